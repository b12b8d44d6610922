"""API module - one router per page."""

from .dashboard import router as dashboard_router
from .image_analysis import router as image_analysis_router
from .chat_assistant import router as chat_assistant_router
from .treatment_planner import router as treatment_planner_router
from .medication_analyzer import router as medication_analyzer_router
from .video_resources import router as video_resources_router
from .health_reports import router as health_reports_router
from .profile import router as profile_router
from .settings_routes import router as settings_router
from .speech import router as speech_router

__all__ = [
    'dashboard_router', 'image_analysis_router', 'chat_assistant_router', 'treatment_planner_router',
    'medication_analyzer_router', 'video_resources_router', 'health_reports_router', 'profile_router',
    'settings_router', 'speech_router',
]
