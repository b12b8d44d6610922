"""Models module."""

from .profile import UserProfile, ProfileUpdate, ProfileForm
from .activity import ActivityEntry
from .state import Theme, AppSnapshot
from .analysis import (
    Notification, ChatMessage, ChatRequest, TreatmentPlanRequest, MedicationRequest,
    VideoSearchRequest, VideoSummaryRequest, VideoResource, VideoPageResult,
)

__all__ = [
    'UserProfile', 'ProfileUpdate', 'ProfileForm',
    'ActivityEntry',
    'Theme', 'AppSnapshot',
    'Notification', 'ChatMessage', 'ChatRequest', 'TreatmentPlanRequest', 'MedicationRequest',
    'VideoSearchRequest', 'VideoSummaryRequest', 'VideoResource', 'VideoPageResult',
]
