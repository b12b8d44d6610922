"""
Dashboard and layout routes - feature overview, recent activity, theme and sidebar.
"""

from fastapi import APIRouter, Depends

from ..config import settings
from ..state import AppStateStore
from .deps import get_state_store

router = APIRouter(tags=["dashboard"])

FEATURES = [
    {
        "title": "Image Analysis",
        "description": "Upload X-rays, MRIs, CT scans, and pathology slides for AI-based disease detection.",
        "path": "/image-analysis",
    },
    {
        "title": "Medical Assistant",
        "description": "Chat with our AI medical assistant to get answers to your health-related questions.",
        "path": "/chat-assistant",
    },
    {
        "title": "Treatment Planner",
        "description": "Get personalized treatment plans based on your symptoms and medical history.",
        "path": "/treatment-planner",
    },
    {
        "title": "Medication Safety",
        "description": "Analyze medications for safety, interactions, and side effects.",
        "path": "/medication-analyzer",
    },
    {
        "title": "Video Resources",
        "description": "Discover curated medical videos with AI-generated summaries.",
        "path": "/video-resources",
    },
    {
        "title": "Health Reports",
        "description": "Summarize lab results, scan reports and discharge summaries.",
        "path": "/health-reports",
    },
]

NAVIGATION = [
    {"path": "/", "label": "Dashboard"},
    *[{"path": feature["path"], "label": feature["title"]} for feature in FEATURES],
    {"path": "/profile", "label": "User Profile"},
    {"path": "/settings", "label": "Settings"},
]


@router.get("/")
async def dashboard(store: AppStateStore = Depends(get_state_store)):
    """
    Dashboard: greeting, feature cards and the recent activity log.

    The call to action points at the profile until the user has a name.
    """
    profile = store.profile
    name = profile.name
    return {
        "title": f"Welcome to {settings.app_name}",
        "greeting": f"Welcome back, {name}!" if name else f"Welcome to {settings.app_name}",
        "call_to_action": (
            {"label": "Start Diagnosis", "path": "/image-analysis"}
            if name else
            {"label": "Complete Your Profile", "path": "/profile"}
        ),
        "features": FEATURES,
        "recent_activities": store.activities,
        "profile_complete": profile.is_complete,
    }


@router.get("/layout")
async def layout(store: AppStateStore = Depends(get_state_store)):
    """Shell state shared by every page: theme, sidebar and navigation."""
    profile = store.profile
    return {
        "app_name": settings.app_name,
        "theme": store.theme,
        "sidebar_open": store.sidebar_open,
        "navigation": NAVIGATION,
        "user": {
            "name": profile.name,
            "profile_image": profile.profile_image,
            "has_profile": not profile.is_empty(),
        },
    }


@router.post("/layout/sidebar")
async def toggle_sidebar(store: AppStateStore = Depends(get_state_store)):
    return {"sidebar_open": store.toggle_sidebar()}
