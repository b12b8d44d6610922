"""
Application State Models.
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict

from .activity import ActivityEntry
from .profile import UserProfile


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


class AppSnapshot(BaseModel):
    """Read-only view of the application state handed to views and subscribers."""
    model_config = ConfigDict(frozen=True)

    theme: Theme
    profile: UserProfile
    activities: List[ActivityEntry]
    sidebar_open: bool
    ai_model: Optional[str] = None
    profile_complete: bool = False
