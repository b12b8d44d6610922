"""
Analysis Models - page request bodies and adapter results.
"""

from datetime import datetime, timezone
from typing import List, Literal, Optional
from pydantic import BaseModel, Field


class Notification(BaseModel):
    """User-facing notice shown by the client as a toast."""
    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


class ChatMessage(BaseModel):
    """Chat message; lives only in page-local state."""
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ChatRequest(BaseModel):
    message: str = ""
    history: Optional[List[ChatMessage]] = None  # overrides the page transcript when given
    concise: bool = False


class TreatmentPlanRequest(BaseModel):
    patient_info: str = ""
    symptoms: str = ""
    medical_history: str = ""
    concise: bool = False


class MedicationRequest(BaseModel):
    medication_name: str = ""
    patient_info: str = ""
    concise: bool = False


class VideoSearchRequest(BaseModel):
    query: str = ""


class VideoSummaryRequest(BaseModel):
    video_id: str
    title: str
    concise: bool = False


class VideoResource(BaseModel):
    """Video metadata returned by the video search endpoint."""
    id: str
    title: str
    description: str = ""
    thumbnail: str = ""
    published_at: datetime
    channel_title: str = ""

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.id}"


class VideoPageResult(BaseModel):
    """Page-local state of the video resources page."""
    videos: List[VideoResource] = Field(default_factory=list)
    selected: Optional[VideoResource] = None
    summary: str = ""
