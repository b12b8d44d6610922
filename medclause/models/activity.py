"""
Activity Models - entries of the bounded recent-activity log.
"""

from datetime import datetime, timezone
from typing import Any
from pydantic import BaseModel, Field, model_validator


class ActivityEntry(BaseModel):
    """A timestamped, human-readable description of a user action."""
    text: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="before")
    @classmethod
    def _from_legacy_string(cls, data: Any) -> Any:
        # Earlier builds persisted the log as bare strings
        if isinstance(data, str):
            return {"text": data}
        return data
