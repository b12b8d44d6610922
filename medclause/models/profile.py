"""
User Profile Models - the single canonical profile schema and its form input.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


class UserProfile(BaseModel):
    """Profile of the local user. Every field is optional."""
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    height: Optional[str] = None
    weight: Optional[str] = None
    blood_type: Optional[str] = None
    medical_history: List[str] = Field(default_factory=list)
    allergies: List[str] = Field(default_factory=list)
    medications: List[str] = Field(default_factory=list)
    profile_image: Optional[str] = None  # data URI or URL

    @model_validator(mode="before")
    @classmethod
    def _fold_deprecated_conditions(cls, data: Any) -> Any:
        # Older builds stored "conditions" next to (or instead of) medicalHistory
        if isinstance(data, dict) and "conditions" in data:
            data = dict(data)
            conditions = data.pop("conditions") or []
            history = list(data.get("medical_history") or [])
            for condition in conditions:
                if condition not in history:
                    history.append(condition)
            data["medical_history"] = history
        return data

    @property
    def is_complete(self) -> bool:
        return bool(self.name) and self.age is not None

    def is_empty(self) -> bool:
        return self == UserProfile()


class ProfileUpdate(UserProfile):
    """Partial profile; only explicitly set fields are merged."""

    def changes(self) -> Dict[str, Any]:
        """Set fields in schema order."""
        return {
            field: getattr(self, field)
            for field in type(self).model_fields
            if field in self.model_fields_set
        }


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class ProfileForm(BaseModel):
    """Raw profile form as the profile page submits it."""
    name: Optional[str] = None
    age: Optional[str] = None
    gender: Optional[str] = None
    height: Optional[str] = None
    weight: Optional[str] = None
    blood_type: Optional[str] = None
    medical_history: Optional[str] = None  # comma separated
    allergies: Optional[str] = None
    medications: Optional[str] = None
    profile_image: Optional[str] = None

    def to_update(self) -> ProfileUpdate:
        """
        Convert submitted form fields into a ProfileUpdate.

        Only fields present in the submission are included. Age is coerced
        to a number (blank means unset); list fields are split on commas.
        """
        data: Dict[str, Any] = {}
        for field in self.model_fields_set:
            value = getattr(self, field)
            if field == "age":
                data[field] = value.strip() if value and value.strip() else None
            elif field in ("medical_history", "allergies", "medications"):
                data[field] = _split_list(value or "")
            else:
                data[field] = value
        return ProfileUpdate.model_validate(data)

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "ProfileForm":
        """Pre-fill the form from the stored profile."""
        return cls(
            name=profile.name or "",
            age=str(profile.age) if profile.age is not None else "",
            gender=profile.gender or "",
            height=profile.height or "",
            weight=profile.weight or "",
            blood_type=profile.blood_type or "",
            medical_history=", ".join(profile.medical_history),
            allergies=", ".join(profile.allergies),
            medications=", ".join(profile.medications),
            profile_image=profile.profile_image,
        )
