"""
Profile page - view and edit the local user profile.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError

from ..models import Notification, ProfileForm
from ..state import AppStateStore
from .deps import get_state_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
async def get_profile(store: AppStateStore = Depends(get_state_store)):
    """
    Get the stored profile and the form pre-filled from it.
    """
    profile = store.profile
    return {
        "profile": profile,
        "form": ProfileForm.from_profile(profile),
        "profile_complete": profile.is_complete,
    }


@router.put("")
async def update_profile(form: ProfileForm, store: AppStateStore = Depends(get_state_store)):
    """
    Save the submitted profile form.

    Only the fields present in the request body are changed.

    Raises:
        HTTPException: 400 if a field cannot be converted (e.g. a non-numeric age)
    """
    try:
        update = form.to_update()
    except ValidationError as e:
        fields = ", ".join(str(error["loc"][0]) for error in e.errors() if error["loc"])
        logger.warning(f"Rejected profile form: invalid {fields}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Please check these fields: {fields}"
        )

    profile = await store.update_profile(update)
    return {
        "profile": profile,
        "profile_complete": profile.is_complete,
        "notification": Notification(
            title="Profile Updated",
            description="Your profile information has been saved successfully.",
        ),
    }
