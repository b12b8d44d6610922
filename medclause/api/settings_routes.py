"""
Settings page - theme, AI model preference and data reset.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from ..config import settings
from ..models import Notification
from ..services import SpeechSynthesizer
from ..state import AppStateStore
from .deps import get_speech, get_state_store

router = APIRouter(prefix="/settings", tags=["settings"])


class AIModelRequest(BaseModel):
    model: str


def _active_model(store: AppStateStore) -> Optional[str]:
    offered = settings.models_for_provider()
    # a preference saved under another provider no longer applies
    if store.ai_model in offered:
        return store.ai_model
    return settings.llm_model or (offered[0] if offered else None)


@router.get("")
async def get_settings(
    store: AppStateStore = Depends(get_state_store),
    speech: SpeechSynthesizer = Depends(get_speech),
):
    return {
        "theme": store.theme,
        "ai_model": _active_model(store),
        "llm_provider": settings.llm_provider,
        "available_models": settings.models_for_provider(),
        "speech_supported": speech.supported,
        "mock_mode": not settings.llm_api_key,
    }


@router.post("/theme")
async def toggle_theme(store: AppStateStore = Depends(get_state_store)):
    """Switch between the light and dark theme."""
    theme = await store.toggle_theme()
    return {"theme": theme}


@router.put("/ai-model")
async def set_ai_model(body: AIModelRequest, store: AppStateStore = Depends(get_state_store)):
    """
    Choose the model used by the analysis adapters.

    Raises:
        HTTPException: 400 if the model is not offered
    """
    if body.model not in settings.models_for_provider():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown AI model for {settings.llm_provider}: {body.model}"
        )
    model = await store.set_ai_model(body.model)
    return {
        "ai_model": model,
        "notification": Notification(title="AI Model Updated", description=f"Now using {model}."),
    }


@router.post("/reset")
async def reset_data(store: AppStateStore = Depends(get_state_store)):
    """
    Clear the profile and activity history.

    The client reloads its views when ``reload`` is true.
    """
    reload = await store.reset_all()
    return {
        "reload": reload,
        "notification": Notification(
            title="Data Reset",
            description="Your profile and activity history have been cleared.",
        ),
    }
