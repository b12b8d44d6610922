"""
Speech routes - read results aloud.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from ..models import Notification
from ..services import SpeechOptions, SpeechSynthesizer, SpeechUnavailableError
from .deps import get_speech, require

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/speech", tags=["speech"])


class SpeakRequest(BaseModel):
    text: str = ""
    rate: Optional[float] = None
    pitch: Optional[float] = None
    volume: Optional[float] = None
    lang: Optional[str] = None
    voice: Optional[str] = None


def _status(speech: SpeechSynthesizer) -> dict:
    current = speech.current
    return {
        "supported": speech.supported,
        "speaking": speech.speaking,
        "paused": speech.paused,
        "voices": speech.voices(),
        "audio_bytes": len(current.audio) if current else 0,
        "error": current.error if current else None,
    }


@router.get("/status")
async def speech_status(speech: SpeechSynthesizer = Depends(get_speech)):
    return _status(speech)


@router.post("/speak")
async def speak(body: SpeakRequest, speech: SpeechSynthesizer = Depends(get_speech)):
    """
    Start reading text aloud; any utterance in progress is cancelled first.

    Raises:
        HTTPException: 503 with a notification if speech is not supported
    """
    text = require(body.text, "Nothing to read aloud.")
    options = SpeechOptions(
        rate=body.rate, pitch=body.pitch, volume=body.volume, lang=body.lang, voice=body.voice
    )
    try:
        await speech.speak(text, options)
    except SpeechUnavailableError as e:
        logger.warning(str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=Notification(
                title="Not Supported",
                description="Text-to-speech is not supported on this server.",
                variant="destructive",
            ).model_dump(),
        )
    return _status(speech)


@router.post("/stop")
async def stop(speech: SpeechSynthesizer = Depends(get_speech)):
    await speech.stop()
    return _status(speech)


@router.post("/pause")
async def pause(speech: SpeechSynthesizer = Depends(get_speech)):
    speech.pause()
    return _status(speech)


@router.post("/resume")
async def resume(speech: SpeechSynthesizer = Depends(get_speech)):
    speech.resume()
    return _status(speech)


@router.get("/audio")
async def audio(speech: SpeechSynthesizer = Depends(get_speech)):
    """Audio produced so far for the current utterance."""
    current = speech.current
    if current is None or not current.audio:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No audio available.")
    return Response(content=bytes(current.audio), media_type=speech.engine.media_type)
