"""
Shared API dependencies and helpers for the page routers.
"""

import logging
from typing import Awaitable, Callable, Optional, Set, TypeVar

from fastapi import HTTPException, Request, UploadFile, status
from fastapi.responses import PlainTextResponse

from ..config import settings
from ..llm.base import InlineData, LLMProvider
from ..llm.factory import create_llm_provider
from ..pages import PageBusyError, PageController, PageRegistry
from ..services import AnalysisError, AnalysisService, SpeechSynthesizer
from ..state import AppStateStore
from ..tools import VideoSearchTool

logger = logging.getLogger(__name__)

T = TypeVar("T")

IMAGE_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif"}
REPORT_TYPES = IMAGE_TYPES | {"application/pdf", "text/plain"}
MAX_UPLOAD_BYTES = 20 * 1024 * 1024


def get_state_store(request: Request) -> AppStateStore:
    return request.app.state.store


def get_pages(request: Request) -> PageRegistry:
    return request.app.state.pages


def get_speech(request: Request) -> SpeechSynthesizer:
    return request.app.state.speech


def _get_llm_provider(model: Optional[str]) -> Optional[LLMProvider]:
    """Get configured LLM provider or None."""
    if not settings.llm_api_key:
        return None
    if model not in settings.models_for_provider():
        model = None
    return create_llm_provider(
        provider=settings.llm_provider,
        api_key=settings.llm_api_key,
        model=model or settings.llm_model,
        base_url=settings.llm_base_url,
        log_calls=settings.log_llm_calls,
    )


def _get_video_search() -> Optional[VideoSearchTool]:
    if not settings.youtube_api_key:
        return None
    return VideoSearchTool(
        api_key=settings.youtube_api_key,
        provider=settings.video_search_provider,
        max_results=settings.video_search_max_results,
    )


def get_analysis_service(request: Request) -> AnalysisService:
    """Adapters bound to the provider and the user's model preference."""
    store = get_state_store(request)
    return AnalysisService(
        provider=_get_llm_provider(store.ai_model),
        video_search=_get_video_search(),
        word_limit=settings.concise_word_limit,
        mock_delay=settings.mock_response_delay,
    )


def require(value: str, message: str) -> str:
    """Validate a required text field; the message is the inline notice."""
    if not value or not value.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
    return value.strip()


async def read_upload(file: Optional[UploadFile], allowed_types: Set[str], missing_message: str) -> InlineData:
    """Validate an uploaded file and load it for an adapter."""
    if file is None or not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=missing_message)
    if file.content_type not in allowed_types:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported file type: {file.content_type}"
        )
    data = await file.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="The uploaded file is empty.")
    if len(data) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="The uploaded file is larger than 20 MB."
        )
    mime_type = "image/jpeg" if file.content_type == "image/jpg" else file.content_type
    return InlineData(data=data, mime_type=mime_type)


async def run_page_action(page: PageController, action: Callable[[], Awaitable[T]]) -> T:
    """Run a page action and map its failures to HTTP errors."""
    try:
        return await page.run(action)
    except PageBusyError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except AnalysisError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


def export_page(page: PageController) -> PlainTextResponse:
    """Download the page result as a text file."""
    text = page.export_text()
    if text is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Nothing to export yet.")
    return PlainTextResponse(
        text,
        headers={"Content-Disposition": f'attachment; filename="{page.export_filename}"'},
    )
