"""
MedClauseX - Main FastAPI Application
"""

import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .api import (
    dashboard_router, image_analysis_router, chat_assistant_router, treatment_planner_router,
    medication_analyzer_router, video_resources_router, health_reports_router, profile_router,
    settings_router, speech_router,
)
from .core.logging_config import setup_logging
from .middleware import RequestLoggingMiddleware
from .pages import create_page_registry
from .services import OpenAISpeechEngine, SpeechSynthesizer
from .state import AppStateStore
from .storage import JSONCodec, LocalStorage, ObfuscatingCodec

# Logger will be initialized after setup_logging() is called
logger = logging.getLogger(__name__)


def create_state_store() -> AppStateStore:
    """Build the state store from settings."""
    storage = LocalStorage(settings.local_storage_path)
    if settings.state_obfuscation_enabled:
        codec = ObfuscatingCodec(settings.state_obfuscation_passphrase)
    else:
        codec = JSONCodec()
    return AppStateStore(
        storage,
        codec,
        activity_limit=settings.activity_log_limit,
        prefers_dark=settings.prefer_dark_theme,
    )


def create_speech_synthesizer() -> SpeechSynthesizer:
    engine = None
    if settings.openai_api_key:
        engine = OpenAISpeechEngine(
            api_key=settings.openai_api_key,
            model=settings.tts_model,
            voice=settings.tts_voice,
        )
    return SpeechSynthesizer(engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    setup_logging(settings)

    store = create_state_store()
    await store.load()
    app.state.store = store
    app.state.pages = create_page_registry()
    app.state.speech = create_speech_synthesizer()

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Storage path: {settings.local_storage_path}")
    logger.info(f"LLM provider: {settings.llm_provider}" if settings.llm_api_key else "No LLM key set, using mock responses")
    logger.info(f"Speech synthesis: {'enabled' if app.state.speech.supported else 'not supported'}")
    logger.info(f"Log level: {settings.log_level.upper()}")
    yield
    # Shutdown
    await app.state.speech.stop()
    logger.info(f"Shutting down {settings.app_name}")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="AI-assisted medical analysis: images, reports, medications, treatment plans and videos",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request logging middleware (after CORS)
if settings.log_api_requests:
    app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(dashboard_router)
app.include_router(image_analysis_router)
app.include_router(chat_assistant_router)
app.include_router(treatment_planner_router)
app.include_router(medication_analyzer_router)
app.include_router(video_resources_router)
app.include_router(health_reports_router)
app.include_router(profile_router)
app.include_router(settings_router)
app.include_router(speech_router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unknown routes get a 'Page not found' body; other HTTP errors pass through."""
    if exc.status_code == 404 and not isinstance(exc, HTTPException):
        logger.warning(f"404: user attempted to access non-existent route {request.url.path}")
        return JSONResponse(
            status_code=404,
            content={"detail": "Page not found", "path": request.url.path},
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "storage": settings.storage_type,
        "version": settings.app_version
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "medclause.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
