"""
Configuration Settings.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App info
    app_name: str = "MedClauseX"
    app_version: str = "1.0.0"
    debug: bool = True

    # Storage
    storage_type: str = "local"
    local_storage_path: str = "./data"

    # Application state
    state_obfuscation_enabled: bool = True
    # Obfuscation only: this passphrase ships with the app, it is not a secret.
    state_obfuscation_passphrase: str = "medclausex-local-state"
    activity_log_limit: int = 10
    prefer_dark_theme: bool = False  # host colour-scheme preference, used when no theme is stored

    # LLM Provider settings
    llm_provider: str = "gemini"  # "gemini" or "openai"
    llm_api_key: Optional[str] = None
    llm_model: Optional[str] = None  # uses provider default if not set
    llm_base_url: Optional[str] = None  # uses provider default if not set
    # models offered on the settings page, per provider
    available_models: dict[str, list[str]] = {
        "gemini": ["gemini-2.0-flash", "gemini-1.5-pro", "gemini-1.5-flash"],
        "openai": ["gpt-4o", "gpt-4o-mini"],
    }

    # Adapters
    mock_response_delay: float = 1.5  # seconds, used when no LLM key is configured
    concise_word_limit: int = 50

    # Video search
    youtube_api_key: Optional[str] = None
    video_search_provider: str = "youtube"
    video_search_max_results: int = 3

    # Speech synthesis
    openai_api_key: Optional[str] = None
    tts_model: str = "gpt-4o-mini-tts"
    tts_voice: str = "alloy"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8080",
        "http://127.0.0.1:3000",
    ]

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file_path: str = "./logs/medclausex.log"
    log_file_enabled: bool = True
    log_console_enabled: bool = True
    log_json_format: bool = True  # JSON format for files, human-readable for console
    log_api_requests: bool = True
    log_llm_calls: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = False

    def models_for_provider(self) -> list[str]:
        """Models offered for the configured LLM provider."""
        return self.available_models.get(self.llm_provider, [])


settings = Settings()
