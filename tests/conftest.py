"""
Shared test fixtures and configuration.
"""

import pytest
import os

# Set test environment variables before importing app modules
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("LOCAL_STORAGE_PATH", "/tmp/medclausex_test_data")
os.environ["LOG_FILE_ENABLED"] = "false"
os.environ["MOCK_RESPONSE_DELAY"] = "0"
# Adapters run in mock mode unless a test supplies a provider
os.environ["LLM_API_KEY"] = ""
os.environ["YOUTUBE_API_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""

from medclause.state import AppStateStore  # noqa: E402
from medclause.storage import JSONCodec, LocalStorage  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "state"))


@pytest.fixture
def store(storage):
    return AppStateStore(storage, JSONCodec())
