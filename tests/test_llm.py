"""
Unit tests for the LLM module.
Tests generation requests, providers, and factory.
"""

import dataclasses
import logging
import pytest
from unittest.mock import AsyncMock, patch, MagicMock

from medclause.llm.base import InlineData, LLMResponse, TextImageRequest, TextRequest
from medclause.llm.gemini_provider import GeminiProvider
from medclause.llm.openai_provider import OpenAIProvider
from medclause.llm.factory import create_llm_provider


def _mock_client(mock_client, response):
    mock_instance = AsyncMock()
    mock_instance.post.return_value = response
    mock_instance.__aenter__ = AsyncMock(return_value=mock_instance)
    mock_instance.__aexit__ = AsyncMock(return_value=False)
    mock_client.return_value = mock_instance
    return mock_instance


class TestGenerationRequests:
    """Tests for the request variants."""

    def test_text_request_kind(self):
        req = TextRequest(prompt="Hello")
        assert req.kind == "text"
        assert req.system_instruction is None

    def test_text_image_request_kind(self):
        image = InlineData(data=b"\x89PNG", mime_type="image/png")
        req = TextImageRequest(prompt="Describe", image=image)
        assert req.kind == "text_image"
        assert req.image.mime_type == "image/png"

    def test_text_image_request_requires_image(self):
        with pytest.raises(TypeError):
            TextImageRequest(prompt="Describe")

    def test_kind_cannot_be_passed(self):
        with pytest.raises(TypeError):
            TextRequest(prompt="Hello", kind="text_image")

    def test_requests_are_frozen(self):
        req = TextRequest(prompt="Hello")
        with pytest.raises(dataclasses.FrozenInstanceError):
            req.prompt = "Changed"

    def test_inline_data_encoding(self):
        image = InlineData(data=b"abc", mime_type="image/jpeg")
        assert image.to_base64() == "YWJj"
        assert image.to_data_uri() == "data:image/jpeg;base64,YWJj"


class TestLLMResponse:
    """Tests for LLMResponse dataclass."""

    def test_basic_response(self):
        resp = LLMResponse(content="Hello!", model="gemini-2.0-flash")
        assert resp.content == "Hello!"
        assert resp.usage == {}
        assert resp.raw is None


class TestGeminiProvider:
    """Tests for the Gemini provider."""

    def test_init_defaults(self):
        provider = GeminiProvider(api_key="test-key")
        assert provider.model == "gemini-2.0-flash"
        assert provider.base_url == "https://generativelanguage.googleapis.com/v1beta"

    def test_headers(self):
        provider = GeminiProvider(api_key="g-key")
        headers = provider._get_headers()
        assert headers["x-goog-api-key"] == "g-key"

    def test_build_payload_text(self):
        provider = GeminiProvider(api_key="key")
        payload = provider._build_payload(
            TextRequest(prompt="What is anemia?", system_instruction="Be careful"), None, None
        )
        parts = payload["contents"][0]["parts"]
        assert parts == [{"text": "What is anemia?"}]
        assert payload["systemInstruction"]["parts"][0]["text"] == "Be careful"
        assert payload["generationConfig"]["temperature"] == 0.4

    def test_build_payload_image_first(self):
        provider = GeminiProvider(api_key="key")
        image = InlineData(data=b"abc", mime_type="image/png")
        payload = provider._build_payload(TextImageRequest(prompt="Describe", image=image), 0.1, 100)
        parts = payload["contents"][0]["parts"]
        assert parts[0]["inline_data"] == {"mime_type": "image/png", "data": "YWJj"}
        assert parts[1] == {"text": "Describe"}
        assert "systemInstruction" not in payload
        assert payload["generationConfig"]["maxOutputTokens"] == 100

    def test_extract_text_no_candidates(self):
        with pytest.raises(ValueError, match="SAFETY"):
            GeminiProvider._extract_text({"promptFeedback": {"blockReason": "SAFETY"}})

    @pytest.mark.asyncio
    async def test_generate_success(self):
        provider = GeminiProvider(api_key="test-key")
        mock_response = MagicMock()
        mock_response.json.return_value = {
            "candidates": [{"content": {"parts": [{"text": "Iron "}, {"text": "deficiency"}]}}],
            "usageMetadata": {"promptTokenCount": 7, "candidatesTokenCount": 2, "totalTokenCount": 9},
            "modelVersion": "gemini-2.0-flash",
        }
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client:
            instance = _mock_client(mock_client, mock_response)

            result = await provider.generate(TextRequest(prompt="Hello"))

            assert result.content == "Iron deficiency"
            assert result.usage["total_tokens"] == 9
            url = instance.post.call_args.args[0]
            assert url.endswith("/models/gemini-2.0-flash:generateContent")

    @pytest.mark.asyncio
    async def test_generate_http_error_propagates(self):
        provider = GeminiProvider(api_key="test-key")
        mock_response = MagicMock()
        mock_response.raise_for_status.side_effect = RuntimeError("500 Server Error")

        with patch("httpx.AsyncClient") as mock_client:
            _mock_client(mock_client, mock_response)
            with pytest.raises(RuntimeError, match="500"):
                await provider.generate(TextRequest(prompt="Hello"))


class TestOpenAIProvider:
    """Tests for OpenAI-compatible provider."""

    def test_init_defaults(self):
        provider = OpenAIProvider(api_key="test-key")
        assert provider.api_key == "test-key"
        assert provider.model == "gpt-4o"
        assert provider.base_url == "https://api.openai.com/v1"

    def test_format_messages_text(self):
        provider = OpenAIProvider(api_key="test")
        formatted = provider._format_messages(TextRequest(prompt="hello", system_instruction="sys prompt"))
        assert formatted == [
            {"role": "system", "content": "sys prompt"},
            {"role": "user", "content": "hello"},
        ]

    def test_format_messages_image(self):
        provider = OpenAIProvider(api_key="test")
        image = InlineData(data=b"abc", mime_type="image/jpeg")
        formatted = provider._format_messages(TextImageRequest(prompt="Analyze", image=image))
        content = formatted[0]["content"]
        assert content[0]["image_url"]["url"] == "data:image/jpeg;base64,YWJj"
        assert content[1] == {"type": "text", "text": "Analyze"}

    def test_headers(self):
        provider = OpenAIProvider(api_key="sk-test123")
        headers = provider._get_headers()
        assert headers["Authorization"] == "Bearer sk-test123"
        assert headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_generate_success(self):
        provider = OpenAIProvider(api_key="test-key")
        mock_response = MagicMock()
        mock_response.json.return_value = {
            "choices": [{"message": {"content": "Test response"}}],
            "model": "gpt-4o",
            "usage": {"prompt_tokens": 10, "completion_tokens": 5}
        }
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client:
            _mock_client(mock_client, mock_response)

            result = await provider.generate(TextRequest(prompt="Hello"))

            assert result.content == "Test response"
            assert result.model == "gpt-4o"

    @pytest.mark.asyncio
    async def test_call_log_can_be_switched_off(self, caplog):
        mock_response = MagicMock()
        mock_response.json.return_value = {
            "choices": [{"message": {"content": "ok"}}],
            "model": "gpt-4o",
            "usage": {},
        }
        mock_response.raise_for_status = MagicMock()
        caplog.set_level(logging.INFO, logger="medclause.llm.openai_provider")

        with patch("httpx.AsyncClient") as mock_client:
            _mock_client(mock_client, mock_response)
            await OpenAIProvider(api_key="k", log_calls=False).generate(TextRequest(prompt="Hi"))
            assert "LLM API call completed" not in caplog.messages

            await OpenAIProvider(api_key="k").generate(TextRequest(prompt="Hi"))
            assert "LLM API call completed" in caplog.messages


class TestFactory:
    """Tests for LLM provider factory."""

    def test_create_gemini(self):
        provider = create_llm_provider(provider="gemini", api_key="key")
        assert isinstance(provider, GeminiProvider)

    def test_create_openai_with_model(self):
        provider = create_llm_provider(provider="openai", api_key="key", model="gpt-4o-mini")
        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-4o-mini"

    def test_no_api_key_returns_none(self):
        assert create_llm_provider(provider="gemini", api_key="") is None
        assert create_llm_provider(provider="gemini", api_key=None) is None

    def test_unsupported_provider(self):
        with pytest.raises(ValueError, match="Unsupported"):
            create_llm_provider(provider="unknown", api_key="key")

    def test_log_calls_passed_to_provider(self):
        provider = create_llm_provider(provider="gemini", api_key="key", log_calls=False)
        assert provider.log_calls is False


class TestConfiguredProvider:
    """Tests for the provider built from settings and the saved model preference."""

    @pytest.fixture(autouse=True)
    def _gemini_settings(self, monkeypatch):
        from medclause.config import settings
        monkeypatch.setattr(settings, "llm_provider", "gemini")
        monkeypatch.setattr(settings, "llm_api_key", "key")
        monkeypatch.setattr(settings, "llm_model", None)
        monkeypatch.setattr(settings, "log_llm_calls", False)

    def test_uses_saved_model(self):
        from medclause.api.deps import _get_llm_provider
        provider = _get_llm_provider("gemini-1.5-pro")
        assert provider.model == "gemini-1.5-pro"
        assert provider.log_calls is False

    def test_ignores_model_from_another_provider(self):
        from medclause.api.deps import _get_llm_provider
        provider = _get_llm_provider("gpt-4o")
        assert isinstance(provider, GeminiProvider)
        assert provider.model == "gemini-2.0-flash"
