"""
LLM Provider Base - Abstract base for generative-AI API providers.

Requests are a tagged union: a text-only prompt, or a prompt with one
inline file (image or document). Every required field is a dataclass field
without a default, so an incomplete request cannot be constructed.
"""

import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Union


@dataclass(frozen=True)
class InlineData:
    """A file sent inline with a prompt."""
    data: bytes
    mime_type: str

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("utf-8")

    def to_data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"


@dataclass(frozen=True)
class TextRequest:
    """Text-only generation request."""
    prompt: str
    system_instruction: Optional[str] = None
    kind: Literal["text"] = field(default="text", init=False)


@dataclass(frozen=True)
class TextImageRequest:
    """Generation request with one inline file."""
    prompt: str
    image: InlineData
    system_instruction: Optional[str] = None
    kind: Literal["text_image"] = field(default="text_image", init=False)


GenerationRequest = Union[TextRequest, TextImageRequest]


@dataclass
class LLMResponse:
    """Response from an LLM API call."""
    content: str
    model: str = ""
    usage: Dict[str, int] = field(default_factory=dict)
    raw: Optional[Dict[str, Any]] = None


class LLMProvider(ABC):
    """
    Abstract base class for LLM API providers.
    All providers must implement generate.
    """

    name: str = "base"

    def __init__(self, api_key: str, model: str, base_url: Optional[str] = None,
                 default_temperature: float = 0.4, default_max_tokens: int = 2048):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.default_temperature = default_temperature
        self.default_max_tokens = default_max_tokens

    @abstractmethod
    async def generate(
        self,
        request: GenerationRequest,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """
        Send one generation request.

        Args:
            request: TextRequest or TextImageRequest
            temperature: Sampling temperature override
            max_tokens: Max output tokens override
            **kwargs: Provider-specific parameters

        Returns:
            LLMResponse with the generated text
        """
        pass
