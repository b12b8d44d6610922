"""
Text-to-Speech Service.

``SpeechSynthesizer`` exposes speak/stop/pause/resume over a speech engine
and tracks whether an utterance is playing. At most one utterance plays at a
time: speaking again cancels the current one first. Playback here means
pulling audio chunks from the engine into the utterance buffer; the client
fetches the buffer and plays it.
"""

import asyncio
import contextlib
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import AsyncIterator, List, Optional

from openai import AsyncOpenAI

logger = logging.getLogger(__name__)


class SpeechUnavailableError(RuntimeError):
    """No speech engine is available on this host."""


@dataclass
class SpeechOptions:
    rate: Optional[float] = None
    pitch: Optional[float] = None
    volume: Optional[float] = None
    lang: Optional[str] = None
    voice: Optional[str] = None

    def merged(self, override: Optional["SpeechOptions"]) -> "SpeechOptions":
        if override is None:
            return SpeechOptions(**vars(self))
        return SpeechOptions(**{
            name: value if value is not None else getattr(self, name)
            for name, value in vars(override).items()
        })


@dataclass
class Utterance:
    text: str
    options: SpeechOptions
    audio: bytearray = field(default_factory=bytearray)
    completed: bool = False
    cancelled: bool = False
    error: Optional[str] = None


class SpeechEngine(ABC):
    """Produces audio for a piece of text."""

    media_type: str = "audio/mpeg"

    @abstractmethod
    def stream(self, text: str, options: SpeechOptions) -> AsyncIterator[bytes]:
        """Yield audio chunks for the text."""
        pass

    def voices(self) -> List[str]:
        return []


class OpenAISpeechEngine(SpeechEngine):
    """OpenAI text-to-speech, streamed as MP3."""

    VOICES = ["alloy", "ash", "coral", "echo", "fable", "nova", "onyx", "sage", "shimmer"]

    def __init__(self, api_key: str, model: str = "gpt-4o-mini-tts", voice: str = "alloy",
                 chunk_size: int = 4096):
        self.client = AsyncOpenAI(api_key=api_key)
        self.model = model
        self.voice = voice
        self.chunk_size = chunk_size

    async def stream(self, text: str, options: SpeechOptions) -> AsyncIterator[bytes]:
        params = {
            "model": self.model,
            "voice": options.voice or self.voice,
            "input": text,
            "response_format": "mp3",
        }
        if options.rate is not None:
            # API accepts 0.25-4.0
            params["speed"] = min(max(options.rate, 0.25), 4.0)

        async with self.client.audio.speech.with_streaming_response.create(**params) as response:
            async for chunk in response.iter_bytes(self.chunk_size):
                yield chunk

    def voices(self) -> List[str]:
        return list(self.VOICES)


class SpeechSynthesizer:
    """
    Start/stop/pause/resume wrapper with a speaking flag.
    """

    def __init__(self, engine: Optional[SpeechEngine] = None,
                 default_options: Optional[SpeechOptions] = None):
        self.engine = engine
        self.default_options = default_options or SpeechOptions()
        self.speaking = False
        self.paused = False
        self.current: Optional[Utterance] = None
        self._task: Optional[asyncio.Task] = None
        self._resume_event = asyncio.Event()
        self._resume_event.set()

    @property
    def supported(self) -> bool:
        return self.engine is not None

    def voices(self) -> List[str]:
        return self.engine.voices() if self.engine else []

    async def speak(self, text: str, options: Optional[SpeechOptions] = None) -> Utterance:
        """
        Start speaking text, cancelling any utterance in progress.

        Raises:
            SpeechUnavailableError: If no speech engine is configured
        """
        if self.engine is None:
            raise SpeechUnavailableError("Speech synthesis is not supported on this host")

        await self.stop()

        utterance = Utterance(text=text, options=self.default_options.merged(options))
        self.current = utterance
        self.speaking = True
        self.paused = False
        self._resume_event.set()
        self._task = asyncio.create_task(self._play(utterance))
        return utterance

    async def _play(self, utterance: Utterance) -> None:
        try:
            chunks = self.engine.stream(utterance.text, utterance.options)
            async with contextlib.aclosing(chunks):
                async for chunk in chunks:
                    await self._resume_event.wait()
                    utterance.audio.extend(chunk)
            utterance.completed = True
        except asyncio.CancelledError:
            utterance.cancelled = True
            raise
        except Exception as e:
            logger.error(f"Speech synthesis error: {e}", exc_info=True)
            utterance.error = str(e)
        finally:
            if self.current is utterance:
                self.speaking = False
                self.paused = False

    async def stop(self) -> None:
        """Cancel the current utterance, if any."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
            # a task cancelled before its first step never reaches _play's handler
            if self.current is not None and not self.current.completed:
                self.current.cancelled = True
        self.speaking = False
        self.paused = False
        self._resume_event.set()

    def pause(self) -> bool:
        if not self.speaking or self.paused:
            return False
        self._resume_event.clear()
        self.paused = True
        return True

    def resume(self) -> bool:
        if not self.paused:
            return False
        self._resume_event.set()
        self.paused = False
        return True

    async def wait(self) -> Optional[Utterance]:
        """Wait for the current utterance to finish playing."""
        if self._task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
        return self.current
