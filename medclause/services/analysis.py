"""
Analysis Service - adapters from page input to the generative-AI and
video-search APIs.

Each adapter assembles a prompt, forwards it to the configured LLM provider
and returns plain text (or video records). Without a provider the adapters
answer with canned responses after an artificial delay.
"""

import asyncio
import logging
import random
import re
from typing import Iterable, List, Optional, Sequence

from ..llm.base import GenerationRequest, InlineData, LLMProvider, TextImageRequest, TextRequest
from ..models import ActivityEntry, ChatMessage, VideoResource
from ..tools.video_search import VideoSearchTool
from . import mock_responses
from .text_utils import truncate_words

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = """You are MedClauseX, an AI medical assistant.

You help users understand medical images, lab reports, prescriptions, medications,
symptoms and treatment options. Be accurate, structured and plain-spoken:
- Use short paragraphs or numbered lists
- Explain medical terms when you use them
- Flag findings that need prompt attention from a clinician

IMPORTANT: Your answers are informational only and not a substitute for professional
medical advice, diagnosis or treatment. Say so when giving recommendations.
"""

CHAT_HISTORY_TURNS = 6
MIN_KEYWORD_LENGTH = 5


class AnalysisError(RuntimeError):
    """An adapter call failed; the message is safe to show to the user."""


class AnalysisService:
    """
    Adapters used by the feature pages.
    """

    def __init__(
        self,
        provider: Optional[LLMProvider] = None,
        video_search: Optional[VideoSearchTool] = None,
        word_limit: int = 50,
        mock_delay: float = 1.5,
    ):
        """
        Args:
            provider: LLM provider; None switches text adapters to mock responses
            video_search: Video search tool; None switches video search to mock results
            word_limit: Word budget applied in concise mode
            mock_delay: Simulated latency of mock responses, in seconds
        """
        self.provider = provider
        self.video_search = video_search
        self.word_limit = word_limit
        self.mock_delay = mock_delay

    @property
    def is_mock(self) -> bool:
        return self.provider is None

    def _finish(self, text: str, concise: bool) -> str:
        text = text.strip()
        return truncate_words(text, self.word_limit) if concise else text

    async def _generate(
        self,
        request: GenerationRequest,
        mock_text: str,
        failure: str,
        concise: bool,
    ) -> str:
        if self.provider is None:
            await asyncio.sleep(self.mock_delay)
            return self._finish(mock_text, concise)

        try:
            response = await self.provider.generate(request)
        except Exception as e:
            logger.error(f"Adapter call failed: {failure} ({e})")
            raise AnalysisError(f"{failure} Please try again.") from e
        return self._finish(response.content, concise)

    # ------------------------------------------------------------------
    # Image and document analysis
    # ------------------------------------------------------------------

    async def analyze_medical_image(
        self,
        image: InlineData,
        prompt: str = "",
        concise: bool = False,
    ) -> str:
        """Analyze an X-ray, MRI, CT scan or pathology slide."""
        instruction = prompt.strip() or (
            "Analyze this medical image (X-ray, MRI, CT scan or pathology slide). "
            "Describe the notable findings, the conditions they may indicate and "
            "the recommended next steps."
        )
        request = TextImageRequest(prompt=instruction, image=image, system_instruction=SYSTEM_INSTRUCTION)
        return await self._generate(
            request, mock_responses.MEDICAL_IMAGE, "Failed to analyze the medical image.", concise
        )

    async def analyze_health_report(self, report: InlineData, concise: bool = False) -> str:
        """Summarize a lab result, scan report or discharge summary."""
        request = TextImageRequest(
            prompt=(
                "Summarize this medical report. List the key findings with their values and "
                "reference ranges, likely diagnoses, and recommendations for follow-up."
            ),
            image=report,
            system_instruction=SYSTEM_INSTRUCTION,
        )
        return await self._generate(
            request, mock_responses.HEALTH_REPORT, "Failed to analyze the health report.", concise
        )

    async def analyze_prescription_image(self, image: InlineData, concise: bool = False) -> str:
        """Read the medications, doses and instructions off a prescription."""
        request = TextImageRequest(
            prompt=(
                "Read this prescription. List each medication with its strength, dose, frequency "
                "and purpose, then note refills, follow-up instructions and side effects to watch for."
            ),
            image=image,
            system_instruction=SYSTEM_INSTRUCTION,
        )
        return await self._generate(
            request, mock_responses.PRESCRIPTION_IMAGE, "Failed to analyze the prescription image.", concise
        )

    # ------------------------------------------------------------------
    # Text adapters
    # ------------------------------------------------------------------

    @staticmethod
    def build_medication_prompt(medication_name: str, patient_info: str = "") -> str:
        prompt = (
            f"Analyze the medication {medication_name.strip()}. Cover what it treats, how it works, "
            f"typical dosage, common and serious side effects, precautions, and notable drug interactions."
        )
        if patient_info.strip():
            prompt += f"\n\nPatient context: {patient_info.strip()}\nHighlight anything specific to this patient."
        return prompt

    async def analyze_medication(
        self,
        medication_name: str,
        patient_info: str = "",
        concise: bool = False,
    ) -> str:
        """Safety, interaction and side-effect overview for a named medication."""
        request = TextRequest(
            prompt=self.build_medication_prompt(medication_name, patient_info),
            system_instruction=SYSTEM_INSTRUCTION,
        )
        return await self._generate(
            request,
            mock_responses.MEDICATION.format(name=medication_name.strip()),
            "Failed to analyze medication.",
            concise,
        )

    async def generate_treatment_plan(
        self,
        patient_info: str,
        symptoms: str,
        medical_history: str = "",
        concise: bool = False,
    ) -> str:
        """Draft a treatment plan from patient details and symptoms."""
        prompt = (
            "Create a treatment plan with sections for medication, diagnostic tests, lifestyle "
            "recommendations and follow-up.\n\n"
            f"Patient information: {patient_info.strip()}\n"
            f"Symptoms: {symptoms.strip()}"
        )
        if medical_history.strip():
            prompt += f"\nMedical history: {medical_history.strip()}"
        request = TextRequest(prompt=prompt, system_instruction=SYSTEM_INSTRUCTION)
        return await self._generate(
            request, mock_responses.TREATMENT_PLAN, "Failed to generate treatment plan.", concise
        )

    async def ask_health_question(
        self,
        question: str,
        history: Sequence[ChatMessage] = (),
        concise: bool = False,
    ) -> str:
        """Answer a health question, with the last few chat turns as context."""
        prompt = ""
        recent = list(history)[-CHAT_HISTORY_TURNS:]
        if recent:
            turns = "\n".join(f"{message.role.title()}: {message.content}" for message in recent)
            prompt += f"Conversation so far:\n{turns}\n\n"
        prompt += f"User question: {question.strip()}"
        request = TextRequest(prompt=prompt, system_instruction=SYSTEM_INSTRUCTION)
        return await self._generate(
            request,
            mock_responses.HEALTH_ANSWER.format(question=question.strip()),
            "Failed to get a response.",
            concise,
        )

    async def summarize_video(self, video_id: str, title: str, concise: bool = False) -> str:
        """Summarize an educational video by id and title."""
        request = TextRequest(
            prompt=(
                f"Summarize the medical video \"{title}\" "
                f"(https://www.youtube.com/watch?v={video_id}). Cover the topics it explains, the "
                f"treatments it discusses and who would benefit from watching it."
            ),
            system_instruction=SYSTEM_INSTRUCTION,
        )
        return await self._generate(
            request, mock_responses.VIDEO_SUMMARY.format(title=title), "Failed to summarize the video.", concise
        )

    # ------------------------------------------------------------------
    # Video search
    # ------------------------------------------------------------------

    async def search_videos(self, query: str) -> List[VideoResource]:
        """Keyword search for educational videos."""
        if self.video_search is None:
            await asyncio.sleep(self.mock_delay)
            return mock_responses.search_results(query.strip())

        try:
            return await self.video_search.search(query.strip())
        except Exception as e:
            logger.error(f"Video search failed for {query!r}: {e}")
            raise AnalysisError("Failed to search for videos. Please try again.") from e

    @staticmethod
    def pick_keyword(activities: Iterable[ActivityEntry], rng: Optional[random.Random] = None) -> str:
        """Pick a recommendation keyword from recent activity, defaulting to 'health'."""
        words = [
            word
            for entry in activities
            for word in re.findall(r"[\w-]+", entry.text)
            if len(word) >= MIN_KEYWORD_LENGTH
        ]
        if not words:
            return "health"
        return (rng or random).choice(words)

    async def recommend_videos(self, activities: Sequence[ActivityEntry]) -> List[VideoResource]:
        """Recommend videos from a keyword found in recent activity."""
        keyword = self.pick_keyword(activities)
        logger.info(f"Recommending videos for keyword {keyword!r}")
        if self.video_search is None:
            await asyncio.sleep(self.mock_delay)
            return mock_responses.recommended_results(keyword)

        try:
            return await self.video_search.search(keyword)
        except Exception as e:
            logger.error(f"Video recommendation failed for {keyword!r}: {e}")
            raise AnalysisError("Failed to recommend videos. Please try again.") from e
