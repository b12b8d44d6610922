"""Services module - external service adapters."""

from .analysis import AnalysisService, AnalysisError
from .speech import (
    SpeechSynthesizer, SpeechEngine, OpenAISpeechEngine, SpeechOptions, SpeechUnavailableError,
)
from .text_utils import truncate_words

__all__ = [
    'AnalysisService', 'AnalysisError',
    'SpeechSynthesizer', 'SpeechEngine', 'OpenAISpeechEngine', 'SpeechOptions', 'SpeechUnavailableError',
    'truncate_words',
]
