"""
Text helpers for adapter responses.
"""

TRUNCATION_SUFFIX = "... [truncated for brevity]"


def truncate_words(text: str, limit: int, suffix: str = TRUNCATION_SUFFIX) -> str:
    """
    Shorten text to its first ``limit`` whitespace-delimited words.

    Text that already fits is returned unchanged. Otherwise the kept words
    are joined by single spaces and ``suffix`` is appended. The suffix
    itself adds words, so applying this twice with the same limit shortens
    the text again.
    """
    if limit < 0:
        raise ValueError("limit must not be negative")
    words = text.split()
    if len(words) <= limit:
        return text
    return " ".join(words[:limit]) + suffix


def shorten(text: str, max_chars: int, marker: str = "...") -> str:
    """Cut text to ``max_chars`` characters, adding ``marker`` when cut."""
    return text[:max_chars] + (marker if len(text) > max_chars else "")
