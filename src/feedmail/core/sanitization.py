"""Text sanitization for extracted post content.

Provides:
- Unicode normalization and zero-width character removal
- Whitespace collapsing for post text, names and anchor text
"""

from __future__ import annotations

import re
import unicodedata

_ANY_WHITESPACE = re.compile(r"\s+")
_ZERO_WIDTH = re.compile(r"[\u200b-\u200d\ufeff]")


def normalize_characters(text: str) -> str:
    """Normalize Unicode characters for consistent processing.

    Args:
        text: Text to normalize.

    Returns:
        NFC-normalized text without zero-width characters.
    """
    if not text:
        return ""

    text = unicodedata.normalize("NFC", text)
    return _ZERO_WIDTH.sub("", text)


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run, line breaks included, to one space.

    Args:
        text: Text to flatten.

    Returns:
        Single-line text.
    """
    if not text:
        return ""

    return _ANY_WHITESPACE.sub(" ", normalize_characters(text)).strip()


def sanitize_content(text: str) -> str:
    """Clean extracted post text.

    Normalizes characters, then flattens every whitespace run (line breaks
    included) to one space and trims. Applying it twice gives the same
    result as applying it once.

    Args:
        text: Extracted text.

    Returns:
        Single-line sanitized text.
    """
    return collapse_whitespace(text)
