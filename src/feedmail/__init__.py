"""Recover structured social-network posts from notification emails."""

from __future__ import annotations

from feedmail.core.types import PostCategory, PostRecord, RawEmailRecord
from feedmail.extraction import PostExtractor, calculate_importance, derive_tags, extract

__version__ = "0.1.0"

__all__ = [
    "PostCategory",
    "PostExtractor",
    "PostRecord",
    "RawEmailRecord",
    "calculate_importance",
    "derive_tags",
    "extract",
]
