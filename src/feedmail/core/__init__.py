"""Core utilities for feedmail."""

from __future__ import annotations

from feedmail.core.config import ExtractionConfig, get_extraction_config
from feedmail.core.logging import configure_structlog, get_logger, setup_logging
from feedmail.core.sanitization import collapse_whitespace, normalize_characters, sanitize_content
from feedmail.core.types import (
    EmailSnapshot,
    ExtractionOutcome,
    LinkItem,
    MediaItem,
    PostCategory,
    PostRecord,
    RawEmailRecord,
)

__all__ = [
    "EmailSnapshot",
    "ExtractionConfig",
    "ExtractionOutcome",
    "LinkItem",
    "MediaItem",
    "PostCategory",
    "PostRecord",
    "RawEmailRecord",
    "collapse_whitespace",
    "configure_structlog",
    "get_extraction_config",
    "get_logger",
    "normalize_characters",
    "sanitize_content",
    "setup_logging",
]
