"""Extraction configuration using pydantic-settings.

Every pattern list below is ordered: rules are evaluated top to bottom and
the first match wins.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from feedmail.core.types import PostCategory

DEFAULT_AUTHOR_PATTERNS = [
    r"(.+?) posted in",
    r"(.+?) shared a post",
    r"(.+?) added a new photo",
    r"(.+?) updated their status",
    r"(.+?) wrote a new post",
]

DEFAULT_AUTHOR_SELECTORS = [
    '[data-testid="post_author"]',
    ".author",
    ".post-author",
]

DEFAULT_AUTHOR_TEXT_PATTERN = r"\b(?:Posted by|From|By)\s+([^\n\r]+)"

# Order is the tie-break for subjects matching several rules
# ("shared a video" is SHARED, not VIDEO).
DEFAULT_CATEGORY_PATTERNS: list[tuple[PostCategory, str]] = [
    (PostCategory.PHOTO, r"added a new photo|posted a photo|shared .*photo"),
    (PostCategory.STATUS, r"updated their status|wrote on their timeline"),
    (PostCategory.SHARED, r"shared a post|shared .*link|shared a video"),
    (PostCategory.VIDEO, r"posted a video|shared a video"),
    (PostCategory.LINK, r"shared a link|posted a link"),
    (PostCategory.GROUP, r"posted in .*group"),
    (PostCategory.PAGE, r"posted on .*page"),
]

DEFAULT_CONTENT_SELECTORS = [
    '[data-testid="post_message"]',
    ".post-content",
    ".message",
    ".post-text",
    ".userContent",
    'p:-soup-contains("wrote:")',
    'div:-soup-contains("wrote:")',
]

DEFAULT_CONTENT_PREFIX_PATTERNS = [
    r"^.+?wrote:\s*",
    r"^.+?said:\s*",
    r"^.+?posted:\s*",
]

DEFAULT_BOILERPLATE_PATTERNS = [
    r"^(To help keep|You're receiving|This message was sent|Facebook|Copyright|Privacy|Terms)",
    r"^(View|Reply|Like|Comment|Share|Unsubscribe)",
    r"^(http|www\.)",
    r"^[0-9\s\-:]+$",
]

DEFAULT_SYSTEM_MESSAGE_PATTERNS = [
    r"facebook\.com",
    r"unsubscribe",
    r"privacy policy",
    r"terms of service",
    r"help center",
    r"view on facebook",
]

DEFAULT_CATEGORY_WEIGHTS: dict[PostCategory, float] = {
    PostCategory.PHOTO: 2,
    PostCategory.VIDEO: 3,
    PostCategory.SHARED: 1,
    PostCategory.LINK: 1,
    PostCategory.STATUS: 1,
    PostCategory.GROUP: 2,
    PostCategory.POST: 1,
}

# Japanese terms first, then their English counterparts
DEFAULT_TAG_KEYWORDS = [
    "技術",
    "開発",
    "AI",
    "機械学習",
    "プログラミング",
    "Web",
    "アプリ",
    "スタートアップ",
    "ビジネス",
    "technology",
    "development",
    "machine learning",
    "programming",
    "app",
    "startup",
    "business",
]


class ExtractionConfig(BaseSettings):
    """Extraction rules and thresholds loaded from environment variables.

    Variables use the ``FEEDMAIL_`` prefix; list and mapping fields are
    given as JSON, e.g.
    ``FEEDMAIL_TRACKING_PIXEL_MARKERS='["pixel", "/beacon"]'``.
    """

    model_config = SettingsConfigDict(
        env_prefix="FEEDMAIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Subject classification
    author_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_AUTHOR_PATTERNS),
        description="Ordered subject anchors; group 1 captures the author",
    )
    author_selectors: list[str] = Field(
        default_factory=lambda: list(DEFAULT_AUTHOR_SELECTORS),
        description="CSS selectors for an author region in the body",
    )
    author_text_pattern: str = Field(
        default=DEFAULT_AUTHOR_TEXT_PATTERN,
        description="Free-text author phrase; group 1 captures the author",
    )
    category_patterns: list[tuple[PostCategory, str]] = Field(
        default_factory=lambda: list(DEFAULT_CATEGORY_PATTERNS),
        description="Ordered (category, pattern) rules, first match wins",
    )

    # Content extraction
    content_selectors: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CONTENT_SELECTORS),
        description="Ordered CSS selectors for the post body",
    )
    content_prefix_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CONTENT_PREFIX_PATTERNS),
        description="Leading 'X wrote:' style prefixes stripped from selected text",
    )
    boilerplate_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BOILERPLATE_PATTERNS),
        description="Lines matching any of these are not post content",
    )
    system_message_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SYSTEM_MESSAGE_PATTERNS),
        description="Site chrome that ends the fallback absorption window",
    )
    selector_min_length: int = Field(default=10, ge=0, description="Selector text must be longer")
    fallback_min_length: int = Field(default=20, ge=0, description="Fallback text must be longer")
    short_line_max_length: int = Field(
        default=5, ge=0, description="Lines this short or shorter are rejected"
    )
    fallback_lookahead: int = Field(
        default=4, ge=0, description="Lines absorbed after the first content line"
    )
    max_scan_lines: int = Field(default=2000, ge=1, description="Fallback scan line budget")
    max_scan_chars: int = Field(
        default=200_000, ge=1, description="Fallback scan character budget"
    )

    # Media and links
    tracking_pixel_markers: list[str] = Field(
        default_factory=lambda: ["facebook.com/tr/", "pixel"],
        description="Image sources containing these are dropped",
    )
    excluded_link_markers: list[str] = Field(
        default_factory=lambda: ["facebook.com/help", "unsubscribe"],
        description="Link targets containing these are dropped",
    )

    # Importance and tags
    category_weights: dict[PostCategory, float] = Field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_WEIGHTS),
        description="Importance weight per category",
    )
    default_category_weight: float = Field(default=1, ge=0)
    max_importance: float = Field(default=10, gt=0)
    tag_source_label: str = Field(default="Facebook", description="Tag naming the source network")
    tag_keywords: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TAG_KEYWORDS),
        description="Keywords promoted to tags when found in the content",
    )

    @field_validator(
        "author_patterns",
        "content_prefix_patterns",
        "boilerplate_patterns",
        "system_message_patterns",
    )
    @classmethod
    def validate_pattern_list(cls, v: list[str]) -> list[str]:
        """Reject patterns that do not compile."""
        for pattern in v:
            _check_pattern(pattern)
        return v

    @field_validator("author_text_pattern")
    @classmethod
    def validate_author_text_pattern(cls, v: str) -> str:
        """Reject an author phrase pattern that does not compile."""
        _check_pattern(v)
        return v

    @field_validator("category_patterns")
    @classmethod
    def validate_category_patterns(
        cls, v: list[tuple[PostCategory, str]]
    ) -> list[tuple[PostCategory, str]]:
        """Reject category rules whose pattern does not compile."""
        for _, pattern in v:
            _check_pattern(pattern)
        return v


def _check_pattern(pattern: str) -> None:
    try:
        re.compile(pattern)
    except re.error as e:
        raise ValueError(f"Invalid pattern {pattern!r}: {e}") from e


@lru_cache
def get_extraction_config() -> ExtractionConfig:
    """Get cached extraction configuration instance."""
    return ExtractionConfig()
