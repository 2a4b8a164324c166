"""Shared type definitions for notification emails and recovered posts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PostCategory(str, Enum):
    """Kind of social-network post a notification refers to."""

    PHOTO = "photo"
    STATUS = "status"
    SHARED = "shared"
    VIDEO = "video"
    LINK = "link"
    GROUP = "group"
    PAGE = "page"
    POST = "post"  # Default when no subject rule matches


@dataclass(frozen=True, slots=True)
class RawEmailRecord:
    """Notification email as supplied by the email source.

    The identifier is passed through for the caller's bookkeeping only.
    """

    identifier: str = ""
    subject: str = ""
    sender: str = ""
    body: str = ""
    timestamp: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RawEmailRecord:
        """Build a record from a mapping.

        Accepts the field names as well as the ``id``/``from``/``date``
        keys used by mailbox exports.

        Args:
            data: Mapping with email fields.

        Returns:
            RawEmailRecord with missing fields left empty.
        """

        def _get(*keys: str) -> str:
            for key in keys:
                value = data.get(key)
                if value is not None:
                    return str(value)
            return ""

        return cls(
            identifier=_get("identifier", "id", "message_id"),
            subject=_get("subject"),
            sender=_get("sender", "from"),
            body=_get("body", "body_html", "body_text"),
            timestamp=_get("timestamp", "date"),
        )


@dataclass(frozen=True, slots=True)
class MediaItem:
    """Image attached to a post."""

    url: str
    alt_text: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "alt_text": self.alt_text}


@dataclass(frozen=True, slots=True)
class LinkItem:
    """Outbound link found in a post."""

    url: str
    anchor_text: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "anchor_text": self.anchor_text}


@dataclass(frozen=True, slots=True)
class EmailSnapshot:
    """Audit copy of the originating email's subject, sender and timestamp."""

    subject: str
    sender: str
    timestamp: str

    @classmethod
    def of(cls, raw: RawEmailRecord) -> EmailSnapshot:
        return cls(subject=raw.subject, sender=raw.sender, timestamp=raw.timestamp)

    def to_dict(self) -> dict[str, str]:
        return {"subject": self.subject, "sender": self.sender, "timestamp": self.timestamp}


@dataclass(frozen=True, slots=True)
class PostRecord:
    """Structured post recovered from a notification email.

    Attributes:
        author: Display name of the post author. Never empty.
        content: Sanitized post text. Never empty.
        category: Post category, ``PostCategory.POST`` by default.
        timestamp: ISO-8601 timestamp of the notification.
        media: Images in document order.
        links: Outbound links in document order.
        source: Snapshot of the originating email.
    """

    author: str
    content: str
    category: PostCategory
    timestamp: str
    source: EmailSnapshot
    media: tuple[MediaItem, ...] = field(default_factory=tuple)
    links: tuple[LinkItem, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.author or not self.author.strip():
            raise ValueError("PostRecord requires a non-empty author")
        if not self.content or not self.content.strip():
            raise ValueError("PostRecord requires non-empty content")

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return {
            "author": self.author,
            "content": self.content,
            "category": self.category.value,
            "timestamp": self.timestamp,
            "media": [item.to_dict() for item in self.media],
            "links": [item.to_dict() for item in self.links],
            "source": self.source.to_dict(),
        }


# None signals "this email is not a usable post notification".
ExtractionOutcome = PostRecord | None
