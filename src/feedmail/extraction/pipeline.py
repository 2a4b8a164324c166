"""Extraction pipeline: notification email in, post record (or nothing) out.

Flow per email:
1. Subject classifier resolves the author and the post category
2. Content extractor runs the selector cascade, then the line-scan fallback
3. Harvester collects images and links
4. The record is assembled, or None is returned when author or content is missing

Each call is independent: the extractor only holds compiled, read-only rules,
so one instance can serve several threads.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

import structlog

from feedmail.core.config import ExtractionConfig, get_extraction_config
from feedmail.core.types import EmailSnapshot, PostRecord, RawEmailRecord
from feedmail.extraction.classifiers import LineClassifier
from feedmail.extraction.content import ContentExtractor
from feedmail.extraction.document import load_document
from feedmail.extraction.harvest import harvest_links, harvest_media
from feedmail.extraction.subject import SubjectClassifier


def parse_timestamp(value: str) -> datetime | None:
    """Parse an email date string.

    Tries RFC 2822 first, then ISO-8601. Naive results are taken as UTC.

    Args:
        value: Raw timestamp.

    Returns:
        Timezone-aware datetime, or None when unparsable.
    """
    if not value or not value.strip():
        return None
    value = value.strip()

    parsed: datetime | None = None
    try:
        parsed = parsedate_to_datetime(value)
    except (ValueError, TypeError, IndexError, OverflowError):
        pass

    # Fallback: try ISO format
    if parsed is None:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except (ValueError, TypeError, OverflowError):
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


class PostExtractor:
    """Recover social-network posts from notification emails.

    Example:
        extractor = PostExtractor()
        record = extractor.extract(raw_email)
        if record is None:
            # not a usable post notification
            ...
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        logger: structlog.typing.FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the extractor.

        Args:
            config: Extraction rules (default: environment configuration).
            logger: Logger receiving extraction events (default: module logger).
        """
        self.config = config or get_extraction_config()
        self._logger = logger or structlog.get_logger(__name__)

        classifier = LineClassifier.from_config(self.config)
        self.subject_classifier = SubjectClassifier.from_config(self.config)
        self.content_extractor = ContentExtractor.from_config(self.config, classifier)

    def extract(self, raw: RawEmailRecord) -> PostRecord | None:
        """Extract a post record from one email.

        Never raises: an unexpected fault is logged and reported as absence
        so a batch loop can move on to the next email.

        Args:
            raw: Notification email.

        Returns:
            PostRecord, or None when the email is not a usable post notification.
        """
        log = self._logger.bind(email_id=raw.identifier)
        try:
            return self._extract(raw, log)
        except Exception:
            log.exception("post_extraction_failed", subject=raw.subject)
            return None

    def _extract(
        self, raw: RawEmailRecord, log: structlog.typing.FilteringBoundLogger
    ) -> PostRecord | None:
        log.debug("post_extraction_started", subject=raw.subject)

        document = load_document(raw.body)
        author = self.subject_classifier.resolve_author(raw.subject, document)
        category = self.subject_classifier.resolve_category(raw.subject)
        content = self.content_extractor.extract(document)

        if not author or not content:
            log.debug(
                "post_incomplete",
                has_author=bool(author),
                has_content=bool(content),
            )
            return None

        media = harvest_media(document, self.config.tracking_pixel_markers)
        links = harvest_links(document, self.config.excluded_link_markers)

        timestamp = parse_timestamp(raw.timestamp)
        if timestamp is None:
            log.debug("timestamp_unparsable", raw_timestamp=raw.timestamp)
            timestamp = datetime.now(UTC)

        record = PostRecord(
            author=author,
            content=content,
            category=category,
            timestamp=timestamp.isoformat(),
            source=EmailSnapshot.of(raw),
            media=tuple(media),
            links=tuple(links),
        )
        log.info(
            "post_extracted",
            author=record.author,
            category=record.category.value,
            content_length=len(record.content),
        )
        return record

    def extract_many(
        self, raws: Iterable[RawEmailRecord]
    ) -> Iterator[tuple[RawEmailRecord, PostRecord | None]]:
        """Lazily extract a batch, pairing every email with its outcome."""
        for raw in raws:
            yield raw, self.extract(raw)


def extract(
    raw: RawEmailRecord,
    config: ExtractionConfig | None = None,
    logger: structlog.typing.FilteringBoundLogger | None = None,
) -> PostRecord | None:
    """Extract a post record from one email with a one-off extractor."""
    return PostExtractor(config=config, logger=logger).extract(raw)
