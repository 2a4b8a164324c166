"""Author and category resolution from notification subjects."""

from __future__ import annotations

import re

from feedmail.core.config import ExtractionConfig
from feedmail.core.sanitization import collapse_whitespace
from feedmail.core.types import PostCategory
from feedmail.extraction.document import Document


class SubjectClassifier:
    """Ordered first-match-wins rules over the subject line.

    Author anchors are matched case-sensitively (they are fixed phrases in
    the notification templates); category rules ignore case.
    """

    def __init__(
        self,
        author_patterns: list[re.Pattern[str]],
        category_rules: list[tuple[re.Pattern[str], PostCategory]],
        author_selectors: list[str],
        author_text_pattern: re.Pattern[str],
    ) -> None:
        self.author_patterns = author_patterns
        self.category_rules = category_rules
        self.author_selectors = author_selectors
        self.author_text_pattern = author_text_pattern

    @classmethod
    def from_config(cls, config: ExtractionConfig) -> SubjectClassifier:
        return cls(
            author_patterns=[re.compile(p) for p in config.author_patterns],
            category_rules=[
                (re.compile(pattern, re.I), category)
                for category, pattern in config.category_patterns
            ],
            author_selectors=list(config.author_selectors),
            author_text_pattern=re.compile(config.author_text_pattern, re.I),
        )

    def author_from_subject(self, subject: str) -> str | None:
        """Return the captured author of the first matching anchor."""
        for pattern in self.author_patterns:
            match = pattern.search(subject)
            if match:
                captured = match.group(1) if pattern.groups else match.group(0)
                return collapse_whitespace(captured) or None
        return None

    def author_from_document(self, document: Document) -> str | None:
        """Look for an author region, then a "Posted by <name>" phrase.

        The region selectors form one query, so the earliest matching element
        in the document wins regardless of selector order.
        """
        if self.author_selectors:
            nodes = document.select(", ".join(self.author_selectors))
            if nodes:
                author = collapse_whitespace(nodes[0].text())
                if author:
                    return author

        match = self.author_text_pattern.search(document.text())
        if match:
            author = collapse_whitespace(match.group(1))
            if author:
                return author
        return None

    def resolve_author(self, subject: str, document: Document) -> str | None:
        """Resolve the post author.

        Args:
            subject: Notification subject, may be empty.
            document: Parsed email body for the fallbacks.

        Returns:
            Author name, or None when nothing matched.
        """
        return self.author_from_subject(subject or "") or self.author_from_document(document)

    def resolve_category(self, subject: str) -> PostCategory:
        """Resolve the post category; unmatched subjects are ``POST``."""
        for pattern, category in self.category_rules:
            if pattern.search(subject or ""):
                return category
        return PostCategory.POST
