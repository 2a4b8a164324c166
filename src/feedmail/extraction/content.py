"""Post body extraction: selector cascade with a heuristic line-scan fallback."""

from __future__ import annotations

import re

from feedmail.core.config import ExtractionConfig
from feedmail.core.sanitization import sanitize_content
from feedmail.extraction.classifiers import LineClassifier
from feedmail.extraction.document import Document


class ContentExtractor:
    """Find the post text in a notification body.

    Stage 1 tries each content selector in order and accepts the first
    node's text once speaker prefixes ("Jane wrote:") are stripped and it
    is longer than ``selector_min_length``. Stage 2 scans the flattened
    text for a run of lines that look like post content.
    """

    def __init__(
        self,
        classifier: LineClassifier,
        selectors: list[str],
        prefix_patterns: list[re.Pattern[str]],
        selector_min_length: int = 10,
        fallback_min_length: int = 20,
        lookahead: int = 4,
        max_scan_lines: int = 2000,
        max_scan_chars: int = 200_000,
    ) -> None:
        self.classifier = classifier
        self.selectors = selectors
        self.prefix_patterns = prefix_patterns
        self.selector_min_length = selector_min_length
        self.fallback_min_length = fallback_min_length
        self.lookahead = lookahead
        self.max_scan_lines = max_scan_lines
        self.max_scan_chars = max_scan_chars

    @classmethod
    def from_config(
        cls, config: ExtractionConfig, classifier: LineClassifier | None = None
    ) -> ContentExtractor:
        return cls(
            classifier=classifier or LineClassifier.from_config(config),
            selectors=list(config.content_selectors),
            prefix_patterns=[re.compile(p, re.I) for p in config.content_prefix_patterns],
            selector_min_length=config.selector_min_length,
            fallback_min_length=config.fallback_min_length,
            lookahead=config.fallback_lookahead,
            max_scan_lines=config.max_scan_lines,
            max_scan_chars=config.max_scan_chars,
        )

    def strip_prefixes(self, text: str) -> str:
        """Remove leading "X wrote:", "X said:", "X posted:" speaker prefixes."""
        for pattern in self.prefix_patterns:
            text = pattern.sub("", text, count=1)
        return text

    def from_selectors(self, document: Document) -> str | None:
        """Run the selector cascade.

        Returns:
            Sanitized text of the first accepted node, or None.
        """
        for selector in self.selectors:
            nodes = document.select(selector)
            if not nodes:
                continue
            text = self.strip_prefixes(nodes[0].text().strip())
            if len(text) > self.selector_min_length:
                return sanitize_content(text) or None
        return None

    def scan_lines(self, text: str) -> list[str]:
        """Split flattened text into stripped non-blank lines within the scan budget."""
        text = text[: self.max_scan_chars]
        lines: list[str] = []
        for raw_line in text.split("\n"):
            line = raw_line.strip()
            if not line:
                continue
            lines.append(line)
            if len(lines) >= self.max_scan_lines:
                break
        return lines

    def from_lines(self, lines: list[str]) -> str | None:
        """Heuristic fallback over a line sequence.

        The first line that looks like post content opens a window that
        absorbs up to ``lookahead`` following lines while they still look
        like content and carry no site chrome. A window shorter than
        ``fallback_min_length`` is discarded and the scan moves on.
        """
        for i, line in enumerate(lines):
            if not self.classifier.is_post_content(line):
                continue

            window = [line]
            for next_line in lines[i + 1 : i + 1 + self.lookahead]:
                if self.classifier.is_post_content(
                    next_line
                ) and not self.classifier.is_system_message(next_line):
                    window.append(next_line)
                else:
                    break

            content = "\n".join(window)
            if len(content) > self.fallback_min_length:
                return sanitize_content(content) or None
        return None

    def extract(self, document: Document) -> str | None:
        """Extract the post text.

        Args:
            document: Parsed email body.

        Returns:
            Sanitized post content, or None when neither stage succeeds.
        """
        content = self.from_selectors(document)
        if content:
            return content
        return self.from_lines(self.scan_lines(document.text()))
