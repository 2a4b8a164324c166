"""Line predicates separating post text from notification chrome."""

from __future__ import annotations

import re

from feedmail.core.config import ExtractionConfig


class LineClassifier:
    """Compiled boilerplate and system-message pattern sets.

    Example:
        classifier = LineClassifier.from_config(config)
        if classifier.is_post_content(line) and not classifier.is_system_message(line):
            ...
    """

    def __init__(
        self,
        boilerplate_patterns: list[re.Pattern[str]],
        system_message_patterns: list[re.Pattern[str]],
        short_line_max_length: int = 5,
    ) -> None:
        self.boilerplate_patterns = boilerplate_patterns
        self.system_message_patterns = system_message_patterns
        self.short_line_max_length = short_line_max_length

    @classmethod
    def from_config(cls, config: ExtractionConfig) -> LineClassifier:
        return cls(
            boilerplate_patterns=[re.compile(p, re.I) for p in config.boilerplate_patterns],
            system_message_patterns=[re.compile(p, re.I) for p in config.system_message_patterns],
            short_line_max_length=config.short_line_max_length,
        )

    def is_post_content(self, line: str) -> bool:
        """Check whether a line plausibly belongs to the post itself.

        Rejects lines that open like sender/legal/navigation chrome, bare
        URLs, pure timestamps, and lines too short to carry content.
        """
        if len(line) <= self.short_line_max_length:
            return False
        return not any(pattern.search(line) for pattern in self.boilerplate_patterns)

    def is_system_message(self, line: str) -> bool:
        """Check whether a line mentions site chrome anywhere in it."""
        return any(pattern.search(line) for pattern in self.system_message_patterns)
