"""Importance scoring for recovered posts.

The score is read by downstream consumers (e.g. to order a digest); it
never decides whether a record is produced.
"""

from __future__ import annotations

from feedmail.core.config import ExtractionConfig, get_extraction_config
from feedmail.core.types import PostRecord

# (minimum exclusive length, points); buckets add up independently
CONTENT_LENGTH_BUCKETS: tuple[tuple[int, float], ...] = (
    (100, 1),
    (300, 2),
    (500, 3),
)
IMAGE_WEIGHT = 1.0
LINK_WEIGHT = 0.5


def calculate_importance(record: PostRecord, config: ExtractionConfig | None = None) -> float:
    """Score a post between 0 and the configured maximum (10 by default).

    Args:
        record: Assembled post record.
        config: Extraction configuration for category weights and the cap.

    Returns:
        Importance score.
    """
    config = config or get_extraction_config()

    score = 0.0
    length = len(record.content)
    for threshold, points in CONTENT_LENGTH_BUCKETS:
        if length > threshold:
            score += points

    score += config.category_weights.get(record.category, config.default_category_weight)
    score += len(record.media) * IMAGE_WEIGHT
    score += len(record.links) * LINK_WEIGHT

    return max(0.0, min(score, config.max_importance))
