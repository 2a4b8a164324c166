"""Tag derivation for recovered posts."""

from __future__ import annotations

from feedmail.core.config import ExtractionConfig, get_extraction_config
from feedmail.core.types import PostCategory, PostRecord

CATEGORY_LABELS: dict[PostCategory, str] = {
    PostCategory.PHOTO: "Photo",
    PostCategory.STATUS: "Status",
    PostCategory.SHARED: "Shared",
    PostCategory.VIDEO: "Video",
    PostCategory.LINK: "Link",
    PostCategory.GROUP: "Group",
    PostCategory.PAGE: "Page",
}


def derive_tags(record: PostRecord, config: ExtractionConfig | None = None) -> list[str]:
    """Build tags: source label, author, category label, matched keywords.

    Keywords match case-insensitively anywhere in the content. Order is
    preserved and duplicates dropped.
    """
    config = config or get_extraction_config()

    tags = [config.tag_source_label, record.author]
    label = CATEGORY_LABELS.get(record.category)
    if label:
        tags.append(label)

    content = record.content.lower()
    tags.extend(keyword for keyword in config.tag_keywords if keyword.lower() in content)

    return list(dict.fromkeys(tag for tag in tags if tag))
