"""Image and link harvesting with tracking/chrome filtering."""

from __future__ import annotations

from feedmail.core.sanitization import collapse_whitespace
from feedmail.core.types import LinkItem, MediaItem
from feedmail.extraction.document import Document


def harvest_media(document: Document, tracking_markers: list[str]) -> list[MediaItem]:
    """Collect images in document order, skipping tracking pixels.

    Args:
        document: Parsed email body.
        tracking_markers: Substrings identifying tracking-pixel sources.

    Returns:
        Media items; duplicates are kept.
    """
    media: list[MediaItem] = []
    for node in document.select("img"):
        src = node.attr("src")
        if not src or any(marker in src for marker in tracking_markers):
            continue
        media.append(MediaItem(url=src, alt_text=node.attr("alt") or ""))
    return media


def harvest_links(document: Document, excluded_markers: list[str]) -> list[LinkItem]:
    """Collect anchors in document order, skipping help and unsubscribe targets.

    Args:
        document: Parsed email body.
        excluded_markers: Substrings identifying excluded link targets.

    Returns:
        Link items; duplicates are kept.
    """
    links: list[LinkItem] = []
    for node in document.select("a"):
        href = node.attr("href")
        if not href or any(marker in href for marker in excluded_markers):
            continue
        links.append(LinkItem(url=href, anchor_text=collapse_whitespace(node.text())))
    return links
