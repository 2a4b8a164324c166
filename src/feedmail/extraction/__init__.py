"""Post extraction from notification emails."""

from __future__ import annotations

from feedmail.extraction.classifiers import LineClassifier
from feedmail.extraction.content import ContentExtractor
from feedmail.extraction.document import (
    Document,
    DocumentNode,
    PlainTextDocument,
    SoupDocument,
    load_document,
)
from feedmail.extraction.harvest import harvest_links, harvest_media
from feedmail.extraction.pipeline import PostExtractor, extract, parse_timestamp
from feedmail.extraction.scoring import calculate_importance
from feedmail.extraction.subject import SubjectClassifier
from feedmail.extraction.tags import derive_tags

__all__ = [
    "ContentExtractor",
    "Document",
    "DocumentNode",
    "LineClassifier",
    "PlainTextDocument",
    "PostExtractor",
    "SoupDocument",
    "SubjectClassifier",
    "calculate_importance",
    "derive_tags",
    "extract",
    "harvest_links",
    "harvest_media",
    "load_document",
    "parse_timestamp",
]
