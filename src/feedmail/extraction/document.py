"""Markup-independent document querying.

Extraction code only talks to the ``Document``/``DocumentNode`` protocols:
select nodes by a CSS locator, read text, read attributes, walk children.
``SoupDocument`` implements them on BeautifulSoup; ``PlainTextDocument``
stands in for bodies that are not markup or cannot be parsed.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Protocol

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag
from soupsieve import SelectorSyntaxError

# Elements whose text never belongs to a post
SKIPPED_TAGS = frozenset({"script", "style", "head", "title", "noscript", "template"})

# Elements that start a new line when flattened
BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "center", "dd", "div", "dl", "dt",
        "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6",
        "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section", "table",
        "tbody", "td", "tfoot", "th", "thead", "tr", "ul",
    }
)

_MARKUP_RE = re.compile(r"<\s*[a-zA-Z!/][^>]*>")
_TAG_RE = re.compile(r"<[^>]+>")


class DocumentNode(Protocol):
    """A single element of a parsed document."""

    def text(self) -> str: ...

    def attr(self, name: str) -> str | None: ...

    def children(self) -> Iterator[DocumentNode]: ...


class Document(Protocol):
    """A parsed email body."""

    def select(self, locator: str) -> list[DocumentNode]: ...

    def text(self) -> str: ...


def _flatten(root: Tag) -> str:
    """Concatenate the text below *root*, breaking lines at block elements."""
    parts: list[str] = []
    stack: list[Iterator[object]] = [iter(root.children)]
    closes_block: list[bool] = [False]

    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
            if closes_block.pop():
                parts.append("\n")
            continue

        if isinstance(child, Tag):
            if child.name in SKIPPED_TAGS:
                continue
            if child.name == "br":
                parts.append("\n")
                continue
            block = child.name in BLOCK_TAGS
            if block:
                parts.append("\n")
            stack.append(iter(child.children))
            closes_block.append(block)
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            parts.append(str(child))

    return "".join(parts)


class SoupNode:
    """DocumentNode backed by a BeautifulSoup tag."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def text(self) -> str:
        return _flatten(self._tag)

    def attr(self, name: str) -> str | None:
        value = self._tag.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def children(self) -> Iterator[DocumentNode]:
        for child in self._tag.children:
            if isinstance(child, Tag):
                yield SoupNode(child)


class SoupDocument:
    """Document backed by a BeautifulSoup tree.

    Locators are CSS selectors as understood by soupsieve, including
    ``:-soup-contains("text")``. A locator that soupsieve rejects matches
    nothing.
    """

    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup

    @classmethod
    def parse(cls, markup: str) -> SoupDocument:
        return cls(BeautifulSoup(markup, "html.parser"))

    def select(self, locator: str) -> list[DocumentNode]:
        try:
            tags = self._soup.select(locator)
        except (SelectorSyntaxError, NotImplementedError, ValueError):
            return []
        return [SoupNode(tag) for tag in tags]

    def text(self) -> str:
        return _flatten(self._soup)


class PlainTextDocument:
    """Document for plain-text bodies: no nodes, text as given."""

    def __init__(self, text: str) -> None:
        self._text = text

    def select(self, locator: str) -> list[DocumentNode]:
        return []

    def text(self) -> str:
        return self._text


def looks_like_markup(body: str) -> bool:
    """Check whether *body* contains at least one markup tag."""
    return bool(_MARKUP_RE.search(body))


def load_document(body: str) -> Document:
    """Parse an email body into a Document.

    Plain-text bodies and markup the parser rejects both come back as a
    ``PlainTextDocument``; this function never raises.

    Args:
        body: HTML or plain-text email body.

    Returns:
        Queryable document.
    """
    if not body or not looks_like_markup(body):
        return PlainTextDocument(body or "")

    try:
        return SoupDocument.parse(body)
    except Exception:
        # Unparsable markup: keep the text, drop the tags
        return PlainTextDocument(_TAG_RE.sub(" ", body))
