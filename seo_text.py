"""
seo_text.py - Text normalisation shared by every analyzer.

The HTML is parsed once; the same read-only document, plain text and word
count are handed to all four analyzers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator

from bs4 import BeautifulSoup, NavigableString
from bs4.element import PreformattedString, Tag

_NON_TEXT_PARENTS = frozenset({"script", "style"})
_BLANK_LINE_RE = re.compile(r"\n\s*\n")


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to ``digits`` decimals, .5 away from zero."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def _text_nodes(root: BeautifulSoup | Tag) -> Iterator[NavigableString]:
    """Visible text nodes: no comments/doctype/CDATA, nothing inside script or style."""
    for node in root.find_all(string=True):
        if isinstance(node, PreformattedString):
            continue
        if node.parent is not None and node.parent.name in _NON_TEXT_PARENTS:
            continue
        yield node


def element_text(tag: Tag) -> str:
    """Plain text of a single element (tags stripped, whitespace collapsed)."""
    return collapse_whitespace(" ".join(_text_nodes(tag)))


def _document_text(document: BeautifulSoup) -> str:
    return collapse_whitespace(" ".join(_text_nodes(document)))


def _paragraphs(document: BeautifulSoup) -> tuple[str, ...]:
    blocks = [element_text(p) for p in document.find_all("p")]
    if not blocks:
        # No <p> markup (plain text drafts): fall back to blank-line separated blocks
        raw = " ".join(_text_nodes(document))
        blocks = [collapse_whitespace(b) for b in _BLANK_LINE_RE.split(raw)]
    return tuple(b for b in blocks if b)


def strip_html(html: str) -> str:
    """Plain text of an HTML fragment. Never raises; empty in, empty out."""
    return _document_text(parse_html(html))


def count_words(text: str) -> int:
    """Number of whitespace-delimited tokens."""
    return len(text.split())


@dataclass(frozen=True, eq=False)
class NormalizedContent:
    html: str
    document: BeautifulSoup = field(repr=False)
    text: str
    word_count: int
    paragraphs: tuple[str, ...]


def normalize(html: str) -> NormalizedContent:
    html = html or ""
    document = parse_html(html)
    text = _document_text(document)
    return NormalizedContent(
        html=html,
        document=document,
        text=text,
        word_count=count_words(text),
        paragraphs=_paragraphs(document),
    )
