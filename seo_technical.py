"""
seo_technical.py - Markup-level technical checks.

Schema markup, canonical tag, URL shape, heading sequencing, payload size
and meta completeness.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlsplit

from seo_catalog import CheckList, make_check, passed
from seo_models import Check, TechnicalResult
from seo_text import NormalizedContent, round_half_up

URL_WARN_LENGTH = 75
URL_MAX_LENGTH = 100
HTML_WARN_KB = 200
HTML_MAX_KB = 500

_URL_SPECIAL_CHARS_RE = re.compile(r"[^a-zA-Z0-9\-/]")
_HEADING_RE = re.compile(r"^h[1-6]$")
_MICRODATA_ATTRS = ("itemscope", "itemprop", "itemtype")
_RDFA_ATTRS = ("typeof", "vocab")


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------

def _has_json_ld(doc: NormalizedContent) -> bool:
    for script in doc.document.find_all("script"):
        if (script.get("type") or "").strip().lower() == "application/ld+json":
            return True
    return False


def detect_schema_markup(doc: NormalizedContent) -> bool:
    """JSON-LD block, microdata attributes or RDFa markers."""
    if _has_json_ld(doc):
        return True
    for tag in doc.document.find_all(True):
        if any(tag.has_attr(a) for a in _MICRODATA_ATTRS + _RDFA_ATTRS):
            return True
        prop = tag.get("property")
        if isinstance(prop, str) and prop.lower().startswith("schema:"):
            return True
    return False


def detect_canonical_tag(doc: NormalizedContent) -> bool:
    """<link rel="canonical">, rel value matched case-insensitively."""
    for link in doc.document.find_all("link"):
        rel = link.get("rel") or []
        if isinstance(rel, str):
            rel = rel.split()
        if any(value.lower() == "canonical" for value in rel):
            return True
    return False


def url_path(url: str) -> str:
    """Path component of an absolute URL; anything else is taken as a path already."""
    parts = urlsplit(url)
    if parts.scheme and parts.netloc:
        return parts.path or "/"
    return url


def heading_issues(doc: NormalizedContent) -> list[str]:
    """Sequencing problems, in document order. Empty list means the hierarchy is valid."""
    issues: list[str] = []
    last = 0
    for tag in doc.document.find_all(_HEADING_RE):
        level = int(tag.name[1])
        if last == 0:
            if level != 1:
                issues.append(f"Content should start with H1, not H{level}")
        elif level > last + 1:
            issues.append(f"Heading jumps from H{last} to H{level}")
        last = level
    return issues


def html_size_kb(html: str) -> float:
    return round_half_up(len(html.encode("utf-8")) / 1024, 1)


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def _schema(has_schema: bool) -> Check:
    if has_schema:
        return passed("schema-markup", "Schema markup detected")
    return make_check("schema-markup", status="warning", score=5,
                      description="No schema markup found",
                      suggestion="Add schema markup (JSON-LD) for rich snippets in search results")


def _url(url: Optional[str]) -> Optional[Check]:
    if not url:
        return None
    path = url_path(url)
    length = len(path)
    description = f"URL path is {length} characters"
    if length > URL_MAX_LENGTH:
        return make_check("url-length", status="warning", score=4, description=description,
                          suggestion=f"URL is very long ({length} chars). "
                                     f"Keep URLs under {URL_WARN_LENGTH} characters.")
    if length > URL_WARN_LENGTH:
        return make_check("url-length", status="warning", score=7, description=description,
                          suggestion="URL could be shorter for better SEO.")
    if _URL_SPECIAL_CHARS_RE.search(path):
        return make_check("url-length", status="warning", score=7, description=description,
                          suggestion="URL contains special characters. "
                                     "Use only letters, numbers, and hyphens.")
    return passed("url-length", description)


def _hierarchy(issues: list[str]) -> Check:
    if not issues:
        return passed("heading-hierarchy", "Headings follow proper hierarchy")
    return make_check("heading-hierarchy", status="warning", score=5, description=issues[0],
                      suggestion="Ensure headings follow a logical order (H1 -> H2 -> H3)")


def _size(kb: float) -> Check:
    description = f"HTML content is approximately {kb}KB"
    if kb > HTML_MAX_KB:
        return make_check("html-size", status="warning", score=3, description=description,
                          suggestion=f"Page is large ({kb}KB). Consider optimizing content and images.")
    if kb > HTML_WARN_KB:
        return make_check("html-size", status="warning", score=6, description=description,
                          suggestion="Page size is moderate. Monitor for loading performance.")
    return passed("html-size", description)


def _meta_completeness(title: str, meta_description: str) -> Check:
    missing = [name for name, value in (("title", title), ("meta description", meta_description))
               if not value]
    if not missing:
        return passed("meta-completeness", "Title and meta description are set")
    return make_check("meta-completeness", status="fail", score=5 if len(missing) == 1 else 0,
                      description=f"Missing: {', '.join(missing)}",
                      suggestion="Set both title and meta description for better SEO")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def analyze_technical(
    *,
    doc: NormalizedContent,
    title: str,
    meta_description: str,
    url: Optional[str] = None,
) -> TechnicalResult:
    has_schema = detect_schema_markup(doc)
    issues = heading_issues(doc)
    size_kb = html_size_kb(doc.html)
    path = url_path(url) if url else ""

    checks = CheckList()
    checks.emit(_schema(has_schema))
    checks.emit(_url(url))
    checks.emit(_hierarchy(issues))
    checks.emit(_size(size_kb))
    checks.emit(_meta_completeness(title, meta_description))

    return TechnicalResult(
        has_schema_markup=has_schema,
        has_canonical_tag=detect_canonical_tag(doc),
        url_length=len(path),
        url_has_special_chars=bool(_URL_SPECIAL_CHARS_RE.search(path)),
        html_size_kb=size_kb,
        heading_hierarchy_valid=not issues,
        heading_issues=tuple(issues),
        checks=checks.freeze(),
    )
