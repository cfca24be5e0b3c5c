"""
seo_keyword.py - Keyword density and placement checks.

Works on the plain text and the parsed headings only; no network, no
stemming, no synonyms. A keyword counts when it appears as a whole-word,
case-insensitive match.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from seo_catalog import CheckList, make_check, passed
from seo_models import Check, KeywordDensity, KeywordResult
from seo_text import NormalizedContent, element_text, round_half_up

PRIMARY_DENSITY_BAND = (0.5, 2.5)
SECONDARY_DENSITY_BAND = (0.3, 2.0)
MAX_SECONDARY_KEYWORDS = 5
INTRO_WINDOW_WORDS = 100
DISTRIBUTION_MIN_WORDS = 300
THIN_CONTENT_WORDS = 300
SHORT_CONTENT_WORDS = 800

_HEADING_RE = re.compile(r"^h[1-6]$")


# ---------------------------------------------------------------------------
# Counting
# ---------------------------------------------------------------------------

def count_occurrences(text: str, keyword: str) -> int:
    keyword = (keyword or "").strip()
    if not keyword:
        return 0
    # word boundaries that also hold for keywords starting or ending in symbols (C++, C#)
    return len(re.findall(rf"(?<!\w){re.escape(keyword)}(?!\w)", text, re.I))


def keyword_density(count: int, word_count: int) -> float:
    """Percentage of words, two decimals."""
    if word_count == 0:
        return 0.0
    return round_half_up(count * 100 / word_count, 2)


def density_status(density: float, primary: bool) -> str:
    low, high = PRIMARY_DENSITY_BAND if primary else SECONDARY_DENSITY_BAND
    if density < low:
        return "low"
    if density > high:
        return "high"
    return "optimal"


def _density(text: str, keyword: str, word_count: int, primary: bool) -> KeywordDensity:
    count = count_occurrences(text, keyword)
    density = keyword_density(count, word_count)
    return KeywordDensity(keyword=keyword, count=count, density=density,
                          status=density_status(density, primary))


def _introduction(doc: NormalizedContent) -> str:
    # a single block is no paragraph structure; use the opening words instead
    if len(doc.paragraphs) > 1:
        return doc.paragraphs[0]
    return " ".join(doc.text.split()[:INTRO_WINDOW_WORDS])


def _in_headings(doc: NormalizedContent, keyword: str) -> bool:
    return any(count_occurrences(element_text(h), keyword)
               for h in doc.document.find_all(_HEADING_RE))


def _sections_with_keyword(text: str, keyword: str) -> int:
    third = len(text) // 3
    sections = (text[:third], text[third:2 * third], text[2 * third:])
    return sum(1 for s in sections if count_occurrences(s, keyword))


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def _primary_density(primary: KeywordDensity) -> Check:
    description = f'"{primary.keyword}" appears {primary.count} times ({primary.density}%)'
    low, high = PRIMARY_DENSITY_BAND
    if primary.count == 0:
        return make_check("primary-keyword-density", status="fail", score=0, description=description,
                          suggestion=f'Add your primary keyword "{primary.keyword}" to your content')
    if primary.status == "low":
        return make_check("primary-keyword-density", status="warning", score=7, description=description,
                          suggestion=f"Keyword density is low ({primary.density}%). Aim for {low}-{high}%.")
    if primary.status == "high":
        return make_check("primary-keyword-density", status="warning", score=8, description=description,
                          suggestion=f"Keyword density is high ({primary.density}%). This may look like "
                                     f"keyword stuffing. Aim for {low}-{high}%.")
    return passed("primary-keyword-density", description)


def _first_paragraph(found: bool) -> Check:
    if found:
        return passed("keyword-first-paragraph", "Primary keyword appears in the first paragraph")
    return make_check("keyword-first-paragraph", status="warning", score=3,
                      description="Primary keyword not found in first paragraph",
                      suggestion="Add your primary keyword to the opening paragraph")


def _headings(found: bool) -> Check:
    if found:
        return passed("keyword-in-headings", "Primary keyword found in at least one heading")
    return make_check("keyword-in-headings", status="warning", score=4,
                      description="Primary keyword not found in any headings",
                      suggestion="Include your primary keyword in at least one H2 subheading")


def _distribution(text: str, keyword: str, count: int, word_count: int) -> Check:
    if count > 0 and word_count > DISTRIBUTION_MIN_WORDS and _sections_with_keyword(text, keyword) < 2:
        return make_check("keyword-distribution", status="warning", score=5,
                          description="Keyword appears in limited sections of content",
                          suggestion="Spread your keyword throughout the content, not just in one section")
    return passed("keyword-distribution", "Keyword is well distributed throughout content")


def _secondary(results: Sequence[KeywordDensity]) -> Optional[Check]:
    if not results:
        return None
    total = len(results)
    missing = [r.keyword for r in results if r.count == 0]
    if not missing:
        return passed("secondary-keywords", f"All {total} secondary keywords found in content")

    description = f"{total - len(missing)} of {total} secondary keywords found"
    if len(missing) == total:
        score = 2
    elif len(missing) > total / 2:
        score = 5
    else:
        score = 8
    return make_check("secondary-keywords", status="warning", score=score, description=description,
                      suggestion=f"Add missing secondary keywords: {', '.join(missing[:3])}")


def _word_count(word_count: int) -> Check:
    description = f"{word_count:,} words"
    if word_count < THIN_CONTENT_WORDS:
        return make_check("word-count", status="warning", score=3, description=description,
                          suggestion=f"Content is thin ({word_count} words). "
                                     "Aim for at least 800-1000 words for better SEO.")
    if word_count < SHORT_CONTENT_WORDS:
        return make_check("word-count", status="warning", score=6, description=description,
                          suggestion=f"Content could be longer ({word_count} words). "
                                     "Longer content often ranks better.")
    return passed("word-count", description)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def analyze_keywords(
    *,
    doc: NormalizedContent,
    primary_keyword: str,
    secondary_keywords: Optional[Sequence[str]] = (),
    title: str = "",
    meta_description: str = "",
) -> KeywordResult:
    text = doc.text
    word_count = doc.word_count

    primary = _density(text, primary_keyword, word_count, primary=True)
    secondary = tuple(
        _density(text, kw, word_count, primary=False)
        for kw in [k for k in secondary_keywords or () if k and k.strip()][:MAX_SECONDARY_KEYWORDS]
    )
    in_intro = count_occurrences(_introduction(doc), primary_keyword) > 0
    in_headings = _in_headings(doc, primary_keyword)

    checks = CheckList()
    checks.emit(_primary_density(primary))
    checks.emit(_first_paragraph(in_intro))
    checks.emit(_headings(in_headings))
    checks.emit(_distribution(text, primary_keyword, primary.count, word_count))
    checks.emit(_secondary(secondary))
    checks.emit(_word_count(word_count))

    return KeywordResult(
        primary_keyword=primary,
        secondary_keywords=secondary,
        keyword_in_title=count_occurrences(title, primary_keyword) > 0,
        keyword_in_meta=count_occurrences(meta_description, primary_keyword) > 0,
        keyword_in_first_paragraph=in_intro,
        keyword_in_headings=in_headings,
        checks=checks.freeze(),
    )
