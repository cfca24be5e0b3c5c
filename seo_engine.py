# =============================================================================
# SEO Content Engine - Rule-based content scoring
# =============================================================================
#
# Pure, deterministic scoring of a draft (title, meta description, HTML body,
# keyword plan). No network, no randomness, no clock.
#
# - analyze_content():          4 analyzers -> category scores -> overall + grade
# - prioritized_suggestions():  actionable fixes, most important first
# - score_draft():              pass/fail quality gate used before publishing
# - build_rewrite_prompt():     improvement brief for a draft that failed the gate
#
# Analyzers live in seo_content / seo_readability / seo_technical /
# seo_keyword; the check weights live in seo_catalog.
# =============================================================================

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Sequence, Union

from seo_catalog import (
    CATEGORIES,
    CATEGORY_WEIGHTS,
    GRADE_THRESHOLDS,
    LOWEST_GRADE,
    PRIORITY_ORDER,
)
from seo_content import analyze_content_structure
from seo_keyword import analyze_keywords, count_occurrences
from seo_models import (
    Check,
    DraftMetrics,
    DraftScore,
    MetricScore,
    SEOAnalysisInput,
    SEOScore,
    Suggestion,
)
from seo_readability import analyze_readability, flesch_reading_ease
from seo_technical import analyze_technical
from seo_text import element_text, normalize

logger = logging.getLogger("seo-engine")

# ---------------------------------------------------------------------------
# Constants - quality gate
# ---------------------------------------------------------------------------

DEFAULT_PASS_SCORE = 90
DEFAULT_TARGET_WORD_COUNT = 1800
GATE_DENSITY_BAND = (0.8, 2.0)

# Integer percentages: keyword usage, length, readability, headings, images
GATE_WEIGHTS = {
    "keyword_usage": 30,
    "content_length": 25,
    "readability": 20,
    "heading_structure": 15,
    "image_optimization": 10,
}

GATE_GRADES = (
    (95, "A+"), (90, "A"), (85, "A-"),
    (80, "B+"), (75, "B"), (70, "B-"),
    (65, "C+"), (60, "C"), (55, "C-"),
    (50, "D+"), (45, "D"),
)

# ---------------------------------------------------------------------------
# Prompt
# ---------------------------------------------------------------------------

REWRITE_PROMPT = """You are an expert SEO content optimizer. The current content scored {overall}/100 but needs to score {pass_score}+ to pass.

CURRENT SEO SCORES:
- Keyword Usage: {keyword_usage.score}/100 - {keyword_usage.detail}
- Content Length: {content_length.score}/100 - {content_length.detail}
- Readability: {readability.score}/100 - {readability.detail}
- Heading Structure: {heading_structure.score}/100 - {heading_structure.detail}
- Image Optimization: {image_optimization.score}/100 - {image_optimization.detail}

REQUIRED IMPROVEMENTS TO REACH {pass_score}+:
{improvements}

PRIMARY KEYWORD: "{primary_keyword}"
TARGET WORD COUNT: {target_word_count}+ words

REWRITE INSTRUCTIONS:
1. Keep the same overall structure and topic
2. Address EVERY improvement listed above
3. Ensure primary keyword appears naturally {density_min}-{density_max}% density
4. Use exactly ONE H1 heading at the start containing the primary keyword
5. Include 3-6 H2 subheadings for clear structure
6. Write at a 6th-8th grade reading level (short sentences, simple words)
7. Ensure all image placeholders have descriptive alt text with keywords
8. Maintain the professional yet engaging tone

OUTPUT: Return ONLY the improved HTML content. No explanations.

CURRENT CONTENT TO IMPROVE:
{content}"""


# ---------------------------------------------------------------------------
# Score arithmetic
# ---------------------------------------------------------------------------

def _round_half_up(numerator: int, denominator: int) -> int:
    """round(numerator / denominator) with .5 going up, exact for non-negative ints."""
    return (2 * numerator + denominator) // (2 * denominator)


def category_score(checks: Sequence[Check]) -> int:
    """Percentage of available points earned; a category with no checks scores 100."""
    total_max = sum(c.max_score for c in checks)
    if not checks or total_max == 0:
        return 100
    return _round_half_up(100 * sum(c.score for c in checks), total_max)


def overall_score(categories: Mapping[str, int]) -> int:
    weighted = sum(CATEGORY_WEIGHTS[name] * categories[name] for name in CATEGORIES)
    return _round_half_up(weighted, sum(CATEGORY_WEIGHTS.values()))


def letter_grade(overall: int) -> str:
    for threshold, grade in GRADE_THRESHOLDS:
        if overall >= threshold:
            return grade
    return LOWEST_GRADE


# ---------------------------------------------------------------------------
# Main analysis
# ---------------------------------------------------------------------------

def analyze_content(data: Union[SEOAnalysisInput, Mapping[str, Any]]) -> SEOScore:
    """
    Score a draft across content, readability, technical and keyword checks.
    Total for well-typed input: missing optional fields only change which
    checks are emitted.
    """
    if not isinstance(data, SEOAnalysisInput):
        data = SEOAnalysisInput.model_validate(data)

    doc = normalize(data.content)

    content_result = analyze_content_structure(
        title=data.title,
        meta_description=data.meta_description,
        doc=doc,
        primary_keyword=data.primary_keyword,
        featured_image=data.featured_image,
    )
    readability_result = analyze_readability(doc)
    technical_result = analyze_technical(
        doc=doc,
        title=data.title,
        meta_description=data.meta_description,
        url=data.url,
    )
    keyword_result = analyze_keywords(
        doc=doc,
        primary_keyword=data.primary_keyword,
        secondary_keywords=data.secondary_keywords,
        title=data.title,
        meta_description=data.meta_description,
    )

    by_category = {
        "content": content_result.checks,
        "readability": readability_result.checks,
        "technical": technical_result.checks,
        "keyword": keyword_result.checks,
    }
    scores = {name: category_score(by_category[name]) for name in CATEGORIES}
    overall = overall_score(scores)
    grade = letter_grade(overall)
    checks = tuple(c for name in CATEGORIES for c in by_category[name])

    logger.debug(
        f"Scored '{data.title[:40]}' ({doc.word_count} words): overall={overall} grade={grade} "
        f"content={scores['content']} readability={scores['readability']} "
        f"technical={scores['technical']} keyword={scores['keyword']}"
    )

    return SEOScore(
        overall=overall,
        grade=grade,
        checks=checks,
        content_result=content_result,
        readability_result=readability_result,
        technical_result=technical_result,
        keyword_result=keyword_result,
        **scores,
    )


def prioritized_suggestions(score: SEOScore) -> list[Suggestion]:
    """Suggestions of every non-passing check, high priority first, evaluation order within."""
    pending = [c for c in score.checks if c.status != "pass" and c.suggestion]
    pending.sort(key=lambda c: PRIORITY_ORDER[c.priority])
    return [
        Suggestion(
            check_id=c.id,
            category=c.category,
            priority=c.priority,
            title=c.title,
            suggestion=c.suggestion,
        )
        for c in pending
    ]


# ---------------------------------------------------------------------------
# Draft quality gate - the orchestrator's 90+ check before publishing
# ---------------------------------------------------------------------------

def _gate_keyword(plain: str, word_count: int, h1_text: str, primary_keyword: str,
                  secondary_keywords: Sequence[str], meta_title: str,
                  improvements: list[str]) -> tuple[float, str]:
    if not primary_keyword:
        improvements.append("Set a primary keyword for SEO optimization")
        return 30, "No primary keyword set"

    count = count_occurrences(plain, primary_keyword)
    density = (count / word_count) * 100 if word_count > 0 else 0
    low, high = GATE_DENSITY_BAND
    in_h1 = primary_keyword.lower() in h1_text.lower()

    if low <= density <= high and in_h1:
        score, detail = 100, f'Perfect! "{primary_keyword}" {count}x ({density:.1f}%), in H1'
    elif low <= density <= high:
        score, detail = 85, "Good density but missing from H1"
        improvements.append(f'Add "{primary_keyword}" to the main H1 heading')
    elif density < low:
        score = max(40, 100 - (low - density) * 60)
        detail = f"Low density: {count}x ({density:.1f}%)"
        needed = math.ceil(low * word_count / 100)
        improvements.append(f'Increase "{primary_keyword}" usage from {count} to {needed} mentions')
    else:
        score = max(50, 100 - (density - high) * 25)
        detail = f"High density: {count}x ({density:.1f}%)"
        improvements.append(f'Reduce "{primary_keyword}" density - use synonyms or related terms')

    secondary = [k for k in secondary_keywords if k and k.strip()]
    missing = [k for k in secondary if count_occurrences(plain, k) == 0]
    if secondary and len(secondary) - len(missing) < len(secondary) * 0.5:
        score = max(score - 10, 40)
        improvements.append(f"Add more secondary keywords: {', '.join(missing[:3])}")

    if meta_title and primary_keyword.lower() not in meta_title.lower():
        improvements.append(f'Add "{primary_keyword}" to the meta title')

    return score, detail


def _gate_length(word_count: int, target: int, improvements: list[str]) -> tuple[float, str]:
    ratio = word_count / target if target > 0 else 0
    if 0.95 <= ratio <= 1.4:
        return 100, f"Excellent: {word_count} words"
    if 0.85 <= ratio < 0.95:
        improvements.append(f"Add {math.ceil(target * 0.95) - word_count} more words to reach optimal length")
        return 85, f"Good: {word_count}/{target} words"
    if 0.7 <= ratio < 0.85:
        improvements.append(f"Content is too short - add {target - word_count} more words")
        return 65, f"Short: {word_count}/{target} words"
    if ratio > 1.4:
        return 90, f"Long: {word_count} words"
    improvements.append(f"Content is significantly too short - target {target} words minimum")
    return max(30, ratio * 65), f"Very short: {word_count} words"


def _gate_readability(plain: str, improvements: list[str]) -> tuple[float, str]:
    fre = flesch_reading_ease(plain)
    if fre >= 60:
        return 100, f"Easy to read ({fre})"
    if fre >= 50:
        return 85, f"Fairly easy ({fre})"
    if fre >= 40:
        improvements.append("Use shorter sentences and simpler words to improve readability")
        return 70, f"Moderate ({fre})"
    improvements.append("Content is hard to read - simplify vocabulary and break up long sentences")
    return 50, f"Difficult ({fre})"


def _gate_headings(h1: int, h2: int, h3: int, improvements: list[str]) -> tuple[float, str]:
    if h1 == 1 and 3 <= h2 <= 8:
        return 100, f"Perfect: 1 H1, {h2} H2s, {h3} H3s"
    if h1 == 1 and h2 >= 2:
        return 90, f"Good: 1 H1, {h2} H2s"
    if h1 == 0:
        improvements.append("Add an H1 heading at the start with your primary keyword")
        return 40, "Missing H1 heading"
    if h1 > 1:
        improvements.append("Use only ONE H1 heading - convert extras to H2s")
        return 60, f"Multiple H1s: {h1}"
    improvements.append("Add more H2 section headings to break up content")
    return 70, f"Need more H2s: only {h2}"


def _gate_images(alts: Sequence[str], primary_keyword: str, improvements: list[str]) -> tuple[float, str]:
    total = len(alts)
    with_alt = sum(1 for a in alts if a.strip())
    with_keyword = sum(1 for a in alts if primary_keyword and primary_keyword.lower() in a.lower())

    if total == 0:
        improvements.append("Add at least 2-3 images with keyword-rich alt text")
        return 50, "No images found"
    if total >= 2 and with_alt == total:
        if not with_keyword:
            improvements.append(f'Add primary keyword "{primary_keyword}" to at least one image alt text')
        return (100 if with_keyword else 85), f"{total} images with alt text"
    if with_alt < total:
        improvements.append(f"Add alt text to {total - with_alt} images")
        return max(50, (with_alt / total) * 85), f"{with_alt}/{total} have alt text"
    improvements.append("Add more images to improve engagement")
    return 70, f"Only {total} image"


def draft_letter_grade(overall: int) -> str:
    for threshold, grade in GATE_GRADES:
        if overall >= threshold:
            return grade
    return "F"


def score_draft(
    content: str,
    primary_keyword: str,
    secondary_keywords: Sequence[str] = (),
    target_word_count: int = DEFAULT_TARGET_WORD_COUNT,
    meta_title: str = "",
    pass_score: int = DEFAULT_PASS_SCORE,
) -> DraftScore:
    """
    Score a generated draft against the publishing bar.
    Returns overall (0-100), per-metric breakdown, improvements and pass/fail.
    """
    doc = normalize(content)
    plain = doc.text
    improvements: list[str] = []

    first_h1 = doc.document.find("h1")
    h1_text = element_text(first_h1) if first_h1 is not None else ""
    alts = [img.get("alt") or "" for img in doc.document.find_all("img")]

    raw = {
        "keyword_usage": _gate_keyword(plain, doc.word_count, h1_text, primary_keyword,
                                       secondary_keywords, meta_title, improvements),
        "content_length": _gate_length(doc.word_count, target_word_count, improvements),
        "readability": _gate_readability(plain, improvements),
        "heading_structure": _gate_headings(
            len(doc.document.find_all("h1")),
            len(doc.document.find_all("h2")),
            len(doc.document.find_all("h3")),
            improvements,
        ),
        "image_optimization": _gate_images(alts, primary_keyword, improvements),
    }

    metrics = {
        name: MetricScore(score=max(0, min(100, int(score + 0.5))), detail=detail)
        for name, (score, detail) in raw.items()
    }
    overall = _round_half_up(
        sum(GATE_WEIGHTS[name] * m.score for name, m in metrics.items()),
        sum(GATE_WEIGHTS.values()),
    )

    logger.debug(f"Draft gate for '{primary_keyword}': overall={overall} "
                 f"({'pass' if overall >= pass_score else 'fail'}, {len(improvements)} improvements)")

    return DraftScore(
        overall=overall,
        letter_grade=draft_letter_grade(overall),
        metrics=DraftMetrics(**metrics),
        improvements=tuple(improvements),
        passed=overall >= pass_score,
    )


def build_rewrite_prompt(
    original_content: str,
    draft: DraftScore,
    primary_keyword: str,
    target_word_count: int = DEFAULT_TARGET_WORD_COUNT,
    pass_score: int = DEFAULT_PASS_SCORE,
) -> str:
    """Improvement brief for a draft that failed score_draft()."""
    improvements = "\n".join(f"{i}. {imp}" for i, imp in enumerate(draft.improvements, 1))
    low, high = GATE_DENSITY_BAND
    m = draft.metrics
    return REWRITE_PROMPT.format(
        overall=draft.overall,
        pass_score=pass_score,
        keyword_usage=m.keyword_usage,
        content_length=m.content_length,
        readability=m.readability,
        heading_structure=m.heading_structure,
        image_optimization=m.image_optimization,
        improvements=improvements or "None - polish only.",
        primary_keyword=primary_keyword,
        target_word_count=target_word_count,
        density_min=low,
        density_max=high,
        content=original_content,
    )
