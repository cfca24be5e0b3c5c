"""
seo_catalog.py - The fixed check catalog.

Every check the engine can emit is declared here once: its category, label,
priority and maximum score. Analyzers only decide *which band* a check lands
in; the catalog owns the weights. The tables are read-only mappings and are
never modified at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from seo_models import Check

CATEGORIES = ("content", "readability", "technical", "keyword")

# Integer percentages so the weights sum to exactly 100 (i.e. 1.0)
CATEGORY_WEIGHTS: Mapping[str, int] = MappingProxyType({
    "content": 30,
    "readability": 25,
    "technical": 20,
    "keyword": 25,
})

GRADE_THRESHOLDS = (
    (90, "A+"),
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
)
LOWEST_GRADE = "F"


@dataclass(frozen=True)
class CheckSpec:
    id: str
    category: str
    title: str
    priority: str
    max_score: int


def _table(*specs: CheckSpec) -> Mapping[str, CheckSpec]:
    table = {}
    for spec in specs:
        if spec.id in table:
            raise ValueError(f"Duplicate check id in catalog: {spec.id}")
        table[spec.id] = spec
    return MappingProxyType(table)


CATALOG: Mapping[str, CheckSpec] = _table(
    # ── content ─────────────────────────────────────────────────────────
    CheckSpec("title-length", "content", "Title Length", "high", 15),
    CheckSpec("title-keyword", "content", "Keyword in Title", "high", 15),
    CheckSpec("meta-length", "content", "Meta Description Length", "high", 10),
    CheckSpec("meta-keyword", "content", "Keyword in Meta Description", "medium", 10),
    CheckSpec("h1-heading", "content", "H1 Heading", "high", 10),
    CheckSpec("h2-headings", "content", "Subheadings (H2)", "medium", 8),
    CheckSpec("images", "content", "Images", "medium", 8),
    CheckSpec("image-alt", "content", "Image Alt Tags", "medium", 8),
    CheckSpec("internal-links", "content", "Internal Links", "medium", 6),
    CheckSpec("featured-image", "content", "Featured Image", "medium", 5),
    # ── readability ─────────────────────────────────────────────────────
    CheckSpec("flesch-reading-ease", "readability", "Flesch Reading Ease", "high", 15),
    CheckSpec("grade-level", "readability", "Reading Grade Level", "medium", 15),
    CheckSpec("sentence-length", "readability", "Average Sentence Length", "medium", 12),
    CheckSpec("long-sentences", "readability", "Long Sentences", "low", 10),
    CheckSpec("passive-voice", "readability", "Passive Voice", "low", 10),
    CheckSpec("word-length", "readability", "Average Word Length", "low", 8),
    CheckSpec("paragraphs", "readability", "Paragraph Structure", "low", 8),
    # ── technical ───────────────────────────────────────────────────────
    CheckSpec("schema-markup", "technical", "Schema Markup", "medium", 15),
    CheckSpec("url-length", "technical", "URL Structure", "medium", 10),
    CheckSpec("heading-hierarchy", "technical", "Heading Hierarchy", "medium", 12),
    CheckSpec("html-size", "technical", "Page Size", "low", 8),
    CheckSpec("meta-completeness", "technical", "Meta Tags Complete", "high", 10),
    # ── keyword ─────────────────────────────────────────────────────────
    CheckSpec("primary-keyword-density", "keyword", "Primary Keyword Density", "high", 15),
    CheckSpec("keyword-first-paragraph", "keyword", "Keyword in Introduction", "medium", 10),
    CheckSpec("keyword-in-headings", "keyword", "Keyword in Headings", "medium", 10),
    CheckSpec("keyword-distribution", "keyword", "Keyword Distribution", "low", 10),
    CheckSpec("secondary-keywords", "keyword", "Secondary Keywords", "medium", 10),
    CheckSpec("word-count", "keyword", "Content Length", "medium", 10),
)

PRIORITY_ORDER: Mapping[str, int] = MappingProxyType({"high": 0, "medium": 1, "low": 2})


def max_score(check_id: str) -> int:
    return CATALOG[check_id].max_score


def make_check(
    check_id: str,
    *,
    status: str,
    score: int,
    description: str,
    suggestion: Optional[str] = None,
) -> Check:
    """Build a Check whose category, title, priority and max_score come from the catalog."""
    spec = CATALOG[check_id]
    return Check(
        id=spec.id,
        category=spec.category,
        title=spec.title,
        description=description,
        status=status,
        priority=spec.priority,
        score=score,
        max_score=spec.max_score,
        suggestion=suggestion if status != "pass" else None,
    )


def passed(check_id: str, description: str) -> Check:
    """Shorthand for a check at its full score."""
    return make_check(check_id, status="pass", score=max_score(check_id), description=description)


class CheckList:
    """Ordered collector for an analyzer's checks.

    Rule functions return either a Check or None (rule not applicable for this
    input); ``emit`` keeps the former and drops the latter, so the decision to
    skip a check lives next to the rule that makes it.
    """

    def __init__(self) -> None:
        self._checks: list[Check] = []

    def emit(self, outcome: Optional[Check]) -> None:
        if outcome is not None:
            self._checks.append(outcome)

    def __len__(self) -> int:
        return len(self._checks)

    def freeze(self) -> tuple[Check, ...]:
        return tuple(self._checks)
