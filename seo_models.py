"""
seo_models.py - Data model for the content SEO scoring engine.

Every object here is created fresh per analysis and never mutated: the
models are frozen, collections are tuples, and everything serialises to
plain JSON via ``model_dump(mode="json")``.

Hierarchy:  SEOScore -> {Content,Readability,Technical,Keyword}Result -> Check
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

Category = Literal["content", "readability", "technical", "keyword"]
Status = Literal["pass", "warning", "fail"]
Priority = Literal["high", "medium", "low"]
Grade = Literal["A+", "A", "B", "C", "D", "F"]
DensityStatus = Literal["optimal", "low", "high"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

class FeaturedImage(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    url: str = ""
    alt: str = ""


class SEOAnalysisInput(BaseModel):
    """A draft to score. Accepts snake_case or camelCase keys."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    title: str
    meta_description: str
    content: str  # HTML or plain text
    primary_keyword: str
    secondary_keywords: tuple[str, ...] = ()
    url: Optional[str] = None
    featured_image: Optional[FeaturedImage] = None

    @field_validator("secondary_keywords", mode="before")
    @classmethod
    def _null_keywords_are_empty(cls, v):
        return () if v is None else v


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------

class Check(_Frozen):
    id: str
    category: Category
    title: str
    description: str
    status: Status
    priority: Priority
    score: int
    max_score: int
    suggestion: Optional[str] = None

    @model_validator(mode="after")
    def _score_matches_status(self) -> "Check":
        if self.max_score <= 0:
            raise ValueError(f"{self.id}: max_score must be positive")
        if not 0 <= self.score <= self.max_score:
            raise ValueError(f"{self.id}: score {self.score} outside 0..{self.max_score}")
        if self.status == "pass":
            if self.score != self.max_score:
                raise ValueError(f"{self.id}: a passing check must carry the full score")
            if self.suggestion:
                raise ValueError(f"{self.id}: a passing check carries no suggestion")
        return self


# ---------------------------------------------------------------------------
# Category results
# ---------------------------------------------------------------------------

class Headings(_Frozen):
    h1: tuple[str, ...] = ()
    h2: tuple[str, ...] = ()
    h3: tuple[str, ...] = ()
    h4: tuple[str, ...] = ()


class ContentResult(_Frozen):
    title_length: int
    meta_description_length: int
    headings: Headings
    image_count: int
    images_with_alt: int
    internal_links: int
    external_links: int
    checks: tuple[Check, ...]


class ReadabilityResult(_Frozen):
    flesch_reading_ease: int
    flesch_kincaid_grade: float
    grade_level: str
    avg_sentence_length: float
    avg_word_length: float
    sentence_count: int
    word_count: int
    paragraph_count: int
    passive_voice_count: int
    long_sentences: int
    checks: tuple[Check, ...]


class TechnicalResult(_Frozen):
    has_schema_markup: bool
    has_canonical_tag: bool
    url_length: int
    url_has_special_chars: bool
    html_size_kb: float
    heading_hierarchy_valid: bool
    heading_issues: tuple[str, ...]
    checks: tuple[Check, ...]


class KeywordDensity(_Frozen):
    keyword: str
    count: int
    density: float
    status: DensityStatus


class KeywordResult(_Frozen):
    primary_keyword: KeywordDensity
    secondary_keywords: tuple[KeywordDensity, ...]
    keyword_in_title: bool
    keyword_in_meta: bool
    keyword_in_first_paragraph: bool
    keyword_in_headings: bool
    checks: tuple[Check, ...]


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------

class SEOScore(_Frozen):
    overall: int = Field(ge=0, le=100)
    content: int = Field(ge=0, le=100)
    readability: int = Field(ge=0, le=100)
    technical: int = Field(ge=0, le=100)
    keyword: int = Field(ge=0, le=100)
    grade: Grade
    checks: tuple[Check, ...]
    content_result: ContentResult
    readability_result: ReadabilityResult
    technical_result: TechnicalResult
    keyword_result: KeywordResult


class Suggestion(_Frozen):
    check_id: str
    category: Category
    priority: Priority
    title: str
    suggestion: str


# ---------------------------------------------------------------------------
# Draft quality gate
# ---------------------------------------------------------------------------

class MetricScore(_Frozen):
    score: int
    detail: str


class DraftMetrics(_Frozen):
    keyword_usage: MetricScore
    content_length: MetricScore
    readability: MetricScore
    heading_structure: MetricScore
    image_optimization: MetricScore


class DraftScore(_Frozen):
    overall: int
    letter_grade: str
    metrics: DraftMetrics
    improvements: tuple[str, ...]
    passed: bool
