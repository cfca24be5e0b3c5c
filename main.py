# =============================================================================
# SEO SaaS Platform - Content Scoring API (FastAPI)
# =============================================================================
# Deterministic content SEO scoring for drafts produced by the writer
# pipeline.
#
# Endpoints:
#   1. Analyze        - 4-category itemized score + grade for a draft
#   2. Suggestions    - prioritized fixes for a draft
#   3. Export         - PDF report of the score
#   4. Draft gate     - 90+ pass/fail check before publishing
#   5. Rewrite prompt - improvement brief for a failed draft
#
# Run:  python main.py
# Test: curl http://localhost:8000/health
# =============================================================================

import logging
import os
import re
import time
from collections import defaultdict
from datetime import datetime
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, field_validator

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

load_dotenv()                       # reads .env into os.environ

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
)
logger = logging.getLogger("seo-saas")

RATE_LIMIT = int(os.getenv("RATE_LIMIT_PER_MIN", "60"))
MAX_CONTENT_KB = int(os.getenv("MAX_CONTENT_KB", "2048"))
SEO_PASS_SCORE = int(os.getenv("SEO_PASS_SCORE", "90"))

if not 0 <= SEO_PASS_SCORE <= 100:
    logger.warning(f"SEO_PASS_SCORE={SEO_PASS_SCORE} is outside 0-100 - falling back to 90")
    SEO_PASS_SCORE = 90

from seo_catalog import CATALOG
from seo_engine import (
    DEFAULT_TARGET_WORD_COUNT,
    analyze_content,
    build_rewrite_prompt,
    prioritized_suggestions,
    score_draft,
)
from seo_models import DraftScore, SEOAnalysisInput, SEOScore
from pdf_export import build_pdf

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

app = FastAPI(
    title="SEO SaaS Content Scoring API",
    version="1.0.0",
    description="Rule-based, explainable content SEO scoring",
)

# CORS - open for development, lock down for production
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:3000,http://localhost:5173",
).split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Simple in-memory rate limiter (swap for Redis in production)
# ---------------------------------------------------------------------------

_rate_buckets: dict[str, list[float]] = defaultdict(list)


@app.middleware("http")
async def rate_limit_middleware(request: Request, call_next):
    if request.url.path.startswith(("/health", "/info", "/docs", "/openapi")):
        return await call_next(request)

    ip = request.client.host if request.client else "unknown"
    now = time.time()
    _rate_buckets[ip] = [t for t in _rate_buckets[ip] if now - t < 60]

    if len(_rate_buckets[ip]) >= RATE_LIMIT:
        # HTTPException raised in middleware bypasses the exception handlers
        return JSONResponse(status_code=429,
                            content={"detail": "Rate limit exceeded - try again in a minute"})

    _rate_buckets[ip].append(now)
    return await call_next(request)


# =============================================================================
# Request models
# =============================================================================

def _check_content_size(v: str) -> str:
    size_kb = len(v.encode("utf-8")) / 1024
    if size_kb > MAX_CONTENT_KB:
        raise ValueError(f"Content is {size_kb:.0f}KB - the limit is {MAX_CONTENT_KB}KB")
    return v


def _check_keyword(v: str) -> str:
    v = v.strip()
    if len(v) > 200:
        raise ValueError("Keyword must be under 200 characters")
    return v


def _check_secondary(v):
    if len(v) > 20:
        raise ValueError("At most 20 secondary keywords are allowed")
    return v


class AnalyzeRequest(SEOAnalysisInput):
    """Draft to analyze. Keys may be snake_case or camelCase (metaDescription, ...)."""

    @field_validator("content")
    @classmethod
    def content_size(cls, v: str) -> str:
        return _check_content_size(v)

    @field_validator("primary_keyword")
    @classmethod
    def keyword_valid(cls, v: str) -> str:
        return _check_keyword(v)

    @field_validator("secondary_keywords")
    @classmethod
    def secondary_valid(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return _check_secondary(v)

    @field_validator("url")
    @classmethod
    def url_valid(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) > 2048:
            raise ValueError("URL must be under 2048 characters")
        return v


class DraftRequest(BaseModel):
    content: str
    primary_keyword: str = ""
    secondary_keywords: list[str] = []
    target_word_count: int = DEFAULT_TARGET_WORD_COUNT
    meta_title: str = ""

    @field_validator("content")
    @classmethod
    def content_size(cls, v: str) -> str:
        return _check_content_size(v)

    @field_validator("primary_keyword")
    @classmethod
    def keyword_valid(cls, v: str) -> str:
        return _check_keyword(v)

    @field_validator("secondary_keywords", mode="before")
    @classmethod
    def secondary_null(cls, v):
        return [] if v is None else v

    @field_validator("secondary_keywords")
    @classmethod
    def secondary_valid(cls, v: list[str]) -> list[str]:
        return _check_secondary(v)

    @field_validator("target_word_count")
    @classmethod
    def target_valid(cls, v: int) -> int:
        if not 100 <= v <= 20000:
            raise ValueError("target_word_count must be between 100 and 20000")
        return v


def _slug(text: str, fallback: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")[:30]
    return slug or fallback


# =============================================================================
# Content scoring
# =============================================================================

@app.post("/seo/analyze", response_model=SEOScore)
def seo_analyze(body: AnalyzeRequest):
    """Full itemized score: category scores, overall, grade and every check."""
    score = analyze_content(body)
    logger.info(f"Analyzed '{body.title[:60]}' [{body.primary_keyword}] -> {score.overall} ({score.grade})")
    return score


@app.post("/seo/analyze/suggestions")
def seo_suggestions(body: AnalyzeRequest):
    """Just the actionable part of the score, most important first."""
    score = analyze_content(body)
    return {
        "overall": score.overall,
        "grade": score.grade,
        "suggestions": [s.model_dump() for s in prioritized_suggestions(score)],
    }


@app.post("/seo/analyze/export")
def seo_export_pdf(body: AnalyzeRequest):
    """Score the draft and return the report as a PDF attachment."""
    score = analyze_content(body)
    try:
        pdf_bytes = build_pdf(score, title=body.title, primary_keyword=body.primary_keyword)
    except Exception as e:
        logger.error(f"PDF generation failed for '{body.title[:60]}': {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="PDF generation failed")

    filename = f"seo-score-{_slug(body.primary_keyword, 'content')}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


# =============================================================================
# Draft quality gate
# =============================================================================

def _score_draft(body: DraftRequest) -> DraftScore:
    return score_draft(
        body.content,
        body.primary_keyword,
        secondary_keywords=body.secondary_keywords,
        target_word_count=body.target_word_count,
        meta_title=body.meta_title,
        pass_score=SEO_PASS_SCORE,
    )


@app.post("/seo/score-draft", response_model=DraftScore)
def seo_score_draft(body: DraftRequest):
    """Pass/fail gate for generated drafts (SEO_PASS_SCORE, default 90)."""
    result = _score_draft(body)
    logger.info(
        f"Draft gate [{body.primary_keyword}]: {result.overall} {result.letter_grade} "
        f"{'PASSED' if result.passed else 'FAILED'}"
    )
    return result


@app.post("/seo/rewrite-prompt")
def seo_rewrite_prompt(body: DraftRequest):
    """Score a draft and build the improvement brief for the writer model."""
    result = _score_draft(body)
    prompt = build_rewrite_prompt(
        body.content,
        result,
        body.primary_keyword,
        target_word_count=body.target_word_count,
        pass_score=SEO_PASS_SCORE,
    )
    return {"score": result.model_dump(), "prompt": prompt}


# =============================================================================
# Health & info
# =============================================================================

@app.get("/health")
async def health():
    return {
        "status": "ok",
        "timestamp": datetime.now().isoformat(),
        "checks_in_catalog": len(CATALOG),
    }


@app.get("/info")
async def info():
    return {
        "name": "SEO SaaS Content Scoring API",
        "version": "1.0.0",
        "pass_score": SEO_PASS_SCORE,
        "categories": ["content", "readability", "technical", "keyword"],
        "endpoints": {
            "analyze": "POST /seo/analyze",
            "suggestions": "POST /seo/analyze/suggestions",
            "export": "POST /seo/analyze/export",
            "score_draft": "POST /seo/score-draft",
            "rewrite_prompt": "POST /seo/rewrite-prompt",
            "health": "GET /health",
        },
    }


# =============================================================================
# Run
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(app, host="0.0.0.0", port=port)
