"""
pdf_export.py - Render a content SEO score as a branded PDF report.

Usage:
    from pdf_export import build_pdf
    pdf_bytes = build_pdf(score, title="...", primary_keyword="...")
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from seo_catalog import CATEGORIES, CATEGORY_WEIGHTS
from seo_engine import prioritized_suggestions
from seo_models import Check, SEOScore

# ---------------------------------------------------------------------------
# Latin-1 sanitiser - Helvetica only supports Latin-1 (no emoji / Unicode)
# ---------------------------------------------------------------------------
_REPLACEMENTS = {
    "\u2026": "...",   # ellipsis
    "\u2018": "'",     # left single quote
    "\u2019": "'",     # right single quote
    "\u201c": '"',     # left double quote
    "\u201d": '"',     # right double quote
    "\u2013": "-",     # en dash
    "\u2014": "--",    # em dash
    "\u2022": "*",     # bullet
    "\u2192": "->",    # arrow
}


def _s(text) -> str:
    """Return a Latin-1-safe, single-line string for fpdf cell() calls."""
    t = str(text)
    for char, repl in _REPLACEMENTS.items():
        t = t.replace(char, repl)
    t = t.replace("\n", " ").replace("\r", " ").replace("\t", " ")
    return t.encode("latin-1", errors="replace").decode("latin-1")


# ---------------------------------------------------------------------------
# Colour palette
# ---------------------------------------------------------------------------
NAVY       = (15,  23,  42)   # headings / cover
BLUE       = (37,  99, 235)   # section titles
LIGHT_BLUE = (219, 234, 254)  # section title bg
GRAY_BG    = (248, 250, 252)  # table row bg
GRAY_LINE  = (226, 232, 240)  # dividers
GRAY_TEXT  = (100, 116, 139)  # secondary text
GREEN      = (22, 163,  74)   # pass
AMBER      = (217, 119,   6)  # warning
RED        = (220,  38,  38)  # fail
WHITE      = (255, 255, 255)

CATEGORY_LABELS = {
    "content": "Content",
    "readability": "Readability",
    "technical": "Technical",
    "keyword": "Keywords",
}


def _score_color(score: int):
    return GREEN if score >= 80 else AMBER if score >= 50 else RED


# ---------------------------------------------------------------------------
# PDF subclass with helpers
# ---------------------------------------------------------------------------

class SEOReport(FPDF):
    def __init__(self, score: SEOScore, title: str = "", primary_keyword: str = ""):
        super().__init__()
        self.score = score
        self.doc_title = title
        self.primary_keyword = primary_keyword
        self.set_margins(18, 18, 18)
        self.set_auto_page_break(auto=True, margin=22)

    # ── Header / footer ────────────────────────────────────────────────────

    def header(self):
        if self.page_no() == 1:
            return
        self.set_font("Helvetica", "B", 8)
        self.set_text_color(*GRAY_TEXT)
        self.cell(0, 6, _s(f"Content SEO Report  |  {self.doc_title[:80]}"), align="L")
        self.ln(1)
        self.set_draw_color(*GRAY_LINE)
        self.line(self.l_margin, self.get_y(), self.w - self.r_margin, self.get_y())
        self.ln(4)

    def footer(self):
        self.set_y(-16)
        self.set_font("Helvetica", "", 8)
        self.set_text_color(*GRAY_TEXT)
        self.cell(0, 6, f"Page {self.page_no()} of {{nb}}", align="C")

    # ── Drawing primitives ──────────────────────────────────────────────────

    def rule(self):
        self.set_draw_color(*GRAY_LINE)
        self.line(self.l_margin, self.get_y(), self.w - self.r_margin, self.get_y())
        self.ln(3)

    def section_title(self, tag: str, title: str):
        self.ln(4)
        self.set_fill_color(*LIGHT_BLUE)
        self.set_text_color(*BLUE)
        self.set_font("Helvetica", "B", 12)
        self.cell(0, 9, _s(f"  [{tag}]  {title}"), fill=True,
                  new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.ln(3)

    def sub_heading(self, text: str):
        self.set_font("Helvetica", "B", 9)
        self.set_text_color(*NAVY)
        self.cell(0, 6, _s(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.ln(1)

    def numbered(self, n: int, text: str):
        self.set_font("Helvetica", "", 9)
        self.set_text_color(*NAVY)
        self.set_x(self.l_margin + 4)
        self.cell(6, 5, f"{n}.")
        self.multi_cell(self.w - self.r_margin - self.l_margin - 10, 5, _s(text))
        self.set_x(self.l_margin)

    def status_badge(self, status: str):
        """Inline coloured badge: pass / warning / fail."""
        if status == "pass":
            color, label = GREEN, "PASS"
        elif status == "warning":
            color, label = AMBER, "WARN"
        else:
            color, label = RED, "FAIL"
        self.set_font("Helvetica", "B", 7)
        self.set_text_color(*WHITE)
        self.set_fill_color(*color)
        self.cell(12, 4, label, fill=True, align="C")
        self.set_text_color(*NAVY)
        self.set_fill_color(*WHITE)

    def score_circle(self, score: int, label: str):
        """Large score indicator."""
        cx = self.l_margin + 18
        cy = self.get_y() + 12
        self.set_fill_color(*_score_color(score))
        self.ellipse(cx - 12, cy - 10, 24, 20, "F")
        self.set_font("Helvetica", "B", 14)
        self.set_text_color(*WHITE)
        self.set_xy(cx - 12, cy - 5)
        self.cell(24, 10, str(score), align="C")
        self.set_font("Helvetica", "", 9)
        self.set_text_color(*GRAY_TEXT)
        self.set_xy(cx + 15, cy - 3)
        self.cell(0, 5, _s(f"/ 100  {label}"))
        self.set_xy(self.l_margin, cy + 14)

    def score_bar(self, label: str, score: int, weight: int):
        """Labelled horizontal bar for one category score."""
        y = self.get_y()
        self.set_font("Helvetica", "B", 9)
        self.set_text_color(*NAVY)
        self.cell(32, 6, _s(label))
        track_x = self.l_margin + 34
        track_w = self.w - self.r_margin - track_x - 30
        self.set_fill_color(*GRAY_LINE)
        self.rect(track_x, y + 1.5, track_w, 3, "F")
        if score > 0:
            self.set_fill_color(*_score_color(score))
            self.rect(track_x, y + 1.5, track_w * score / 100, 3, "F")
        self.set_xy(track_x + track_w + 2, y)
        self.set_font("Helvetica", "", 8)
        self.set_text_color(*GRAY_TEXT)
        self.cell(0, 6, f"{score}/100  ({weight}%)", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    def check_row(self, check: Check):
        y = self.get_y()
        if int(y) % 2 == 0:
            self.set_fill_color(*GRAY_BG)
            self.rect(self.l_margin, y, self.w - self.l_margin - self.r_margin, 7, "F")
        self.set_font("Helvetica", "B", 8)
        self.set_text_color(*NAVY)
        self.cell(45, 7, _s(check.title))
        self.status_badge(check.status)
        self.set_font("Helvetica", "", 8)
        self.set_text_color(*GRAY_TEXT)
        self.set_x(self.l_margin + 60)
        self.cell(16, 7, f"{check.score}/{check.max_score}")
        self.multi_cell(0, 7, _s(check.description)[:90])
        self.set_x(self.l_margin)


# ---------------------------------------------------------------------------
# Section renderers
# ---------------------------------------------------------------------------

def _cover(pdf: SEOReport):
    pdf.add_page()

    pdf.set_fill_color(*NAVY)
    pdf.rect(0, 0, pdf.w, 68, "F")

    pdf.set_xy(18, 18)
    pdf.set_font("Helvetica", "B", 22)
    pdf.set_text_color(*WHITE)
    pdf.cell(0, 10, "Content SEO Report", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    pdf.set_x(18)
    pdf.set_font("Helvetica", "", 11)
    pdf.set_text_color(148, 163, 184)
    pdf.cell(0, 8, _s(pdf.doc_title[:90]), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    pdf.set_xy(18, 72)
    meta_items = [
        ("Keyword", pdf.primary_keyword or "-"),
        ("Grade", pdf.score.grade),
        ("Checks", f"{sum(1 for c in pdf.score.checks if c.status == 'pass')} of "
                   f"{len(pdf.score.checks)} passed"),
        ("Date", datetime.now().strftime("%B %d, %Y")),
    ]
    for key, val in meta_items:
        pdf.set_font("Helvetica", "B", 9)
        pdf.set_text_color(*GRAY_TEXT)
        pdf.cell(32, 6, _s(f"{key}:"))
        pdf.set_font("Helvetica", "", 9)
        pdf.set_text_color(*NAVY)
        pdf.cell(0, 6, _s(val), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    pdf.ln(4)
    pdf.score_circle(pdf.score.overall, f"Overall score  |  Grade {pdf.score.grade}")
    pdf.rule()


def _category_scores(pdf: SEOReport):
    pdf.section_title("%", "Category Scores")
    for name in CATEGORIES:
        pdf.score_bar(CATEGORY_LABELS[name], getattr(pdf.score, name), CATEGORY_WEIGHTS[name])
        pdf.ln(1)
    pdf.ln(2)


def _suggestions(pdf: SEOReport):
    suggestions = prioritized_suggestions(pdf.score)
    if not suggestions:
        return
    pdf.section_title("!", "Suggestions")
    for i, s in enumerate(suggestions, 1):
        pdf.numbered(i, f"[{s.priority.upper()}] {s.title}: {s.suggestion}")
        pdf.ln(1)
    pdf.ln(2)


def _checks(pdf: SEOReport):
    pdf.add_page()
    pdf.section_title("CK", "All Checks")
    for name in CATEGORIES:
        rows = [c for c in pdf.score.checks if c.category == name]
        if not rows:
            continue
        pdf.sub_heading(CATEGORY_LABELS[name])
        for check in rows:
            pdf.check_row(check)
        pdf.ln(3)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_pdf(score: SEOScore, title: str = "", primary_keyword: Optional[str] = None) -> bytes:
    """
    Build a PDF report from an SEOScore.
    Returns raw PDF bytes ready to send as an HTTP response.
    """
    pdf = SEOReport(score, title=title, primary_keyword=primary_keyword or "")
    pdf.alias_nb_pages()

    _cover(pdf)
    _category_scores(pdf)
    _suggestions(pdf)
    _checks(pdf)

    return bytes(pdf.output())
