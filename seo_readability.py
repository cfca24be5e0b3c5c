"""
seo_readability.py - Readability checks on the plain text of a draft.

Flesch Reading Ease / Flesch-Kincaid grade, sentence and word length,
passive voice and paragraphing. Markup never reaches this module.
"""

from __future__ import annotations

import re

import textstat

from seo_catalog import CheckList, make_check, passed
from seo_models import Check, ReadabilityResult
from seo_text import NormalizedContent, round_half_up

LONG_SENTENCE_WORDS = 20
THIN_TEXT_WORDS = 300
MIN_PARAGRAPHS = 3
WORD_LENGTH_RANGE = (3.5, 6.5)

_SENTENCE_BREAK_RE = re.compile(r"(?<=[.?!])\s+(?=[A-Z])")
_NON_WORD_RE = re.compile(r"[^\w\s'-]")
_PASSIVE_PATTERNS = [
    re.compile(r"\b(is|are|was|were|been|being|be)\s+(\w+ed)\b", re.I),
    re.compile(r"\b(is|are|was|were|been|being|be)\s+(\w+en)\b", re.I),
    re.compile(r"\b(has|have|had)\s+been\s+(\w+ed)\b", re.I),
    re.compile(r"\b(has|have|had)\s+been\s+(\w+en)\b", re.I),
    re.compile(r"\b(will|shall|would|should|could|might)\s+be\s+(\w+ed)\b", re.I),
    re.compile(r"\b(will|shall|would|should|could|might)\s+be\s+(\w+en)\b", re.I),
]


# ---------------------------------------------------------------------------
# Text metrics
# ---------------------------------------------------------------------------

def split_sentences(text: str) -> list[str]:
    return [s.strip() for s in _SENTENCE_BREAK_RE.split(text) if s.strip()]


def split_words(text: str) -> list[str]:
    return _NON_WORD_RE.sub(" ", text).split()


def count_passive_voice(text: str) -> int:
    return sum(len(p.findall(text)) for p in _PASSIVE_PATTERNS)


def flesch_reading_ease(text: str) -> int:
    """0-100, higher is easier. 60-70 is plain English. Text without words scores 0."""
    if textstat.lexicon_count(text) == 0:
        return 0
    score = textstat.flesch_reading_ease(text)
    return int(round_half_up(max(0.0, min(100.0, score))))


def flesch_kincaid_grade(text: str) -> float:
    """US school grade level, one decimal."""
    if textstat.lexicon_count(text) == 0:
        return 0.0
    return max(0.0, round_half_up(textstat.flesch_kincaid_grade(text), 1))


def grade_description(grade: float) -> str:
    if grade <= 5:
        return "Elementary School (5th grade or below)"
    if grade <= 6:
        return "6th Grade"
    if grade <= 7:
        return "7th Grade"
    if grade <= 8:
        return "8th Grade"
    if grade <= 9:
        return "9th Grade (Freshman)"
    if grade <= 10:
        return "10th Grade (Sophomore)"
    if grade <= 11:
        return "11th Grade (Junior)"
    if grade <= 12:
        return "12th Grade (Senior)"
    if grade <= 14:
        return "College Level"
    return "Graduate Level"


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def _reading_ease(fre: int) -> Check:
    label = "Easy" if fre >= 60 else "Moderate" if fre >= 30 else "Difficult"
    description = f"Score: {fre}/100 ({label})"
    if fre < 30:
        return make_check("flesch-reading-ease", status="fail", score=5, description=description,
                          suggestion="Content is very difficult to read. Use shorter sentences and simpler words.")
    if fre < 50:
        return make_check("flesch-reading-ease", status="warning", score=10, description=description,
                          suggestion="Content is fairly difficult. Consider simplifying for broader audience.")
    return passed("flesch-reading-ease", description)


def _grade_level(fk: float) -> Check:
    description = f"{grade_description(fk)} (Grade {fk})"
    if fk > 12:
        return make_check("grade-level", status="warning", score=8, description=description,
                          suggestion="Content requires college-level reading. Simplify for wider audience.")
    if fk > 10:
        return make_check("grade-level", status="warning", score=12, description=description,
                          suggestion="Consider simplifying for broader readership (aim for 8th grade level).")
    return passed("grade-level", description)


def _sentence_length(avg: float) -> Check:
    description = f"{avg} words per sentence"
    if avg > 25:
        return make_check("sentence-length", status="warning", score=6, description=description,
                          suggestion=f"Average sentence length is {avg} words. Try to keep it under 20.")
    if avg > 20:
        return make_check("sentence-length", status="warning", score=9, description=description,
                          suggestion=f"Sentences are a bit long ({avg} words avg). Shorter is often better.")
    return passed("sentence-length", description)


def _long_sentences(long_count: int, sentence_count: int) -> Check:
    ratio = (long_count / sentence_count) * 100 if sentence_count else 0
    description = f"{long_count} of {sentence_count} sentences are over {LONG_SENTENCE_WORDS} words"
    if ratio > 30:
        return make_check("long-sentences", status="warning", score=5, description=description,
                          suggestion=f"{int(round_half_up(ratio))}% of sentences are over {LONG_SENTENCE_WORDS} words. "
                                     "Break some up.")
    if ratio > 20:
        return make_check("long-sentences", status="warning", score=7, description=description,
                          suggestion="Consider shortening some of your longer sentences.")
    return passed("long-sentences", description)


def _passive_voice(passive: int, sentence_count: int) -> Check:
    ratio = (passive / sentence_count) * 100 if sentence_count else 0
    description = f"{passive} passive voice instance{'' if passive == 1 else 's'} detected"
    if ratio > 20:
        return make_check("passive-voice", status="warning", score=5, description=description,
                          suggestion="Too much passive voice. Use active voice for more engaging content.")
    if ratio > 10:
        return make_check("passive-voice", status="warning", score=7, description=description,
                          suggestion="Consider reducing passive voice usage.")
    return passed("passive-voice", description)


def _word_length(avg: float, word_count: int) -> Check:
    shortest, longest = WORD_LENGTH_RANGE
    description = f"{avg} characters per word"
    if avg > longest:
        return make_check("word-length", status="warning", score=4, description=description,
                          suggestion="Many long words. Prefer short, everyday words where you can.")
    if word_count and avg < shortest:
        return make_check("word-length", status="warning", score=5, description=description,
                          suggestion="Words are unusually short. Check for fragments, lists of "
                                     "abbreviations or missing explanations.")
    return passed("word-length", description)


def _paragraphs(paragraph_count: int, word_count: int) -> Check:
    description = f"Content has {paragraph_count} paragraph{'' if paragraph_count == 1 else 's'}"
    if paragraph_count < MIN_PARAGRAPHS and word_count > THIN_TEXT_WORDS:
        return make_check("paragraphs", status="warning", score=4, description=description,
                          suggestion="Add more paragraph breaks to improve readability.")
    return passed("paragraphs", description)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def analyze_readability(doc: NormalizedContent) -> ReadabilityResult:
    text = doc.text
    sentences = split_sentences(text)
    words = split_words(text)

    sentence_count = len(sentences)
    word_count = len(words)
    paragraph_count = len(doc.paragraphs)

    fre = flesch_reading_ease(text)
    fk = flesch_kincaid_grade(text)
    avg_sentence = round_half_up(word_count / sentence_count, 1) if sentence_count else 0.0
    avg_word = round_half_up(len(re.sub(r"\s", "", text)) / word_count, 1) if word_count else 0.0
    passive = count_passive_voice(text)
    long_count = sum(1 for s in sentences if len(split_words(s)) > LONG_SENTENCE_WORDS)

    checks = CheckList()
    checks.emit(_reading_ease(fre))
    checks.emit(_grade_level(fk))
    checks.emit(_sentence_length(avg_sentence))
    checks.emit(_long_sentences(long_count, sentence_count))
    checks.emit(_passive_voice(passive, sentence_count))
    checks.emit(_word_length(avg_word, word_count))
    checks.emit(_paragraphs(paragraph_count, word_count))

    return ReadabilityResult(
        flesch_reading_ease=fre,
        flesch_kincaid_grade=fk,
        grade_level=grade_description(fk),
        avg_sentence_length=avg_sentence,
        avg_word_length=avg_word,
        sentence_count=sentence_count,
        word_count=word_count,
        paragraph_count=paragraph_count,
        passive_voice_count=passive,
        long_sentences=long_count,
        checks=checks.freeze(),
    )
