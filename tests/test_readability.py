"""Tests for the readability metrics and checks."""

import unittest

from seo_readability import (
    analyze_readability,
    count_passive_voice,
    flesch_kincaid_grade,
    flesch_reading_ease,
    grade_description,
    split_sentences,
)
from seo_text import normalize
from tests.fixtures import PARAGRAPH


def _by_id(result):
    return {c.id: c for c in result.checks}


class TestMetrics(unittest.TestCase):

    def test_sentences_need_capital_after_break(self):
        self.assertEqual(split_sentences("One. Two? three! Four"), ["One.", "Two? three!", "Four"])
        self.assertEqual(split_sentences(""), [])

    def test_passive_voice(self):
        self.assertEqual(count_passive_voice("The ball was kicked. The cake was eaten."), 2)
        self.assertEqual(count_passive_voice("The dog chased the ball."), 0)

    def test_empty_scores(self):
        self.assertEqual(flesch_reading_ease(""), 0)
        self.assertEqual(flesch_kincaid_grade(""), 0.0)
        self.assertEqual(flesch_reading_ease("... !!"), 0)

    def test_reading_ease_is_clamped(self):
        self.assertEqual(flesch_reading_ease("The cat sat. The dog ran."), 100)
        dense = ("Institutionalized interdisciplinary considerations notwithstanding, "
                 "organizational comprehensiveness necessitates unprecedented "
                 "administrative reconceptualization.")
        self.assertEqual(flesch_reading_ease(dense), 0)
        self.assertGreater(flesch_kincaid_grade(dense), 12)

    def test_plain_text_grade(self):
        self.assertLessEqual(flesch_kincaid_grade(PARAGRAPH), 10)
        self.assertGreaterEqual(flesch_reading_ease(PARAGRAPH), 60)

    def test_grade_description(self):
        self.assertEqual(grade_description(4.2), "Elementary School (5th grade or below)")
        self.assertEqual(grade_description(8.0), "8th Grade")
        self.assertEqual(grade_description(13.5), "College Level")
        self.assertEqual(grade_description(16), "Graduate Level")


class TestChecks(unittest.TestCase):

    def test_plain_english_passes(self):
        result = analyze_readability(normalize(f"<p>{PARAGRAPH}</p>" * 3))
        self.assertEqual(result.paragraph_count, 3)
        self.assertEqual(result.passive_voice_count, 0)
        self.assertEqual(result.long_sentences, 0)
        for check in result.checks:
            self.assertEqual(check.status, "pass", check.id)

    def test_dense_text(self):
        sentence = "Complicated " + " ".join(["complicated"] * 29) + "."
        result = analyze_readability(normalize(" ".join([sentence] * 3)))
        checks = _by_id(result)
        self.assertEqual(result.sentence_count, 3)
        self.assertEqual(result.avg_sentence_length, 30.0)
        self.assertEqual(result.flesch_reading_ease, 0)
        self.assertEqual((checks["flesch-reading-ease"].status, checks["flesch-reading-ease"].score), ("fail", 5))
        self.assertEqual(checks["grade-level"].score, 8)
        self.assertEqual(checks["sentence-length"].score, 6)
        self.assertEqual(checks["long-sentences"].score, 5)
        self.assertEqual(checks["word-length"].score, 4)

    def test_short_words(self):
        result = analyze_readability(normalize("I go. We do. It is. So be it."))
        check = _by_id(result)["word-length"]
        self.assertLess(result.avg_word_length, 3.5)
        self.assertEqual((check.status, check.score), ("warning", 5))

    def test_passive_heavy(self):
        text = "The ball was kicked. The cake was eaten. The door was opened. The dog ran home."
        check = _by_id(analyze_readability(normalize(text)))["passive-voice"]
        self.assertEqual((check.status, check.score), ("warning", 5))

    def test_wall_of_text(self):
        result = analyze_readability(normalize("<p>" + " ".join([PARAGRAPH] * 4) + "</p>"))
        check = _by_id(result)["paragraphs"]
        self.assertEqual(result.paragraph_count, 1)
        self.assertEqual((check.status, check.score), ("warning", 4))

    def test_empty_text(self):
        result = analyze_readability(normalize(""))
        self.assertEqual(result.word_count, 0)
        self.assertEqual(result.sentence_count, 0)
        self.assertEqual(len(result.checks), 7)
        for check in result.checks:
            self.assertLessEqual(check.score, check.max_score)


if __name__ == "__main__":
    unittest.main()
