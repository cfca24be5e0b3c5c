"""Tests for the aggregator: category/overall scores, grades and the check catalog."""

import unittest

from pydantic import ValidationError

from seo_catalog import CATALOG, CATEGORIES, CATEGORY_WEIGHTS, PRIORITY_ORDER, CheckSpec, _table, make_check
from seo_engine import analyze_content, category_score, letter_grade, overall_score, prioritized_suggestions
from seo_models import Check, SEOAnalysisInput, SEOScore
from tests.fixtures import KEYWORD, OPTIMAL_INPUT, minimal_input

GRADE_RANK = {"F": 0, "D": 1, "C": 2, "B": 3, "A": 4, "A+": 5}


def _by_id(score):
    return {c.id: c for c in score.checks}


class TestCatalog(unittest.TestCase):

    def test_weights_sum_to_one(self):
        self.assertEqual(set(CATEGORY_WEIGHTS), set(CATEGORIES))
        self.assertEqual(sum(CATEGORY_WEIGHTS.values()), 100)

    def test_specs_are_well_formed(self):
        for check_id, spec in CATALOG.items():
            self.assertEqual(check_id, spec.id)
            self.assertIn(spec.category, CATEGORIES)
            self.assertIn(spec.priority, PRIORITY_ORDER)
            self.assertGreater(spec.max_score, 0)

    def test_duplicate_ids_rejected(self):
        spec = CheckSpec("dup", "content", "Dup", "low", 1)
        with self.assertRaises(ValueError):
            _table(spec, spec)

    def test_catalog_is_read_only(self):
        with self.assertRaises(TypeError):
            CATALOG["new"] = CheckSpec("new", "content", "New", "low", 1)
        with self.assertRaises(TypeError):
            CATEGORY_WEIGHTS["content"] = 50

    def test_pass_drops_suggestion(self):
        check = make_check("images", status="pass", score=8, description="ok", suggestion="ignored")
        self.assertIsNone(check.suggestion)

    def test_check_invariants(self):
        with self.assertRaises(ValidationError):
            make_check("images", status="warning", score=9, description="too many points")
        with self.assertRaises(ValidationError):
            make_check("images", status="pass", score=3, description="partial pass")


class TestScoring(unittest.TestCase):

    def _check(self, score, max_score):
        return Check(id="c", category="content", title="C", description="", status="warning",
                     priority="low", score=score, max_score=max_score, suggestion="fix")

    def test_vacuous_category(self):
        self.assertEqual(category_score(()), 100)

    def test_category_rounds_half_up(self):
        # 1/8 = 12.5%
        self.assertEqual(category_score([self._check(1, 8)]), 13)
        self.assertEqual(category_score([self._check(5, 8), self._check(0, 8)]), 31)

    def test_overall_weighting(self):
        self.assertEqual(overall_score(dict.fromkeys(CATEGORIES, 100)), 100)
        self.assertEqual(overall_score({"content": 100, "readability": 0, "technical": 0, "keyword": 0}), 30)
        # 0.30*50 + 0.25*51 + 0.20*50 + 0.25*50 = 50.25
        self.assertEqual(overall_score({"content": 50, "readability": 51, "technical": 50, "keyword": 50}), 50)

    def test_grade_thresholds(self):
        expected = {100: "A+", 90: "A+", 89: "A", 80: "A", 79: "B", 70: "B", 60: "C", 50: "D", 49: "F", 0: "F"}
        for overall, grade in expected.items():
            self.assertEqual(letter_grade(overall), grade, overall)

    def test_grade_monotonic(self):
        for low in range(100):
            self.assertLessEqual(GRADE_RANK[letter_grade(low)], GRADE_RANK[letter_grade(low + 1)])


class TestScenarios(unittest.TestCase):

    def test_empty_title_and_meta(self):
        checks = _by_id(analyze_content(minimal_input()))
        for check_id in ("title-length", "meta-length", "meta-completeness"):
            self.assertEqual((checks[check_id].status, checks[check_id].score), ("fail", 0), check_id)

    def test_title_of_55_chars_with_keyword(self):
        title = "The Complete Guide to Garden Tools for Small Yards 2026"
        self.assertEqual(len(title), 55)
        checks = _by_id(analyze_content(minimal_input(title=title, primary_keyword=KEYWORD)))
        self.assertEqual((checks["title-length"].status, checks["title-length"].score), ("pass", 15))
        self.assertEqual((checks["title-keyword"].status, checks["title-keyword"].score), ("pass", 15))

    def test_two_of_three_images_with_alt(self):
        content = '<img src="a.png" alt="a"><img src="b.png" alt="b"><img src="c.png">'
        checks = _by_id(analyze_content(minimal_input(content=content)))
        self.assertEqual((checks["images"].status, checks["images"].score), ("pass", 8))
        self.assertEqual((checks["image-alt"].status, checks["image-alt"].score), ("warning", 5))

    def test_heading_jump(self):
        content = "<h1>A</h1><h2>B</h2><h4>C</h4>"
        check = _by_id(analyze_content(minimal_input(content=content)))["heading-hierarchy"]
        self.assertEqual(check.status, "warning")
        self.assertIn("H2 to H4", check.description)

    def test_long_url(self):
        url = "https://example.com/" + "a" * 119
        check = _by_id(analyze_content(minimal_input(url=url)))["url-length"]
        self.assertEqual((check.status, check.score), ("warning", 4))
        self.assertIn("120", check.suggestion)

    def test_everything_satisfied(self):
        score = analyze_content(OPTIMAL_INPUT)
        failing = [(c.id, c.status, c.description) for c in score.checks if c.status != "pass"]
        self.assertEqual(failing, [])
        self.assertEqual(score.overall, 100)
        self.assertEqual(score.grade, "A+")
        self.assertTrue(score.technical_result.has_canonical_tag)
        self.assertEqual(prioritized_suggestions(score), [])


class TestAggregate(unittest.TestCase):

    INPUTS = [
        minimal_input(),
        minimal_input(content=""),
        minimal_input(content="<div><br></div>", primary_keyword=""),
        OPTIMAL_INPUT,
    ]

    def test_deterministic(self):
        for data in self.INPUTS:
            self.assertEqual(analyze_content(data).model_dump_json(), analyze_content(data).model_dump_json())

    def test_bounds(self):
        for data in self.INPUTS:
            score = analyze_content(data)
            for value in (score.overall, score.content, score.readability, score.technical, score.keyword):
                self.assertTrue(0 <= value <= 100)
            for check in score.checks:
                self.assertTrue(0 <= check.score <= check.max_score, check.id)

    def test_check_order_follows_categories(self):
        score = analyze_content(OPTIMAL_INPUT)
        order = [CATEGORIES.index(c.category) for c in score.checks]
        self.assertEqual(order, sorted(order))
        self.assertEqual(score.checks, score.content_result.checks + score.readability_result.checks
                         + score.technical_result.checks + score.keyword_result.checks)

    def test_json_round_trip(self):
        score = analyze_content(OPTIMAL_INPUT)
        self.assertEqual(SEOScore.model_validate_json(score.model_dump_json()), score)

    def test_camel_and_snake_case_agree(self):
        snake = {
            "title": OPTIMAL_INPUT["title"],
            "meta_description": OPTIMAL_INPUT["metaDescription"],
            "content": OPTIMAL_INPUT["content"],
            "primary_keyword": OPTIMAL_INPUT["primaryKeyword"],
            "secondary_keywords": OPTIMAL_INPUT["secondaryKeywords"],
            "url": OPTIMAL_INPUT["url"],
            "featured_image": OPTIMAL_INPUT["featuredImage"],
        }
        self.assertEqual(analyze_content(snake), analyze_content(SEOAnalysisInput(**snake)))
        self.assertEqual(analyze_content(snake), analyze_content(OPTIMAL_INPUT))

    def test_missing_optional_fields(self):
        score = analyze_content(minimal_input())
        ids = {c.id for c in score.checks}
        self.assertNotIn("url-length", ids)
        self.assertNotIn("image-alt", ids)
        self.assertNotIn("secondary-keywords", ids)

    def test_null_secondary_keywords(self):
        for key in ("secondary_keywords", "secondaryKeywords"):
            with self.subTest(key=key):
                score = analyze_content(minimal_input(**{key: None}))
                self.assertNotIn("secondary-keywords", {c.id for c in score.checks})
                self.assertEqual(score.keyword_result.secondary_keywords, ())


class TestSuggestions(unittest.TestCase):

    def test_priority_order(self):
        score = analyze_content(minimal_input())
        suggestions = prioritized_suggestions(score)
        self.assertTrue(suggestions)
        ranks = [PRIORITY_ORDER[s.priority] for s in suggestions]
        self.assertEqual(ranks, sorted(ranks))
        failing = {c.id for c in score.checks if c.status != "pass"}
        self.assertEqual({s.check_id for s in suggestions}, failing)

    def test_stable_within_priority(self):
        score = analyze_content(minimal_input())
        evaluation = [c.id for c in score.checks]
        high = [s.check_id for s in prioritized_suggestions(score) if s.priority == "high"]
        self.assertEqual(high, sorted(high, key=evaluation.index))


if __name__ == "__main__":
    unittest.main()
