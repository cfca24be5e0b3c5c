"""Tests for the FastAPI endpoints."""

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

import main
from seo_catalog import CATALOG, PRIORITY_ORDER
from tests.fixtures import KEYWORD, OPTIMAL_HTML, OPTIMAL_INPUT, minimal_input


class APITestCase(unittest.TestCase):

    def setUp(self):
        main._rate_buckets.clear()
        self.client = TestClient(main.app)


class TestAnalyze(APITestCase):

    def test_camel_case_payload(self):
        resp = self.client.post("/seo/analyze", json=OPTIMAL_INPUT)
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["overall"], 100)
        self.assertEqual(body["grade"], "A+")
        self.assertEqual(len(body["checks"]), len(CATALOG))
        self.assertIn("max_score", body["checks"][0])

    def test_snake_case_payload(self):
        resp = self.client.post("/seo/analyze", json=minimal_input())
        self.assertEqual(resp.status_code, 200)
        self.assertLess(resp.json()["overall"], 100)

    def test_missing_required_field(self):
        payload = minimal_input()
        del payload["content"]
        self.assertEqual(self.client.post("/seo/analyze", json=payload).status_code, 422)

    def test_too_many_secondary_keywords(self):
        payload = minimal_input(secondary_keywords=[f"kw{i}" for i in range(21)])
        self.assertEqual(self.client.post("/seo/analyze", json=payload).status_code, 422)

    def test_null_secondary_keywords(self):
        resp = self.client.post("/seo/analyze", json=minimal_input(secondaryKeywords=None))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["keyword_result"]["secondary_keywords"], [])

    def test_content_size_limit(self):
        with patch.object(main, "MAX_CONTENT_KB", 1):
            payload = minimal_input(content="x" * 2048)
            self.assertEqual(self.client.post("/seo/analyze", json=payload).status_code, 422)

    def test_suggestions(self):
        resp = self.client.post("/seo/analyze/suggestions", json=minimal_input())
        self.assertEqual(resp.status_code, 200)
        suggestions = resp.json()["suggestions"]
        self.assertTrue(suggestions)
        ranks = [PRIORITY_ORDER[s["priority"]] for s in suggestions]
        self.assertEqual(ranks, sorted(ranks))

    def test_export_pdf(self):
        resp = self.client.post("/seo/analyze/export", json=OPTIMAL_INPUT)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["content-type"], "application/pdf")
        self.assertIn("seo-score-garden-tools.pdf", resp.headers["content-disposition"])
        self.assertTrue(resp.content.startswith(b"%PDF"))

    def test_export_failure(self):
        with patch.object(main, "build_pdf", side_effect=RuntimeError("boom")):
            with self.assertLogs("seo-saas", level="ERROR"):
                resp = self.client.post("/seo/analyze/export", json=OPTIMAL_INPUT)
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["detail"], "PDF generation failed")


class TestDraftGate(APITestCase):

    def test_score_draft(self):
        resp = self.client.post("/seo/score-draft", json={
            "content": OPTIMAL_HTML, "primary_keyword": KEYWORD, "target_word_count": 800,
        })
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["passed"])
        self.assertEqual(body["metrics"]["content_length"]["score"], 100)

    def test_uses_configured_pass_score(self):
        with patch.object(main, "SEO_PASS_SCORE", 100):
            resp = self.client.post("/seo/score-draft", json={
                "content": OPTIMAL_HTML, "primary_keyword": KEYWORD, "target_word_count": 800,
            })
        self.assertFalse(resp.json()["passed"])

    def test_target_word_count_validation(self):
        resp = self.client.post("/seo/score-draft", json={"content": "x", "target_word_count": 50})
        self.assertEqual(resp.status_code, 422)

    def test_null_secondary_keywords(self):
        resp = self.client.post("/seo/score-draft", json={
            "content": OPTIMAL_HTML, "primary_keyword": KEYWORD, "secondary_keywords": None,
        })
        self.assertEqual(resp.status_code, 200)

    def test_rewrite_prompt(self):
        resp = self.client.post("/seo/rewrite-prompt", json={"content": "<p>Tiny.</p>", "primary_keyword": KEYWORD})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertFalse(body["score"]["passed"])
        self.assertIn(f'PRIMARY KEYWORD: "{KEYWORD}"', body["prompt"])


class TestServiceEndpoints(APITestCase):

    def test_health(self):
        body = self.client.get("/health").json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["checks_in_catalog"], len(CATALOG))

    def test_info(self):
        body = self.client.get("/info").json()
        self.assertEqual(body["endpoints"]["analyze"], "POST /seo/analyze")

    def test_rate_limit(self):
        with patch.object(main, "RATE_LIMIT", 1):
            self.assertEqual(self.client.post("/seo/analyze", json=minimal_input()).status_code, 200)
            resp = self.client.post("/seo/analyze", json=minimal_input())
            self.assertEqual(resp.status_code, 429)
            self.assertEqual(self.client.get("/health").status_code, 200)


if __name__ == "__main__":
    unittest.main()
