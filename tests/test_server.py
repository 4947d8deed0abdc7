from __future__ import annotations

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from ai.service import CompletionService
from analysis_flow.orchestrator import AnalysisOrchestrator
from errors import UpstreamError
from server import app, get_orchestrator
from settings import Settings


class _ScriptedService(CompletionService):
    def __init__(self, reply: str = "", error: Exception = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts = []

    def complete(self, prompt: str, *, model: str, temperature: float, max_tokens: int) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


class ServerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.service = _ScriptedService(reply="Revenue grew **20%**.")
        orchestrator = AnalysisOrchestrator(Settings(api_key="test-key"), self.service)
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def test_analyze_returns_response(self) -> None:
        resp = self.client.post(
            "/api/analyze",
            json={"question": "summarize trends", "data": "date,rev\n2023-01,100\n", "fileName": "q1.csv"},
        )
        self.assertEqual(200, resp.status_code)
        self.assertEqual({"response": "Revenue grew **20%**."}, resp.json())
        self.assertIn("FILE: q1.csv", self.service.prompts[0])

    def test_analyze_returns_chart(self) -> None:
        self.service.reply = (
            'Done.\n```chart\n{"type":"pie","title":"Mix","data":[{"name":"A","value":3}]}\n```'
        )
        resp = self.client.post(
            "/api/analyze",
            json={"question": "share by name", "data": "name,value\nA,3\n"},
        )
        self.assertEqual(200, resp.status_code)
        self.assertEqual(
            {
                "response": "Done.",
                "chart": {"type": "pie", "title": "Mix", "data": [{"name": "A", "value": 3}]},
            },
            resp.json(),
        )

    def test_all_files_trigger_comparison(self) -> None:
        resp = self.client.post(
            "/api/analyze",
            json={
                "question": "Compare these two",
                "data": "m,s\nJan,1\n",
                "fileName": "a.csv",
                "allFiles": [
                    {"name": "a.csv", "data": "m,s\nJan,1\n"},
                    {"name": "b.csv", "data": "m,s\nJan,2\n"},
                ],
            },
        )
        self.assertEqual(200, resp.status_code)
        self.assertIn("--- FILE 2: b.csv", self.service.prompts[0])

    def test_missing_data_is_client_error(self) -> None:
        resp = self.client.post("/api/analyze", json={"question": "anything"})
        self.assertEqual(400, resp.status_code)
        self.assertEqual({"error": "No data provided. Please upload a file first."}, resp.json())
        self.assertEqual([], self.service.prompts)

    def test_malformed_body_is_client_error(self) -> None:
        resp = self.client.post(
            "/api/analyze",
            content="not json",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(400, resp.status_code)
        self.assertEqual({"error": "Invalid request body."}, resp.json())

    def test_upstream_status_is_forwarded(self) -> None:
        self.service.error = UpstreamError("rate limited", status_code=429)
        resp = self.client.post("/api/analyze", json={"question": "q", "data": "a\n1\n"})
        self.assertEqual(429, resp.status_code)
        self.assertEqual({"error": "rate limited"}, resp.json())

    def test_preview(self) -> None:
        resp = self.client.post(
            "/api/preview",
            json={"data": "date,rev\n2023-01,100\n2023-02,120\n", "fileName": "q1.csv"},
        )
        self.assertEqual(200, resp.status_code)
        self.assertEqual(
            {
                "fileName": "q1.csv",
                "columns": ["date", "rev"],
                "rows": 2,
                "preview": [["2023-01", "100"], ["2023-02", "120"]],
            },
            resp.json(),
        )

    def test_preview_without_data(self) -> None:
        resp = self.client.post("/api/preview", json={})
        self.assertEqual(400, resp.status_code)

    def test_health(self) -> None:
        resp = self.client.get("/health")
        self.assertEqual({"status": "ok", "provider": "groq"}, resp.json())



@patch("settings.dotenv.load_dotenv", lambda *a, **kw: False)
class ServerConfigurationTests(unittest.TestCase):
    def setUp(self) -> None:
        get_orchestrator.cache_clear()
        self.client = TestClient(app)

    def tearDown(self) -> None:
        get_orchestrator.cache_clear()

    @patch.dict("os.environ", {"ANALYSIS_PROVIDER": "mystery"}, clear=True)
    def test_unknown_provider_is_json_error(self) -> None:
        resp = self.client.post("/api/analyze", json={"question": "q", "data": "a\n1\n"})
        self.assertEqual(500, resp.status_code)
        self.assertEqual({"error": "Unknown AI provider: 'mystery'"}, resp.json())

    @patch.dict("os.environ", {"ANALYSIS_TEMPERATURE": "abc"}, clear=True)
    def test_malformed_setting_is_json_error(self) -> None:
        resp = self.client.get("/health")
        self.assertEqual(500, resp.status_code)
        self.assertIn("ANALYSIS_TEMPERATURE", resp.json()["error"])

    @patch.dict("os.environ", {"GROQ_API_KEY": "gsk-test"}, clear=True)
    def test_valid_environment_builds_orchestrator(self) -> None:
        resp = self.client.get("/health")
        self.assertEqual({"status": "ok", "provider": "groq"}, resp.json())


if __name__ == "__main__":
    unittest.main()
