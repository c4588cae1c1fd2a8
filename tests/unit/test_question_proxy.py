"""Companion question-generation proxy."""
from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

import llm_gateway.llm_gateway as gateway_module
from config import LlmRoute
from llm_gateway import LlmGatewayError, LlmValidationError
from question_proxy import generate_questions, generator, route_from_config
from question_proxy.app import app
from storage import Difficulty
from suggestions import Suggestion, SuggestionList


client = TestClient(app)

RESULT = SuggestionList(questions=[Suggestion(question="What is CI?", difficulty=Difficulty.EASY)])


def test_post_body_role_is_forwarded(monkeypatch):
    seen = {}

    def fake_generate(role, *, config_path, route=None):
        seen["role"] = role
        return RESULT

    monkeypatch.setattr(generator, "generate_with_config", fake_generate)
    resp = client.post("/api/generate-question", json={"job_role": "DevOps engineer"})

    assert resp.status_code == 200
    assert resp.json() == {"questions": [{"question": "What is CI?", "difficulty": "Easy"}]}
    assert seen["role"] == "DevOps engineer"


def test_get_query_role_is_forwarded(monkeypatch):
    monkeypatch.setattr(generator, "generate_with_config", lambda role, **_: RESULT)
    resp = client.get("/api/generate-question", params={"job_role": "Tester"})
    assert resp.status_code == 200


def test_missing_or_non_string_role_is_400():
    assert client.post("/api/generate-question", json={}).status_code == 400
    resp = client.post("/api/generate-question", json={"job_role": 12})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Role Description is required"}
    assert client.get("/api/generate-question").status_code == 400


def test_invalid_model_schema_is_502(monkeypatch):
    def fake_generate(role, **_):
        raise LlmValidationError("bad", [{"loc": ["questions"], "msg": "too short"}])

    monkeypatch.setattr(generator, "generate_with_config", fake_generate)
    resp = client.post("/api/generate-question", json={"job_role": "Analyst"})
    assert resp.status_code == 502
    assert resp.json()["error"] == "Model returned invalid schema"
    assert resp.json()["details"]


def test_gateway_failure_is_500(monkeypatch):
    def fake_generate(role, **_):
        raise LlmGatewayError("LLM transport failed")

    monkeypatch.setattr(generator, "generate_with_config", fake_generate)
    resp = client.post("/api/generate-question", json={"job_role": "Analyst"})
    assert resp.status_code == 500
    assert "error" in resp.json()


def test_prompt_chain_sends_role_description(monkeypatch):
    captured = {}

    def fake_chat(messages, schema, *, cfg, client=None, options=None):
        captured["messages"] = messages
        return RESULT

    monkeypatch.setattr(gateway_module, "chat", fake_chat)
    route = LlmRoute(name="t", base_url="http://x", endpoint="/c", model="m", timeout_s=1)

    assert generate_questions("Site reliability engineer", route=route) == RESULT
    roles = [m["role"] for m in captured["messages"]]
    assert roles == ["system", "user"]
    assert "Site reliability engineer" in captured["messages"][1]["content"]


def test_shipped_config_resolves_route():
    route = route_from_config(Path(__file__).resolve().parents[2] / "app_config.json")
    assert route.model == "gpt-4o-mini"
