"""Recruiter resources, answer export and suggestions through the HTTP API."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.deps import get_repository, get_suggestion_service
from api_server import app
from errors import NetworkError
from storage import Difficulty
from suggestions import Suggestion, SuggestionService


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def suggestion_calls():
    calls = []

    def generate(role):
        calls.append(role)
        return [
            Suggestion(question="What is a hook?", difficulty=Difficulty.EASY),
            Suggestion(question="Explain reconciliation.", difficulty=Difficulty.ADVANCED),
        ]

    service = SuggestionService(
        generate,
        get_repository(),
        max_workers=1,
        timeout_s=5,
    )
    app.dependency_overrides[get_suggestion_service] = lambda: service
    yield calls
    app.dependency_overrides.pop(get_suggestion_service, None)
    service.shutdown()


def _interview(client, **fields):
    payload = {"title": "Frontend Developer", "job_role": "React developer"}
    payload.update(fields)
    return client.post("/api/interviews", json=payload).json()


def test_interview_crud_with_counts(client):
    interview = _interview(client)
    assert interview["status"] == "Draft"
    client.post(f"/api/interviews/{interview['id']}/questions", json={"question": "Q1", "difficulty": "Easy"})

    listing = client.get("/api/interviews").json()
    assert listing[0]["question_count"] == 1
    assert listing[0]["applicant_count"] == 0

    patched = client.patch(f"/api/interviews/{interview['id']}", json={"status": "Published"}).json()
    assert patched["status"] == "Published"

    assert client.delete(f"/api/interviews/{interview['id']}").status_code == 204
    missing = client.get(f"/api/interviews/{interview['id']}")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "NOT_FOUND"


def test_question_crud_and_validation(client):
    interview = _interview(client)
    bad = client.post(f"/api/interviews/{interview['id']}/questions", json={"question": "Q", "difficulty": "Hard"})
    assert bad.status_code == 422

    q = client.post(
        f"/api/interviews/{interview['id']}/questions", json={"question": "Q1", "difficulty": "Easy"}
    ).json()
    updated = client.patch(f"/api/questions/{q['id']}", json={"difficulty": "Advanced"}).json()
    assert updated["difficulty"] == "Advanced"
    assert client.delete(f"/api/questions/{q['id']}").status_code == 204
    assert client.get(f"/api/interviews/{interview['id']}/questions").json() == []


def test_applicant_status_cannot_be_reset(client):
    interview = _interview(client)
    applicant = client.post(
        "/api/applicants",
        json={"interview_id": interview["id"], "title": "Ms", "firstname": "Ana", "surname": "Li", "email_address": "a@x.io"},
    ).json()
    assert applicant["interview_status"] == "Not Started"
    done = client.patch(f"/api/applicants/{applicant['id']}", json={"interview_status": "Completed"})
    assert done.json()["interview_status"] == "Completed"

    reset = client.patch(f"/api/applicants/{applicant['id']}", json={"interview_status": "Not Started"})
    assert reset.status_code == 400
    assert reset.json()["error"]["code"] == "BAD_REQUEST"


def test_answers_pdf_download(client):
    interview = _interview(client)
    applicant = client.post(
        "/api/applicants",
        json={"interview_id": interview["id"], "title": "Mr", "firstname": "Bo", "surname": "Kay", "email_address": "b@x.io"},
    ).json()
    resp = client.get(f"/api/applicants/{applicant['id']}/answers.pdf")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert "Bo_Kay" in resp.headers["content-disposition"]
    assert resp.content.startswith(b"%PDF")


def test_suggest_and_promote(client, suggestion_calls):
    interview = _interview(client)
    client.post(f"/api/interviews/{interview['id']}/questions", json={"question": "What is a hook?", "difficulty": "Easy"})

    resp = client.post(f"/api/interviews/{interview['id']}/suggestions")
    assert resp.status_code == 200
    assert [q["question"] for q in resp.json()["questions"]] == ["Explain reconciliation."]
    client.post(f"/api/interviews/{interview['id']}/suggestions")
    assert suggestion_calls == ["React developer"]

    promoted = client.post(
        f"/api/interviews/{interview['id']}/suggestions/promote", json={"question": "Explain reconciliation."}
    )
    assert promoted.status_code == 201
    assert promoted.json()["difficulty"] == "Advanced"
    assert client.get(f"/api/interviews/{interview['id']}/suggestions").json()["questions"] == []
    assert len(client.get(f"/api/interviews/{interview['id']}/questions").json()) == 2


def test_suggestions_need_job_role(client, suggestion_calls):
    interview = _interview(client, job_role="")
    resp = client.post(f"/api/interviews/{interview['id']}/suggestions")
    assert resp.status_code == 400
    assert "job role" in resp.json()["error"]["message"]
    assert suggestion_calls == []


def test_proxy_failure_maps_to_502(client):
    def generate(role):
        raise NetworkError("Failed to generate questions")

    service = SuggestionService(generate, get_repository(), max_workers=1, timeout_s=5)
    app.dependency_overrides[get_suggestion_service] = lambda: service
    try:
        interview = _interview(client)
        resp = client.post(f"/api/interviews/{interview['id']}/suggestions")
        assert resp.status_code == 502
        assert resp.json()["error"]["code"] == "NETWORK"
    finally:
        app.dependency_overrides.pop(get_suggestion_service, None)
        service.shutdown()
