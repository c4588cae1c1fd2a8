"""REST store request shape, faked with httpx.MockTransport."""
from __future__ import annotations

import json

import httpx
import pytest

from errors import NetworkError
from storage import Repository, RestStore
from storage.rest import parse_content_range


class Recorder:
    def __init__(self, responder):
        self.requests = []
        self._responder = responder

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)


def _store(recorder) -> RestStore:
    return RestStore(
        "http://store.test/api/",
        token="secret-token",
        username="s1234567",
        client=httpx.Client(transport=httpx.MockTransport(recorder)),
    )


def test_insert_sends_credential_username_and_prefer_header():
    def respond(request):
        body = json.loads(request.content)
        return httpx.Response(201, json=[{"id": 7, **body}])

    recorder = Recorder(respond)
    row = _store(recorder).insert("interview", {"title": "QA Lead", "job_role": "QA"})

    request = recorder.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "http://store.test/api/interview"
    assert request.headers["authorization"] == "Bearer secret-token"
    assert request.headers["prefer"] == "return=representation"
    assert json.loads(request.content)["username"] == "s1234567"
    assert row["id"] == 7


def test_select_uses_equality_filters_and_order():
    recorder = Recorder(lambda request: httpx.Response(200, json=[]))
    _store(recorder).select("question", {"interview_id": 3}, order=[("position", "asc"), ("id", "asc")])

    params = recorder.requests[0].url.params
    assert params["interview_id"] == "eq.3"
    assert params["order"] == "position.asc,id.asc"
    assert "prefer" not in recorder.requests[0].headers


def test_update_and_delete_target_filtered_rows():
    recorder = Recorder(lambda request: httpx.Response(200, json=[{"id": 5, "title": "New"}]))
    store = _store(recorder)
    rows = store.update("interview", {"id": 5}, {"title": "New"})
    store.delete("interview", {"id": 5})

    patch, delete = recorder.requests
    assert patch.method == "PATCH" and patch.url.params["id"] == "eq.5"
    assert json.loads(patch.content) == {"title": "New", "username": "s1234567"}
    assert delete.method == "DELETE" and delete.url.params["id"] == "eq.5"
    assert rows == [{"id": 5, "title": "New"}]


def test_count_reads_content_range_total():
    recorder = Recorder(lambda request: httpx.Response(200, json=[], headers={"Content-Range": "0-1/7"}))
    assert _store(recorder).count("applicant", {"interview_id": 1}) == 7
    assert recorder.requests[0].headers["prefer"] == "count=exact"


@pytest.mark.parametrize("value,expected", [("0-9/42", 42), ("*/0", 0), ("0-9/*", 0), (None, 0)])
def test_parse_content_range(value, expected):
    assert parse_content_range(value) == expected


def test_error_status_raises_network_error():
    recorder = Recorder(lambda request: httpx.Response(500, text="boom"))
    with pytest.raises(NetworkError) as excinfo:
        _store(recorder).select("interview")
    assert excinfo.value.message == "HTTP error! status: 500"


def test_transport_error_raises_network_error():
    def respond(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(NetworkError):
        _store(Recorder(respond)).insert("interview", {"title": "x"})


def test_failed_counts_display_as_zero():
    def respond(request):
        if request.headers.get("prefer") == "count=exact":
            return httpx.Response(503)
        return httpx.Response(200, json=[{"id": 1, "title": "Dev", "job_role": "Dev", "status": "Published"}])

    listing = Repository(_store(Recorder(respond))).list_interviews_with_counts()
    assert listing[0].question_count == 0
    assert listing[0].applicant_count == 0
