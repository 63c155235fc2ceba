"""Unit tests for the HTTP service client.

WHY: The CLI's --server mode and external scripts go through
JoinServiceClient. It must send the payloads the service expects and turn
error responses into a typed exception instead of a KeyError on "result".

HOW: httpx.MockTransport stands in for the network. Each handler records the
request it received and returns a canned response.

RULES:
- No real network access
- The client is always used as a context manager, except in the test that
  checks the guard
"""

import json

import httpx
import pytest

from context_join.client import JoinServiceClient, JoinServiceError


def _transport(responder, seen):
    def handler(request):
        seen.append(request)
        return responder(request)
    return httpx.MockTransport(handler)


class TestRequests:
    """Each method hits the right endpoint with the right payload."""

    def test_join_lines(self):
        seen = []
        transport = _transport(
            lambda r: httpx.Response(200, json={"result": "a b", "language": "default"}),
            seen,
        )
        with JoinServiceClient(base_url="http://svc", transport=transport) as client:
            assert client.join_lines(["a", "b"]) == "a b"

        assert seen[0].method == "POST"
        assert seen[0].url.path == "/join"
        assert json.loads(seen[0].content) == {"lines": ["a", "b"], "language": None}

    def test_join_pair_sends_language(self):
        seen = []
        transport = _transport(
            lambda r: httpx.Response(200, json={"result": "# a b", "language": "python"}),
            seen,
        )
        with JoinServiceClient(base_url="http://svc", transport=transport) as client:
            assert client.join_pair("# a", "# b", language="python") == "# a b"

        assert seen[0].url.path == "/join/pair"
        assert json.loads(seen[0].content)["language"] == "python"

    def test_join_document(self):
        seen = []
        body = {"text": "a b\nc", "joined": ["a b"], "skipped": []}
        transport = _transport(lambda r: httpx.Response(200, json=body), seen)
        with JoinServiceClient(base_url="http://svc", transport=transport) as client:
            result = client.join_document("a\nb\nc", [{"start_line": 0, "end_line": 1}])

        assert result == body
        assert seen[0].url.path == "/documents/join"

    def test_health(self):
        seen = []
        transport = _transport(
            lambda r: httpx.Response(200, json={"status": "ok", "version": "0.1.0"}),
            seen,
        )
        with JoinServiceClient(base_url="http://svc", transport=transport) as client:
            assert client.health()["status"] == "ok"
        assert seen[0].method == "GET"

    def test_trailing_slash_in_base_url(self):
        seen = []
        transport = _transport(lambda r: httpx.Response(200, json=[]), seen)
        with JoinServiceClient(base_url="http://svc/", transport=transport) as client:
            assert client.languages() == []
        assert str(seen[0].url) == "http://svc/languages"


class TestErrors:
    """Error responses raise JoinServiceError."""

    def test_detail_extracted(self):
        transport = _transport(
            lambda r: httpx.Response(400, json={"detail": "Unknown language 'cobol'"}),
            [],
        )
        with JoinServiceClient(base_url="http://svc", transport=transport) as client:
            with pytest.raises(JoinServiceError) as excinfo:
                client.join_lines(["a"], language="cobol")

        assert excinfo.value.status_code == 400
        assert "Unknown language" in excinfo.value.message

    def test_plain_text_error_body(self):
        transport = _transport(lambda r: httpx.Response(502, text="Bad Gateway"), [])
        with JoinServiceClient(base_url="http://svc", transport=transport) as client:
            with pytest.raises(JoinServiceError) as excinfo:
                client.health()

        assert excinfo.value.status_code == 502
        assert excinfo.value.message == "Bad Gateway"

    def test_requires_context_manager(self):
        client = JoinServiceClient(base_url="http://svc")
        with pytest.raises(RuntimeError, match="context manager"):
            client.health()
