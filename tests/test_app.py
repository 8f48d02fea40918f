"""Tests for the Flask rewrite endpoint."""

from __future__ import annotations

import json

import httpx
import pytest

from article_rewriter.app import create_app
from article_rewriter.config import AppConfig
from article_rewriter.runner import build_service


GEMINI_HOST = "generativelanguage.googleapis.com"


class _Network:
    """Fake network: per-host responses plus a log of every request made."""

    def __init__(self, routes: dict[str, object]):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.routes.get(request.url.host)
        if outcome is None:
            return httpx.Response(404, text="Not Found")
        if isinstance(outcome, Exception):
            raise outcome
        status, body = outcome
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)


def _client(routes: dict[str, object], api_key: str | None = "test-key", **server):
    cfg = AppConfig()
    cfg.provider.api_key = api_key
    cfg.provider.api_key_env = "REWRITER_TEST_UNSET_KEY"
    cfg.fetch.min_length = 10
    for key, value in server.items():
        setattr(cfg.server, key, value)
    network = _Network(routes)
    service = build_service(cfg, transport=httpx.MockTransport(network.handler))
    return create_app(cfg, service).test_client(), network


def _gemini_ok(text: str) -> tuple[int, dict]:
    return 200, {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def test_end_to_end_rewrite():
    client, network = _client(
        {
            "api.allorigins.win": (200, {"contents": "<html><body>Job details here</body></html>"}),
            GEMINI_HOST: _gemini_ok("Fixed rewritten article"),
        }
    )

    resp = client.post("/api/rewrite", json={"url": "https://example.com/job", "type": "job"})

    assert resp.status_code == 200
    data = resp.get_json()
    assert data["success"] is True
    assert data["content"] == "Fixed rewritten article"
    assert data["originalLength"] == len("Job details here")
    assert data["rewrittenLength"] == len("Fixed rewritten article")
    assert data["timestamp"].endswith("Z")
    prompt = json.loads(network.requests[-1].content)["contents"][0]["parts"][0]["text"]
    assert "Job details here" in prompt


@pytest.mark.parametrize("method", ["get", "put", "patch", "delete"])
def test_non_post_methods_are_rejected_without_network(method):
    client, network = _client({})

    resp = getattr(client, method)("/api/rewrite")

    assert resp.status_code == 405
    assert resp.get_json() == {"error": "Method not allowed"}
    assert network.requests == []


def test_options_preflight_returns_empty_200_with_cors():
    client, network = _client({})

    resp = client.options("/api/rewrite")

    assert resp.status_code == 200
    assert resp.data == b""
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    assert "POST" in resp.headers["Access-Control-Allow-Methods"]
    assert network.requests == []


def test_options_without_cors_is_method_not_allowed():
    client, _ = _client({}, cors=False)

    resp = client.options("/api/rewrite")

    assert resp.status_code == 405
    assert "Access-Control-Allow-Origin" not in resp.headers


def test_unrouted_method_gets_json_405_with_cors():
    client, network = _client({})

    resp = client.open("/api/rewrite", method="TRACE")

    assert resp.status_code == 405
    assert resp.get_json() == {"error": "Method not allowed"}
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    assert network.requests == []


@pytest.mark.parametrize("body", [{}, {"url": ""}, {"url": "   "}, {"type": "job"}, None])
def test_missing_url_is_rejected_without_network(body):
    client, network = _client({})

    if body is None:
        resp = client.post("/api/rewrite", data="not json", content_type="text/plain")
    else:
        resp = client.post("/api/rewrite", json=body)

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "URL is required"}
    assert network.requests == []


def test_fetch_exhaustion_maps_to_400():
    client, network = _client(
        {
            "api.allorigins.win": httpx.ReadTimeout("timed out"),
            "corsproxy.io": (500, "error"),
            "api.codetabs.com": (200, "tiny"),
        }
    )

    resp = client.post("/api/rewrite", json={"url": "https://example.com/job"})

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Failed to fetch content from URL"}
    assert all(r.url.host != GEMINI_HOST for r in network.requests)


def test_missing_credential_maps_to_500_before_generation_call():
    client, network = _client(
        {"api.allorigins.win": (200, {"contents": "<p>Admit card details are out</p>"})},
        api_key=None,
    )

    resp = client.post("/api/rewrite", json={"url": "https://example.com/admit"})

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "REWRITER_TEST_UNSET_KEY not configured"}
    assert all(r.url.host != GEMINI_HOST for r in network.requests)


def test_upstream_error_message_is_returned():
    client, network = _client(
        {
            "api.allorigins.win": (200, {"contents": "<p>Result declared for the exam</p>"}),
            GEMINI_HOST: (429, {"error": {"message": "Quota exceeded"}}),
        }
    )

    resp = client.post("/api/rewrite", json={"url": "https://example.com/result"})

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Quota exceeded"}
    assert sum(1 for r in network.requests if r.url.host == GEMINI_HOST) == 1


def test_unexpected_error_is_converted_to_500():
    class _Boom:
        def run(self, request):
            raise RuntimeError("kaboom")

    app = create_app(AppConfig(), service=_Boom())

    resp = app.test_client().post("/api/rewrite", json={"url": "https://example.com"})

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "kaboom"}


def test_cors_headers_on_error_and_root_route():
    client, _ = _client({})

    resp = client.post("/", json={})

    assert resp.status_code == 400
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    assert resp.headers["Access-Control-Allow-Credentials"] == "true"
    assert "Content-Type" in resp.headers["Access-Control-Allow-Headers"]
