"""Unit tests for the shared httpx client pool and request headers.

Covers:
- Same purpose returns the same instance.
- Different purpose yields different instances.
- Closed clients are replaced.
"""
from __future__ import annotations

from ollama_stream.base.auth import BasicAuth
from ollama_stream.base.http import HttpxTransport, build_headers, close_all_clients, get_httpx_client


def setup_function(_):
    close_all_clients()


def teardown_function(_):
    close_all_clients()


def test_same_purpose_returns_same_instance():
    assert get_httpx_client("stream") is get_httpx_client("stream")


def test_different_purpose_returns_different_instances():
    assert get_httpx_client("stream") is not get_httpx_client("async")


def test_closed_client_is_replaced():
    c1 = get_httpx_client("stream")
    close_all_clients()
    c2 = get_httpx_client("stream")
    assert c1.is_closed
    assert c2 is not c1


def test_transport_defaults_to_pooled_client():
    assert HttpxTransport(purpose="async").client is get_httpx_client("async")


def test_pooled_client_uses_env_timeout(monkeypatch):
    monkeypatch.setenv("OLLAMA_STREAM_HTTP_TIMEOUT_SECONDS", "77")
    client = get_httpx_client("timeout-probe")
    assert client.timeout.read == 77.0


def test_build_headers():
    assert build_headers(None) == {"Accept": "application/json", "Content-Type": "application/json"}
    headers = build_headers(BasicAuth("u", "p"))
    assert headers["Authorization"] == "Basic dTpw"
