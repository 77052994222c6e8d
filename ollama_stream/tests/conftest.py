"""Pytest configuration for the ollama_stream test suite.

HTTP is faked with ``httpx.MockTransport`` wrapped in ``HttpxTransport`` so
every caller runs its real request/line loop without a server.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Iterable, Iterator, List, Tuple, Union

import httpx
import pytest

from ollama_stream.base.http import HttpxTransport, close_all_clients
from ollama_stream.config import reset_config_cache

Body = Union[bytes, Iterable[bytes]]

_CONFIG_ENV = (
    "OLLAMA_HOST",
    "OLLAMA_REQUEST_TIMEOUT_SECONDS",
    "OLLAMA_VERBOSE",
    "OLLAMA_USERNAME",
    "OLLAMA_PASSWORD",
    "OLLAMA_STREAM_CONFIG_FILE",
    "OLLAMA_STREAM_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate every test from the developer's Ollama environment."""
    for name in _CONFIG_ENV:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()
    close_all_clients()


@pytest.fixture()
def ndjson() -> Callable[..., bytes]:
    """Encode objects as a newline-delimited JSON body."""

    def _encode(*objs: Any) -> bytes:
        return b"".join(json.dumps(o).encode("utf-8") + b"\n" for o in objs)

    return _encode


@pytest.fixture()
def make_transport() -> Callable[..., Tuple[HttpxTransport, List[httpx.Request]]]:
    """Build a transport answering every request with ``status`` and ``body``.

    Returns the transport and the list the handler records requests into.
    ``body`` may be bytes or an iterator of byte chunks (read lazily).
    """

    def _factory(status: int, body: Body = b"") -> Tuple[HttpxTransport, List[httpx.Request]]:
        seen: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(status, content=body)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        return HttpxTransport(client), seen

    return _factory


@pytest.fixture()
def failing_transport() -> Callable[[Exception], HttpxTransport]:
    """Build a transport whose every request raises ``exc``."""

    def _factory(exc: Exception) -> HttpxTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc

        return HttpxTransport(httpx.Client(transport=httpx.MockTransport(handler)))

    return _factory


@pytest.fixture()
def log_records() -> Iterator[List[logging.LogRecord]]:
    """Capture records reaching the shared ``ollama_stream`` logger.

    The base logger does not propagate to root, so ``caplog`` cannot see it.
    """
    from ollama_stream.base.logging import get_logger

    records: List[logging.LogRecord] = []
    handler = logging.Handler(level=logging.DEBUG)
    handler.emit = records.append  # type: ignore[method-assign]
    base = get_logger()
    base.addHandler(handler)
    try:
        yield records
    finally:
        base.removeHandler(handler)


def events(records: List[logging.LogRecord]) -> List[dict]:
    """Decode the JSON payloads emitted by ``log_event``."""
    out = []
    for rec in records:
        try:
            payload = json.loads(rec.getMessage())
        except ValueError:
            continue
        if isinstance(payload, dict):
            out.append(payload)
    return out


@pytest.fixture()
def decode_events() -> Callable[[List[logging.LogRecord]], List[dict]]:
    return events
