"""Streaming HTTP transport and shared client pool.

Purpose:
    Endpoint callers only need three things from HTTP: send a request, read
    the status code, and iterate the body line by line. ``HttpTransport``
    captures that capability; ``HttpxTransport`` implements it on top of a
    pooled ``httpx.Client``.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Lifecycle & cleanup:
    - Pooled clients are cached by ``purpose`` and closed at interpreter exit
      via ``atexit``. Tests may call :func:`close_all_clients` explicitly.
    - Connection reuse is entirely the client's concern; callers open one
      streaming response per call and close it when the line loop ends.
"""

from __future__ import annotations

import atexit
import threading
from typing import ContextManager, Dict, Iterator, Optional, Protocol

import httpx

from ..auth import BasicAuth
from ..timeouts import get_timeout_config

_CLIENTS: Dict[str, httpx.Client] = {}
_LOCK = threading.RLock()


class StreamingResponse(Protocol):
    """Minimal view of an open HTTP response."""

    @property
    def status_code(self) -> int: ...

    def iter_lines(self) -> Iterator[str]: ...


class HttpTransport(Protocol):
    """Capability to open a streaming HTTP response."""

    def open_stream(
        self,
        method: str,
        url: str,
        *,
        headers: Dict[str, str],
        content: str,
        timeout: float,
    ) -> ContextManager[StreamingResponse]: ...


def get_httpx_client(purpose: str = "default") -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given purpose.

    The first request for a purpose creates a client configured from
    :func:`get_timeout_config`; later requests reuse it. Safe for concurrent use.
    """
    client = _CLIENTS.get(purpose)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(purpose)
        if client is not None and not client.is_closed:
            return client
        cfg = get_timeout_config()
        client = httpx.Client(
            timeout=httpx.Timeout(cfg.http_timeout_seconds, connect=cfg.connect_timeout_seconds)
        )
        _CLIENTS[purpose] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            try:
                c.close()
            except (httpx.HTTPError, OSError):  # nosec B110 - best-effort shutdown
                pass
        _CLIENTS.clear()


atexit.register(close_all_clients)


class HttpxTransport:
    """``HttpTransport`` backed by an ``httpx.Client``.

    Parameters:
        client: Explicit client (tests inject one built on ``httpx.MockTransport``).
            When omitted, the pooled client for ``purpose`` is used.
        purpose: Pool key used when ``client`` is not given.
    """

    def __init__(self, client: Optional[httpx.Client] = None, *, purpose: str = "stream") -> None:
        self._client = client
        self._purpose = purpose

    @property
    def client(self) -> httpx.Client:
        return self._client if self._client is not None else get_httpx_client(self._purpose)

    def open_stream(
        self,
        method: str,
        url: str,
        *,
        headers: Dict[str, str],
        content: str,
        timeout: float,
    ) -> ContextManager[httpx.Response]:
        """Open a streaming response; the caller must use it as a context manager."""
        return self.client.stream(
            method,
            url,
            headers=headers,
            content=content.encode("utf-8"),
            timeout=timeout,
        )


def build_headers(basic_auth: Optional[BasicAuth]) -> Dict[str, str]:
    """Return the JSON request headers, with ``Authorization`` when credentials are set."""
    headers = {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
    if basic_auth is not None:
        headers["Authorization"] = basic_auth.header_value()
    return headers


__all__ = [
    "StreamingResponse",
    "HttpTransport",
    "HttpxTransport",
    "get_httpx_client",
    "close_all_clients",
    "build_headers",
]
