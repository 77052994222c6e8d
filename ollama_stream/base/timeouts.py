"""Timeout configuration shared by the HTTP layer.

``get_timeout_config()`` returns a process-cached :class:`TimeoutConfig`,
parsing environment overrides on first use (and again only when the
relevant variable changes). Supported environment variables:

    OLLAMA_STREAM_HTTP_TIMEOUT_SECONDS
    OLLAMA_STREAM_CONNECT_TIMEOUT_SECONDS

Per-call request timeouts configured on an endpoint caller take precedence;
these values only seed pooled clients.
"""
from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Baseline timeout applied to pooled clients.
        connect_timeout_seconds: Timeout for establishing the TCP connection.
    """

    http_timeout_seconds: float = 30.0
    connect_timeout_seconds: float = 10.0


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float with a fallback default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - module cache
    guard = "/".join(
        [
            os.getenv("OLLAMA_STREAM_HTTP_TIMEOUT_SECONDS", ""),
            os.getenv("OLLAMA_STREAM_CONNECT_TIMEOUT_SECONDS", ""),
        ]
    )
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED

    _CACHED = TimeoutConfig(
        http_timeout_seconds=_parse_env_float("OLLAMA_STREAM_HTTP_TIMEOUT_SECONDS", 30.0),
        connect_timeout_seconds=_parse_env_float("OLLAMA_STREAM_CONNECT_TIMEOUT_SECONDS", 10.0),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
