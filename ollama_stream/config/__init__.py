"""Unified configuration layer.

Sources are merged in a predictable order (later wins):

    1. Built-in defaults (``config.defaults``)
    2. Optional external JSON file pointed to by ``OLLAMA_STREAM_CONFIG_FILE``
    3. Environment variables (``OLLAMA_HOST``, ``OLLAMA_REQUEST_TIMEOUT_SECONDS``,
       ``OLLAMA_VERBOSE``)
    4. In-code overrides passed to :func:`get_client_config`

External config file example::

    {"host": "http://gpu-box:11434", "request_timeout_seconds": 120, "verbose": false}

Public API
----------
* get_client_config(overrides: dict | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .defaults import (
    OLLAMA_DEFAULT_HOST,
    OLLAMA_DEFAULT_REQUEST_TIMEOUT_SECONDS,
    OLLAMA_DEFAULT_VERBOSE,
)
from .env import CONFIG_FILE_ENV, HOST_ENV, REQUEST_TIMEOUT_ENV, VERBOSE_ENV, resolve_basic_auth

DEFAULTS: Dict[str, Any] = {
    "host": OLLAMA_DEFAULT_HOST,
    "request_timeout_seconds": OLLAMA_DEFAULT_REQUEST_TIMEOUT_SECONDS,
    "verbose": OLLAMA_DEFAULT_VERBOSE,
}

ENV_FIELD_MAP = {
    "host": HOST_ENV,
    "request_timeout_seconds": REQUEST_TIMEOUT_ENV,
    "verbose": VERBOSE_ENV,
}

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def _load_external_config() -> Dict[str, Any]:
    """Load (and cache per path) the JSON config file, ``{}`` when absent or invalid."""
    global _FILE_CACHE, _FILE_CACHE_PATH  # noqa: PLW0603 - module cache
    path = os.getenv(CONFIG_FILE_ENV) or ""
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Any = {}
    if path and Path(path).is_file():
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except ValueError:
            data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = data
    _FILE_CACHE_PATH = path
    return data


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, env_name in ENV_FIELD_MAP.items():
        val = os.getenv(env_name)
        if val is not None and val.strip():
            out[field] = val
    return out


def _coerce_bool(value: Any, fallback: bool) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUTHY:
        return True
    if text in _FALSY:
        return False
    return fallback


def _coerce_timeout(value: Any, fallback: float) -> float:
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return fallback
    return seconds if seconds > 0 else fallback


def _normalize(cfg: Dict[str, Any]) -> Dict[str, Any]:
    host = str(cfg.get("host") or OLLAMA_DEFAULT_HOST).strip().rstrip("/")
    cfg["host"] = host or OLLAMA_DEFAULT_HOST
    cfg["request_timeout_seconds"] = _coerce_timeout(
        cfg.get("request_timeout_seconds"), OLLAMA_DEFAULT_REQUEST_TIMEOUT_SECONDS
    )
    cfg["verbose"] = _coerce_bool(cfg.get("verbose"), OLLAMA_DEFAULT_VERBOSE)
    return cfg


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged client configuration.

    Keys: ``host`` (no trailing slash), ``request_timeout_seconds`` (float),
    ``verbose`` (bool) and ``basic_auth`` (``BasicAuth`` or ``None``).
    ``None`` values in ``overrides`` are ignored.
    """
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= {k: v for k, v in _load_external_config().items() if k in DEFAULTS}
    cfg |= _env_overrides()
    cfg["basic_auth"] = resolve_basic_auth()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return _normalize(cfg)


def reset_config_cache() -> None:
    """Drop the cached external config file contents."""
    global _FILE_CACHE, _FILE_CACHE_PATH  # noqa: PLW0603 - module cache
    _FILE_CACHE = None
    _FILE_CACHE_PATH = None


__all__ = [
    "get_client_config",
    "reset_config_cache",
    "DEFAULTS",
]
