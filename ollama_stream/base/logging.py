"""Structured logging for endpoint calls.

Every module obtains its logger through :func:`get_logger`. All of them hang
off the shared ``ollama_stream`` logger, which owns the only console handler
and does not propagate to the root logger, so embedding applications keep
control of their own logging tree.

Events are emitted as one JSON object per line via :func:`log_event`.
:func:`normalized_log_event` adds the keys every call event carries
(``structured``, ``phase``, ``emitted`` and, on failures, ``error_code``) so
the request, result and error events of both execution modes can be filtered
the same way.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "ollama_stream"
LOG_LEVEL_ENV = "OLLAMA_STREAM_LOG_LEVEL"

_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_FILE_MAX_BYTES = 10 * 1024 * 1024
_FILE_BACKUPS = 5

# Marker attributes set on handlers/loggers created here.
_INIT_MARK = "_ollama_stream_initialized"
_CONSOLE_MARK = "_ollama_stream_console"
_FILE_MARK = "_ollama_stream_file"


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _level_from(value: Any, default: int) -> int:
    """Resolve a level given as int or name (``"warn"`` accepted); ``default`` otherwise."""
    if isinstance(value, int):
        return value
    if not value:
        return default
    name = str(value).strip().upper()
    if name == "WARN":
        name = "WARNING"
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else default


def _marked(logger: logging.Logger, mark: str) -> List[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, mark, False)]


def _drop(logger: logging.Logger, handler: logging.Handler) -> None:
    logger.removeHandler(handler)
    with contextlib.suppress(Exception):
        handler.close()


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Create the shared logger on first use; afterwards re-apply level and format.

    ``OLLAMA_STREAM_LOG_LEVEL`` wins over ``level`` when it names a valid level.
    """
    base = logging.getLogger(BASE_LOGGER_NAME)
    wanted = _level_from(os.getenv(LOG_LEVEL_ENV), level)

    if not getattr(base, _INIT_MARK, False):
        console = logging.StreamHandler(sys.stderr)
        setattr(console, _CONSOLE_MARK, True)
        base.handlers[:] = [console]
        base.propagate = False
        setattr(base, _INIT_MARK, True)

    base.setLevel(wanted)
    for console in _marked(base, _CONSOLE_MARK):
        console.setLevel(wanted)
        if json_mode != isinstance(console.formatter, JsonFormatter):
            console.setFormatter(_formatter(json_mode))
    return base


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` wired to the shared ``ollama_stream`` handler.

    Child loggers carry no console handler of their own and propagate to the
    base logger, so every event is written exactly once.
    """
    base = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base
    child = logging.getLogger(name)
    for stray in _marked(child, _CONSOLE_MARK):
        _drop(child, stray)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the shared logger at runtime.

    Parameters
    ----------
    level:
        New level (number or name). ``None`` keeps the current one.
    file_path:
        Mirror events into a rotating log file (10 MB x 5). Passing ``None``
        detaches a file handler previously added here.
    json_mode:
        Formatter for the file handler.
    """
    base = get_logger(json_mode=json_mode)
    if level is not None:
        base.setLevel(_level_from(level, base.level))
        for h in base.handlers:
            h.setLevel(base.level)

    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    keep: Optional[logging.Handler] = None
    for h in _marked(base, _FILE_MARK):
        if target is not None and getattr(h, "baseFilename", None) == target and keep is None:
            keep = h
        else:
            _drop(base, h)
    if target is None:
        return base

    if keep is None:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        keep = RotatingFileHandler(target, maxBytes=_FILE_MAX_BYTES, backupCount=_FILE_BACKUPS, encoding="utf-8")
        setattr(keep, _FILE_MARK, True)
        base.addHandler(keep)
    keep.setLevel(base.level)
    keep.setFormatter(_formatter(json_mode))
    return base


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Write ``event`` plus context and ``fields`` as one JSON message.

    ``None`` values are left out unless ``keep_none`` is set.
    """
    payload: Dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.to_dict())
    payload.update(fields if keep_none else {k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = ("structured", "phase", "error_code", "emitted")


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    error_code: str | None = None,
    emitted: int | None = None,
    structured: bool = True,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit ``event`` with the normalized call keys.

    ``phase`` is one of ``start``, ``mid_stream`` or ``finalize``. ``emitted``
    counts the fragments produced so far. ``error_code`` appears only on
    failures. Extra fields never shadow a normalized key.
    """
    fields: Dict[str, Any] = {"structured": structured, "phase": phase, "emitted": emitted}
    if error_code is not None:
        fields["error_code"] = error_code
    for key, value in extra_fields.items():
        if value is not None and key not in fields:
            fields[key] = value
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
    "BASE_LOGGER_NAME",
]
