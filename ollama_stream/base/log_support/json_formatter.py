"""JSON formatter for the shared ``ollama_stream`` logger.

Messages produced by ``log_event`` are already JSON objects; their keys are
merged into the output record instead of being nested as an escaped string.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

# Attribute names every LogRecord has; anything else came in through ``extra=``.
_STANDARD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line.

    Output keys: ``ts`` (UTC, from the record's creation time), ``level``,
    ``logger``, ``msg``, the hoisted keys of a JSON-object message, ``exc``
    when exception info is attached, and any ``extra=`` attributes.
    """

    def format(self, record: logging.LogRecord) -> str:
        text = record.getMessage()
        out = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
            "msg": text,
        }
        if text.startswith("{"):
            try:
                hoisted = json.loads(text)
            except ValueError:
                hoisted = None
            if isinstance(hoisted, dict):
                out.update(hoisted)
        if record.exc_info:
            out["exc"] = self.formatException(record.exc_info)
        for key, value in vars(record).items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                out.setdefault(key, value)
        return json.dumps(out, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]
