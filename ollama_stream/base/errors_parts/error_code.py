"""
Normalized error codes (taxonomy).

Values are lowercase snake_case and are considered a stable public contract
for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    DECODE = "decode"
    TRANSPORT = "transport"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
