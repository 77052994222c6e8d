"""
Structured exception types raised by endpoint callers.

``OllamaError`` carries a normalized :class:`ErrorCode` plus the HTTP status
(when one was received). Subclasses distinguish the three failure kinds a
caller can observe:

- ``ProtocolError``: the server answered with a non-200 status. The message is
  the text accumulated from the error stream.
- ``TransportError``: the HTTP exchange itself failed (connect, read, timeout).
- ``DecodeError``: a single response line could not be decoded. Line parsers
  catch it and treat it as a completion signal; it never reaches the
  synchronous caller.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class OllamaError(Exception):
    """Base structured error.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message.
        status_code: HTTP status code when the failure followed a response.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    status_code: Optional[int] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:
        return self.message


@dataclass
class ProtocolError(OllamaError):
    """Final HTTP status was not 200."""


@dataclass
class TransportError(OllamaError):
    """I/O failure while sending the request or reading the body."""


@dataclass
class DecodeError(OllamaError):
    """A response line did not match the expected schema."""

    line: Optional[str] = None


__all__ = ["OllamaError", "ProtocolError", "TransportError", "DecodeError"]
