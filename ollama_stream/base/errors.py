"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``ollama_stream.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.ollama_error import DecodeError, OllamaError, ProtocolError, TransportError
from .errors_parts.classification import classify_exception, code_for_status

__all__ = [
    "ErrorCode",
    "OllamaError",
    "ProtocolError",
    "TransportError",
    "DecodeError",
    "classify_exception",
    "code_for_status",
]
