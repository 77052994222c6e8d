"""Errors parts package public surface.

Prefer importing from `ollama_stream.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .ollama_error import DecodeError, OllamaError, ProtocolError, TransportError
from .classification import classify_exception, code_for_status

__all__ = [
    "ErrorCode",
    "OllamaError",
    "ProtocolError",
    "TransportError",
    "DecodeError",
    "classify_exception",
    "code_for_status",
]
