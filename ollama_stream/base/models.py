"""Core DTOs for endpoint calls.

Re-exports the one-class-per-file implementations under ``models_parts`` and
defines the line decoding helpers shared by the synchronous callers and the
asynchronous streamer.
"""
from __future__ import annotations

from typing import Optional, Protocol, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import DecodeError, ErrorCode
from .models_parts.call_result import OllamaResult
from .models_parts.chat_response import ChatMessage, ChatResponseModel
from .models_parts.error_response import ErrorResponse
from .models_parts.generate_response import GenerateResponseModel


class StreamFragment(Protocol):
    """Shape shared by decoded stream units."""

    done: bool

    @property
    def fragment(self) -> Optional[str]: ...


M = TypeVar("M", bound=BaseModel)


def decode_line(line: str, model: Type[M]) -> M:
    """Decode one response line into ``model``.

    Raises:
        DecodeError: when the line is not JSON or does not match the schema.
    """
    try:
        return model.model_validate_json(line)
    except ValidationError as e:
        raise DecodeError(
            code=ErrorCode.DECODE,
            message=f"cannot decode {model.__name__}: {e.errors(include_url=False)[0]['msg']}",
            raw=e,
            line=line,
        ) from e


def decode_error_text(line: str) -> str:
    """Return the ``error`` text of an error-stream line.

    Lines that are not a JSON error object are returned stripped, verbatim.
    """
    try:
        return ErrorResponse.model_validate_json(line).error
    except ValidationError:
        return line.strip()


__all__ = [
    "OllamaResult",
    "ErrorResponse",
    "ChatMessage",
    "ChatResponseModel",
    "GenerateResponseModel",
    "StreamFragment",
    "decode_line",
    "decode_error_text",
]
