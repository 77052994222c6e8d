"""
Pydantic request bodies and their wire serialization.

Purpose
-------
Endpoint callers treat the request payload as opaque: anything that
serializes to a JSON object is accepted. Two concrete bodies are provided for
the chat and generate endpoints; plain mappings work as well.

External dependencies: Pydantic only. Validation failures raise
``pydantic.ValidationError`` at construction time, never during a call.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..models_parts.chat_response import ChatMessage


class ChatRequest(BaseModel):
    """Body of a ``POST /api/chat`` call.

    Parameters:
        model: Target model identifier (non-empty).
        messages: Conversation so far (non-empty).
        stream: Whether the server should stream partial turns.
        format: Optional output format hint (``"json"`` or a JSON schema).
        options: Model runtime options forwarded verbatim.
        keep_alive: How long the server keeps the model loaded.
    """

    model_config = ConfigDict(extra="allow")

    model: str = Field(..., min_length=1)
    messages: List[ChatMessage] = Field(..., min_length=1)
    stream: bool = False
    format: Optional[Union[str, Dict[str, Any]]] = None
    options: Optional[Dict[str, Any]] = None
    keep_alive: Optional[Union[str, int]] = None


class GenerateRequest(BaseModel):
    """Body of a ``POST /api/generate`` call."""

    model_config = ConfigDict(extra="allow")

    model: str = Field(..., min_length=1)
    prompt: str
    stream: bool = False
    system: Optional[str] = None
    template: Optional[str] = None
    context: Optional[List[int]] = None
    images: Optional[List[str]] = None
    raw: Optional[bool] = None
    format: Optional[Union[str, Dict[str, Any]]] = None
    options: Optional[Dict[str, Any]] = None
    keep_alive: Optional[Union[str, int]] = None


RequestBody = Union[BaseModel, Mapping[str, Any]]


def serialize_body(body: RequestBody) -> str:
    """Return the canonical JSON encoding of a request body.

    Pydantic models drop ``None`` fields; mappings are dumped compactly.

    Raises:
        TypeError: when ``body`` is neither a pydantic model nor a mapping.
    """
    if isinstance(body, BaseModel):
        return body.model_dump_json(exclude_none=True)
    if isinstance(body, Mapping):
        return json.dumps(dict(body), separators=(",", ":"), ensure_ascii=False)
    raise TypeError(f"request body not serializable: {type(body).__name__}")


def force_streaming(body: RequestBody) -> None:
    """Set the body's ``stream`` flag to ``True`` in place."""
    if isinstance(body, BaseModel):
        body.stream = True  # type: ignore[attr-defined]
    elif isinstance(body, MutableMapping):
        body["stream"] = True
    else:
        raise TypeError(f"request body has no mutable stream flag: {type(body).__name__}")


def model_name(body: RequestBody) -> Optional[str]:
    """Return the ``model`` field of a body, if it has one (used for log context)."""
    value = body.get("model") if isinstance(body, Mapping) else getattr(body, "model", None)
    return value if isinstance(value, str) else None


__all__ = ["ChatRequest", "GenerateRequest", "RequestBody", "serialize_body", "force_streaming", "model_name"]
