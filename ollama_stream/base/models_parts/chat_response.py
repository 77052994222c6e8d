"""
Streamed chat response models.

Each line of an ``/api/chat`` stream decodes into a ``ChatResponseModel``.
Unknown fields (token counts, durations, tool calls) are kept on the model so
stream handlers receive the complete unit.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class ChatMessage(BaseModel):
    """A single chat turn as exchanged with the server.

    ``content`` is optional: partial messages streamed under load sometimes
    omit it or send ``null``.
    """

    model_config = ConfigDict(extra="allow")

    role: str = "assistant"
    content: Optional[str] = None
    images: Optional[List[str]] = None


class ChatResponseModel(BaseModel):
    """One decoded line of a chat stream."""

    model_config = ConfigDict(extra="allow")

    model: Optional[str] = None
    created_at: Optional[str] = None
    message: Optional[ChatMessage] = None
    done: bool = False
    done_reason: Optional[str] = None

    @property
    def fragment(self) -> Optional[str]:
        """Content text of this unit, ``None`` when the message is absent or empty."""
        if self.message is None or not self.message.content:
            return None
        return self.message.content

    def extras(self) -> Dict[str, Any]:
        """Fields the server sent that the model does not declare."""
        return dict(self.model_extra or {})


__all__ = ["ChatMessage", "ChatResponseModel"]
