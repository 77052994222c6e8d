"""Caller for the streaming ``/api/chat`` endpoint."""
from __future__ import annotations

from typing import List

from ..base.models import ChatResponseModel
from ..config.defaults import CHAT_ENDPOINT
from .endpoint_caller import EndpointCaller


class ChatEndpointCaller(EndpointCaller):
    """Decode chat turns and forward each content-bearing turn to the observer."""

    @property
    def endpoint_suffix(self) -> str:
        return CHAT_ENDPOINT

    def parse_line(self, line: str, buffer: List[str]) -> bool:
        """Parse one streamed chat line.

        An undecodable line is logged and reported as ``done`` so the read loop
        stops instead of spinning on bad input. Under heavy load the server
        sometimes streams a turn without message content; such a turn adds no
        text and triggers no notification, but its ``done`` flag still counts.
        """
        unit = self._decode(line, ChatResponseModel)
        if unit is None:
            return True
        text = unit.fragment
        if text is not None:
            buffer.append(text)
            self._notify(unit)
        return unit.done


__all__ = ["ChatEndpointCaller"]
