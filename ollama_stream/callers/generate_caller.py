"""Caller for the streaming ``/api/generate`` endpoint."""
from __future__ import annotations

from typing import List

from ..base.models import GenerateResponseModel
from ..config.defaults import GENERATE_ENDPOINT
from .endpoint_caller import EndpointCaller


class GenerateEndpointCaller(EndpointCaller):
    """Same contract as the chat caller, reading the ``response`` field."""

    @property
    def endpoint_suffix(self) -> str:
        return GENERATE_ENDPOINT

    def parse_line(self, line: str, buffer: List[str]) -> bool:
        unit = self._decode(line, GenerateResponseModel)
        if unit is None:
            return True
        if unit.fragment:
            buffer.append(unit.fragment)
            self._notify(unit)
        return unit.done


__all__ = ["GenerateEndpointCaller"]
