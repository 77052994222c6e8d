"""
Streamed generate response model.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class GenerateResponseModel(BaseModel):
    """One decoded line of an ``/api/generate`` stream."""

    model_config = ConfigDict(extra="allow")

    model: Optional[str] = None
    created_at: Optional[str] = None
    response: Optional[str] = None
    done: bool = False
    done_reason: Optional[str] = None
    context: Optional[List[int]] = None

    @property
    def fragment(self) -> Optional[str]:
        """Generated text of this unit, ``None`` when the server sent none."""
        return self.response


__all__ = ["GenerateResponseModel"]
