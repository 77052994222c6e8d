"""
Error payload shape returned by the server for 4xx responses.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ErrorResponse(BaseModel):
    """``{"error": "..."}`` line of an error stream."""

    model_config = ConfigDict(extra="ignore")

    error: str = ""


__all__ = ["ErrorResponse"]
