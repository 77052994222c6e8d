"""
Result DTO returned by a synchronous endpoint call.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class OllamaResult:
    """Outcome of a successful synchronous call.

    Attributes:
        body: Concatenated response text, surrounding whitespace trimmed.
        response_time_ms: Wall time from request send to end of body.
        http_status_code: HTTP status of the response (always 200 here).
    """

    body: str
    response_time_ms: int
    http_status_code: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["OllamaResult"]
