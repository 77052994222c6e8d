"""Status-code based selection of the per-line handler.

The status code is fixed once the response headers arrive, so the handler is
chosen once before the line loop instead of re-checking the status per line.
"""
from __future__ import annotations

from typing import Callable, Iterator, Optional

from ..http import StreamingResponse
from ..models import decode_error_text

# Statuses whose body lines are ``{"error": "..."}`` payloads.
ERROR_PAYLOAD_STATUSES = frozenset((400, 404))
UNAUTHORIZED_STATUS = 401

LineHandler = Callable[[str], bool]


def select_line_handler(
    status_code: int,
    *,
    on_error_text: Callable[[str], None],
    parse_line: LineHandler,
) -> Optional[LineHandler]:
    """Return the handler for every line of a response with ``status_code``.

    A handler returns ``True`` when reading must stop. ``None`` is returned for
    401: the body is not read and the caller substitutes a fixed error text.
    """
    if status_code == UNAUTHORIZED_STATUS:
        return None
    if status_code in ERROR_PAYLOAD_STATUSES:

        def _error_line(line: str) -> bool:
            on_error_text(decode_error_text(line))
            return False

        return _error_line
    return parse_line


def iter_body_lines(response: StreamingResponse) -> Iterator[str]:
    """Yield the non-blank lines of a streaming response body."""
    for line in response.iter_lines():
        if line.strip():
            yield line


__all__ = [
    "ERROR_PAYLOAD_STATUSES",
    "UNAUTHORIZED_STATUS",
    "LineHandler",
    "select_line_handler",
    "iter_body_lines",
]
