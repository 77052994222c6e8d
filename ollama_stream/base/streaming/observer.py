"""Stream observer bound to one in-flight call.

The observer is created fresh for every call so a handler supplied to one
call can never receive units from another.
"""
from __future__ import annotations

from typing import Callable, Generic, Optional, TypeVar

U = TypeVar("U")

StreamHandler = Callable[[U], None]


class StreamObserver(Generic[U]):
    """Forward decoded units to an optional user handler.

    ``notify`` is a no-op when no handler was bound. ``notified`` counts the
    units forwarded so far.
    """

    def __init__(self, handler: Optional[StreamHandler[U]] = None) -> None:
        self._handler = handler
        self._notified = 0

    @property
    def bound(self) -> bool:
        return self._handler is not None

    @property
    def notified(self) -> int:
        return self._notified

    def notify(self, unit: U) -> None:
        if self._handler is None:
            return
        self._notified += 1
        self._handler(unit)


__all__ = ["StreamObserver", "StreamHandler"]
