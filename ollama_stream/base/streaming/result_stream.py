"""Append-only fragment sequence shared between one writer and many readers.

The background worker of an :class:`AsyncResultStreamer` is the only writer.
Any number of readers may iterate concurrently; each iteration starts at the
first fragment and blocks for new ones until the writer closes the stream.
"""
from __future__ import annotations

import threading
from typing import Iterator, List, Optional


class ResultStream:
    """Thread-safe, append-only list of string fragments with a close signal."""

    def __init__(self) -> None:
        self._items: List[str] = []
        self._closed = False
        self._cond = threading.Condition()

    def append(self, fragment: str) -> None:
        """Publish one fragment to every reader.

        Raises:
            RuntimeError: when the stream has already been closed.
        """
        with self._cond:
            if self._closed:
                raise RuntimeError("result stream is closed")
            self._items.append(fragment)
            self._cond.notify_all()

    def close(self) -> None:
        """Mark the stream complete; blocked readers drain and stop. Idempotent."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def snapshot(self) -> List[str]:
        """Copy of the fragments published so far."""
        with self._cond:
            return list(self._items)

    def read_from(self, index: int) -> List[str]:
        """Non-blocking read of the fragments at ``index`` and later (for pollers)."""
        with self._cond:
            return self._items[index:]

    def wait_closed(self, timeout: Optional[float] = None) -> bool:
        """Block until the stream is closed; return ``False`` on timeout."""
        with self._cond:
            return self._cond.wait_for(lambda: self._closed, timeout=timeout)

    def __iter__(self) -> Iterator[str]:
        index = 0
        while True:
            with self._cond:
                self._cond.wait_for(lambda: index < len(self._items) or self._closed)
                if index >= len(self._items):
                    return
                fragment = self._items[index]
            index += 1
            yield fragment

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"ResultStream(len={len(self)}, closed={self.closed})"


__all__ = ["ResultStream"]
