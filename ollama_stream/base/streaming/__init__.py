"""Streaming primitives: observers, the shared result stream, and the
background streamer."""

from .async_streamer import AsyncResultStreamer
from .line_dispatch import iter_body_lines, select_line_handler
from .observer import StreamHandler, StreamObserver
from .result_stream import ResultStream

__all__ = [
    "AsyncResultStreamer",
    "ResultStream",
    "StreamHandler",
    "StreamObserver",
    "iter_body_lines",
    "select_line_handler",
]
