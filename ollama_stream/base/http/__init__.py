"""HTTP transport package public surface."""

from .client import (
    HttpTransport,
    HttpxTransport,
    StreamingResponse,
    build_headers,
    close_all_clients,
    get_httpx_client,
)

__all__ = [
    "HttpTransport",
    "HttpxTransport",
    "StreamingResponse",
    "build_headers",
    "close_all_clients",
    "get_httpx_client",
]
