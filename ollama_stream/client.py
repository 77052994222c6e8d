"""Client facade over the endpoint callers.

Resolves host, timeout, verbosity and credentials through the configuration
layer once, then builds a fresh caller per call so no per-call state (stream
handlers, buffers) is shared between calls.
"""

from __future__ import annotations

from typing import Any, Optional

from .base.auth import BasicAuth
from .base.dto import RequestBody
from .base.http import HttpTransport
from .base.models import ChatResponseModel, GenerateResponseModel, OllamaResult
from .base.streaming import AsyncResultStreamer, StreamHandler
from .callers import ChatEndpointCaller, GenerateEndpointCaller
from .config import get_client_config
from .config.defaults import CHAT_ENDPOINT, GENERATE_ENDPOINT


class OllamaClient:
    """Entry point for chat, generate, and background generate calls.

    Parameters
    ----------
    host:
        Server base URL. Falls back to ``OLLAMA_HOST``, the optional config
        file, then ``http://localhost:11434``.
    basic_auth:
        Credentials for Basic auth. Falls back to ``OLLAMA_USERNAME`` and
        ``OLLAMA_PASSWORD`` when both are set.
    request_timeout_seconds:
        Per-request timeout (default 10 seconds).
    verbose:
        Log outbound payloads and results.
    transport:
        HTTP capability shared by every call made through this client.
    """

    def __init__(
        self,
        host: Optional[str] = None,
        *,
        basic_auth: Optional[BasicAuth] = None,
        request_timeout_seconds: Optional[float] = None,
        verbose: Optional[bool] = None,
        transport: Optional[HttpTransport] = None,
    ) -> None:
        cfg = get_client_config(
            overrides={
                "host": host,
                "basic_auth": basic_auth,
                "request_timeout_seconds": request_timeout_seconds,
                "verbose": verbose,
            }
        )
        self._host: str = cfg["host"]
        self._basic_auth: Optional[BasicAuth] = cfg["basic_auth"]
        self._request_timeout_seconds: float = cfg["request_timeout_seconds"]
        self._verbose: bool = cfg["verbose"]
        self._transport = transport

    @property
    def host(self) -> str:
        return self._host

    @property
    def request_timeout_seconds(self) -> float:
        return self._request_timeout_seconds

    @property
    def verbose(self) -> bool:
        return self._verbose

    def _caller_kwargs(self) -> dict[str, Any]:
        return {
            "host": self._host,
            "basic_auth": self._basic_auth,
            "request_timeout_seconds": self._request_timeout_seconds,
            "verbose": self._verbose,
            "transport": self._transport,
        }

    def chat(
        self, request: RequestBody, stream_handler: Optional[StreamHandler[ChatResponseModel]] = None
    ) -> OllamaResult:
        """Blocking chat call; ``stream_handler`` sees every content-bearing turn."""
        return ChatEndpointCaller(**self._caller_kwargs()).call(request, stream_handler)

    def generate(
        self, request: RequestBody, stream_handler: Optional[StreamHandler[GenerateResponseModel]] = None
    ) -> OllamaResult:
        """Blocking generate call; ``stream_handler`` sees every content-bearing fragment."""
        return GenerateEndpointCaller(**self._caller_kwargs()).call(request, stream_handler)

    def generate_async(self, request: RequestBody) -> AsyncResultStreamer:
        """Start a background generate call and return its (already started) handle."""
        return AsyncResultStreamer(
            self._host,
            request,
            basic_auth=self._basic_auth,
            request_timeout_seconds=self._request_timeout_seconds,
            endpoint_suffix=GENERATE_ENDPOINT,
            response_model=GenerateResponseModel,
            transport=self._transport,
        ).start()

    def chat_async(self, request: RequestBody) -> AsyncResultStreamer:
        """Start a background chat call and return its (already started) handle."""
        return AsyncResultStreamer(
            self._host,
            request,
            basic_auth=self._basic_auth,
            request_timeout_seconds=self._request_timeout_seconds,
            endpoint_suffix=CHAT_ENDPOINT,
            response_model=ChatResponseModel,
            transport=self._transport,
        ).start()


__all__ = ["OllamaClient"]
