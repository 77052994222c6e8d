"""Abstract endpoint caller for the line-delimited JSON API.

Purpose:
    Send one request to ``{host}{endpoint_suffix}``, read the streamed body line
    by line, and turn it into an :class:`OllamaResult` or a raised error.
    Concrete callers plug in the endpoint path and the per-line decode step.

Status handling:
    The status code is read once when the response headers arrive and
    selects the line handler for the whole body:
        - 404 / 400: every line is an ``{"error": ...}`` payload.
        - 401: the body is not read; the error text is ``"Unauthorized"``.
        - anything else: ``parse_line`` decodes content and reports ``done``.

Failure semantics:
    - Non-200 status raises :class:`ProtocolError` whose message is the
      accumulated error text. No partial result is returned.
    - Transport failures (connect, read, timeout) raise :class:`TransportError`.
    - Undecodable lines never raise; ``parse_line`` logs them and stops the loop.

No retries are attempted at this layer.
"""
from __future__ import annotations

import abc
import logging
import time
from typing import Any, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from ..base.auth import BasicAuth
from ..base.dto import RequestBody, model_name, serialize_body
from ..base.errors import DecodeError, ProtocolError, TransportError, classify_exception, code_for_status
from ..base.http import HttpTransport, HttpxTransport, build_headers
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import OllamaResult, decode_line
from ..base.streaming import StreamHandler, StreamObserver, iter_body_lines, select_line_handler
from ..config.defaults import UNAUTHORIZED_MESSAGE

M = TypeVar("M", bound=BaseModel)


class EndpointCaller(abc.ABC):
    """Blocking caller for one server endpoint.

    Parameters:
        host: Server base URL without trailing slash.
        basic_auth: Optional credentials; adds a Basic ``Authorization`` header.
        request_timeout_seconds: Timeout handed to the transport per request.
        verbose: Log the outbound payload and the final result.
        transport: HTTP capability; defaults to the pooled httpx transport.
    """

    def __init__(
        self,
        host: str,
        basic_auth: Optional[BasicAuth],
        request_timeout_seconds: float,
        verbose: bool,
        *,
        transport: Optional[HttpTransport] = None,
    ) -> None:
        self._host = host
        self._basic_auth = basic_auth
        self._request_timeout_seconds = request_timeout_seconds
        self._verbose = verbose
        self._transport = transport or HttpxTransport()
        self._logger = get_logger(f"ollama_stream.callers.{type(self).__name__}")
        self._observer: Optional[StreamObserver[Any]] = None

    @property
    @abc.abstractmethod
    def endpoint_suffix(self) -> str:
        """Path appended to the host, e.g. ``/api/chat``."""

    @abc.abstractmethod
    def parse_line(self, line: str, buffer: List[str]) -> bool:
        """Decode one 2xx line, append its content to ``buffer``.

        Returns ``True`` when the stream reached its terminal state (or the
        line could not be decoded) and no further line must be read.
        """

    @property
    def url(self) -> str:
        return self._host + self.endpoint_suffix

    def _decode(self, line: str, model: Type[M]) -> Optional[M]:
        """Decode ``line`` into ``model``; log and return ``None`` when it cannot be decoded."""
        try:
            return decode_line(line, model)
        except DecodeError as e:
            normalized_log_event(
                self._logger,
                "line.decode_error",
                LogContext(endpoint=self.endpoint_suffix, host=self._host),
                phase="mid_stream",
                error_code=e.code.value,
                error=e.message,
                line=line,
                level=logging.ERROR,
            )
            return None

    def _notify(self, unit: Any) -> None:
        if self._observer is not None:
            self._observer.notify(unit)

    def call(self, body: RequestBody, stream_handler: Optional[StreamHandler[Any]] = None) -> OllamaResult:
        """Run :meth:`call_sync` with ``stream_handler`` bound for this call only.

        The handler receives every decoded unit that carries content, in
        arrival order, before the call returns.
        """
        self._observer = StreamObserver(stream_handler)
        try:
            return self.call_sync(body)
        finally:
            self._observer = None

    def call_sync(self, body: RequestBody) -> OllamaResult:
        """Send ``body`` and block until the response is fully consumed.

        Raises:
            ProtocolError: the final status code was not 200.
            TransportError: the request could not be sent or the body read.
        """
        ctx = LogContext(endpoint=self.endpoint_suffix, host=self._host, model=model_name(body))
        content = serialize_body(body)
        if self._verbose:
            normalized_log_event(self._logger, "call.request", ctx, phase="start", payload=content)

        buffer: List[str] = []
        started = time.perf_counter()
        try:
            with self._transport.open_stream(
                "POST",
                self.url,
                headers=build_headers(self._basic_auth),
                content=content,
                timeout=self._request_timeout_seconds,
            ) as response:
                status = response.status_code
                handle = select_line_handler(
                    status,
                    on_error_text=buffer.append,
                    parse_line=lambda line: self.parse_line(line, buffer),
                )
                if handle is None:
                    buffer.append(UNAUTHORIZED_MESSAGE)
                else:
                    for line in iter_body_lines(response):
                        if handle(line):
                            break
        except httpx.HTTPError as e:
            code = classify_exception(e)
            normalized_log_event(
                self._logger,
                "call.error",
                ctx,
                phase="mid_stream",
                error_code=code.value,
                error=str(e),
                level=logging.ERROR,
            )
            raise TransportError(code=code, message=str(e) or type(e).__name__, raw=e) from e
        elapsed_ms = int((time.perf_counter() - started) * 1000)

        text = "".join(buffer)
        if status != 200:
            code = code_for_status(status)
            normalized_log_event(
                self._logger,
                "call.error",
                ctx,
                phase="finalize",
                error_code=code.value,
                status_code=status,
                error=text,
                level=logging.ERROR,
            )
            raise ProtocolError(code=code, message=text, status_code=status)

        result = OllamaResult(body=text.strip(), response_time_ms=elapsed_ms, http_status_code=status)
        if self._verbose:
            normalized_log_event(
                self._logger,
                "call.result",
                ctx,
                phase="finalize",
                emitted=len(buffer),
                response_time_ms=elapsed_ms,
                body=result.body,
            )
        return result


__all__ = ["EndpointCaller"]
