"""Background streaming of one request with live, multi-reader output.

Purpose:
    Run the same request/line protocol as the synchronous callers on a
    dedicated worker thread. Fragments are published to a :class:`ResultStream`
    as they arrive; the final outcome is exposed through thread-safe
    properties the initiating thread polls after :meth:`join` (or once
    ``finished`` is true).

Failure semantics:
    The worker never propagates an exception. A non-200 status, a transport
    failure, or an undecodable line all converge to ``succeeded == False``
    with ``complete_response`` starting with ``"[FAILED] "``.

Boundary policy:
    The done-flagged fragment is streamed to live readers but is not part of
    ``complete_response``; only non-terminal fragments are accumulated.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import List, Optional, Type

import httpx
from pydantic import BaseModel

from ...config.defaults import (
    ASYNC_FAILURE_PREFIX,
    GENERATE_ENDPOINT,
    OLLAMA_DEFAULT_REQUEST_TIMEOUT_SECONDS,
    UNAUTHORIZED_MESSAGE,
)
from ..auth import BasicAuth
from ..dto import RequestBody, force_streaming, model_name, serialize_body
from ..errors import ErrorCode, OllamaError, ProtocolError, classify_exception, code_for_status
from ..http import HttpTransport, HttpxTransport, build_headers
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import GenerateResponseModel, StreamFragment, decode_line
from .line_dispatch import iter_body_lines, select_line_handler
from .result_stream import ResultStream


class AsyncResultStreamer:
    """Handle on one background streaming call.

    Parameters:
        host: Server base URL (no trailing slash).
        request: Request body; its ``stream`` flag is forced to ``True``.
        basic_auth: Optional credentials for the ``Authorization`` header.
        request_timeout_seconds: Timeout handed to the transport.
        endpoint_suffix: Path appended to ``host``.
        response_model: Pydantic model each normal line decodes into; must
            expose ``done`` and ``fragment``.
        transport: HTTP capability; defaults to the pooled httpx transport.
    """

    def __init__(
        self,
        host: str,
        request: RequestBody,
        *,
        basic_auth: Optional[BasicAuth] = None,
        request_timeout_seconds: float = OLLAMA_DEFAULT_REQUEST_TIMEOUT_SECONDS,
        endpoint_suffix: str = GENERATE_ENDPOINT,
        response_model: Type[BaseModel] = GenerateResponseModel,
        transport: Optional[HttpTransport] = None,
    ) -> None:
        self._host = host
        self._request = request
        self._basic_auth = basic_auth
        self._request_timeout_seconds = request_timeout_seconds
        self._endpoint_suffix = endpoint_suffix
        self._response_model = response_model
        self._transport = transport or HttpxTransport(purpose="async")
        self._logger = get_logger("ollama_stream.async")
        self._ctx = LogContext(endpoint=endpoint_suffix, host=host, model=model_name(request))

        self._stream = ResultStream()
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._succeeded = False
        self._http_status_code = 0
        self._response_time_ms = 0
        self._complete_response = ""

    # Lifecycle -------------------------------------------------------------
    def start(self) -> "AsyncResultStreamer":
        """Spawn the worker thread. Calling it twice is an error."""
        with self._lock:
            if self._thread is not None:
                raise RuntimeError("streamer already started")
            self._thread = threading.Thread(target=self._run, name="ollama-async-stream", daemon=True)
        self._thread.start()
        return self

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the worker to finish; return ``False`` on timeout."""
        return self._done.wait(timeout)

    @property
    def finished(self) -> bool:
        return self._done.is_set()

    # State -----------------------------------------------------------------
    @property
    def result_stream(self) -> ResultStream:
        return self._stream

    @property
    def succeeded(self) -> bool:
        with self._lock:
            return self._succeeded

    @property
    def http_status_code(self) -> int:
        with self._lock:
            return self._http_status_code

    @property
    def response_time_ms(self) -> int:
        with self._lock:
            return self._response_time_ms

    @property
    def complete_response(self) -> str:
        with self._lock:
            return self._complete_response

    # Worker ----------------------------------------------------------------
    def _publish(self, buffer: List[str], text: str) -> None:
        self._stream.append(text)
        buffer.append(text)

    def _consume(self, buffer: List[str], line: str) -> bool:
        unit: StreamFragment = decode_line(line, self._response_model)
        text = unit.fragment
        if text is not None:
            self._stream.append(text)
            if not unit.done:
                buffer.append(text)
        return unit.done

    def _finish(self, *, succeeded: bool, complete_response: str, started: float) -> None:
        with self._lock:
            self._succeeded = succeeded
            self._complete_response = complete_response
            self._response_time_ms = int((time.perf_counter() - started) * 1000)

    def _fail(self, error: Exception, started: float) -> None:
        code = classify_exception(error)
        self._finish(
            succeeded=False,
            complete_response=ASYNC_FAILURE_PREFIX + str(error),
            started=started,
        )
        normalized_log_event(
            self._logger,
            "async.error",
            self._ctx,
            phase="finalize",
            error_code=code.value,
            emitted=len(self._stream),
            status_code=self.http_status_code,
            error=str(error),
            level=logging.ERROR,
        )

    def _run(self) -> None:
        started = time.perf_counter()
        buffer: List[str] = []
        try:
            force_streaming(self._request)
            normalized_log_event(self._logger, "async.start", self._ctx, phase="start")
            with self._transport.open_stream(
                "POST",
                self._host + self._endpoint_suffix,
                headers=build_headers(self._basic_auth),
                content=serialize_body(self._request),
                timeout=self._request_timeout_seconds,
            ) as response:
                status = response.status_code
                with self._lock:
                    self._http_status_code = status
                handle = select_line_handler(
                    status,
                    on_error_text=lambda text: self._publish(buffer, text),
                    parse_line=lambda line: self._consume(buffer, line),
                )
                if handle is None:
                    self._publish(buffer, UNAUTHORIZED_MESSAGE)
                else:
                    for line in iter_body_lines(response):
                        if handle(line):
                            break
            complete = "".join(buffer)
            if status != 200:
                raise ProtocolError(code=code_for_status(status), message=complete, status_code=status)
            self._finish(succeeded=True, complete_response=complete, started=started)
            normalized_log_event(
                self._logger,
                "async.end",
                self._ctx,
                phase="finalize",
                emitted=len(self._stream),
                response_time_ms=self.response_time_ms,
            )
        except OllamaError as e:
            self._fail(e, started)
        except httpx.HTTPError as e:
            self._fail(e, started)
        except Exception as e:  # noqa: BLE001 - worker boundary
            self._logger.exception("async worker failed unexpectedly")
            self._fail(
                OllamaError(code=ErrorCode.UNKNOWN, message=f"{type(e).__name__}: {e}", raw=e),
                started,
            )
        finally:
            self._stream.close()
            self._done.set()


__all__ = ["AsyncResultStreamer"]
