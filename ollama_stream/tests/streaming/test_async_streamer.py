"""AsyncResultStreamer: live fragments, boundary policy, failure shape."""

from __future__ import annotations

import json
import threading

import httpx
import pytest

from ollama_stream.base.dto import ChatRequest, GenerateRequest
from ollama_stream.base.models import ChatResponseModel
from ollama_stream.base.streaming import AsyncResultStreamer
from ollama_stream.config.defaults import CHAT_ENDPOINT

HOST = "http://ollama.test"


def _chat_streamer(transport, request=None) -> AsyncResultStreamer:
    request = request or ChatRequest(model="llama3", messages=[{"role": "user", "content": "hi"}])
    return AsyncResultStreamer(
        HOST,
        request,
        endpoint_suffix=CHAT_ENDPOINT,
        response_model=ChatResponseModel,
        transport=transport,
    )


def test_two_line_stream_excludes_done_fragment_from_complete_response(make_transport) -> None:
    body = b'{"message":{"content":"Hel"},"done":false}\n{"message":{"content":"lo"},"done":true}\n'
    transport, _ = make_transport(200, body)

    streamer = _chat_streamer(transport).start()

    assert list(streamer.result_stream) == ["Hel", "lo"]
    assert streamer.join(timeout=5)
    assert streamer.finished
    assert streamer.succeeded is True
    assert streamer.complete_response == "Hel"
    assert streamer.http_status_code == 200
    assert streamer.response_time_ms >= 0


def test_request_is_forced_to_stream(make_transport) -> None:
    transport, seen = make_transport(200, b'{"response":"x","done":true}\n')
    request = GenerateRequest(model="m", prompt="p", stream=False)

    streamer = AsyncResultStreamer(HOST, request, transport=transport).start()
    streamer.join(timeout=5)

    assert request.stream is True
    assert json.loads(seen[0].content)["stream"] is True
    assert str(seen[0].url) == HOST + "/api/generate"


def test_generate_fragments_are_streamed_live(make_transport) -> None:
    release = threading.Event()

    def body():
        yield b'{"response":"first","done":false}\n'
        release.wait(timeout=5)
        yield b'{"response":" second","done":false}\n'
        yield b'{"response":"","done":true}\n'

    transport, _ = make_transport(200, body())
    streamer = AsyncResultStreamer(HOST, GenerateRequest(model="m", prompt="p"), transport=transport).start()

    reader = iter(streamer.result_stream)
    assert next(reader) == "first"
    assert streamer.finished is False
    release.set()
    rest = list(reader)

    assert rest == [" second", ""]
    assert streamer.join(timeout=5)
    assert streamer.succeeded
    assert streamer.complete_response == "first second"


def test_lines_after_done_are_ignored(make_transport) -> None:
    body = b'{"response":"a","done":false}\n{"response":"b","done":true}\n{"response":"c","done":false}\n'
    transport, _ = make_transport(200, body)

    streamer = AsyncResultStreamer(HOST, {"model": "m", "prompt": "p"}, transport=transport).start()
    streamer.join(timeout=5)

    assert streamer.result_stream.snapshot() == ["a", "b"]
    assert streamer.complete_response == "a"


def test_not_found_produces_failed_state(make_transport) -> None:
    transport, _ = make_transport(404, b'{"error":"model \'m\' not found"}\n')

    streamer = AsyncResultStreamer(HOST, {"model": "m", "prompt": "p"}, transport=transport).start()
    streamer.join(timeout=5)

    assert streamer.succeeded is False
    assert streamer.http_status_code == 404
    assert streamer.complete_response == "[FAILED] model 'm' not found"
    assert streamer.result_stream.snapshot() == ["model 'm' not found"]
    assert streamer.result_stream.closed


def test_unauthorized_produces_failed_state(make_transport) -> None:
    transport, _ = make_transport(401, b"ignored\n")

    streamer = AsyncResultStreamer(HOST, {"model": "m", "prompt": "p"}, transport=transport).start()
    streamer.join(timeout=5)

    assert streamer.succeeded is False
    assert streamer.complete_response == "[FAILED] Unauthorized"


def test_transport_failure_produces_failed_state(failing_transport, log_records, decode_events) -> None:
    transport = failing_transport(httpx.ConnectError("connection refused"))

    streamer = AsyncResultStreamer(HOST, {"model": "m", "prompt": "p"}, transport=transport).start()

    assert streamer.join(timeout=5)
    assert streamer.succeeded is False
    assert streamer.complete_response.startswith("[FAILED] ")
    assert "connection refused" in streamer.complete_response
    assert list(streamer.result_stream) == []
    errors = [e for e in decode_events(log_records) if e["event"] == "async.error"]
    assert errors and errors[0]["error_code"] == "transport"


def test_read_error_after_headers_produces_failed_state(make_transport) -> None:
    def body():
        yield b'{"response":"a","done":false}\n'
        raise httpx.ReadError("reset mid-stream")

    transport, _ = make_transport(200, body())

    streamer = AsyncResultStreamer(HOST, {"model": "m", "prompt": "p"}, transport=transport).start()

    assert list(streamer.result_stream) == ["a"]
    assert streamer.join(timeout=5)
    assert streamer.succeeded is False
    assert streamer.http_status_code == 200
    assert streamer.complete_response == "[FAILED] reset mid-stream"


def test_malformed_line_produces_failed_state(make_transport) -> None:
    transport, _ = make_transport(200, b'{"response":"ok","done":false}\nnot-json\n')

    streamer = AsyncResultStreamer(HOST, {"model": "m", "prompt": "p"}, transport=transport).start()
    streamer.join(timeout=5)

    assert streamer.succeeded is False
    assert streamer.complete_response.startswith("[FAILED] cannot decode GenerateResponseModel")
    assert streamer.result_stream.snapshot() == ["ok"]


def test_start_twice_is_rejected(make_transport) -> None:
    transport, _ = make_transport(200, b'{"response":"x","done":true}\n')
    streamer = AsyncResultStreamer(HOST, {"model": "m", "prompt": "p"}, transport=transport).start()
    streamer.join(timeout=5)

    with pytest.raises(RuntimeError, match="already started"):
        streamer.start()


def test_state_before_start() -> None:
    streamer = AsyncResultStreamer(HOST, {"model": "m", "prompt": "p"})

    assert streamer.finished is False
    assert streamer.succeeded is False
    assert streamer.complete_response == ""
    assert streamer.http_status_code == 0
    assert streamer.join(timeout=0.01) is False
