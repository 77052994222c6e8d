"""Synchronous generate caller."""

from __future__ import annotations

import json

import pytest

from ollama_stream.base.dto import GenerateRequest
from ollama_stream.base.errors import ProtocolError
from ollama_stream.base.models import GenerateResponseModel
from ollama_stream.callers import GenerateEndpointCaller


def _caller(transport) -> GenerateEndpointCaller:
    return GenerateEndpointCaller("http://ollama.test", None, 5, False, transport=transport)


def test_generate_endpoint_and_accumulation(make_transport, ndjson) -> None:
    body = ndjson(
        {"model": "m", "response": "The ", "done": False},
        {"model": "m", "response": "sky", "done": False},
        {"model": "m", "response": "", "done": True, "context": [1, 2, 3]},
    )
    transport, seen = make_transport(200, body)
    units = []

    result = _caller(transport).call(GenerateRequest(model="m", prompt="why?"), units.append)

    assert str(seen[0].url) == "http://ollama.test/api/generate"
    assert json.loads(seen[0].content) == {"model": "m", "prompt": "why?", "stream": False}
    assert result.body == "The sky"
    assert [u.response for u in units] == ["The ", "sky"]
    assert all(isinstance(u, GenerateResponseModel) for u in units)


def test_generate_stops_on_malformed_line(make_transport, ndjson) -> None:
    transport, _ = make_transport(200, ndjson({"response": "a", "done": False}) + b"[1, 2\n")

    assert _caller(transport).call_sync(GenerateRequest(model="m", prompt="p")).body == "a"


def test_generate_not_found(make_transport, ndjson) -> None:
    transport, _ = make_transport(404, ndjson({"error": "model 'm' not found, try pulling it first"}))

    with pytest.raises(ProtocolError, match="try pulling it first"):
        _caller(transport).call_sync(GenerateRequest(model="m", prompt="p"))


def test_non_json_error_body_is_reported_verbatim(make_transport) -> None:
    transport, _ = make_transport(404, b"404 page not found\n")

    with pytest.raises(ProtocolError) as info:
        _caller(transport).call_sync(GenerateRequest(model="m", prompt="p"))

    assert info.value.message == "404 page not found"
