"""Line decoding helpers and request body serialization."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from ollama_stream.base.dto import ChatRequest, GenerateRequest, force_streaming, model_name, serialize_body
from ollama_stream.base.errors import DecodeError, ErrorCode
from ollama_stream.base.models import (
    ChatResponseModel,
    GenerateResponseModel,
    OllamaResult,
    decode_error_text,
    decode_line,
)


def test_decode_chat_line_keeps_unknown_fields() -> None:
    unit = decode_line(
        '{"model":"m","message":{"role":"assistant","content":"hi"},"done":true,"eval_count":7}',
        ChatResponseModel,
    )

    assert unit.fragment == "hi"
    assert unit.done is True
    assert unit.extras() == {"eval_count": 7}


def test_chat_fragment_is_none_without_content() -> None:
    assert decode_line('{"done":false}', ChatResponseModel).fragment is None
    assert decode_line('{"message":null,"done":false}', ChatResponseModel).fragment is None
    assert decode_line('{"message":{"role":"assistant"},"done":false}', ChatResponseModel).fragment is None
    assert decode_line('{"message":{"content":null},"done":false}', ChatResponseModel).fragment is None


def test_decode_generate_line() -> None:
    unit = decode_line('{"response":"tok","done":true,"context":[1,2]}', GenerateResponseModel)

    assert unit.fragment == "tok"
    assert unit.context == [1, 2]


@pytest.mark.parametrize("line", ["{oops", '{"done":"not-a-bool"}', "[]"])
def test_decode_line_raises_decode_error(line) -> None:
    with pytest.raises(DecodeError) as info:
        decode_line(line, ChatResponseModel)

    assert info.value.code is ErrorCode.DECODE
    assert info.value.line == line
    assert str(info.value).startswith("cannot decode ChatResponseModel")


def test_decode_error_text() -> None:
    assert decode_error_text('{"error":"boom"}') == "boom"
    assert decode_error_text("  plain text  ") == "plain text"


def test_serialize_body_drops_none_for_models() -> None:
    req = ChatRequest(model="m", messages=[{"role": "user", "content": "hi"}], options={"temperature": 0})

    assert json.loads(serialize_body(req)) == {
        "model": "m",
        "messages": [{"role": "user", "content": "hi"}],
        "stream": False,
        "options": {"temperature": 0},
    }


def test_serialize_body_mapping_and_rejects_other_types() -> None:
    assert serialize_body({"model": "m", "stream": True}) == '{"model":"m","stream":true}'
    with pytest.raises(TypeError):
        serialize_body(["not", "a", "body"])  # type: ignore[arg-type]


def test_force_streaming_and_model_name() -> None:
    req = GenerateRequest(model="m", prompt="p")
    body = {"model": "x"}

    force_streaming(req)
    force_streaming(body)

    assert req.stream is True
    assert body["stream"] is True
    assert model_name(req) == "m"
    assert model_name(body) == "x"
    assert model_name({}) is None
    with pytest.raises(TypeError):
        force_streaming(())  # type: ignore[arg-type]


def test_request_validation() -> None:
    with pytest.raises(ValidationError):
        ChatRequest(model="", messages=[{"role": "user", "content": "hi"}])
    with pytest.raises(ValidationError):
        ChatRequest(model="m", messages=[])


def test_result_to_dict() -> None:
    result = OllamaResult(body="x", response_time_ms=5, http_status_code=200)
    assert result.to_dict() == {"body": "x", "response_time_ms": 5, "http_status_code": 200}
