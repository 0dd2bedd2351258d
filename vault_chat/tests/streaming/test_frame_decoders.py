from __future__ import annotations

import pytest

from vault_chat.base.models import TERMINAL_DELTA, TokenDelta
from vault_chat.base.streaming import (
    MalformedFrame,
    NDJSONFrameDecoder,
    SSEFrameDecoder,
    openai_delta_text,
)


def _ollama_text(obj):
    return obj["message"]["content"]


def test_sse_data_line_yields_content():
    dec = SSEFrameDecoder(openai_delta_text)
    delta = dec.decode('data: {"choices":[{"delta":{"content":"Hel"}}]}')
    assert delta == TokenDelta(content="Hel", done=False)  # nosec B101 - asserts are appropriate in unit tests


def test_sse_sentinel_is_terminal():
    dec = SSEFrameDecoder(openai_delta_text, sentinel="[DONE]")
    assert dec.decode("data: [DONE]") == TERMINAL_DELTA  # nosec B101 - asserts are appropriate in unit tests


@pytest.mark.parametrize("line", ["", ": keep-alive", "event: message", "id: 7", "data:", "data:   "])
def test_sse_non_data_lines_are_skipped(line):
    assert SSEFrameDecoder(openai_delta_text).decode(line) is None  # nosec B101 - asserts are appropriate in unit tests


def test_sse_reasoning_content_is_not_emitted():
    dec = SSEFrameDecoder(openai_delta_text)
    delta = dec.decode('data: {"choices":[{"delta":{"reasoning_content":"hmm"}}]}')
    assert delta.content == ""  # nosec B101 - asserts are appropriate in unit tests
    assert not delta.done  # nosec B101 - asserts are appropriate in unit tests


def test_sse_invalid_json_raises_malformed():
    with pytest.raises(MalformedFrame) as ei:
        SSEFrameDecoder(openai_delta_text).decode("data: {not json")
    assert ei.value.line == "data: {not json"  # nosec B101 - asserts are appropriate in unit tests


def test_sse_non_object_payload_raises_malformed():
    with pytest.raises(MalformedFrame):
        SSEFrameDecoder(openai_delta_text).decode("data: [1, 2]")


def test_sse_without_sentinel_treats_done_as_payload():
    with pytest.raises(MalformedFrame):
        SSEFrameDecoder(openai_delta_text, sentinel=None).decode("data: [DONE]")


def test_ndjson_terminal_frame_keeps_its_content():
    dec = NDJSONFrameDecoder(_ollama_text)
    delta = dec.decode('{"message":{"content":"!"},"done":true}')
    assert delta == TokenDelta(content="!", done=True)  # nosec B101 - asserts are appropriate in unit tests


def test_ndjson_unexpected_shape_raises_malformed():
    with pytest.raises(MalformedFrame) as ei:
        NDJSONFrameDecoder(_ollama_text).decode('{"done": false}')
    assert "unexpected frame shape" in ei.value.reason  # nosec B101 - asserts are appropriate in unit tests


def test_ndjson_blank_line_is_skipped():
    assert NDJSONFrameDecoder(_ollama_text).decode("   ") is None  # nosec B101 - asserts are appropriate in unit tests
