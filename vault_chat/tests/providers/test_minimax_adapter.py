from __future__ import annotations

import json

import httpx
import pytest

from vault_chat.base.errors import ErrorCode, ProviderError
from vault_chat.base.models import ChatRequest, Message
from vault_chat.minimax import MiniMaxProvider, minimax_base_url


def _provider(handler, **kw) -> MiniMaxProvider:
    return MiniMaxProvider(api_key=kw.pop("api_key", "mm-key"), transport=httpx.MockTransport(handler), **kw)


def _request(**kw) -> ChatRequest:
    return ChatRequest(model="MiniMax-M2", messages=[Message(role="user", content="Hi")], **kw)


def _reply(content: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


def test_region_selects_api_root():
    assert minimax_base_url("china") == "https://api.minimaxi.com/v1"  # nosec B101 - asserts are appropriate in unit tests
    assert minimax_base_url("international") == "https://api.minimax.io/v1"  # nosec B101 - asserts are appropriate in unit tests
    assert minimax_base_url(None) == "https://api.minimax.io/v1"  # nosec B101 - asserts are appropriate in unit tests


def test_china_region_endpoint_and_default_temperature():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return _reply("ok")

    provider = _provider(handler, region="china")
    provider.chat(_request())
    assert provider.region == "china"  # nosec B101 - asserts are appropriate in unit tests
    assert seen["url"] == "https://api.minimaxi.com/v1/chat/completions"  # nosec B101 - asserts are appropriate in unit tests
    assert seen["body"]["temperature"] == 1.0  # nosec B101 - asserts are appropriate in unit tests


def test_thinking_blocks_removed_by_default():
    resp = _provider(lambda r: _reply("<think>The user says hi.</think>\n\nHello!")).chat(_request())
    assert resp.text == "Hello!"  # nosec B101 - asserts are appropriate in unit tests


def test_truncated_thinking_block_hidden_in_blocking_reply():
    resp = _provider(lambda r: _reply("<think>The user wants a long plan and")).chat(_request())
    assert resp.text == ""  # nosec B101 - asserts are appropriate in unit tests


def test_show_thinking_keeps_blocks():
    raw = "<think>reasoning</think>Hello!"
    resp = _provider(lambda r: _reply(raw), show_thinking=True).chat(_request())
    assert resp.text == raw  # nosec B101 - asserts are appropriate in unit tests


def test_stream_filters_split_thinking_tags():
    def frame(text: str) -> bytes:
        return ("data: " + json.dumps({"choices": [{"delta": {"content": text}}]}) + "\n\n").encode()

    body = frame("<th") + frame("ink>planning") + frame(" more</thi") + frame("nk>Hi") + frame(" there") + b"data: [DONE]\n\n"
    with _provider(lambda r: httpx.Response(200, content=body)).chat_stream(_request()) as response:
        text = response.stream.text()
    assert text == "Hi there"  # nosec B101 - asserts are appropriate in unit tests


def test_validate_sends_chat_with_fixed_model():
    seen = {}

    def handler(request):
        seen["body"] = json.loads(request.content)
        return _reply("Hi")

    assert _provider(handler).validate().valid  # nosec B101 - asserts are appropriate in unit tests
    assert seen["body"]["model"] == "MiniMax-M2.1"  # nosec B101 - asserts are appropriate in unit tests
    assert seen["body"]["max_tokens"] == 5  # nosec B101 - asserts are appropriate in unit tests
    assert seen["body"]["messages"] == [{"role": "user", "content": "Hi"}]  # nosec B101 - asserts are appropriate in unit tests


def test_validate_invalid_key():
    result = _provider(lambda r: httpx.Response(401, json={"base_resp": {"status_msg": "invalid api key"}})).validate()
    assert result.valid is False  # nosec B101 - asserts are appropriate in unit tests
    assert result.error == "Invalid API key"  # nosec B101 - asserts are appropriate in unit tests


def test_http_error_prefix():
    with pytest.raises(ProviderError) as ei:
        _provider(lambda r: httpx.Response(500, json={"error": {"message": "overloaded"}})).chat(_request())
    assert ei.value.message == "MiniMax API error 500: overloaded"  # nosec B101 - asserts are appropriate in unit tests
    assert ei.value.code is ErrorCode.SERVER_ERROR  # nosec B101 - asserts are appropriate in unit tests


def test_static_model_list_without_network():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500)

    models = _provider(handler).list_models()
    assert [m.id for m in models] == ["MiniMax-M2.1", "MiniMax-M2"]  # nosec B101 - asserts are appropriate in unit tests
    assert calls == []  # nosec B101 - asserts are appropriate in unit tests
