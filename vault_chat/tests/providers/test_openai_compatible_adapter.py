from __future__ import annotations

import json

import httpx
import pytest

from vault_chat.base.errors import ErrorCode, ProviderError
from vault_chat.base.models import ChatRequest, Message
from vault_chat.openai_compatible import OpenAICompatibleProvider, normalize_endpoint_url


def _provider(handler, **kw) -> OpenAICompatibleProvider:
    kw.setdefault("base_url", "http://localhost:1234")
    kw.setdefault("model", "local-model")
    return OpenAICompatibleProvider(transport=httpx.MockTransport(handler), **kw)


def _request() -> ChatRequest:
    return ChatRequest(model="", messages=[Message(role="user", content="Hi")])


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("http://localhost:1234", "http://localhost:1234/v1/chat/completions"),
        ("http://localhost:1234/v1/", "http://localhost:1234/v1/chat/completions"),
        ("https://gw.example.net/v1/chat/completions", "https://gw.example.net/v1/chat/completions"),
        ("https://gw.example.net/openai/completions", "https://gw.example.net/openai/completions"),
        ("", ""),
    ],
)
def test_normalize_endpoint_url(raw, expected):
    assert normalize_endpoint_url(raw) == expected  # nosec B101 - asserts are appropriate in unit tests


def test_chat_without_key_sends_no_auth_header():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "pong"}}]})

    resp = _provider(handler).chat(_request())
    assert resp.text == "pong"  # nosec B101 - asserts are appropriate in unit tests
    assert seen["url"] == "http://localhost:1234/v1/chat/completions"  # nosec B101 - asserts are appropriate in unit tests
    assert seen["auth"] is None  # nosec B101 - asserts are appropriate in unit tests
    assert seen["body"]["model"] == "local-model"  # nosec B101 - asserts are appropriate in unit tests
    assert seen["body"]["max_tokens"] == 2000  # nosec B101 - asserts are appropriate in unit tests
    assert seen["body"]["temperature"] == 0.7  # nosec B101 - asserts are appropriate in unit tests


def test_chat_with_key_sends_bearer():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

    _provider(handler, api_key="secret-token").chat(_request())
    assert seen["auth"] == "Bearer secret-token"  # nosec B101 - asserts are appropriate in unit tests


def test_missing_base_url_is_config_error():
    provider = OpenAICompatibleProvider(model="m", transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    with pytest.raises(ProviderError) as ei:
        provider.chat(_request())
    assert ei.value.code is ErrorCode.CONFIG  # nosec B101 - asserts are appropriate in unit tests
    result = provider.validate()
    assert result.error == "Base URL is required"  # nosec B101 - asserts are appropriate in unit tests


def test_validate_requires_model():
    result = _provider(lambda r: httpx.Response(200, json={}), model="").validate()
    assert not result.valid  # nosec B101 - asserts are appropriate in unit tests
    assert result.error == "Model ID is required"  # nosec B101 - asserts are appropriate in unit tests


def test_validate_request_and_error_prefix():
    seen = {}

    def ok(request):
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "hi"}}]})

    assert _provider(ok).validate().valid  # nosec B101 - asserts are appropriate in unit tests
    assert seen["body"]["max_tokens"] == 5  # nosec B101 - asserts are appropriate in unit tests

    result = _provider(lambda r: httpx.Response(502, text="Bad Gateway")).validate()
    assert result.error == "API error 502: Bad Gateway"  # nosec B101 - asserts are appropriate in unit tests


def test_list_models_is_configured_model():
    models = _provider(lambda r: httpx.Response(500)).list_models()
    assert [(m.id, m.context_length) for m in models] == [("local-model", 128000)]  # nosec B101 - asserts are appropriate in unit tests
    assert _provider(lambda r: httpx.Response(500), model="").list_models() == []  # nosec B101 - asserts are appropriate in unit tests


def test_stream_over_sse():
    body = b'data: {"choices":[{"delta":{"content":"a"}}]}\n\ndata: {"choices":[{"delta":{"content":"b"}}]}\n\ndata: [DONE]\n\n'
    with _provider(lambda r: httpx.Response(200, content=body)).chat_stream(_request()) as response:
        assert response.stream.text() == "ab"  # nosec B101 - asserts are appropriate in unit tests
