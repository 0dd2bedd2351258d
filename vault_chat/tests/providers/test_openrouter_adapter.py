from __future__ import annotations

import json

import httpx
import pytest

from vault_chat.base.errors import ErrorCode, ProviderError
from vault_chat.base.models import ChatRequest, Message
from vault_chat.openrouter import OpenRouterProvider

API = "https://openrouter.ai/api/v1"


def _request(**kw) -> ChatRequest:
    return ChatRequest(model=kw.pop("model", "openai/gpt-4o"), messages=[Message(role="user", content="Hi")], **kw)


def _provider(handler, **kw) -> OpenRouterProvider:
    return OpenRouterProvider(api_key=kw.pop("api_key", "sk-or-1"), transport=httpx.MockTransport(handler), **kw)


def test_chat_success_sends_openai_body_and_attribution_headers():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "choices": [{"message": {"content": "Hello", "reasoning_content": "ignored"}}],
                "usage": {"prompt_tokens": 3, "completion_tokens": 1},
            },
        )

    resp = _provider(handler).chat(_request(max_tokens=64))
    assert resp.text == "Hello"  # nosec B101 - asserts are appropriate in unit tests
    assert resp.usage.total_tokens == 4  # nosec B101 - asserts are appropriate in unit tests
    assert resp.model == "openai/gpt-4o"  # nosec B101 - asserts are appropriate in unit tests
    assert seen["url"] == f"{API}/chat/completions"  # nosec B101 - asserts are appropriate in unit tests
    assert seen["headers"]["Authorization"] == "Bearer sk-or-1"  # nosec B101 - asserts are appropriate in unit tests
    assert seen["headers"]["HTTP-Referer"] == "https://obsidian.md"  # nosec B101 - asserts are appropriate in unit tests
    assert seen["headers"]["X-Title"] == "Obsidian Vault AI"  # nosec B101 - asserts are appropriate in unit tests
    assert seen["body"]["stream"] is False  # nosec B101 - asserts are appropriate in unit tests
    assert seen["body"]["max_tokens"] == 64  # nosec B101 - asserts are appropriate in unit tests
    assert "temperature" not in seen["body"]  # nosec B101 - asserts are appropriate in unit tests
    assert seen["body"]["messages"] == [{"role": "user", "content": "Hi"}]  # nosec B101 - asserts are appropriate in unit tests


def test_http_error_maps_to_provider_error_with_prefix():
    def handler(request):
        return httpx.Response(401, json={"error": {"message": "No auth credentials found"}})

    with pytest.raises(ProviderError) as ei:
        _provider(handler).chat(_request())
    err = ei.value
    assert err.code is ErrorCode.AUTH  # nosec B101 - asserts are appropriate in unit tests
    assert err.status == 401  # nosec B101 - asserts are appropriate in unit tests
    assert err.message == "OpenRouter API error 401: No auth credentials found"  # nosec B101 - asserts are appropriate in unit tests
    assert err.provider == "openrouter"  # nosec B101 - asserts are appropriate in unit tests


def test_error_envelope_in_success_body_raises():
    def handler(request):
        return httpx.Response(200, json={"error": {"message": "No endpoints found", "code": 404}})

    with pytest.raises(ProviderError) as ei:
        _provider(handler).chat(_request())
    assert ei.value.message == "No endpoints found"  # nosec B101 - asserts are appropriate in unit tests


def test_missing_key_fails_before_any_request():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    with pytest.raises(ProviderError) as ei:
        _provider(handler, api_key="").chat(_request())
    assert ei.value.code is ErrorCode.CONFIG  # nosec B101 - asserts are appropriate in unit tests
    assert calls == []  # nosec B101 - asserts are appropriate in unit tests


def test_missing_model_is_a_config_error():
    with pytest.raises(ProviderError) as ei:
        _provider(lambda r: httpx.Response(200, json={})).chat(_request(model=""))
    assert ei.value.code is ErrorCode.CONFIG  # nosec B101 - asserts are appropriate in unit tests
    assert ei.value.message == "Model ID is required"  # nosec B101 - asserts are appropriate in unit tests


def test_default_model_used_when_request_has_none():
    seen = {}

    def handler(request):
        seen["model"] = json.loads(request.content)["model"]
        return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

    _provider(handler, model="meta-llama/llama-3.1-70b-instruct").chat(_request(model=""))
    assert seen["model"] == "meta-llama/llama-3.1-70b-instruct"  # nosec B101 - asserts are appropriate in unit tests


def test_empty_response_policy():
    def handler(request):
        return httpx.Response(200, json={"choices": [{"message": {"content": ""}}]})

    assert _provider(handler).chat(_request()).text == ""  # nosec B101 - asserts are appropriate in unit tests
    with pytest.raises(ProviderError) as ei:
        _provider(handler, empty_response_policy="error").chat(_request())
    assert ei.value.code is ErrorCode.EMPTY_RESPONSE  # nosec B101 - asserts are appropriate in unit tests


def test_stream_yields_normalized_deltas():
    body = (
        b'data: {"choices":[{"delta":{"role":"assistant"}}]}\n\n'
        b": OPENROUTER PROCESSING\n\n"
        b'data: {"choices":[{"delta":{"content":"Hel"}}]}\n\n'
        b'data: {"choices":[{"delta":{"content":"lo"}}]}\n\n'
        b"data: [DONE]\n\n"
    )
    seen = {}

    def handler(request):
        seen["stream"] = json.loads(request.content)["stream"]
        return httpx.Response(200, content=body, headers={"content-type": "text/event-stream"})

    with _provider(handler).chat_stream(_request()) as response:
        deltas = list(response.stream)
    assert seen["stream"] is True  # nosec B101 - asserts are appropriate in unit tests
    assert "".join(d.content for d in deltas) == "Hello"  # nosec B101 - asserts are appropriate in unit tests
    assert sum(d.done for d in deltas) == 1 and deltas[-1].done  # nosec B101 - asserts are appropriate in unit tests


def test_stream_error_frame_raises_after_partial_text():
    body = (
        b'data: {"choices":[{"delta":{"content":"Hel"}}]}\n\n'
        b'data: {"error":{"code":502,"message":"Provider returned error"}}\n\n'
        b"data: [DONE]\n\n"
    )
    response = _provider(
        lambda r: httpx.Response(200, content=body, headers={"content-type": "text/event-stream"})
    ).chat_stream(_request())
    stream = response.stream
    assert next(stream).content == "Hel"  # nosec B101 - asserts are appropriate in unit tests
    with pytest.raises(ProviderError) as ei:
        next(stream)
    assert ei.value.message == "Provider returned error"  # nosec B101 - asserts are appropriate in unit tests
    assert ei.value.code is ErrorCode.TRANSIENT  # nosec B101 - asserts are appropriate in unit tests
    assert ei.value.provider == "openrouter"  # nosec B101 - asserts are appropriate in unit tests


def test_stream_error_frame_fails_whole_iteration():
    body = (
        b'data: {"choices":[{"delta":{"content":"Hel"}}]}\n\n'
        b'data: {"error":{"code":502,"message":"Provider returned error"}}\n\n'
        b"data: [DONE]\n\n"
    )
    response = _provider(
        lambda r: httpx.Response(200, content=body, headers={"content-type": "text/event-stream"})
    ).chat_stream(_request())
    with pytest.raises(ProviderError):
        list(response.stream)


def test_stream_handshake_failure_raises_before_stream():
    def handler(request):
        return httpx.Response(429, json={"error": {"message": "Rate limit exceeded"}})

    with pytest.raises(ProviderError) as ei:
        _provider(handler).chat_stream(_request())
    assert ei.value.code is ErrorCode.RATE_LIMIT  # nosec B101 - asserts are appropriate in unit tests
    assert ei.value.retryable  # nosec B101 - asserts are appropriate in unit tests


def test_validate_reports_invalid_key():
    def handler(request):
        assert request.url.path.endswith("/models")  # nosec B101 - asserts are appropriate in unit tests
        return httpx.Response(401, json={"error": {"message": "bad key"}})

    result = _provider(handler).validate()
    assert not result.valid  # nosec B101 - asserts are appropriate in unit tests
    assert result.error == "Invalid API key"  # nosec B101 - asserts are appropriate in unit tests


def test_validate_success_and_unreachable():
    assert _provider(lambda r: httpx.Response(200, json={"data": []})).validate().valid  # nosec B101 - asserts are appropriate in unit tests

    def refused(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = _provider(refused).validate()
    assert not result.valid  # nosec B101 - asserts are appropriate in unit tests
    assert "connection refused" in result.error  # nosec B101 - asserts are appropriate in unit tests


def test_validate_without_key_does_not_raise():
    result = _provider(lambda r: httpx.Response(200, json={}), api_key="").validate()
    assert result.valid is False  # nosec B101 - asserts are appropriate in unit tests
    assert result.error == "API key is required"  # nosec B101 - asserts are appropriate in unit tests


def test_list_models_parses_listing():
    def handler(request):
        return httpx.Response(
            200,
            json={
                "data": [
                    {"id": "openai/gpt-4o", "name": "OpenAI: GPT-4o", "context_length": 128000},
                    {"name": "entry without id"},
                    {"id": "x/y"},
                ]
            },
        )

    models = _provider(handler).list_models()
    assert [m.id for m in models] == ["openai/gpt-4o", "x/y"]  # nosec B101 - asserts are appropriate in unit tests
    assert models[0].context_length == 128000  # nosec B101 - asserts are appropriate in unit tests
    assert models[1].name == "x/y"  # nosec B101 - asserts are appropriate in unit tests


def test_list_models_falls_back_on_failure(provider_events):
    models = _provider(lambda r: httpx.Response(503, text="down")).list_models()
    assert len(models) == 4  # nosec B101 - asserts are appropriate in unit tests
    assert models[0].id == "anthropic/claude-3.5-sonnet"  # nosec B101 - asserts are appropriate in unit tests
    assert any(e.get("event") == "models.fallback" for e in provider_events)  # nosec B101 - asserts are appropriate in unit tests


def test_key_from_environment(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or-env")
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

    OpenRouterProvider(transport=httpx.MockTransport(handler)).chat(_request())
    assert seen["auth"] == "Bearer sk-or-env"  # nosec B101 - asserts are appropriate in unit tests
