from __future__ import annotations

import json

import httpx
import pytest

from vault_chat.base.errors import ErrorCode, ProviderError
from vault_chat.base.models import ChatRequest, Message
from vault_chat.ollama import OllamaProvider
from vault_chat.ollama.helpers import build_payload


def _provider(handler, **kw) -> OllamaProvider:
    return OllamaProvider(transport=httpx.MockTransport(handler), **kw)


def _request(**kw) -> ChatRequest:
    return ChatRequest(model=kw.pop("model", "llama3"), messages=[Message(role="user", content="Hi")], **kw)


def test_payload_maps_options_and_omits_unset():
    body = build_payload(_request(max_tokens=50, temperature=0.2), "llama3", stream=False)
    assert body["options"] == {"num_predict": 50, "temperature": 0.2}  # nosec B101 - asserts are appropriate in unit tests
    assert "options" not in build_payload(_request(), "llama3", stream=True)  # nosec B101 - asserts are appropriate in unit tests


def test_chat_without_api_key():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={"message": {"role": "assistant", "content": "Hi!"}, "done": True, "prompt_eval_count": 5, "eval_count": 2},
        )

    resp = _provider(handler).chat(_request())
    assert resp.text == "Hi!"  # nosec B101 - asserts are appropriate in unit tests
    assert resp.usage.total_tokens == 7  # nosec B101 - asserts are appropriate in unit tests
    assert seen["url"] == "http://localhost:11434/api/chat"  # nosec B101 - asserts are appropriate in unit tests
    assert seen["body"]["stream"] is False  # nosec B101 - asserts are appropriate in unit tests


def test_base_url_trailing_slash_is_stripped():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        return httpx.Response(200, json={"message": {"content": "ok"}, "done": True})

    _provider(handler, base_url="http://gpu-box:11434/").chat(_request())
    assert seen["url"] == "http://gpu-box:11434/api/chat"  # nosec B101 - asserts are appropriate in unit tests


def test_unknown_model_error():
    def handler(request):
        return httpx.Response(404, json={"error": "model 'nope' not found"})

    with pytest.raises(ProviderError) as ei:
        _provider(handler).chat(_request(model="nope"))
    assert ei.value.code is ErrorCode.NOT_FOUND  # nosec B101 - asserts are appropriate in unit tests
    assert ei.value.message == "Ollama error 404: model 'nope' not found"  # nosec B101 - asserts are appropriate in unit tests


def test_error_field_in_success_body():
    def handler(request):
        return httpx.Response(200, json={"error": "out of memory"})

    with pytest.raises(ProviderError) as ei:
        _provider(handler).chat(_request())
    assert ei.value.message == "Ollama error: out of memory"  # nosec B101 - asserts are appropriate in unit tests


def test_stream_ndjson_with_terminal_content():
    body = (
        b'{"message":{"role":"assistant","content":"Hel"},"done":false}\n'
        b'{"message":{"role":"assistant","content":"lo"},"done":false}\n'
        b'{"message":{"role":"assistant","content":""},"done":true,"eval_count":2}\n'
    )

    def handler(request):
        assert json.loads(request.content)["stream"] is True  # nosec B101 - asserts are appropriate in unit tests
        return httpx.Response(200, content=body)

    with _provider(handler).chat_stream(_request()) as response:
        deltas = list(response.stream)
    assert [(d.content, d.done) for d in deltas] == [("Hel", False), ("lo", False), ("", True)]  # nosec B101 - asserts are appropriate in unit tests


def test_stream_error_frame_raises():
    body = b'{"message":{"content":"a"},"done":false}\n{"error":"model crashed"}\n'
    response = _provider(lambda r: httpx.Response(200, content=body)).chat_stream(_request())
    stream = response.stream
    assert next(stream).content == "a"  # nosec B101 - asserts are appropriate in unit tests
    with pytest.raises(ProviderError) as ei:
        next(stream)
    assert "model crashed" in ei.value.message  # nosec B101 - asserts are appropriate in unit tests


def test_validate_unreachable_daemon():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = _provider(handler).validate()
    assert not result.valid  # nosec B101 - asserts are appropriate in unit tests
    assert result.error == "Cannot connect to Ollama at http://localhost:11434"  # nosec B101 - asserts are appropriate in unit tests


def test_validate_and_list_models_from_tags():
    def handler(request):
        assert request.url.path == "/api/tags"  # nosec B101 - asserts are appropriate in unit tests
        return httpx.Response(200, json={"models": [{"name": "llama3:latest"}, {"name": "qwen2.5:7b"}, {}]})

    provider = _provider(handler)
    assert provider.validate().valid  # nosec B101 - asserts are appropriate in unit tests
    assert [m.id for m in provider.list_models()] == ["llama3:latest", "qwen2.5:7b"]  # nosec B101 - asserts are appropriate in unit tests


def test_list_models_empty_when_unreachable():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    assert _provider(handler).list_models() == []  # nosec B101 - asserts are appropriate in unit tests


def test_timeout_maps_to_timeout_code():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(ProviderError) as ei:
        _provider(handler, timeout=1).chat(_request())
    assert ei.value.code is ErrorCode.TIMEOUT  # nosec B101 - asserts are appropriate in unit tests
    assert ei.value.retryable  # nosec B101 - asserts are appropriate in unit tests


def test_blocking_and_streamed_calls_use_separate_read_timeouts(monkeypatch):
    monkeypatch.setenv("PT_TIMEOUT_HTTP_SECONDS", "7")
    monkeypatch.setenv("PT_TIMEOUT_STREAM_SECONDS", "90")
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        stream = json.loads(request.content)["stream"]
        seen[stream] = request.extensions["timeout"]["read"]
        if stream:
            return httpx.Response(200, content=b'{"message":{"content":"a"},"done":true}\n')
        return httpx.Response(200, json={"message": {"content": "a"}, "done": True})

    provider = _provider(handler)
    provider.chat(_request())
    with provider.chat_stream(_request()) as response:
        list(response.stream)
    assert seen == {False: 7.0, True: 90.0}  # nosec B101 - asserts are appropriate in unit tests
