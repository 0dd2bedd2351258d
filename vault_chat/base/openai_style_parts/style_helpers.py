"""
Helper utilities for OpenAI-style Chat Completions dialects.

Purpose:
- Translate our DTOs into the OpenAI ``/chat/completions`` JSON body.
- Read the assistant text, usage counters and in-band error envelopes back
  out of decoded responses.

No network I/O happens here; callers own the HTTP exchange.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..errors import ErrorCode, ProviderError, RETRYABLE_CODES, code_for_status
from ..models import ChatRequest, Message, Usage
from ..streaming import openai_delta_text


def build_openai_messages(messages: List[Message]) -> List[Dict[str, Any]]:
    """Return OpenAI-style ``[{"role", "content"}]`` dicts in order."""
    return [m.to_dict() for m in messages]


def build_openai_payload(
    request: ChatRequest,
    model: str,
    *,
    stream: bool,
    default_max_tokens: Optional[int] = None,
    default_temperature: Optional[float] = None,
) -> Dict[str, Any]:
    """Assemble the JSON body for ``/chat/completions``.

    Unset request fields fall back to the given defaults; fields that are
    still ``None`` are omitted so the provider applies its own.
    """
    max_tokens = request.max_tokens if request.max_tokens is not None else default_max_tokens
    temperature = request.temperature if request.temperature is not None else default_temperature
    payload: Dict[str, Any] = {
        "model": model,
        "messages": build_openai_messages(request.messages),
        "stream": stream,
    }
    if max_tokens is not None:
        payload["max_tokens"] = max_tokens
    if temperature is not None:
        payload["temperature"] = temperature
    return payload


def extract_openai_text(data: Dict[str, Any]) -> str:
    """Return ``choices[0].message.content`` or an empty string.

    ``reasoning_content`` and other sibling fields are ignored.
    """
    choices = data.get("choices") or []
    if not choices or not isinstance(choices[0], dict):
        return ""
    message = choices[0].get("message") or {}
    content = message.get("content")
    return content if isinstance(content, str) else ""


def extract_openai_usage(data: Dict[str, Any]) -> Optional[Usage]:
    usage = data.get("usage")
    if not isinstance(usage, dict):
        return None
    return Usage.from_counts(usage.get("prompt_tokens"), usage.get("completion_tokens"))


def raise_for_error_envelope(data: Dict[str, Any], *, provider: str, model: Optional[str] = None) -> None:
    """Raise ``ProviderError`` when a 2xx body carries an ``error`` envelope.

    Some gateways answer HTTP 200 with ``{"error": {...}}`` instead of a
    completion, or send the same envelope as an SSE frame mid-stream. A
    numeric ``code`` is classified like an HTTP status.
    """
    err = data.get("error")
    if not err:
        return
    if isinstance(err, dict):
        message = str(err.get("message") or err)
        raw_code = err.get("code")
    else:
        message = str(err)
        raw_code = None
    try:
        status = int(raw_code) if raw_code is not None else None
    except (TypeError, ValueError):
        status = None
    code = code_for_status(status) if status is not None else ErrorCode.UNKNOWN
    raise ProviderError(
        code=code,
        message=message,
        provider=provider,
        model=model,
        retryable=code in RETRYABLE_CODES,
        status=status,
    )


def make_openai_frame_extractor(provider: str, model: Optional[str] = None):
    """Return the SSE extractor for one stream.

    Error envelopes raise ``ProviderError``; other frames yield
    ``choices[0].delta.content``.
    """

    def _extract(obj: Dict[str, Any]) -> Optional[str]:
        raise_for_error_envelope(obj, provider=provider, model=model)
        return openai_delta_text(obj)

    return _extract


__all__ = [
    "build_openai_messages",
    "build_openai_payload",
    "extract_openai_text",
    "extract_openai_usage",
    "make_openai_frame_extractor",
    "raise_for_error_envelope",
]
