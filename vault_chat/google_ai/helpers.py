"""Request and response translation for the Gemini REST dialect.

Gemini has no system role and calls the assistant ``model``. System turns
are therefore folded into the first user turn, and every turn is sent as
``{"role", "parts": [{"text"}]}``. Responses carry text under
``candidates[0].content.parts[0].text``; a ``promptFeedback.blockReason``
means the prompt was rejected by safety filters.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.errors import ErrorCode, ProviderError
from ..base.models import ChatRequest, Message, ModelInfo, Usage
from ..config.defaults import (
    GOOGLE_AI_DEFAULT_MAX_TOKENS,
    GOOGLE_AI_DEFAULT_TEMPERATURE,
    GOOGLE_AI_FALLBACK_MODELS,
    GOOGLE_AI_ID,
)

_ROLE_MAP = {"user": "user", "assistant": "model"}


def build_contents(messages: List[Message]) -> List[Dict[str, Any]]:
    """Convert chat messages to Gemini ``contents``.

    System texts are joined (each followed by a blank line) and prepended to
    the first user turn. Without any user/assistant turn a single user turn
    carrying the system text (or ``"Hello"``) is sent.
    """
    system_text = "".join(f"{m.content}\n\n" for m in messages if m.role == "system")
    contents: List[Dict[str, Any]] = []
    prefixed = False
    for m in messages:
        if m.role == "system":
            continue
        text = m.content
        if m.role == "user" and system_text and not prefixed:
            text = system_text + text
            prefixed = True
        contents.append({"role": _ROLE_MAP[m.role], "parts": [{"text": text}]})
    if system_text and not prefixed and contents:
        contents.insert(0, {"role": "user", "parts": [{"text": system_text.rstrip()}]})
    if not contents:
        contents.append({"role": "user", "parts": [{"text": system_text.rstrip() or "Hello"}]})
    return contents


def build_payload(request: ChatRequest) -> Dict[str, Any]:
    return {
        "contents": build_contents(request.messages),
        "generationConfig": {
            "maxOutputTokens": request.max_tokens or GOOGLE_AI_DEFAULT_MAX_TOKENS,
            "temperature": (
                request.temperature if request.temperature is not None else GOOGLE_AI_DEFAULT_TEMPERATURE
            ),
        },
    }


def raise_if_blocked(data: Dict[str, Any], model: Optional[str] = None) -> None:
    """Raise ``ProviderError(CONTENT_BLOCKED)`` on a prompt safety block."""
    feedback = data.get("promptFeedback") or {}
    reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
    if reason:
        raise ProviderError(
            code=ErrorCode.CONTENT_BLOCKED,
            message=f"Content blocked: {reason}",
            provider=GOOGLE_AI_ID,
            model=model,
        )


def _first_candidate(data: Dict[str, Any]) -> Dict[str, Any]:
    candidates = data.get("candidates") or []
    first = candidates[0] if candidates else {}
    return first if isinstance(first, dict) else {}


def extract_text(data: Dict[str, Any]) -> str:
    content = _first_candidate(data).get("content") or {}
    parts = content.get("parts") or []
    if not parts or not isinstance(parts[0], dict):
        return ""
    text = parts[0].get("text")
    return text if isinstance(text, str) else ""


def finish_reason(data: Dict[str, Any]) -> Optional[str]:
    return _first_candidate(data).get("finishReason")


def extract_usage(data: Dict[str, Any]) -> Optional[Usage]:
    meta = data.get("usageMetadata")
    if not isinstance(meta, dict):
        return None
    return Usage.from_counts(meta.get("promptTokenCount"), meta.get("candidatesTokenCount"))


def make_frame_extractor(model: Optional[str] = None):
    """Return the SSE extractor for one stream; blocked chunks raise."""

    def _extract(obj: Dict[str, Any]) -> str:
        raise_if_blocked(obj, model)
        return extract_text(obj)

    return _extract


def parse_models(data: Dict[str, Any]) -> List[ModelInfo]:
    """Keep models supporting ``generateContent``; strip the ``models/`` prefix."""
    out: List[ModelInfo] = []
    for item in data["models"]:
        if "generateContent" not in (item.get("supportedGenerationMethods") or []):
            continue
        model_id = str(item.get("name", "")).replace("models/", "", 1)
        if not model_id:
            continue
        limit = item.get("inputTokenLimit")
        out.append(
            ModelInfo(
                id=model_id,
                name=str(item.get("displayName") or model_id),
                context_length=int(limit) if isinstance(limit, (int, float)) else None,
            )
        )
    return out


def fallback_models() -> List[ModelInfo]:
    return [ModelInfo(id=i, name=n, context_length=c) for i, n, c in GOOGLE_AI_FALLBACK_MODELS]


__all__ = [
    "build_contents",
    "build_payload",
    "raise_if_blocked",
    "extract_text",
    "finish_reason",
    "extract_usage",
    "make_frame_extractor",
    "parse_models",
    "fallback_models",
]
