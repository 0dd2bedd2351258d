"""Ollama helpers module.

Purpose:
- Side-effect-free utilities for the Ollama provider: native ``/api/chat``
  payload construction, response readers, and the NDJSON frame extractor.

Ollama speaks its own JSON dialect rather than the OpenAI one: generation
options live under ``options`` (``num_predict``, ``temperature``), the reply
is at ``message.content`` and token counts are ``prompt_eval_count`` /
``eval_count``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.errors import ErrorCode, ProviderError
from ..base.models import ChatRequest, ModelInfo, Usage


def build_payload(request: ChatRequest, model: str, *, stream: bool) -> Dict[str, Any]:
    """Assemble the ``/api/chat`` JSON body; unset options are omitted."""
    options: Dict[str, Any] = {}
    if request.max_tokens is not None:
        options["num_predict"] = request.max_tokens
    if request.temperature is not None:
        options["temperature"] = request.temperature
    payload: Dict[str, Any] = {
        "model": model,
        "messages": [m.to_dict() for m in request.messages],
        "stream": stream,
    }
    if options:
        payload["options"] = options
    return payload


def extract_text(data: Dict[str, Any]) -> str:
    message = data.get("message") or {}
    content = message.get("content") if isinstance(message, dict) else None
    return content if isinstance(content, str) else ""


def extract_usage(data: Dict[str, Any]) -> Optional[Usage]:
    return Usage.from_counts(data.get("prompt_eval_count"), data.get("eval_count"))


def raise_for_error(data: Dict[str, Any], *, model: Optional[str] = None) -> None:
    """Raise when Ollama reports ``{"error": "..."}`` in a 2xx body or frame."""
    err = data.get("error")
    if err:
        raise ProviderError(
            code=ErrorCode.UNKNOWN,
            message=f"Ollama error: {err}",
            provider="ollama",
            model=model,
        )


def make_frame_extractor(model: Optional[str] = None):
    """Return the NDJSON extractor for one stream (bound to ``model`` for errors)."""

    def _extract(obj: Dict[str, Any]) -> Optional[str]:
        raise_for_error(obj, model=model)
        return extract_text(obj)

    return _extract


def parse_tags(data: Dict[str, Any]) -> List[ModelInfo]:
    """Translate ``GET /api/tags`` into ``ModelInfo`` entries keyed by name."""
    out: List[ModelInfo] = []
    for item in data.get("models") or []:
        name = item.get("name") if isinstance(item, dict) else None
        if name:
            out.append(ModelInfo(id=str(name), name=str(name)))
    return out


__all__ = [
    "build_payload",
    "extract_text",
    "extract_usage",
    "raise_for_error",
    "make_frame_extractor",
    "parse_tags",
]
