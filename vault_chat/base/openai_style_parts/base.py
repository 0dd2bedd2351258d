"""BaseOpenAIStyleProvider: shared adapter for ``/chat/completions`` dialects.

Purpose:
- Implement blocking and streamed chat for providers speaking the OpenAI
  Chat Completions wire format over HTTP (bearer auth, ``choices[...]``
  responses, SSE ``data:`` frames ended by ``[DONE]``).

Subclasses customize through small hooks:
- ``_chat_url()``: absolute completions endpoint.
- ``_headers()``: extra headers (auth is added when a key is configured).
- ``_default_max_tokens`` / ``_default_temperature``: request defaults.
- ``_postprocess_text()``: non-streaming text cleanup.
- ``_thinking_filter()``: optional streaming reasoning filter.
- ``_error_prefix``: prefix for HTTP error messages.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from ..http import BaseHTTPProvider
from ..models import ChatRequest, Usage
from ..streaming import SSEFrameDecoder, ThinkingFilter, TokenStream
from .style_helpers import (
    build_openai_payload,
    extract_openai_text,
    extract_openai_usage,
    make_openai_frame_extractor,
    raise_for_error_envelope,
)


class BaseOpenAIStyleProvider(BaseHTTPProvider):
    """Reusable base class for OpenAI-compatible HTTP providers."""

    _default_max_tokens: Optional[int] = None
    _default_temperature: Optional[float] = None
    _error_prefix: str = ""

    def _chat_url(self) -> str:
        return f"{self.base_url}/chat/completions"

    def _headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _build_payload(self, request: ChatRequest, model: str, *, stream: bool) -> Dict[str, Any]:
        return build_openai_payload(
            request,
            model,
            stream=stream,
            default_max_tokens=self._default_max_tokens,
            default_temperature=self._default_temperature,
        )

    def _postprocess_text(self, text: str) -> str:
        return text

    def _thinking_filter(self) -> Optional[ThinkingFilter]:
        return None

    def _do_chat(self, request: ChatRequest, model: str) -> Tuple[str, Optional[Usage]]:
        resp = self._send(
            "POST",
            self._chat_url(),
            model=model,
            error_prefix=self._error_prefix,
            json=self._build_payload(request, model, stream=False),
            headers=self._headers(),
        )
        data = self._read_json(resp, model)
        raise_for_error_envelope(data, provider=self.provider_id, model=model)
        return self._postprocess_text(extract_openai_text(data)), extract_openai_usage(data)

    def _do_stream(self, request: ChatRequest, model: str) -> TokenStream:
        resp = self._open_stream(
            self._chat_url(),
            model=model,
            error_prefix=self._error_prefix,
            json=self._build_payload(request, model, stream=True),
            headers=self._headers(),
        )
        return self._token_stream(
            resp,
            SSEFrameDecoder(make_openai_frame_extractor(self.provider_id, model), sentinel="[DONE]"),
            model,
            thinking=self._thinking_filter(),
        )


__all__ = ["BaseOpenAIStyleProvider"]
