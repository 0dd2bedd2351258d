"""Google AI (Gemini) provider adapter over the public REST API.

Summary:
- ``models/{model}:generateContent`` for blocking chat and
  ``:streamGenerateContent?alt=sse`` for streaming. The SSE variant has no
  ``[DONE]`` sentinel; the stream ends when the connection closes.
- The API key travels as the ``key`` query parameter, not a header.
- Safety blocks raise ``ProviderError(CONTENT_BLOCKED)``; an empty answer
  with a ``finishReason`` raises ``ProviderError(EMPTY_RESPONSE)`` so it is
  never mistaken for a successful empty reply.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import httpx

from ..base.errors import ErrorCode, ProviderError
from ..base.http import BaseHTTPProvider, _ProviderInit
from ..base.models import ChatRequest, ModelInfo, Usage, ValidationResult
from ..base.streaming import SSEFrameDecoder, TokenStream
from ..base.timeouts import TimeoutLike
from ..config import get_provider_config
from ..config.defaults import GOOGLE_AI_DEFAULT_BASE_URL, GOOGLE_AI_ID, PROVIDER_NAMES
from .helpers import (
    build_payload,
    extract_text,
    extract_usage,
    fallback_models,
    finish_reason,
    make_frame_extractor,
    parse_models,
    raise_if_blocked,
)


class GoogleAIProvider(BaseHTTPProvider):
    """Gemini adapter.

    Parameters:
        api_key: Gemini API key; resolved from ``GOOGLE_AI_API_KEY``,
            ``GEMINI_API_KEY`` or ``GOOGLE_API_KEY`` when omitted.
        model: Default model used when a request carries none.
        base_url: API root; defaults to the ``v1beta`` endpoint.
        timeout: Explicit request timeout (seconds or ``httpx.Timeout``).
        transport: Optional custom transport (tests).
        empty_response_policy: ``"allow"`` (default) or ``"error"``.
    """

    _error_prefix = "Google AI: "

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: TimeoutLike = None,
        transport: Optional[httpx.BaseTransport] = None,
        empty_response_policy: str = "allow",
        **_: Any,
    ) -> None:
        cfg = get_provider_config(GOOGLE_AI_ID)
        super().__init__(
            _ProviderInit(
                provider_id=GOOGLE_AI_ID,
                display_name=PROVIDER_NAMES[GOOGLE_AI_ID],
                base_url=(base_url or cfg.get("base_url") or GOOGLE_AI_DEFAULT_BASE_URL).rstrip("/"),
                api_key=api_key or cfg.get("api_key"),
                default_model=model or cfg.get("model"),
                timeout=timeout,
                transport=transport,
                empty_response_policy=empty_response_policy,  # type: ignore[arg-type]
            )
        )

    def _params(self, **extra: str) -> Dict[str, str]:
        return {"key": self._api_key or "", **extra}

    def _validation_error(self, err: ProviderError) -> str:
        if err.status == 400:
            return "Invalid API key format"
        if err.status == 403:
            return "API key not authorized. Make sure the Gemini API is enabled."
        return err.message

    def _check_connection(self) -> ValidationResult:
        self._send("GET", f"{self.base_url}/models", params=self._params())
        return ValidationResult.ok()

    def _fetch_models(self) -> List[ModelInfo]:
        resp = self._send("GET", f"{self.base_url}/models", params=self._params())
        return parse_models(self._read_json(resp))

    def _fallback_models(self) -> List[ModelInfo]:
        return fallback_models()

    def _do_chat(self, request: ChatRequest, model: str) -> Tuple[str, Optional[Usage]]:
        resp = self._send(
            "POST",
            f"{self.base_url}/models/{model}:generateContent",
            model=model,
            error_prefix=self._error_prefix,
            params=self._params(),
            json=build_payload(request),
        )
        data = self._read_json(resp, model)
        raise_if_blocked(data, model)
        text = extract_text(data)
        reason = finish_reason(data)
        if not text and reason:
            raise ProviderError(
                code=ErrorCode.EMPTY_RESPONSE,
                message=f"No response. Reason: {reason}",
                provider=self.provider_id,
                model=model,
            )
        return text, extract_usage(data)

    def _do_stream(self, request: ChatRequest, model: str) -> TokenStream:
        resp = self._open_stream(
            f"{self.base_url}/models/{model}:streamGenerateContent",
            model=model,
            error_prefix=self._error_prefix,
            params=self._params(alt="sse"),
            json=build_payload(request),
        )
        return self._token_stream(resp, SSEFrameDecoder(make_frame_extractor(model), sentinel=None), model)


__all__ = ["GoogleAIProvider"]
