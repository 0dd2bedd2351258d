"""OpenRouter provider adapter (OpenAI-style over HTTP).

Summary:
- Blocking and streamed chat through the shared ``BaseOpenAIStyleProvider``
  (``/chat/completions``, SSE frames ended by ``[DONE]``).
- Attribution headers (``HTTP-Referer`` / ``X-Title``) on every request.
- ``validate`` calls ``GET /models`` with the bearer key.
- ``list_models`` reads ``GET /models`` and falls back to a static list.

This module orchestrates I/O only; parsing lives in ``helpers``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from ..base.http import _ProviderInit
from ..base.models import ModelInfo, ValidationResult
from ..base.openai_style_parts import BaseOpenAIStyleProvider
from ..base.timeouts import TimeoutLike
from ..config import get_provider_config
from ..config.defaults import (
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_SITE_URL,
    OPENROUTER_ID,
    PROVIDER_NAMES,
)
from .helpers import build_attribution_headers, fallback_models, parse_models


class OpenRouterProvider(BaseOpenAIStyleProvider):
    """OpenRouter LLM provider implementation.

    Parameters:
        api_key: Explicit API key; resolved from provider config when omitted.
        model: Default model used when a request carries none.
        base_url: API root; defaults to ``https://openrouter.ai/api/v1``.
        site_url: Value for the ``HTTP-Referer`` attribution header.
        timeout: Explicit request timeout (seconds or ``httpx.Timeout``).
        transport: Optional custom transport (tests).
        empty_response_policy: ``"allow"`` (default) or ``"error"``.

    Side effects:
        Reads provider-level configuration via ``get_provider_config("openrouter")``.
    """

    _error_prefix = "OpenRouter API error {status}: "

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        site_url: Optional[str] = None,
        timeout: TimeoutLike = None,
        transport: Optional[httpx.BaseTransport] = None,
        empty_response_policy: str = "allow",
        **_: Any,
    ) -> None:
        cfg = get_provider_config(OPENROUTER_ID)
        super().__init__(
            _ProviderInit(
                provider_id=OPENROUTER_ID,
                display_name=PROVIDER_NAMES[OPENROUTER_ID],
                base_url=(base_url or cfg.get("base_url") or OPENROUTER_DEFAULT_BASE_URL).rstrip("/"),
                api_key=api_key or cfg.get("api_key"),
                default_model=model or cfg.get("model"),
                timeout=timeout,
                transport=transport,
                empty_response_policy=empty_response_policy,  # type: ignore[arg-type]
            )
        )
        self._site_url = site_url or OPENROUTER_DEFAULT_SITE_URL

    def _headers(self) -> Dict[str, str]:
        headers = super()._headers()
        headers.update(build_attribution_headers(self._site_url))
        return headers

    def _check_connection(self) -> ValidationResult:
        self._send("GET", f"{self.base_url}/models", headers=self._headers())
        return ValidationResult.ok()

    def _fetch_models(self) -> List[ModelInfo]:
        resp = self._send("GET", f"{self.base_url}/models", headers=self._headers())
        return parse_models(self._read_json(resp))

    def _fallback_models(self) -> List[ModelInfo]:
        return fallback_models()


__all__ = ["OpenRouterProvider"]
