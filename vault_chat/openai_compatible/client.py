"""Adapter for arbitrary OpenAI-compatible ``/chat/completions`` endpoints.

Covers self-hosted gateways (LM Studio, vLLM, LiteLLM, llama.cpp server) and
hosted services that mirror the OpenAI wire format. The user supplies a base
URL which is normalized to a full completions endpoint; the ``Authorization``
header is only sent when a key is configured. There is no model listing:
the configured model is the only entry.
"""

from __future__ import annotations

from typing import Any, List, Optional

import httpx

from ..base.http import _ProviderInit
from ..base.models import ChatRequest, Message, ModelInfo, ValidationResult
from ..base.openai_style_parts import BaseOpenAIStyleProvider
from ..base.timeouts import TimeoutLike
from ..config import get_provider_config
from ..config.defaults import (
    OPENAI_COMPATIBLE_CONTEXT_LENGTH,
    OPENAI_COMPATIBLE_DEFAULT_MAX_TOKENS,
    OPENAI_COMPATIBLE_DEFAULT_TEMPERATURE,
    OPENAI_COMPATIBLE_ID,
    PROVIDER_NAMES,
    VALIDATION_MAX_TOKENS,
)


def normalize_endpoint_url(url: Optional[str]) -> str:
    """Return the full completions endpoint for a user-supplied URL.

    Trailing slashes are stripped. URLs already containing
    ``/chat/completions`` or ending in ``/completions`` are kept; a URL ending
    in ``/v1`` gets ``/chat/completions``; anything else gets
    ``/v1/chat/completions``. Empty input yields ``""``.
    """
    base = (url or "").strip().rstrip("/")
    if not base or "/chat/completions" in base:
        return base
    if base.endswith("/v1"):
        return f"{base}/chat/completions"
    if base.endswith("/completions"):
        return base
    return f"{base}/v1/chat/completions"


class OpenAICompatibleProvider(BaseOpenAIStyleProvider):
    """Adapter for a user-configured OpenAI-compatible endpoint.

    Parameters:
        base_url: Endpoint or API root; normalized by ``normalize_endpoint_url``.
        model: Model id sent with every request (required).
        api_key: Optional bearer credential.
        timeout: Explicit request timeout (seconds or ``httpx.Timeout``).
        transport: Optional custom transport (tests).
        empty_response_policy: ``"allow"`` (default) or ``"error"``.
    """

    _default_max_tokens = OPENAI_COMPATIBLE_DEFAULT_MAX_TOKENS
    _default_temperature = OPENAI_COMPATIBLE_DEFAULT_TEMPERATURE
    _error_prefix = "API error {status}: "

    def __init__(
        self,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: TimeoutLike = None,
        transport: Optional[httpx.BaseTransport] = None,
        empty_response_policy: str = "allow",
        **_: Any,
    ) -> None:
        cfg = get_provider_config(OPENAI_COMPATIBLE_ID)
        super().__init__(
            _ProviderInit(
                provider_id=OPENAI_COMPATIBLE_ID,
                display_name=PROVIDER_NAMES[OPENAI_COMPATIBLE_ID],
                base_url=normalize_endpoint_url(base_url or cfg.get("base_url")),
                api_key=api_key or cfg.get("api_key"),
                default_model=model or cfg.get("model"),
                timeout=timeout,
                transport=transport,
                empty_response_policy=empty_response_policy,  # type: ignore[arg-type]
                requires_api_key=False,
            )
        )

    def _chat_url(self) -> str:
        return self.base_url

    def _check_config(self) -> None:
        if not self.base_url:
            raise self._config_error("Base URL is required")

    def _check_connection(self) -> ValidationResult:
        model = (self.default_model or "").strip()
        if not model:
            raise self._config_error("Model ID is required")
        request = ChatRequest(
            model=model,
            messages=[Message(role="user", content="hi")],
            max_tokens=VALIDATION_MAX_TOKENS,
        )
        self._send(
            "POST",
            self._chat_url(),
            model=model,
            error_prefix=self._error_prefix,
            json=self._build_payload(request, model, stream=False),
            headers=self._headers(),
        )
        return ValidationResult.ok()

    def _fetch_models(self) -> List[ModelInfo]:
        model = (self.default_model or "").strip()
        if not model:
            return []
        return [ModelInfo(id=model, name=model, context_length=OPENAI_COMPATIBLE_CONTEXT_LENGTH)]


__all__ = ["OpenAICompatibleProvider", "normalize_endpoint_url"]
