"""MiniMax provider adapter (OpenAI-style dialect with reasoning blocks).

MiniMax M2 models interleave ``<think>...</think>`` reasoning with the
answer. Unless ``show_thinking`` is enabled the adapter removes those blocks:
whole blocks from blocking responses, and incrementally (tags may be split
across frames) from streams via ``ThinkingFilter``.

The API root depends on the account region: ``api.minimax.io`` for
international accounts and ``api.minimaxi.com`` for mainland China.
"""

from __future__ import annotations

from typing import Any, List, Optional

import httpx

from ..base.http import _ProviderInit
from ..base.models import ChatRequest, Message, ModelInfo, ValidationResult
from ..base.openai_style_parts import BaseOpenAIStyleProvider
from ..base.streaming import ThinkingFilter, strip_thinking_blocks
from ..base.timeouts import TimeoutLike
from ..config import get_provider_config
from ..config.defaults import (
    MINIMAX_BASE_URLS,
    MINIMAX_DEFAULT_REGION,
    MINIMAX_DEFAULT_TEMPERATURE,
    MINIMAX_ID,
    MINIMAX_MODELS,
    MINIMAX_VALIDATION_MODEL,
    PROVIDER_NAMES,
    VALIDATION_MAX_TOKENS,
    VALIDATION_PROMPT,
)


def minimax_base_url(region: Optional[str]) -> str:
    """Return the API root for ``region`` (``"china"`` or anything else)."""
    if (region or "").strip().lower() == "china":
        return MINIMAX_BASE_URLS["china"]
    return MINIMAX_BASE_URLS[MINIMAX_DEFAULT_REGION]


class MiniMaxProvider(BaseOpenAIStyleProvider):
    """MiniMax chat completions adapter.

    Parameters:
        api_key: Explicit API key; resolved from provider config when omitted.
        model: Default model used when a request carries none.
        region: ``"international"`` (default) or ``"china"``.
        show_thinking: Keep ``<think>`` blocks in the output.
        base_url: Explicit API root; overrides ``region``.
        timeout: Explicit request timeout (seconds or ``httpx.Timeout``).
        transport: Optional custom transport (tests).
        empty_response_policy: ``"allow"`` (default) or ``"error"``.
    """

    _default_temperature = MINIMAX_DEFAULT_TEMPERATURE
    _error_prefix = "MiniMax API error {status}: "

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        region: Optional[str] = None,
        show_thinking: bool = False,
        base_url: Optional[str] = None,
        timeout: TimeoutLike = None,
        transport: Optional[httpx.BaseTransport] = None,
        empty_response_policy: str = "allow",
        **_: Any,
    ) -> None:
        cfg = get_provider_config(MINIMAX_ID)
        self._region = region or cfg.get("region") or MINIMAX_DEFAULT_REGION
        root = base_url or cfg.get("base_url") or minimax_base_url(self._region)
        super().__init__(
            _ProviderInit(
                provider_id=MINIMAX_ID,
                display_name=PROVIDER_NAMES[MINIMAX_ID],
                base_url=root.rstrip("/"),
                api_key=api_key or cfg.get("api_key"),
                default_model=model or cfg.get("model"),
                timeout=timeout,
                transport=transport,
                empty_response_policy=empty_response_policy,  # type: ignore[arg-type]
            )
        )
        self._show_thinking = bool(show_thinking)

    @property
    def region(self) -> str:
        return self._region

    @property
    def show_thinking(self) -> bool:
        return self._show_thinking

    def _postprocess_text(self, text: str) -> str:
        if self._show_thinking:
            return text
        return strip_thinking_blocks(text)

    def _thinking_filter(self) -> Optional[ThinkingFilter]:
        return None if self._show_thinking else ThinkingFilter()

    def _check_connection(self) -> ValidationResult:
        request = ChatRequest(
            model=MINIMAX_VALIDATION_MODEL,
            messages=[Message(role="user", content=VALIDATION_PROMPT)],
            max_tokens=VALIDATION_MAX_TOKENS,
        )
        self._send(
            "POST",
            self._chat_url(),
            model=MINIMAX_VALIDATION_MODEL,
            error_prefix=self._error_prefix,
            json=self._build_payload(request, MINIMAX_VALIDATION_MODEL, stream=False),
            headers=self._headers(),
        )
        return ValidationResult.ok()

    def _fetch_models(self) -> List[ModelInfo]:
        return [ModelInfo(id=i, name=n, context_length=c) for i, n, c in MINIMAX_MODELS]


__all__ = ["MiniMaxProvider", "minimax_base_url"]
