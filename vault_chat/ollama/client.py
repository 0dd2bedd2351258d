"""Ollama provider adapter.

Purpose:
    Implements chat and streaming generation against the local Ollama HTTP
    API (default ``http://localhost:11434``). Streaming responses are
    newline-delimited JSON objects; the frame with ``done: true`` ends the
    stream.

External dependencies:
    HTTP client only (``httpx``). No API key is required since Ollama is a
    local daemon.

Fallback semantics:
    ``list_models`` reads the local tags endpoint and returns an empty list
    when the daemon is unreachable.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

import httpx

from ..base.errors import ErrorCode, ProviderError
from ..base.http import BaseHTTPProvider, _ProviderInit
from ..base.models import ChatRequest, ModelInfo, Usage, ValidationResult
from ..base.streaming import NDJSONFrameDecoder, TokenStream
from ..base.timeouts import TimeoutLike
from ..config import get_provider_config
from ..config.defaults import OLLAMA_DEFAULT_HOST, OLLAMA_ID, PROVIDER_NAMES
from .helpers import (
    build_payload,
    extract_text,
    extract_usage,
    make_frame_extractor,
    parse_tags,
    raise_for_error,
)


class OllamaProvider(BaseHTTPProvider):
    """Adapter for a local Ollama daemon.

    Parameters:
        base_url: Daemon root URL; defaults to ``http://localhost:11434``.
        model: Default model used when a request carries none.
        timeout: Explicit request timeout (seconds or ``httpx.Timeout``).
        transport: Optional custom transport (tests).
        empty_response_policy: ``"allow"`` (default) or ``"error"``.
    """

    _error_prefix = "Ollama error {status}: "

    def __init__(
        self,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: TimeoutLike = None,
        transport: Optional[httpx.BaseTransport] = None,
        empty_response_policy: str = "allow",
        **_: Any,
    ) -> None:
        cfg = get_provider_config(OLLAMA_ID)
        super().__init__(
            _ProviderInit(
                provider_id=OLLAMA_ID,
                display_name=PROVIDER_NAMES[OLLAMA_ID],
                base_url=(base_url or cfg.get("base_url") or OLLAMA_DEFAULT_HOST).rstrip("/"),
                default_model=model or cfg.get("model"),
                timeout=timeout,
                transport=transport,
                empty_response_policy=empty_response_policy,  # type: ignore[arg-type]
                requires_api_key=False,
            )
        )

    def _validation_error(self, err: ProviderError) -> str:
        if err.code in (ErrorCode.UNAVAILABLE, ErrorCode.TIMEOUT):
            return f"Cannot connect to Ollama at {self.base_url}"
        return super()._validation_error(err)

    def _check_connection(self) -> ValidationResult:
        self._send("GET", f"{self.base_url}/api/tags", error_prefix=self._error_prefix)
        return ValidationResult.ok()

    def _fetch_models(self) -> List[ModelInfo]:
        resp = self._send("GET", f"{self.base_url}/api/tags", error_prefix=self._error_prefix)
        return parse_tags(self._read_json(resp))

    def _do_chat(self, request: ChatRequest, model: str) -> Tuple[str, Optional[Usage]]:
        resp = self._send(
            "POST",
            f"{self.base_url}/api/chat",
            model=model,
            error_prefix=self._error_prefix,
            json=build_payload(request, model, stream=False),
        )
        data = self._read_json(resp, model)
        raise_for_error(data, model=model)
        return extract_text(data), extract_usage(data)

    def _do_stream(self, request: ChatRequest, model: str) -> TokenStream:
        resp = self._open_stream(
            f"{self.base_url}/api/chat",
            model=model,
            error_prefix=self._error_prefix,
            json=build_payload(request, model, stream=True),
        )
        return self._token_stream(resp, NDJSONFrameDecoder(make_frame_extractor(model)), model)


__all__ = ["OllamaProvider"]
