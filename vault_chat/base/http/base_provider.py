"""Base class for adapters that talk to a provider over plain HTTP.

Purpose:
    Hold the parts every adapter shares so concrete providers only describe
    their wire format:

    - configuration checks done before any network call,
    - request execution with error normalization (``ProviderError``),
    - the streaming handshake (fail fast before a ``TokenStream`` is built),
    - the empty-response policy,
    - ``validate`` / ``list_models`` wrappers that never raise,
    - structured ``chat.*`` / ``stream.*`` / ``validate.end`` log events.

Subclasses implement ``_do_chat``, ``_do_stream``, ``_check_connection`` and
``_fetch_models`` and may override ``_fallback_models`` and
``_validation_error``.

External dependencies:
    ``httpx`` for transport; the pooled client from ``get_httpx_client``.
"""

from __future__ import annotations

import logging
import time
from contextlib import suppress
from typing import Any, Dict, List, Optional, Tuple

import httpx

from ..errors import (
    ErrorCode,
    ProviderError,
    error_from_exception,
    error_from_response,
)
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import (
    ChatRequest,
    ChatResponse,
    ModelInfo,
    StreamingChatResponse,
    Usage,
    ValidationResult,
)
from ..streaming import FrameDecoder, ThinkingFilter, TokenStream
from ..timeouts import resolve_timeout
from .client import get_httpx_client
from .provider_init import _ProviderInit


class BaseHTTPProvider:
    """Shared machinery for the HTTP provider adapters.

    Instances are immutable after construction: configuration lives in the
    frozen ``_ProviderInit`` bundle and is exposed through read-only
    properties.
    """

    def __init__(self, init: _ProviderInit) -> None:
        self._init = init
        self._logger = get_logger(f"providers.{init.provider_id}")
        self._owns_client = init.transport is not None
        self._client = get_httpx_client(
            None,
            init.provider_id,
            timeout=init.timeout,
            transport=init.transport,
        )
        self._blocking_timeout = resolve_timeout(init.timeout, stream=False)

    # ----- identity / configuration -----
    @property
    def provider_id(self) -> str:
        return self._init.provider_id

    @property
    def display_name(self) -> str:
        return self._init.display_name

    @property
    def base_url(self) -> str:
        return self._init.base_url

    @property
    def default_model(self) -> Optional[str]:
        return self._init.default_model

    @property
    def _api_key(self) -> Optional[str]:
        return self._init.api_key

    def __repr__(self) -> str:
        return f"{type(self).__name__}(provider_id={self.provider_id!r}, base_url={self.base_url!r})"

    def close(self) -> None:
        """Close the HTTP client when this adapter owns it (custom transport)."""
        if self._owns_client:
            self._client.close()

    # ----- hooks -----
    def _do_chat(self, request: ChatRequest, model: str) -> Tuple[str, Optional[Usage]]:  # pragma: no cover - abstract
        raise NotImplementedError

    def _do_stream(self, request: ChatRequest, model: str) -> TokenStream:  # pragma: no cover - abstract
        raise NotImplementedError

    def _check_connection(self) -> ValidationResult:  # pragma: no cover - abstract
        raise NotImplementedError

    def _fetch_models(self) -> List[ModelInfo]:  # pragma: no cover - abstract
        raise NotImplementedError

    def _fallback_models(self) -> List[ModelInfo]:
        return []

    def _validation_error(self, err: ProviderError) -> str:
        """Map a validation failure to the message shown to the user."""
        if err.code is ErrorCode.AUTH:
            return "Invalid API key"
        return err.message

    def _check_config(self) -> None:
        """Raise ``ProviderError(CONFIG)`` when required settings are missing."""
        if self._init.requires_api_key and not (self._api_key or "").strip():
            raise self._config_error("API key is required")

    # ----- helpers for subclasses -----
    def _config_error(self, message: str, model: Optional[str] = None) -> ProviderError:
        return ProviderError(code=ErrorCode.CONFIG, message=message, provider=self.provider_id, model=model)

    def _ctx(self, model: Optional[str]) -> LogContext:
        return LogContext(provider=self.provider_id, model=model)

    def _resolve_model(self, request: ChatRequest) -> str:
        model = (request.model or self.default_model or "").strip()
        if not model:
            raise self._config_error("Model ID is required")
        return model

    def _send(
        self,
        method: str,
        url: str,
        *,
        model: Optional[str] = None,
        error_prefix: str = "",
        **kwargs: Any,
    ) -> httpx.Response:
        """Perform a blocking request; non-2xx statuses raise ``ProviderError``.

        Uses the blocking timeout unless ``timeout`` is passed explicitly.
        """
        kwargs.setdefault("timeout", self._blocking_timeout)
        try:
            resp = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise error_from_exception(exc, provider=self.provider_id, model=model) from exc
        if not resp.is_success:
            raise error_from_response(resp, provider=self.provider_id, model=model, prefix=error_prefix)
        return resp

    def _read_json(self, resp: httpx.Response, model: Optional[str] = None) -> Dict[str, Any]:
        try:
            data = resp.json()
        except ValueError as exc:
            raise ProviderError(
                code=ErrorCode.SERVER_ERROR,
                message=f"Invalid JSON response from {self.display_name}",
                provider=self.provider_id,
                model=model,
                status=resp.status_code,
                raw=exc,
            ) from exc
        if not isinstance(data, dict):
            raise ProviderError(
                code=ErrorCode.SERVER_ERROR,
                message=f"Unexpected response shape from {self.display_name}",
                provider=self.provider_id,
                model=model,
                status=resp.status_code,
            )
        return data

    def _open_stream(
        self,
        url: str,
        *,
        model: str,
        error_prefix: str = "",
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a streaming POST and return the open response.

        Connection failures and non-2xx statuses raise here, before any
        stream object exists. On failure the response is read for its error
        envelope and closed.
        """
        req = self._client.build_request("POST", url, **kwargs)
        try:
            resp = self._client.send(req, stream=True)
        except httpx.HTTPError as exc:
            raise error_from_exception(exc, provider=self.provider_id, model=model) from exc
        if resp.is_success:
            return resp
        try:
            with suppress(httpx.HTTPError):
                resp.read()
            raise error_from_response(resp, provider=self.provider_id, model=model, prefix=error_prefix)
        finally:
            resp.close()

    def _token_stream(
        self,
        resp: httpx.Response,
        decoder: FrameDecoder,
        model: str,
        thinking: Optional[ThinkingFilter] = None,
    ) -> TokenStream:
        return TokenStream(
            resp,
            decoder,
            provider=self.provider_id,
            model=model,
            thinking=thinking,
            logger=self._logger,
        )

    # ----- public contract -----
    def chat(self, request: ChatRequest) -> ChatResponse:
        """Run one blocking completion.

        Raises:
            ProviderError: configuration, authentication, transport, remote
                application or content-safety failures.
        """
        self._check_config()
        model = self._resolve_model(request)
        ctx = self._ctx(model)
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            messages=len(request.messages),
            max_tokens=request.max_tokens,
            temperature=request.temperature,
        )
        t0 = time.perf_counter()
        try:
            text, usage = self._do_chat(request, model)
            text = self._apply_empty_policy(text, model)
        except ProviderError as err:
            self._log_failure("chat.error", ctx, err)
            raise
        latency_ms = (time.perf_counter() - t0) * 1000.0
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=bool(text),
            tokens=usage,
            latency_ms=latency_ms,
        )
        return ChatResponse(text=text, usage=usage, model=model, latency_ms=latency_ms)

    def chat_stream(self, request: ChatRequest) -> StreamingChatResponse:
        """Open a streamed completion; handshake failures raise ``ProviderError``."""
        self._check_config()
        model = self._resolve_model(request)
        ctx = self._ctx(model)
        normalized_log_event(
            self._logger,
            "stream.start",
            ctx,
            phase="start",
            messages=len(request.messages),
            max_tokens=request.max_tokens,
            temperature=request.temperature,
        )
        try:
            stream = self._do_stream(request, model)
        except ProviderError as err:
            self._log_failure("stream.error", ctx, err)
            raise
        return StreamingChatResponse(stream=stream)

    def validate(self) -> ValidationResult:
        """Check reachability and credentials; never raises."""
        try:
            self._check_config()
            result = self._check_connection()
        except ProviderError as err:
            result = ValidationResult.failed(self._validation_error(err))
        except Exception as exc:  # noqa: BLE001 - validation failures are reported, not raised
            result = ValidationResult.failed(str(exc) or type(exc).__name__)
        normalized_log_event(
            self._logger,
            "validate.end",
            self._ctx(self.default_model),
            phase="finalize",
            valid=result.valid,
            error=result.error,
        )
        return result

    def list_models(self) -> List[ModelInfo]:
        """Return the live model list, or the static fallback on any failure."""
        try:
            return self._fetch_models()
        except (ProviderError, httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as exc:
            fallback = self._fallback_models()
            normalized_log_event(
                self._logger,
                "models.fallback",
                self._ctx(None),
                phase="finalize",
                level=logging.WARNING,
                error=str(exc),
                fallback_count=len(fallback),
            )
            return fallback

    # ----- internals -----
    def _apply_empty_policy(self, text: Optional[str], model: str) -> str:
        text = text or ""
        if not text.strip() and self._init.empty_response_policy == "error":
            raise ProviderError(
                code=ErrorCode.EMPTY_RESPONSE,
                message=f"{self.display_name} returned an empty response",
                provider=self.provider_id,
                model=model,
            )
        return text

    def _log_failure(self, event: str, ctx: LogContext, err: ProviderError) -> None:
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase="finalize" if event.startswith("chat") else "start",
            emitted=False,
            error_code=err.code.value,
            level=logging.WARNING,
            error=err.message,
            status=err.status,
        )


__all__ = ["BaseHTTPProvider"]
