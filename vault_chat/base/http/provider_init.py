"""Initialization bundle shared by the HTTP provider adapters.

Pure data container; no I/O happens here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

import httpx

from ..timeouts import TimeoutLike

EmptyResponsePolicy = Literal["allow", "error"]


@dataclass(frozen=True)
class _ProviderInit:
    """Constructor parameters common to every ``BaseHTTPProvider``.

    Attributes:
        provider_id: Stable provider id (``"openrouter"``, ``"ollama"``, ...).
        display_name: Human-readable provider name.
        base_url: Root URL of the provider API.
        api_key: Credential; ``None`` for providers that need none.
        default_model: Model used when a request leaves ``model`` empty.
        timeout: Explicit timeout (seconds or ``httpx.Timeout``); ``None``
            uses ``get_timeout_config()``.
        transport: Optional custom transport (``httpx.MockTransport`` in tests).
        empty_response_policy: ``"allow"`` returns empty completions as-is,
            ``"error"`` raises ``ProviderError(EMPTY_RESPONSE)``.
        requires_api_key: Fail fast with a configuration error when no key.
    """

    provider_id: str
    display_name: str
    base_url: str
    api_key: Optional[str] = None
    default_model: Optional[str] = None
    timeout: TimeoutLike = None
    transport: Optional[httpx.BaseTransport] = None
    empty_response_policy: EmptyResponsePolicy = "allow"
    requires_api_key: bool = True

    def __post_init__(self) -> None:
        if self.empty_response_policy not in ("allow", "error"):
            raise ValueError(f"unknown empty_response_policy: {self.empty_response_policy!r}")


__all__ = ["_ProviderInit", "EmptyResponsePolicy"]
