"""
Structured provider error exception type.

Wraps transport failures, HTTP error statuses and provider error envelopes
with a normalized `ErrorCode` so callers can present one message shape to the
user regardless of which backend failed.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message extracted from the provider.
        provider: Provider id where the error originated (e.g., ``"ollama"``).
        model: Optional model name associated with the failure.
        retryable: Hint for caller-side retry logic (not authoritative).
        status: HTTP status code when the failure came from a response.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    status: Optional[int] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return the human-readable message."""
        return self.message


__all__ = ["ProviderError"]
