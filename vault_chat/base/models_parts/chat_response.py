"""
ChatResponse DTO representing a completed, non-incremental result.

Empty text is only returned when the adapter's empty-response policy allows
it; provider failures surface as ``ProviderError`` instead.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .usage import Usage


@dataclass
class ChatResponse:
    """Provider-agnostic response from a blocking chat invocation.

    Attributes:
        text: Full completion text.
        usage: Optional token counters when the provider reports them.
        model: Model that produced the response, when known.
        latency_ms: Wall clock time of the HTTP round trip.
    """

    text: str
    usage: Optional[Usage] = None
    model: Optional[str] = None
    latency_ms: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary."""
        return {
            "text": self.text,
            "usage": self.usage.to_dict() if self.usage else None,
            "model": self.model,
            "latency_ms": self.latency_ms,
        }


__all__ = [
    "ChatResponse",
]
