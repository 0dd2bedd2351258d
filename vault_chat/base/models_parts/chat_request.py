"""
ChatRequest DTO for provider-agnostic chat invocations.

Adapters translate this normalized request into each backend's JSON body.
Unset sampling fields (``None``) let the adapter apply its own default.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .message import Message


@dataclass
class ChatRequest:
    """Normalized chat request sent to provider adapters.

    Attributes:
        model: Target model identifier.
        messages: Ordered list of chat `Message` instances.
        max_tokens: Maximum completion tokens (adapters map the param name).
        temperature: Sampling temperature when supported by the provider.
        stream: Caller hint; ``chat_stream`` always streams regardless.
    """

    model: str
    messages: List[Message] = field(default_factory=list)
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    stream: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the request."""
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "stream": self.stream,
        }


__all__ = [
    "ChatRequest",
]
