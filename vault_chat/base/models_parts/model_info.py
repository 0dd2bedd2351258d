"""
ModelInfo DTO for provider model listings.

Represents a single selectable model as returned by a provider listing API or
by an adapter's static fallback list.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ModelInfo:
    """A single model listing entry.

    Attributes:
        id: Model identifier, unique within one provider.
        name: Human-friendly display name.
        context_length: Optional maximum context window size.
        supports_streaming: Whether ``chat_stream`` can be used with it.
    """

    id: str
    name: str
    context_length: Optional[int] = None
    supports_streaming: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the entry."""
        return asdict(self)


__all__ = [
    "ModelInfo",
]
