"""Token usage counters reported by a provider for one completion."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Usage:
    """Prompt and completion token counts."""

    prompt_tokens: int = 0
    completion_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_counts(cls, prompt: Any, completion: Any) -> Optional["Usage"]:
        """Build a ``Usage`` from raw counters, or ``None`` when both are absent."""
        if prompt is None and completion is None:
            return None
        return cls(prompt_tokens=int(prompt or 0), completion_tokens=int(completion or 0))


__all__ = ["Usage"]
