"""Provider/model pair stamped onto every normalized log event."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class LogContext:
    """Identifies which adapter and model an event belongs to.

    Unset fields are left out of the emitted event rather than logged as
    ``null``.
    """

    provider: Optional[str] = None
    model: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        out: Dict[str, str] = {}
        if self.provider:
            out["provider"] = self.provider
        if self.model:
            out["model"] = self.model
        return out


__all__ = ["LogContext"]
