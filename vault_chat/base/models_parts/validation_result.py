"""Outcome of an adapter connectivity and credential check."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ValidationResult:
    """``valid`` plus a human-readable ``error`` when the check failed."""

    valid: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def failed(cls, error: str) -> "ValidationResult":
        return cls(valid=False, error=error or "Validation failed")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["ValidationResult"]
