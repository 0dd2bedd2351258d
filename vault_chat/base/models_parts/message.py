"""
Message DTO used across providers.

Defines the `Message` dataclass and the closed `Role` literal. Content is
plain text; adapters reshape the role set where a backend uses different
names (Gemini's ``model`` role, for instance).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Tuple


Role = Literal["system", "user", "assistant"]

ROLES: Tuple[str, ...] = ("system", "user", "assistant")


@dataclass(frozen=True)
class Message:
    """One turn of a conversation.

    Attributes:
        role: ``"system"``, ``"user"`` or ``"assistant"``.
        content: Plain text content of the turn.

    Raises:
        ValueError: When ``role`` is outside the closed role set.
    """

    role: Role
    content: str

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise ValueError(f"unsupported message role: {self.role!r}")

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI-style ``{"role", "content"}`` mapping."""
        return {"role": self.role, "content": self.content}


__all__ = [
    "Message",
    "Role",
    "ROLES",
]
