"""TokenDelta DTO: one increment of a streamed response."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TokenDelta:
    """An incremental text fragment plus the terminal flag.

    A well-formed stream is zero or more deltas with ``done=False`` followed
    by exactly one delta with ``done=True`` (whose ``content`` is empty).
    """

    content: str
    done: bool = False


TERMINAL_DELTA = TokenDelta(content="", done=True)


__all__ = ["TokenDelta", "TERMINAL_DELTA"]
