"""Suppression of inline reasoning ("thinking") blocks.

Some reasoning models interleave their internal reasoning with the answer,
wrapped in a delimiter pair such as ``<think>...</think>``. Three helpers live
here:

- :func:`strip_thinking_blocks` removes whole blocks from a complete message.
- :class:`ThinkingFilter` does the same incrementally over streamed deltas,
  where a delimiter may be split across two or more deltas.
- :func:`clean_response_text` is the broader display-layer cleanup applied
  to any provider's output before it is shown or saved.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import List

THINK_OPEN = "<think>"
THINK_CLOSE = "</think>"

_THINK_BLOCK_RE = re.compile(r"<think>[\s\S]*?</think>")
_THINK_UNCLOSED_RE = re.compile(r"<think>[\s\S]*\Z")
_DISPLAY_BLOCK_RES = tuple(
    re.compile(rf"<{tag}>[\s\S]*?</{tag}>", re.IGNORECASE)
    for tag in ("think", "thinking", "reasoning")
)
_LEAKED_REASONING_RE = re.compile(r"^The user\s", re.IGNORECASE)

# Phrases that typically open the real answer after leaked reasoning.
RESPONSE_MARKERS = (
    "Hi there!",
    "Hi!",
    "Hello!",
    "Hey!",
    "Sure,",
    "Sure!",
    "Yes,",
    "I'm ready",
    "I'd be happy",
    "I can help",
    "Here's",
    "Here is",
    "Let me",
    "##",
    "**",
)
_MIN_MARKER_INDEX = 20


class FilterState(str, Enum):
    OUTSIDE = "outside"
    INSIDE = "inside"


def _partial_suffix_len(text: str, tag: str) -> int:
    """Length of the longest proper prefix of ``tag`` that ends ``text``."""
    for size in range(min(len(tag) - 1, len(text)), 0, -1):
        if text.endswith(tag[:size]):
            return size
    return 0


class ThinkingFilter:
    """Two-state machine removing delimited reasoning from streamed text.

    ``feed`` returns the visible part of each delta. While ``OUTSIDE`` a
    trailing fragment that could be the start of the opening delimiter is
    held back until the next delta decides it; while ``INSIDE`` everything is
    dropped except a trailing fragment that could start the closing
    delimiter. ``flush`` releases held text at end of stream (held text is
    discarded when the stream ends inside a block).
    """

    def __init__(self, open_tag: str = THINK_OPEN, close_tag: str = THINK_CLOSE) -> None:
        if not open_tag or not close_tag:
            raise ValueError("thinking delimiters must be non-empty")
        self.open_tag = open_tag
        self.close_tag = close_tag
        self.state = FilterState.OUTSIDE
        self._held = ""

    @property
    def inside(self) -> bool:
        return self.state is FilterState.INSIDE

    def feed(self, text: str) -> str:
        buf = self._held + text
        self._held = ""
        visible: List[str] = []
        while buf:
            if self.state is FilterState.OUTSIDE:
                idx = buf.find(self.open_tag)
                if idx >= 0:
                    visible.append(buf[:idx])
                    buf = buf[idx + len(self.open_tag):]
                    self.state = FilterState.INSIDE
                    continue
                keep = _partial_suffix_len(buf, self.open_tag)
                visible.append(buf[: len(buf) - keep])
                self._held = buf[len(buf) - keep:]
                break
            idx = buf.find(self.close_tag)
            if idx >= 0:
                buf = buf[idx + len(self.close_tag):]
                self.state = FilterState.OUTSIDE
                continue
            keep = _partial_suffix_len(buf, self.close_tag)
            self._held = buf[len(buf) - keep:]
            break
        return "".join(visible)

    def flush(self) -> str:
        held, self._held = self._held, ""
        return held if self.state is FilterState.OUTSIDE else ""


def strip_thinking_blocks(text: str) -> str:
    """Remove ``<think>...</think>`` blocks and trim the result.

    An opening delimiter that is never closed drops the rest of the text,
    matching what :class:`ThinkingFilter` shows for the same output streamed.
    """
    if not text:
        return ""
    text = _THINK_BLOCK_RE.sub("", text)
    return _THINK_UNCLOSED_RE.sub("", text).strip()


def clean_response_text(text: str) -> str:
    """Prepare model output for display.

    Removes ``<think>``, ``<thinking>`` and ``<reasoning>`` blocks (any case)
    and, when the text opens with leaked reasoning ("The user ..."), cuts it
    at the earliest response marker found past the first 20 characters.
    """
    if not text:
        return ""
    cleaned = text
    for pattern in _DISPLAY_BLOCK_RES:
        cleaned = pattern.sub("", cleaned)
    if _LEAKED_REASONING_RE.match(cleaned):
        best = -1
        for marker in RESPONSE_MARKERS:
            idx = cleaned.find(marker)
            if idx > _MIN_MARKER_INDEX and (best == -1 or idx < best):
                best = idx
        if best > 0:
            cleaned = cleaned[best:]
    return cleaned.strip()


__all__ = [
    "FilterState",
    "ThinkingFilter",
    "strip_thinking_blocks",
    "clean_response_text",
    "RESPONSE_MARKERS",
    "THINK_OPEN",
    "THINK_CLOSE",
]
