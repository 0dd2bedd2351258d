"""Frame decoders for the streaming wire dialects.

Purpose:
    Convert one complete text line into a ``TokenDelta`` (or ``None`` for
    lines that carry nothing). Two framing families are covered:

    - Server-sent events: ``data: {...}`` lines, optionally ended by a
      sentinel payload such as ``[DONE]``. Gemini's ``alt=sse`` variant has
      no sentinel and ends when the connection closes.
    - Newline-delimited JSON: one object per line whose ``done`` boolean is
      the terminal signal (Ollama).

Failure modes:
    Lines that are not valid JSON objects raise :class:`MalformedFrame`; the
    token stream logs and skips them. Extractors may raise ``ProviderError``
    for in-band failures (for example a safety block), which propagates.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Optional, Protocol

from ..models import TokenDelta, TERMINAL_DELTA

# Maps a decoded JSON frame to its text fragment ("" or None when absent).
Extractor = Callable[[Dict[str, Any]], Optional[str]]


class MalformedFrame(ValueError):
    """Raised for a line that should carry JSON but does not parse."""

    def __init__(self, line: str, reason: str) -> None:
        super().__init__(reason)
        self.line = line
        self.reason = reason


class FrameDecoder(Protocol):
    """Decodes one complete line into a delta, or ``None`` to skip it."""

    def decode(self, line: str) -> Optional[TokenDelta]:  # pragma: no cover - protocol
        ...


def _load_object(line: str, payload: str) -> Dict[str, Any]:
    try:
        obj = json.loads(payload)
    except ValueError as exc:
        raise MalformedFrame(line, f"invalid json: {exc}") from exc
    if not isinstance(obj, dict):
        raise MalformedFrame(line, "frame is not a json object")
    return obj


def _safe_extract(extract: Extractor, obj: Dict[str, Any], line: str) -> str:
    try:
        text = extract(obj)
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        raise MalformedFrame(line, f"unexpected frame shape: {exc}") from exc
    return text if isinstance(text, str) else ""


class SSEFrameDecoder:
    """Decoder for ``data:`` prefixed server-sent event lines.

    Parameters:
        extract: Callable pulling the text fragment out of a decoded frame.
        sentinel: Payload that ends the stream (``"[DONE]"`` for OpenAI-style
            APIs). ``None`` disables sentinel detection.

    Blank lines, ``:`` comments and other SSE fields (``event:``, ``id:``,
    ``retry:``) carry no tokens and are skipped.
    """

    def __init__(self, extract: Extractor, sentinel: Optional[str] = "[DONE]") -> None:
        self._extract = extract
        self._sentinel = sentinel

    def decode(self, line: str) -> Optional[TokenDelta]:
        if not line.startswith("data:"):
            return None
        payload = line[5:].strip()
        if not payload:
            return None
        if self._sentinel is not None and payload == self._sentinel:
            return TERMINAL_DELTA
        obj = _load_object(line, payload)
        return TokenDelta(content=_safe_extract(self._extract, obj, line), done=False)


class NDJSONFrameDecoder:
    """Decoder for newline-delimited JSON objects carrying a ``done`` flag.

    Content on the terminal frame is preserved on the returned delta so the
    stream can emit it before the terminal marker.
    """

    def __init__(self, extract: Extractor, done_field: str = "done") -> None:
        self._extract = extract
        self._done_field = done_field

    def decode(self, line: str) -> Optional[TokenDelta]:
        if not line.strip():
            return None
        obj = _load_object(line, line)
        text = _safe_extract(self._extract, obj, line)
        return TokenDelta(content=text, done=bool(obj.get(self._done_field)))


def openai_delta_text(obj: Dict[str, Any]) -> Optional[str]:
    """Return ``choices[0].delta.content`` from an OpenAI-style chunk.

    Sibling fields such as ``reasoning_content`` are ignored.
    """
    choices = obj.get("choices") or []
    if not choices:
        return None
    delta = choices[0].get("delta") or {}
    return delta.get("content")


__all__ = [
    "Extractor",
    "FrameDecoder",
    "MalformedFrame",
    "NDJSONFrameDecoder",
    "SSEFrameDecoder",
    "openai_delta_text",
]
