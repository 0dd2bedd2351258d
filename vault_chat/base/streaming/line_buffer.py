"""Incremental line splitter for streamed HTTP bodies.

A network read may end anywhere, including inside a multi-byte UTF-8
sequence or half way through a JSON frame. ``LineBuffer`` decodes bytes
incrementally and only releases newline-terminated lines; the unterminated
remainder waits for the next ``feed``.
"""
from __future__ import annotations

import codecs
from typing import List


class LineBuffer:
    """Accumulates byte chunks and yields complete text lines.

    Lines are returned without their ``\\n`` terminator and without a trailing
    ``\\r`` (SSE servers commonly send CRLF).
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._pending = ""

    @property
    def pending(self) -> str:
        """Text received after the last newline."""
        return self._pending

    def feed(self, chunk: bytes) -> List[str]:
        """Add a chunk and return every line it completed."""
        self._pending += self._decoder.decode(chunk)
        if "\n" not in self._pending:
            return []
        *lines, self._pending = self._pending.split("\n")
        return [_strip_cr(line) for line in lines]

    def flush(self) -> List[str]:
        """Return the unterminated remainder at end of stream (if non-blank)."""
        self._pending += self._decoder.decode(b"", final=True)
        rest, self._pending = _strip_cr(self._pending), ""
        return [rest] if rest.strip() else []


def _strip_cr(line: str) -> str:
    return line[:-1] if line.endswith("\r") else line


__all__ = ["LineBuffer"]
