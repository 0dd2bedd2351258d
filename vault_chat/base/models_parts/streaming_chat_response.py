"""Return value of ``chat_stream``: a wrapper around the lazy token stream."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..streaming.token_stream import TokenStream


@dataclass
class StreamingChatResponse:
    """Holds the single-pass ``stream`` of token deltas.

    Consuming ``stream`` performs the network I/O. Use it as a context manager
    (or call ``close()``) to release the connection when abandoning early.
    """

    stream: "TokenStream"

    def close(self) -> None:
        self.stream.close()

    def __enter__(self) -> "StreamingChatResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["StreamingChatResponse"]
