"""Streaming package: incremental decoding of provider response bodies.

Exposes the line buffer, frame decoders, thinking-block filter and the lazy
``TokenStream`` used by every adapter's ``chat_stream``.
"""

from .line_buffer import LineBuffer
from .framing import (
    Extractor,
    FrameDecoder,
    MalformedFrame,
    NDJSONFrameDecoder,
    SSEFrameDecoder,
    openai_delta_text,
)
from .thinking import (
    FilterState,
    ThinkingFilter,
    clean_response_text,
    strip_thinking_blocks,
)
from .streaming_metrics import StreamMetrics
from .token_stream import TokenStream

__all__ = [
    "LineBuffer",
    "Extractor",
    "FrameDecoder",
    "MalformedFrame",
    "NDJSONFrameDecoder",
    "SSEFrameDecoder",
    "openai_delta_text",
    "FilterState",
    "ThinkingFilter",
    "clean_response_text",
    "strip_thinking_blocks",
    "StreamMetrics",
    "TokenStream",
]
