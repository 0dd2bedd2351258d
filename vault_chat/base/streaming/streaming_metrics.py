"""Per-stream counters reported when a token stream finishes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class StreamMetrics:
    """Collected metrics for a single streamed response.

    Attributes:
        emitted: Number of non-terminal deltas handed to the consumer.
        skipped_frames: Malformed frames dropped by the decoder.
        time_to_first_token_ms: Delay until the first emitted delta.
        total_duration_ms: Time from first pull to the terminal delta.
    """

    emitted: int = 0
    skipped_frames: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None


__all__ = ["StreamMetrics"]
