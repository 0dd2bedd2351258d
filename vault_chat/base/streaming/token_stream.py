"""Lazy, single-pass token stream over a live HTTP response.

Purpose:
    ``TokenStream`` is what ``chat_stream`` hands back. Pulling from it reads
    the response body incrementally: bytes are split into complete lines by
    :class:`LineBuffer`, each line is decoded by the adapter's frame decoder,
    the optional :class:`ThinkingFilter` hides reasoning blocks, and non-empty
    fragments are yielded as ``TokenDelta`` values.

Contract:
    - Exactly one terminal delta (``done=True``) ends every stream that runs
      to completion, whether the provider sent its terminal signal or simply
      closed the connection. Nothing is yielded after it, even when more
      bytes were already buffered.
    - Malformed frames are skipped and logged at DEBUG (``stream.decode_error``).
    - Transport failures mid-stream raise ``ProviderError``.
    - The response is closed on every exit path: normal completion, an
      exception, ``close()`` or garbage collection of an abandoned stream.
      The stream is also a context manager.
    - The stream is not restartable; iterating after it finished yields
      nothing.
"""
from __future__ import annotations

import logging
import time
from typing import Iterator, Optional

import httpx

from ..errors import ProviderError, error_from_exception
from ..logging import LogContext, get_logger, log_event, normalized_log_event
from ..models import TokenDelta, TERMINAL_DELTA
from .framing import FrameDecoder, MalformedFrame
from .line_buffer import LineBuffer
from .streaming_metrics import StreamMetrics
from .thinking import ThinkingFilter


class TokenStream:
    """Iterator of :class:`TokenDelta` backed by a streamed ``httpx.Response``.

    Parameters:
        response: Open response obtained with ``client.send(..., stream=True)``.
        decoder: Frame decoder for the provider's wire dialect.
        provider: Provider id for logs and errors.
        model: Model id for logs and errors.
        thinking: Optional filter removing reasoning blocks from content.
        logger: Logger for stream events; defaults to ``providers.<provider>``.
    """

    def __init__(
        self,
        response: httpx.Response,
        decoder: FrameDecoder,
        *,
        provider: str,
        model: Optional[str] = None,
        thinking: Optional[ThinkingFilter] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._response = response
        self._decoder = decoder
        self._thinking = thinking
        self._provider = provider
        self._model = model
        self._ctx = LogContext(provider=provider, model=model)
        self._logger = logger or get_logger(f"providers.{provider}")
        self._lines = LineBuffer()
        self._closed = False
        self.metrics = StreamMetrics()
        self._iterator = self._generate()

    def __iter__(self) -> "TokenStream":
        return self

    def __next__(self) -> TokenDelta:
        return next(self._iterator)

    def __enter__(self) -> "TokenStream":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __del__(self) -> None:  # pragma: no cover - gc timing
        if not getattr(self, "_closed", True):
            self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release the connection; safe to call repeatedly."""
        if self._closed:
            return
        # Unwinds a suspended generator so its cleanup runs first.
        self._iterator.close()
        self._release()

    def text(self) -> str:
        """Consume the remaining stream and return the concatenated content."""
        return "".join(delta.content for delta in self if not delta.done)

    def _release(self) -> None:
        self._closed = True
        self._response.close()

    def _frames(self) -> Iterator[TokenDelta]:
        """Yield decoded frames until the terminal frame or end of body."""
        for chunk in self._response.iter_bytes():
            for line in self._lines.feed(chunk):
                frame = self._decode(line)
                if frame is None:
                    continue
                yield frame
                if frame.done:
                    return
        for line in self._lines.flush():
            frame = self._decode(line)
            if frame is not None:
                yield frame
                if frame.done:
                    return

    def _decode(self, line: str) -> Optional[TokenDelta]:
        try:
            return self._decoder.decode(line)
        except MalformedFrame as exc:
            self.metrics.skipped_frames += 1
            log_event(
                self._logger,
                "stream.decode_error",
                self._ctx,
                level=logging.DEBUG,
                reason=exc.reason,
                line=exc.line[:200],
            )
            return None

    def _visible(self, content: str) -> str:
        if self._thinking is None or not content:
            return content
        return self._thinking.feed(content)

    def _generate(self) -> Iterator[TokenDelta]:
        t0 = time.perf_counter()
        try:
            try:
                for frame in self._frames():
                    text = self._visible(frame.content)
                    if text:
                        yield self._emit(text, t0)
                    if frame.done:
                        break
            except httpx.HTTPError as exc:
                err = error_from_exception(exc, provider=self._provider, model=self._model)
                self._log_end(t0, error=err)
                raise err from exc
            except ProviderError as err:
                self._log_end(t0, error=err)
                raise
            if self._thinking is not None:
                tail = self._thinking.flush()
                if tail:
                    yield self._emit(tail, t0)
            self._log_end(t0)
            yield TERMINAL_DELTA
        finally:
            self._release()

    def _emit(self, text: str, t0: float) -> TokenDelta:
        if self.metrics.emitted == 0:
            self.metrics.time_to_first_token_ms = (time.perf_counter() - t0) * 1000.0
        self.metrics.emitted += 1
        return TokenDelta(content=text, done=False)

    def _log_end(self, t0: float, error: Optional[ProviderError] = None) -> None:
        self.metrics.total_duration_ms = (time.perf_counter() - t0) * 1000.0
        normalized_log_event(
            self._logger,
            "stream.end" if error is None else "stream.error",
            self._ctx,
            phase="finalize",
            emitted=self.metrics.emitted > 0,
            error_code=error.code.value if error is not None else None,
            level=logging.INFO if error is None else logging.WARNING,
            emitted_count=self.metrics.emitted,
            skipped_frames=self.metrics.skipped_frames,
            time_to_first_token_ms=self.metrics.time_to_first_token_ms,
            total_duration_ms=self.metrics.total_duration_ms,
            error=error.message if error is not None else None,
        )


__all__ = ["TokenStream"]
