"""Caller-side retry policy for provider calls.

Adapters never retry on their own; a caller that wants retries wraps the
call (``chat`` or the ``chat_stream`` handshake) with :func:`retry`. Only
``ProviderError`` instances whose code is in ``retryable_codes`` are retried,
with exponential backoff between attempts.
"""
from __future__ import annotations

import functools
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Protocol, TypeVar

from ..errors import ErrorCode, ProviderError, RETRYABLE_CODES

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = 3
    delay_base: float = 2.0  # delay before retry n is delay_base ** n
    retryable_codes: tuple[ErrorCode, ...] = RETRYABLE_CODES
    attempt_logger: AttemptLogger | None = None
    sleep: Callable[[float], None] = time.sleep

    def delays(self) -> Iterable[float]:
        for attempt in range(self.max_attempts - 1):
            yield self.delay_base**attempt


DEFAULT_RETRY_CONFIG = RetryConfig()


def retry(config: RetryConfig = DEFAULT_RETRY_CONFIG):
    """Return a decorator applying the retry policy in ``config``.

    Non-retryable errors and the error of the final attempt propagate
    unchanged.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            delays = list(config.delays()) + [None]  # final attempt has no delay
            for attempt, delay in enumerate(delays):
                try:
                    result = func(*args, **kwargs)
                except ProviderError as e:
                    if config.attempt_logger:
                        config.attempt_logger(
                            attempt=attempt,
                            max_attempts=config.max_attempts,
                            delay=delay,
                            error=e,
                        )
                    if delay is None or e.code not in config.retryable_codes:
                        raise
                    config.sleep(delay)
                    continue
                if config.attempt_logger:
                    config.attempt_logger(
                        attempt=attempt,
                        max_attempts=config.max_attempts,
                        delay=None,
                        error=None,
                    )
                return result
            raise RuntimeError("retry: no attempts configured")

        return wrapper

    return decorator


__all__ = [
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "retry",
]
