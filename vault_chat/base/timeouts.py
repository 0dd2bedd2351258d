"""Unified timeout configuration for provider HTTP calls.

Every adapter takes an explicit ``timeout``; when omitted it falls back to the
process-wide :class:`TimeoutConfig` built here. Nothing inherits the
transport's own defaults silently. Clients are built with the streaming
read limit; blocking requests pass the blocking timeout per request.

Environment overrides (seconds, all optional, read on first use and whenever
they change):
    PT_TIMEOUT_CONNECT_SECONDS
    PT_TIMEOUT_HTTP_SECONDS
    PT_TIMEOUT_STREAM_SECONDS
"""
from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional, Union

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Limit for establishing the TCP/TLS connection.
        http_timeout_seconds: Read limit for a blocking request/response
            (chat, validation, model listing).
        stream_timeout_seconds: Idle limit between two reads of a streamed
            body (time allowed for the next token to arrive).
    """

    connect_timeout_seconds: float = 10.0
    http_timeout_seconds: float = 60.0
    stream_timeout_seconds: float = 120.0

    def to_httpx(self, *, stream: bool = True) -> httpx.Timeout:
        """Return the ``httpx.Timeout`` for a streamed or a blocking call."""
        return httpx.Timeout(
            self.http_timeout_seconds,
            connect=self.connect_timeout_seconds,
            read=self.stream_timeout_seconds if stream else self.http_timeout_seconds,
        )


_ENV_NAMES = (
    "PT_TIMEOUT_CONNECT_SECONDS",
    "PT_TIMEOUT_HTTP_SECONDS",
    "PT_TIMEOUT_STREAM_SECONDS",
)
_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read a positive float from the environment, else ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`.

    The cache is refreshed when any of the override variables changes, which
    keeps ``monkeypatch.setenv`` in tests effective.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and guard == _ENV_GUARD:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(_ENV_NAMES[0], defaults.connect_timeout_seconds),
        http_timeout_seconds=_parse_env_float(_ENV_NAMES[1], defaults.http_timeout_seconds),
        stream_timeout_seconds=_parse_env_float(_ENV_NAMES[2], defaults.stream_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


TimeoutLike = Union[None, float, int, httpx.Timeout]


def resolve_timeout(timeout: TimeoutLike = None, *, stream: bool = True) -> httpx.Timeout:
    """Normalize an adapter ``timeout`` argument into an ``httpx.Timeout``.

    ``None`` uses :func:`get_timeout_config`, with the stream idle limit as
    read timeout unless ``stream`` is false; a number applies to every phase.
    """
    if timeout is None:
        return get_timeout_config().to_httpx(stream=stream)
    if isinstance(timeout, httpx.Timeout):
        return timeout
    if timeout <= 0:
        raise ValueError("timeout must be positive")
    return httpx.Timeout(float(timeout))


__all__ = [
    "TimeoutConfig",
    "TimeoutLike",
    "get_timeout_config",
    "resolve_timeout",
]
