"""Shared HTTP client pool for providers.

Purpose:
    Provide reusable ``httpx.Client`` instances so adapters rebuilt on every
    settings change do not open fresh connection pools each time.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Pooling rules:
    - Clients using the default transport are cached by
      ``(base_url, purpose, timeout)`` and closed at interpreter exit.
    - A client built around an injected ``transport`` (tests, proxies) is
      never pooled; the adapter that asked for it owns it.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import TimeoutLike, resolve_timeout

_CLIENTS: Dict[Tuple[Optional[str], str, str], httpx.Client] = {}
_LOCK = threading.RLock()


def _timeout_key(timeout: httpx.Timeout) -> str:
    return repr(timeout.as_dict())


def get_httpx_client(
    base_url: Optional[str],
    purpose: str,
    *,
    timeout: TimeoutLike = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Return an ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: Optional API base URL; relative request paths resolve
            against it. ``None`` means callers pass absolute URLs.
        purpose: Short discriminator (e.g. ``"ollama"``); keep stable.
        timeout: Adapter timeout, normalized via ``resolve_timeout``.
        transport: Optional custom transport; disables pooling.

    Returns:
        A ``httpx.Client`` instance.

    Thread-safety:
        Pool creation is guarded by a re-entrant lock.
    """
    resolved = resolve_timeout(timeout)
    if transport is not None:
        return httpx.Client(base_url=base_url or "", timeout=resolved, transport=transport)

    key = (base_url, purpose, _timeout_key(resolved))
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client
    with _LOCK:
        client = _CLIENTS.get(key)
        if client is None or client.is_closed:
            client = httpx.Client(base_url=base_url or "", timeout=resolved)
            _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
