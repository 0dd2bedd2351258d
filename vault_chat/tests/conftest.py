"""Pytest configuration for the vault_chat test suite.

Every test runs with provider environment variables removed and the config
caches reset, so a developer's real keys or ``.env`` file never leak into
assertions. Helpers for chunked mock HTTP bodies and structured log capture
are exposed as fixtures.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Iterable, Iterator, List, Union

import httpx
import pytest

from vault_chat.base.http import close_all_clients
from vault_chat.base.logging import get_logger
from vault_chat.config import reset_config_cache

_ENV_PREFIXES = (
    "OPENROUTER_",
    "GOOGLE_AI_",
    "GEMINI_",
    "GOOGLE_API_KEY",
    "OLLAMA_",
    "MINIMAX_",
    "OPENAI_COMPATIBLE_",
    "PT_TIMEOUT_",
    "PROVIDERS_",
)


class ChunkedStream(httpx.SyncByteStream):
    """Response body delivered in the given chunks.

    Exception instances in ``chunks`` are raised when reached, which
    simulates a connection dropping mid-stream.
    """

    def __init__(self, chunks: Iterable[Union[bytes, Exception]]) -> None:
        self._chunks = list(chunks)
        self.closed = False

    def __iter__(self) -> Iterator[bytes]:
        for chunk in self._chunks:
            if isinstance(chunk, Exception):
                raise chunk
            yield chunk

    def close(self) -> None:
        self.closed = True


class _ListHandler(logging.Handler):
    def __init__(self, sink: List[Dict[str, Any]]) -> None:
        super().__init__()
        self.sink = sink

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - trivial
        msg = record.getMessage()
        try:
            data = json.loads(msg)
        except ValueError:
            data = {"msg": msg}
        if not isinstance(data, dict):
            data = {"msg": msg}
        data["level"] = record.levelname
        data["logger"] = record.name
        self.sink.append(data)


@pytest.fixture(autouse=True)
def isolated_provider_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip provider env vars, point ``.env`` loading at nothing, reset caches."""
    for key in list(os.environ):
        if key.startswith(_ENV_PREFIXES):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "absent.env"))
    reset_config_cache()
    yield
    reset_config_cache()
    close_all_clients()


@pytest.fixture()
def chunked():
    """The ``ChunkedStream`` class, for building streamed mock responses."""
    return ChunkedStream


@pytest.fixture()
def streamed_response():
    """Factory opening a streamed ``httpx.Response`` over the given chunks.

    Returns ``(response, body)`` where ``body.closed`` tells whether the
    connection was released.
    """
    clients: List[httpx.Client] = []

    def _open(chunks, status: int = 200):
        body = ChunkedStream(chunks)
        client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(status, stream=body)))
        clients.append(client)
        response = client.send(client.build_request("POST", "http://stream.test/"), stream=True)
        return response, body

    yield _open
    for client in clients:
        client.close()


@pytest.fixture()
def provider_events(monkeypatch: pytest.MonkeyPatch) -> Iterator[List[Dict[str, Any]]]:
    """Capture events logged under the ``providers`` logger (DEBUG and up)."""
    monkeypatch.setenv("PROVIDERS_LOG_LEVEL", "DEBUG")
    records: List[Dict[str, Any]] = []
    handler = _ListHandler(records)
    base = get_logger()
    base.addHandler(handler)
    try:
        yield records
    finally:
        base.removeHandler(handler)
