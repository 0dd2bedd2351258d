"""Fakes for the service layer: a scripted provider and an in-memory vault search."""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Union

import pytest

from vault_chat.base.errors import ErrorCode, ProviderError
from vault_chat.base.models import (
    ChatRequest,
    ChatResponse,
    StreamingChatResponse,
    TERMINAL_DELTA,
    TokenDelta,
    ValidationResult,
)
from vault_chat.grounding import SearchOptions, SearchResult


def provider_error(code: ErrorCode = ErrorCode.TRANSIENT, message: str = "boom") -> ProviderError:
    return ProviderError(code=code, message=message, provider="fake")


class ScriptedProvider:
    """Adapter double replaying fixed replies and recording requests.

    ``stream_script`` items are text pieces or exceptions raised mid-stream;
    ``stream_error`` is raised when opening the stream, ``chat_error`` by
    ``chat``.
    """

    provider_id = "fake"
    display_name = "Fake"

    def __init__(
        self,
        *,
        chat_text: str = "",
        stream_script: Sequence[Union[str, Exception]] = (),
        stream_error: Optional[Exception] = None,
        chat_error: Optional[Exception] = None,
    ) -> None:
        self.chat_text = chat_text
        self.stream_script = list(stream_script)
        self.stream_error = stream_error
        self.chat_error = chat_error
        self.requests: List[ChatRequest] = []
        self.stream_closed = False

    def chat(self, request: ChatRequest) -> ChatResponse:
        self.requests.append(request)
        if self.chat_error is not None:
            raise self.chat_error
        return ChatResponse(text=self.chat_text, model=request.model)

    def chat_stream(self, request: ChatRequest) -> StreamingChatResponse:
        self.requests.append(request)
        if self.stream_error is not None:
            raise self.stream_error

        def _gen() -> Iterator[TokenDelta]:
            try:
                for item in self.stream_script:
                    if isinstance(item, Exception):
                        raise item
                    yield TokenDelta(content=item)
                yield TERMINAL_DELTA
            finally:
                self.stream_closed = True

        return StreamingChatResponse(stream=_gen())  # type: ignore[arg-type]

    def validate(self) -> ValidationResult:
        return ValidationResult.ok()

    def list_models(self):
        return []


class MemorySearch:
    """Substring search over a fixed list of results."""

    def __init__(self, results: Sequence[SearchResult] = (), error: Optional[Exception] = None) -> None:
        self._results = list(results)
        self._error = error
        self.queries: List[str] = []

    def search(self, query: str, options: Optional[SearchOptions] = None) -> List[SearchResult]:
        self.queries.append(query)
        if self._error is not None:
            raise self._error
        limit = options.limit if options else 10
        return self._results[:limit]


@pytest.fixture()
def scripted_provider():
    return ScriptedProvider


@pytest.fixture()
def memory_search():
    return MemorySearch


@pytest.fixture()
def make_provider_error():
    return provider_error
