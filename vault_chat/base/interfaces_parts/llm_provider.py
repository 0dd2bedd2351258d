"""LLMProvider Protocol (single-class module).

Defines the uniform contract every provider adapter implements.
"""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from ..models import (
    ChatRequest,
    ChatResponse,
    ModelInfo,
    StreamingChatResponse,
    ValidationResult,
)


@runtime_checkable
class LLMProvider(Protocol):
    """Uniform interface for Large Language Model backends.

    Implementations translate ``ChatRequest`` into their wire format,
    normalize responses to ``ChatResponse`` / ``TokenDelta`` and raise
    ``ProviderError`` for failures. Adapters are immutable once built; a
    configuration change means building a new adapter.
    """

    @property
    def provider_id(self) -> str:
        """Stable identifier, e.g. ``"openrouter"`` or ``"ollama"``."""
        ...

    @property
    def display_name(self) -> str:
        """Human-readable provider name."""
        ...

    def validate(self) -> ValidationResult:
        """Cheap reachability and credential check.

        Never raises: every failure is reported as ``valid=False`` with a
        human-readable ``error``.
        """
        ...

    def list_models(self) -> List[ModelInfo]:
        """Return available models, falling back to a static list on failure."""
        ...

    def chat(self, request: ChatRequest) -> ChatResponse:
        """Execute one blocking completion; raises ``ProviderError`` on failure."""
        ...

    def chat_stream(self, request: ChatRequest) -> StreamingChatResponse:
        """Open a streamed completion.

        Raises ``ProviderError`` before returning when the handshake fails;
        otherwise returns a lazy single-pass stream of ``TokenDelta``.
        """
        ...
