"""vault_chat package

Multi-provider LLM client layer for a note-vault chat plugin.

Purpose:
    Provide a minimal, stable API for external consumption. Callers build a
    registry from plugin settings (or create adapters directly) and use the
    uniform ``validate`` / ``list_models`` / ``chat`` / ``chat_stream``
    contract.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`
    - Factory: :func:`create`, :class:`ProviderFactory`
    - Registry: :class:`ProviderRegistry`
    - DTOs: :class:`Message`, :class:`ChatRequest`, :class:`ChatResponse`,
      :class:`TokenDelta`, :class:`ModelInfo`, :class:`ValidationResult`
"""

from typing import Optional

from .base.dto import AdapterParams
from .base.errors import ErrorCode, ProviderError
from .base.factory import ProviderFactory, UnknownProviderError
from .base.interfaces import LLMProvider
from .base.models import (
    ChatRequest,
    ChatResponse,
    Message,
    ModelInfo,
    StreamingChatResponse,
    TokenDelta,
    Usage,
    ValidationResult,
)
from .base.registry import ProviderRegistry

__version__ = "0.1.0"


def create(provider_name: str, *, params: Optional[AdapterParams] = None, **kwargs) -> LLMProvider:
    """Instantiate a provider adapter via ``ProviderFactory``.

    Parameters
    ----------
    provider_name:
        Canonical provider id (for example, ``"ollama"``).
    params:
        Optional typed parameter object carrying common adapter fields.
    **kwargs:
        Adapter constructor keyword arguments; they win over ``params``.

    Raises
    ------
    ProviderError
        ``ErrorCode.CONFIG`` when the provider is unknown or cannot be built.
    """
    try:
        return ProviderFactory.create(provider_name, params=params, **kwargs)
    except UnknownProviderError as e:
        raise ProviderError(
            code=ErrorCode.CONFIG,
            message=f"Failed to create provider '{provider_name}': {e}",
            provider=provider_name,
        ) from e


__all__ = [
    "__version__",
    "create",
    "AdapterParams",
    "ErrorCode",
    "ProviderError",
    "ProviderFactory",
    "UnknownProviderError",
    "LLMProvider",
    "ProviderRegistry",
    "Message",
    "ChatRequest",
    "ChatResponse",
    "Usage",
    "TokenDelta",
    "ModelInfo",
    "ValidationResult",
    "StreamingChatResponse",
]
