"""
Providers Base Package

Exports provider-agnostic contracts, DTOs, the streaming normalizer, the
registry and the provider factory:
- Interfaces: the uniform ``LLMProvider`` contract
- Models (DTOs): request/response objects and token deltas
- Streaming: line buffering, frame decoders, thinking-block filter
- Registry / Factory: lookup and lazy creation of adapters by id
"""

from .errors import ErrorCode, ProviderError
from .factory import ProviderFactory, UnknownProviderError, create_provider
from .interfaces import LLMProvider
from .models import (
    ChatRequest,
    ChatResponse,
    Message,
    ModelInfo,
    Role,
    StreamingChatResponse,
    TokenDelta,
    Usage,
    ValidationResult,
)
from .registry import ProviderRegistry
from .timeouts import TimeoutConfig, get_timeout_config
from .streaming import StreamMetrics, ThinkingFilter, TokenStream

__all__ = [
    # Errors
    "ErrorCode",
    "ProviderError",
    # Models
    "Role",
    "Message",
    "ChatRequest",
    "ChatResponse",
    "Usage",
    "TokenDelta",
    "ModelInfo",
    "ValidationResult",
    "StreamingChatResponse",
    # Interfaces
    "LLMProvider",
    # Registry / Factory
    "ProviderRegistry",
    "ProviderFactory",
    "UnknownProviderError",
    "create_provider",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
    # Streaming
    "StreamMetrics",
    "ThinkingFilter",
    "TokenStream",
]
