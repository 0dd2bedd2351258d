"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``vault_chat.base.models_parts`` to keep imports stable.
"""

from .models_parts.message import Message, Role, ROLES
from .models_parts.chat_request import ChatRequest
from .models_parts.chat_response import ChatResponse
from .models_parts.usage import Usage
from .models_parts.token_delta import TokenDelta, TERMINAL_DELTA
from .models_parts.model_info import ModelInfo
from .models_parts.validation_result import ValidationResult
from .models_parts.streaming_chat_response import StreamingChatResponse

__all__ = [
    "Message",
    "Role",
    "ROLES",
    "ChatRequest",
    "ChatResponse",
    "Usage",
    "TokenDelta",
    "TERMINAL_DELTA",
    "ModelInfo",
    "ValidationResult",
    "StreamingChatResponse",
]
