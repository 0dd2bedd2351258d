"""Models parts package re-exporting one-class-per-file DTOs."""

from .message import Message, Role, ROLES
from .chat_request import ChatRequest
from .chat_response import ChatResponse
from .usage import Usage
from .token_delta import TokenDelta, TERMINAL_DELTA
from .model_info import ModelInfo
from .validation_result import ValidationResult
from .streaming_chat_response import StreamingChatResponse

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
