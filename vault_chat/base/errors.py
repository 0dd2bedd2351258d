"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``vault_chat.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode, RETRYABLE_CODES
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import (
    classify_exception,
    code_for_status,
    error_from_exception,
    error_from_response,
    extract_error_message,
)

__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "ProviderError",
    "classify_exception",
    "code_for_status",
    "error_from_exception",
    "error_from_response",
    "extract_error_message",
]
