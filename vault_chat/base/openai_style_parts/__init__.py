"""Modules for the OpenAI-style provider base.

- ``base``: ``BaseOpenAIStyleProvider``
- ``style_helpers``: payload builders and response readers
"""

from .base import BaseOpenAIStyleProvider
from .style_helpers import (
    build_openai_messages,
    build_openai_payload,
    extract_openai_text,
    extract_openai_usage,
    make_openai_frame_extractor,
    raise_for_error_envelope,
)

__all__ = [
    "BaseOpenAIStyleProvider",
    "build_openai_messages",
    "build_openai_payload",
    "extract_openai_text",
    "extract_openai_usage",
    "make_openai_frame_extractor",
    "raise_for_error_envelope",
]
