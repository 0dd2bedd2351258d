"""Protocols for the provider layer, one class per module."""

from .llm_provider import LLMProvider

__all__ = ["LLMProvider"]
