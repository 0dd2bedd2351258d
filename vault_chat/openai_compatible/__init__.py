"""Generic OpenAI-compatible adapter package."""

from .client import OpenAICompatibleProvider, normalize_endpoint_url

__all__ = ["OpenAICompatibleProvider", "normalize_endpoint_url"]
