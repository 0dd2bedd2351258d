"""Google AI (Gemini) adapter package."""

from .client import GoogleAIProvider

__all__ = ["GoogleAIProvider"]
