"""Process-wide lookup table of active provider adapters.

The registry holds no network state; it is rebuilt wholesale (``clear`` then
``register``) whenever the user-facing configuration changes.
"""
from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from .interfaces import LLMProvider
from .logging import get_logger, log_event


class ProviderRegistry:
    """Maps provider ids to adapter instances (at most one per id)."""

    def __init__(self) -> None:
        self._providers: Dict[str, LLMProvider] = {}
        self._logger = get_logger("providers.registry")

    def register(self, provider: LLMProvider) -> None:
        """Insert ``provider``, replacing any adapter with the same id."""
        replaced = provider.provider_id in self._providers
        self._providers[provider.provider_id] = provider
        log_event(
            self._logger,
            "registry.register",
            provider=provider.provider_id,
            replaced=replaced,
        )

    def get(self, provider_id: str) -> Optional[LLMProvider]:
        """Return the adapter for ``provider_id`` or ``None`` when absent."""
        return self._providers.get(provider_id)

    def list(self) -> List[LLMProvider]:
        return list(self._providers.values())

    def ids(self) -> List[str]:
        return list(self._providers.keys())

    def clear(self) -> None:
        self._providers.clear()

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._providers

    def __len__(self) -> int:
        return len(self._providers)

    def __iter__(self) -> Iterator[LLMProvider]:
        return iter(list(self._providers.values()))


__all__ = ["ProviderRegistry"]
