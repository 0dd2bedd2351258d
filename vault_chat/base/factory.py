"""Provider Factory utilities.

Purpose
-------
Centralize provider-agnostic creation of adapter instances implementing the
``LLMProvider`` interface. Adapters are imported lazily using ``importlib`` so
selecting one provider never imports the others.

Timeout and fallback semantics
------------------------------
- No timeouts are introduced here. The factory performs no retries or
    fallbacks; it either returns an instance or raises a clear error.

Scope
-----
Supported providers: ``openrouter``, ``google-ai``, ``ollama``, ``minimax``
and ``openai-compatible``.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from .dto.adapter_params import AdapterParams


class UnknownProviderError(Exception):
    """Raised when a provider cannot be resolved or initialized.

    Failure modes include:
    - The provider name is not registered in the factory mapping.
    - The provider module cannot be imported or the adapter class is missing.
    - The adapter constructor raised an exception during initialization.
    """


def create_provider(provider: str, **kwargs: Any) -> Any:
    """Shortcut for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


class ProviderFactory:
    """Create provider adapters based on a canonical id (e.g., ``"ollama"``).

    Design notes
    ------------
    - Uses ``importlib.import_module`` for explicit import semantics.
    - Raises :class:`UnknownProviderError` with precise, actionable messages
      for unknown providers, import failures, missing classes, and constructor
      errors.
    """

    # Map canonical provider ids to import paths and class names
    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "openrouter": {"module": "vault_chat.openrouter.client", "class": "OpenRouterProvider"},
        "google-ai": {"module": "vault_chat.google_ai.client", "class": "GoogleAIProvider"},
        "ollama": {"module": "vault_chat.ollama.client", "class": "OllamaProvider"},
        "minimax": {"module": "vault_chat.minimax.client", "class": "MiniMaxProvider"},
        "openai-compatible": {
            "module": "vault_chat.openai_compatible.client",
            "class": "OpenAICompatibleProvider",
        },
    }

    @classmethod
    def create(
        cls,
        provider: str,
        *,
        params: Optional[AdapterParams] = None,
        **kwargs: Any,
    ) -> Any:
        """Create a provider adapter instance.

        Parameters
        ----------
        provider:
            Canonical provider id (e.g., ``"minimax"``).
        params:
            Optional structured :class:`AdapterParams` instance; merged into
            ``kwargs`` with explicit kwargs taking precedence.
        **kwargs:
            Adapter-specific constructor kwargs (``transport``, ``region``...).

        Raises
        ------
        UnknownProviderError
            If provider is unknown, the adapter module fails to import, the
            adapter class is missing, or the adapter constructor raises.
        """
        merged_kwargs = cls._coerce_params(params, kwargs)

        name = (provider or "").lower().strip()
        entry = cls._PROVIDERS.get(name)
        if not entry:
            raise UnknownProviderError(f"Unknown provider '{provider}'")

        module_path, class_name = entry["module"], entry["class"]

        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - import failure path
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

        try:
            return klass(**merged_kwargs)  # type: ignore[call-arg]
        except (TypeError, ValueError) as exc:
            raise UnknownProviderError(
                f"Invalid arguments for '{provider}' adapter constructor: {exc}"
            ) from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported canonical provider ids in deterministic order."""
        return tuple(cls._PROVIDERS.keys())

    @staticmethod
    def _coerce_params(params: Optional[AdapterParams], kwargs: Mapping[str, Any]) -> Dict[str, Any]:
        """Merge ``AdapterParams`` into ``kwargs``.

        Contract
        --------
        - Values explicitly provided in ``kwargs`` take precedence over ``params``.
        - ``None`` values from ``params`` are ignored to keep adapter defaults.
        - ``extra`` entries are flattened into constructor kwargs (they carry
          provider-specific fields such as ``region`` or ``show_thinking``).
        """
        if params is None:
            return dict(kwargs)
        merged: Dict[str, Any] = dict(params.model_dump(exclude_none=True))
        merged.pop("provider", None)
        extra = merged.pop("extra", None) or {}
        for key, value in extra.items():
            merged.setdefault(key, value)
        timeout = merged.pop("timeout_seconds", None)
        if timeout is not None:
            merged["timeout"] = timeout
        merged.update(kwargs)
        return merged


__all__ = ["ProviderFactory", "UnknownProviderError", "create_provider"]
