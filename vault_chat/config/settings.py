"""Plugin settings and registry wiring.

Purpose
-------
``PluginSettings`` is the user-facing configuration surface (what the host's
settings tab edits). ``build_registry`` turns one settings snapshot into a
freshly populated ``ProviderRegistry``: adapters are immutable, so every
settings change clears the registry and rebuilds it wholesale.

External dependencies
---------------------
- Pydantic v2 for validation.
- PyYAML (through ``load_config_file``) for YAML settings files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Literal, Optional

import httpx
from pydantic import BaseModel, Field, field_validator

from ..base.factory import ProviderFactory
from ..base.interfaces import LLMProvider
from ..base.logging import get_logger, log_event
from ..base.registry import ProviderRegistry
from . import load_config_file
from .defaults import (
    DEFAULT_CHAT_FOLDER,
    DEFAULT_ENHANCED_NOTES_FOLDER,
    DEFAULT_MAX_CONTEXT_FILES,
    DEFAULT_MAX_TOKENS,
    DEFAULT_PROVIDER,
    DEFAULT_TEMPERATURE,
    GOOGLE_AI_ID,
    MINIMAX_DEFAULT_REGION,
    MINIMAX_ID,
    OLLAMA_DEFAULT_HOST,
    OLLAMA_ID,
    OPENAI_COMPATIBLE_ID,
    OPENROUTER_ID,
)

_logger = get_logger("providers.settings")


class PluginSettings(BaseModel):
    """User-editable plugin settings.

    Attributes mirror the settings tab: one credential block per provider,
    the active provider and model, request defaults and the vault folders
    used for saved chats and generated notes.
    """

    provider: str = DEFAULT_PROVIDER
    selected_model: str = ""

    openrouter_api_key: str = ""
    google_api_key: str = ""
    ollama_url: str = OLLAMA_DEFAULT_HOST
    minimax_api_key: str = ""
    minimax_region: Literal["international", "china"] = MINIMAX_DEFAULT_REGION
    minimax_show_thinking: bool = False
    custom_api_url: str = ""
    custom_api_key: str = ""
    custom_model: str = ""

    chat_folder: str = DEFAULT_CHAT_FOLDER
    max_context_files: int = Field(default=DEFAULT_MAX_CONTEXT_FILES, ge=0)
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    enhanced_notes_folder: str = DEFAULT_ENHANCED_NOTES_FOLDER

    empty_response_policy: Literal["allow", "error"] = "allow"
    request_timeout_seconds: Optional[float] = Field(default=None, gt=0)

    @field_validator("provider")
    @classmethod
    def _known_provider(cls, value: str) -> str:
        name = (value or "").strip().lower()
        if name not in ProviderFactory.supported():
            raise ValueError(f"unknown provider '{value}'")
        return name


def load_settings(path: Optional[str | Path] = None, **overrides: Any) -> PluginSettings:
    """Load settings from a JSON/YAML file and apply keyword overrides.

    A missing file yields the defaults. Raises ``pydantic.ValidationError`` on
    invalid values.
    """
    data: Dict[str, Any] = load_config_file(path) if path else {}
    data.update({k: v for k, v in overrides.items() if v is not None})
    return PluginSettings.model_validate(data)


def _adapter_kwargs(settings: PluginSettings, transport: Optional[httpx.BaseTransport]) -> Dict[str, Any]:
    common: Dict[str, Any] = {
        "transport": transport,
        "empty_response_policy": settings.empty_response_policy,
    }
    if settings.request_timeout_seconds is not None:
        common["timeout"] = settings.request_timeout_seconds
    return common


def build_registry(
    settings: PluginSettings,
    registry: Optional[ProviderRegistry] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> ProviderRegistry:
    """Clear ``registry`` (or create one) and register adapters for ``settings``.

    Registration rules:
    - OpenRouter, Google AI and MiniMax only when their API key is set.
    - Ollama always (it needs no credential).
    - The OpenAI-compatible adapter only when both URL and model are set.
    """
    registry = registry if registry is not None else ProviderRegistry()
    registry.clear()
    common = _adapter_kwargs(settings, transport)

    if settings.openrouter_api_key:
        registry.register(ProviderFactory.create(OPENROUTER_ID, api_key=settings.openrouter_api_key, **common))
    if settings.google_api_key:
        registry.register(ProviderFactory.create(GOOGLE_AI_ID, api_key=settings.google_api_key, **common))
    registry.register(ProviderFactory.create(OLLAMA_ID, base_url=settings.ollama_url, **common))
    if settings.minimax_api_key:
        registry.register(
            ProviderFactory.create(
                MINIMAX_ID,
                api_key=settings.minimax_api_key,
                region=settings.minimax_region,
                show_thinking=settings.minimax_show_thinking,
                **common,
            )
        )
    if settings.custom_api_url and settings.custom_model:
        registry.register(
            ProviderFactory.create(
                OPENAI_COMPATIBLE_ID,
                base_url=settings.custom_api_url,
                model=settings.custom_model,
                api_key=settings.custom_api_key or None,
                **common,
            )
        )
    log_event(_logger, "registry.rebuilt", providers=registry.ids(), active=settings.provider)
    return registry


def get_active_provider(registry: ProviderRegistry, settings: PluginSettings) -> Optional[LLMProvider]:
    """Return the adapter for ``settings.provider`` or ``None`` when unregistered."""
    return registry.get(settings.provider)


def active_model(settings: PluginSettings) -> str:
    """Return the model id to request for the active provider."""
    if settings.provider == OPENAI_COMPATIBLE_ID:
        return settings.selected_model or settings.custom_model
    return settings.selected_model


__all__ = [
    "PluginSettings",
    "load_settings",
    "build_registry",
    "get_active_provider",
    "active_model",
]
