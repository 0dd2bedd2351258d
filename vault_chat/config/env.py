"""vault_chat.config.env
=====================

Environment variable mapping for provider credentials and settings.

Purpose
-------
- Single source of truth for mapping provider ids to their environment
  variable names (canonical first, then aliases).
- Small lookup helpers used by ``get_provider_config`` and the CLI.

Failure Modes
-------------
Helpers never raise on unknown providers or unset variables; they return
``None`` (or nothing) and let the caller decide.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple


def env_prefix(provider: str) -> str:
    """Return the env var prefix for a provider id (``google-ai`` -> ``GOOGLE_AI``)."""
    return (provider or "").strip().upper().replace("-", "_")


# Canonical provider -> credential env var
ENV_MAP: Dict[str, str] = {
    "openrouter": "OPENROUTER_API_KEY",
    "google-ai": "GOOGLE_AI_API_KEY",
    "minimax": "MINIMAX_API_KEY",
    "openai-compatible": "OPENAI_COMPATIBLE_API_KEY",
}


# Provider -> ordered acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "google-ai": ("GOOGLE_AI_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder rather than a secret.

    Heuristics (case-insensitive): contains 'placeholder', 'changeme',
    'example', or starts with 'test_'.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical credential env var for a provider, if any."""
    return ENV_MAP.get((provider or "").lower())


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable credential env var names, canonical first."""
    p = (provider or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_used)`` for the first non-empty credential.

    Placeholder values are skipped. ``(None, None)`` when nothing is set.
    """
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "env_prefix",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
]
