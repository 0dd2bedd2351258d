"""Unified configuration layer for providers.

Goals
-----
* Centralize defaults (base URLs, regions, request defaults).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by PROVIDERS_CONFIG_FILE
    3. Environment variables (e.g. OPENROUTER_MODEL, MINIMAX_API_KEY)
    4. In-code overrides passed to helper
* Provide a single call site: ``get_provider_config(provider: str)``.

Environment Variable Conventions
--------------------------------
<PROVIDER>_MODEL, <PROVIDER>_API_KEY, <PROVIDER>_BASE_URL, <PROVIDER>_REGION
where <PROVIDER> is the upper-cased provider id with ``-`` replaced by ``_``
(``GOOGLE_AI_API_KEY``, ``OPENAI_COMPATIBLE_BASE_URL``). Google AI also
accepts ``GEMINI_API_KEY`` and ``GOOGLE_API_KEY``.

External Config File (Optional)
-------------------------------
If PROVIDERS_CONFIG_FILE is set to a path, we attempt to load JSON first and
fall back to YAML. Structure example:

```
openrouter:
  model: anthropic/claude-3.5-sonnet
minimax:
  region: china
ollama:
  base_url: http://gpu-box:11434
```

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* get_model(provider: str) -> str | None
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional
import json
import os

import yaml

from .env import env_prefix, is_placeholder, resolve_provider_key
from .defaults import (
    GOOGLE_AI_DEFAULT_BASE_URL,
    MINIMAX_DEFAULT_REGION,
    OLLAMA_DEFAULT_HOST,
    OPENROUTER_DEFAULT_BASE_URL,
)


# -------------------- Defaults --------------------

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openrouter": {"base_url": OPENROUTER_DEFAULT_BASE_URL},
    "google-ai": {"base_url": GOOGLE_AI_DEFAULT_BASE_URL},
    "ollama": {"base_url": OLLAMA_DEFAULT_HOST},
    "minimax": {"region": MINIMAX_DEFAULT_REGION},
    "openai-compatible": {},
}


ENV_FIELD_MAP = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
    "region": "REGION",
}


_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Safe to call
    multiple times. Overrides existing environment variables only if their
    current values appear to be placeholders.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def load_config_file(path: str | Path) -> Dict[str, Any]:
    """Parse a JSON or YAML mapping from ``path``.

    Returns an empty dict when the file is missing, unparsable, or does not
    hold a mapping at the top level.
    """
    p = Path(path)
    if not p.exists():
        return {}
    text = p.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    return data if isinstance(data, dict) else {}


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("PROVIDERS_CONFIG_FILE")
    _FILE_CACHE = load_config_file(path) if path else {}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the cached config file and .env state (used by tests)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = env_prefix(provider)
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None:
            out[field] = val
    if "api_key" not in out:
        key, _ = resolve_provider_key(provider)
        if key:
            out["api_key"] = key
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return cfg


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


__all__ = [
    "get_provider_config",
    "get_model",
    "load_config_file",
    "reset_config_cache",
    "DEFAULTS",
]
