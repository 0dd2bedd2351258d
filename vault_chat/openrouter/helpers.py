"""Common helpers for the OpenRouter provider.

Purpose:
    Keep the wire-specific bits (attribution headers, model listing parsing)
    out of ``client.py`` so the adapter only wires hooks together.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..base.models import ModelInfo
from ..config.defaults import OPENROUTER_APP_TITLE, OPENROUTER_FALLBACK_MODELS


def build_attribution_headers(site_url: str) -> Dict[str, str]:
    """Return the app attribution headers OpenRouter uses for rankings."""
    return {"HTTP-Referer": site_url, "X-Title": OPENROUTER_APP_TITLE}


def parse_models(data: Dict[str, Any]) -> List[ModelInfo]:
    """Translate the ``GET /models`` body into ``ModelInfo`` entries.

    Entries without an ``id`` are skipped; ``name`` falls back to the id.
    """
    out: List[ModelInfo] = []
    for item in data["data"]:
        if not isinstance(item, dict) or not item.get("id"):
            continue
        ctx = item.get("context_length")
        out.append(
            ModelInfo(
                id=str(item["id"]),
                name=str(item.get("name") or item["id"]),
                context_length=int(ctx) if isinstance(ctx, (int, float)) else None,
            )
        )
    return out


def fallback_models() -> List[ModelInfo]:
    return [ModelInfo(id=i, name=n, context_length=c) for i, n, c in OPENROUTER_FALLBACK_MODELS]


__all__ = ["build_attribution_headers", "parse_models", "fallback_models"]
