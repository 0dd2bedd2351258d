"""Typed parameter object for provider adapter initialization.

Purpose
-------
Provide a small, provider-agnostic DTO that captures the common adapter
constructor parameters. This keeps factory call sites short and carries an
``extra`` bag for provider-specific fields (MiniMax ``region`` and
``show_thinking``, OpenRouter ``site_url``).

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``.model_dump()`` convenience.

Failure modes & side effects
----------------------------
- Pure data container: no I/O side effects. Validation errors may be raised by
  Pydantic if inputs are of incorrect types.
"""
from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field


class AdapterParams(BaseModel):
    """Common provider adapter initialization parameters.

    Attributes
    ----------
    provider:
        Canonical provider id. Optional; dropped before construction.
    model:
        Default model identifier used when a request leaves it empty.
    api_key:
        API key or token string.
    base_url:
        Optional override for the API base URL.
    timeout_seconds:
        Explicit per-request timeout; passed to the adapter as ``timeout``.
    empty_response_policy:
        ``"allow"`` or ``"error"`` for empty completions.
    extra:
        Provider-specific constructor kwargs.
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    empty_response_policy: Optional[Literal["allow", "error"]] = None
    extra: Dict[str, Any] = Field(default_factory=dict)


__all__ = ["AdapterParams"]
