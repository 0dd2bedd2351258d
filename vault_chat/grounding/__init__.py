"""Vault grounding: search collaborator interfaces and prompt building."""

from .protocols import DocumentSearch, DocumentStore, SearchOptions, SearchResult
from .context_builder import ContextBuilder, GroundedContext, truncate

__all__ = [
    "DocumentSearch",
    "DocumentStore",
    "SearchOptions",
    "SearchResult",
    "ContextBuilder",
    "GroundedContext",
    "truncate",
]
