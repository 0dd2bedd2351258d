"""Collaborator interfaces for vault grounding.

The host application owns document storage and keyword search; the core only
sees these Protocols so tests (and other hosts) can pass simple fakes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class SearchResult:
    """One scored document match.

    Attributes:
        path: Vault-relative path of the document.
        title: Document title (file basename without extension).
        content: Full document text.
        headings: Heading texts in document order.
        score: Relevance score (higher is better).
    """

    path: str
    title: str
    content: str
    headings: List[str] = field(default_factory=list)
    score: float = 0.0


@dataclass(frozen=True)
class SearchOptions:
    """Filters for ``DocumentSearch.search``."""

    folders: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    limit: int = 10


@runtime_checkable
class DocumentStore(Protocol):
    """Read access to documents by path."""

    def read_document(self, path: str) -> Optional[str]:  # pragma: no cover - interface
        """Return the text of ``path`` or ``None`` when it does not exist."""
        ...


@runtime_checkable
class DocumentSearch(Protocol):
    """Keyword search over the document collection."""

    def search(self, query: str, options: Optional[SearchOptions] = None) -> List[SearchResult]:  # pragma: no cover - interface
        """Return matches sorted by descending score, at most ``options.limit``."""
        ...


__all__ = ["SearchResult", "SearchOptions", "DocumentStore", "DocumentSearch"]
