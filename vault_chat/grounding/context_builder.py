"""Grounded system prompt construction.

``ContextBuilder`` turns keyword search results into a system prompt that
frames the model as a research assistant and appends the matching note
excerpts as supplementary context. Each excerpt is capped individually and
excerpts stop being added once the total character budget would be exceeded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..base.logging import get_logger, log_event
from ..config.defaults import (
    DEFAULT_MAX_CONTEXT_CHARS,
    MAX_SOURCE_CHARS,
    MAX_SOURCE_HEADINGS,
    TRUNCATION_MARKER,
)
from .protocols import DocumentSearch, SearchOptions, SearchResult

CHUNK_SEPARATOR = "\n\n---\n\n"

BASE_SYSTEM_PROMPT = """You are a highly capable AI research assistant integrated into Obsidian, a knowledge management application. You have access to the user's personal notes vault and can help with ANY task they need.

## Your Capabilities
- Answer ANY question using your full knowledge and reasoning abilities
- Help with coding, writing, analysis, brainstorming, research, and creative tasks
- Provide detailed explanations, tutorials, and step-by-step guides
- Assist with planning, problem-solving, and decision-making
- Generate content, summaries, outlines, and documents
- Have natural, contextual conversations with memory of the current chat

## Guidelines
- Be helpful, thorough, and accurate
- Use markdown formatting for clarity (headers, lists, code blocks, etc.)
- When you use information from the user's notes, cite them with [[Note Title]] wiki-links
- If you're unsure about something, say so honestly
- Provide your own knowledge and insights freely - you're not limited to just the vault content
- Be conversational and engaging while remaining informative"""

VAULT_CONTEXT_HEADER = """

## User's Vault Context
The following excerpts from the user's notes may be relevant to this conversation. Use this information when helpful, and cite sources with [[wiki-links]] when referencing specific notes:

"""

VAULT_CONTEXT_FOOTER = """

---
Remember: This vault context is supplementary. You should use your full capabilities to help the user, combining vault information with your broader knowledge when appropriate."""


def truncate(text: str, limit: int, marker: str = TRUNCATION_MARKER) -> str:
    """Cut ``text`` to ``limit`` characters and append ``marker`` when cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + marker


@dataclass(frozen=True)
class GroundedContext:
    """System prompt plus the ``{"path", "title"}`` sources it cites."""

    system_prompt: str
    sources: List[Dict[str, str]] = field(default_factory=list)

    @property
    def source_titles(self) -> List[str]:
        return [s["title"] for s in self.sources]


class ContextBuilder:
    """Builds grounded system prompts from vault search results.

    Parameters:
        search: Keyword search collaborator; ``None`` disables grounding.
        max_context_chars: Total budget for the appended excerpts.
    """

    def __init__(self, search: Optional[DocumentSearch] = None, max_context_chars: int = DEFAULT_MAX_CONTEXT_CHARS) -> None:
        self._search = search
        self._max_context_chars = max_context_chars
        self._logger = get_logger("providers.grounding")

    def build_context(self, query: str, options: Optional[SearchOptions] = None) -> GroundedContext:
        """Search for ``query`` and build a prompt from the matches."""
        if self._search is None:
            return self.build_minimal_context()
        results = self._search.search(query, options)
        return self.build_context_from_results(results)

    def build_context_from_results(self, results: Sequence[SearchResult]) -> GroundedContext:
        sources: List[Dict[str, str]] = []
        chunks: List[str] = []
        total = 0
        for result in results:
            chunk = self._format_source(result)
            if total + len(chunk) > self._max_context_chars:
                break
            chunks.append(chunk)
            total += len(chunk)
            sources.append({"path": result.path, "title": result.title})
        log_event(
            self._logger,
            "grounding.context",
            candidates=len(results),
            used=len(sources),
            chars=total,
        )
        return GroundedContext(system_prompt=self._system_prompt(chunks), sources=sources)

    def build_minimal_context(self) -> GroundedContext:
        """Prompt without vault excerpts."""
        return GroundedContext(system_prompt=self._system_prompt([]), sources=[])

    def build_context_from_content(self, contents: Sequence[Tuple[str, str]]) -> str:
        """Join ``(title, content)`` pairs into one excerpt block within budget."""
        chunks: List[str] = []
        total = 0
        for title, content in contents:
            chunk = f"### [[{title}]]\n\n{truncate(content, MAX_SOURCE_CHARS)}"
            if total + len(chunk) > self._max_context_chars:
                break
            chunks.append(chunk)
            total += len(chunk)
        return CHUNK_SEPARATOR.join(chunks)

    @staticmethod
    def _system_prompt(chunks: List[str]) -> str:
        if not chunks:
            return BASE_SYSTEM_PROMPT
        return BASE_SYSTEM_PROMPT + VAULT_CONTEXT_HEADER + CHUNK_SEPARATOR.join(chunks) + VAULT_CONTEXT_FOOTER

    @staticmethod
    def _format_source(result: SearchResult) -> str:
        content = truncate(result.content, MAX_SOURCE_CHARS)
        headings = ""
        if result.headings:
            headings = "\nHeadings: " + ", ".join(result.headings[:MAX_SOURCE_HEADINGS])
        return f"### [[{result.title}]]\nPath: {result.path}{headings}\n\n{content}"


__all__ = ["ContextBuilder", "GroundedContext", "truncate", "CHUNK_SEPARATOR", "BASE_SYSTEM_PROMPT"]
