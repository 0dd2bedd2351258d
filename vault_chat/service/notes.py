"""AI-written notes: free-form generation and search-backed enhancement.

``NoteWriter`` drives two commands of the plugin:

- ``generate_note``: write a note from a free prompt, optionally grounded
  with short vault excerpts, titled from the first line of the answer.
- ``enhance``: turn source material (explicit content or vault search
  results for a topic) into a summary, analysis, outline, study guide or
  action-item list.

Both use a blocking ``chat`` call and write through ``NoteStorage``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from ..base.errors import ErrorCode, ProviderError
from ..base.interfaces import LLMProvider
from ..base.logging import get_logger, log_event
from ..base.models import ChatRequest, Message
from ..config.defaults import WRITER_SOURCE_CHARS
from ..config.settings import PluginSettings, active_model
from ..grounding import DocumentSearch, SearchOptions, truncate
from ..storage import NoteStorage, sanitize_filename
from ..templates import NoteType, build_enhance_prompt

WRITER_SYSTEM_PROMPT = """You are an expert writer integrated with an Obsidian knowledge base. Generate well-structured, thoughtful content in Markdown format.

Guidelines:
- Write substantive, detailed content
- Use proper Markdown formatting: headers, lists, code blocks, etc.
- Reference relevant notes with [[Note Title]] wiki-links when appropriate
- Be organized with clear sections
- Be helpful and accurate
"""

ENHANCE_SYSTEM_PROMPT = "You are a helpful note-taking assistant. Generate well-structured Markdown notes."

_HEADING_PREFIX_RE = re.compile(r"^#*\s*")


@dataclass(frozen=True)
class WrittenNote:
    """Path and body of a note written by ``NoteWriter``."""

    path: str
    content: str
    sources: List[str] = field(default_factory=list)


class NoteWriter:
    """Generates notes with the active provider and saves them to the vault.

    Parameters:
        provider: Adapter used for generation.
        settings: Plugin settings (model, sampling, target folder).
        storage: Vault storage the notes are written to.
        search: Optional vault search for grounding and topic enhancement.
        clock: Returns the current time (injected by tests).
    """

    def __init__(
        self,
        provider: LLMProvider,
        settings: PluginSettings,
        storage: NoteStorage,
        *,
        search: Optional[DocumentSearch] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._provider = provider
        self._settings = settings
        self._storage = storage
        self._search = search
        self._clock = clock
        self._logger = get_logger("providers.notes")

    @property
    def folder(self) -> str:
        return self._settings.enhanced_notes_folder.strip("/") or "AI Notes"

    def generate_note(self, prompt: str, title: Optional[str] = None, use_vault_context: bool = True) -> WrittenNote:
        """Write a note for ``prompt``; raises ``ValueError`` on an empty prompt."""
        prompt = prompt.strip()
        if not prompt:
            raise ValueError("prompt is empty")
        context, sources = self._writer_context(prompt) if use_vault_context else ("", [])
        text = self._complete(WRITER_SYSTEM_PROMPT + context, prompt)

        name = (title or "").strip()
        if not name:
            first_line = _HEADING_PREFIX_RE.sub("", text.split("\n", 1)[0]).strip()
            name = first_line[:50] or f"AI Note {int(self._clock().timestamp() * 1000)}"
        safe_title = sanitize_filename(name, "-")

        now = self._clock()
        escaped_prompt = prompt[:100].replace('"', '\\"')
        frontmatter = (
            "---\n"
            f"created: {now.isoformat()}\n"
            "source: ai-writer\n"
            f"provider: {self._settings.provider}\n"
            f"model: {active_model(self._settings)}\n"
            f'prompt: "{escaped_prompt}"\n'
            "---\n\n"
        )
        self._ensure_folder()
        path = self._unique_path(safe_title)
        content = frontmatter + text
        self._storage.write(path, content)
        log_event(self._logger, "notes.generated", path=path, sources=len(sources))
        return WrittenNote(path=path, content=content, sources=sources)

    def enhance(self, topic: str, note_type: NoteType | str, content: Optional[str] = None) -> WrittenNote:
        """Write an enhanced note about ``topic``.

        Without ``content`` the vault is searched for the topic; no matches
        raises ``LookupError``.
        """
        kind = NoteType(note_type)
        sources: List[str] = []
        source_content = content or ""
        if not source_content:
            results = self._search.search(topic, SearchOptions(limit=self._settings.max_context_files)) if self._search else []
            if not results:
                raise LookupError(f"No relevant notes found for '{topic}'")
            source_content = "\n\n---\n\n".join(f"## From [[{r.title}]]\n\n{r.content}" for r in results)
            sources = [r.path for r in results]

        text = self._complete(ENHANCE_SYSTEM_PROMPT, build_enhance_prompt(topic, kind, source_content))
        self._ensure_folder()
        date = self._clock().strftime("%Y-%m-%d")
        safe_topic = sanitize_filename(topic)[:40]
        path = f"{self.folder}/{date} - {safe_topic} ({kind.value}).md"
        self._storage.write(path, text)
        log_event(self._logger, "notes.enhanced", path=path, note_type=kind.value, sources=len(sources))
        return WrittenNote(path=path, content=text, sources=sources)

    def _writer_context(self, prompt: str) -> tuple[str, List[str]]:
        if self._search is None:
            return "", []
        results = self._search.search(prompt, SearchOptions(limit=self._settings.max_context_files or 5))
        if not results:
            return "", []
        context = "\n\n## Relevant Context from Vault:\n\n"
        for result in results:
            context += f"### [[{result.title}]]\n{truncate(result.content, WRITER_SOURCE_CHARS, '...[truncated]')}\n\n"
        return context, [r.title for r in results]

    def _complete(self, system_prompt: str, user_prompt: str) -> str:
        model = active_model(self._settings)
        response = self._provider.chat(
            ChatRequest(
                model=model,
                messages=[
                    Message(role="system", content=system_prompt),
                    Message(role="user", content=user_prompt),
                ],
                max_tokens=self._settings.max_tokens,
                temperature=self._settings.temperature,
            )
        )
        if not response.text.strip():
            raise ProviderError(
                code=ErrorCode.EMPTY_RESPONSE,
                message="No response received",
                provider=self._provider.provider_id,
                model=model,
            )
        return response.text

    def _ensure_folder(self) -> None:
        if not self._storage.exists(self.folder):
            self._storage.create_folder(self.folder)

    def _unique_path(self, safe_title: str) -> str:
        path = f"{self.folder}/{safe_title}.md"
        counter = 1
        while self._storage.exists(path):
            path = f"{self.folder}/{safe_title} {counter}.md"
            counter += 1
        return path


__all__ = ["NoteWriter", "WrittenNote", "WRITER_SYSTEM_PROMPT", "ENHANCE_SYSTEM_PROMPT"]
