"""Conversation state for the chat view.

``ChatSession`` keeps the message history of one conversation, grounds each
turn with vault search results, prefers streaming and falls back to a
blocking ``chat`` call when the stream fails before any text arrived. A
stream that breaks after emitting text raises instead.
Replies are stored raw in the history and cleaned of leaked reasoning for
display.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from ..base.errors import ProviderError
from ..base.interfaces import LLMProvider
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ChatRequest, Message
from ..base.streaming import clean_response_text
from ..config.defaults import CHAT_SOURCE_CHARS
from ..config.settings import PluginSettings, active_model
from ..grounding import DocumentSearch, SearchOptions, truncate
from ..storage import ChatPersistence

CHAT_SYSTEM_PROMPT = """You are an expert AI assistant integrated with the user's Obsidian knowledge base.

## Core Principles
- Be substantive and detailed, not vague
- Be accurate - if uncertain, say so
- Be direct - answer first, then explain
- No preamble like "Great question!" or "The user is asking..."

## File Creation
When asked to create a note/file, include a code block like this at the end:
```create-file:suggested-filename.md
[Your generated content here]
```

## Formatting
- Use markdown: headers, lists, code blocks, bold, italic
- Reference notes with [[Note Title]] wiki-links
- For code, include language tags"""

_FILE_BLOCK_RE = re.compile(r"```create-file:([^\n]+)\n([\s\S]*?)```")


@dataclass(frozen=True)
class FileBlock:
    """A ``create-file`` block proposed by the assistant."""

    filename: str
    content: str


@dataclass
class ChatTurn:
    """Result of one ``ChatSession.send`` call."""

    text: str
    display_text: str
    sources: List[str] = field(default_factory=list)
    streamed: bool = False

    @property
    def file_blocks(self) -> List[FileBlock]:
        return extract_file_blocks(self.text)


def extract_file_blocks(response: str) -> List[FileBlock]:
    return [
        FileBlock(filename=m.group(1).strip(), content=m.group(2).strip())
        for m in _FILE_BLOCK_RE.finditer(response or "")
    ]


class ChatSession:
    """One conversation against the active provider.

    Parameters:
        provider: Adapter used for every turn.
        settings: Plugin settings (model, sampling, context size).
        search: Optional vault search used for grounding.
        persistence: Optional transcript writer used by ``save``.
    """

    def __init__(
        self,
        provider: LLMProvider,
        settings: PluginSettings,
        *,
        search: Optional[DocumentSearch] = None,
        persistence: Optional[ChatPersistence] = None,
    ) -> None:
        self._provider = provider
        self._settings = settings
        self._search = search
        self._persistence = persistence
        self._history: List[Message] = []
        self._sources: List[str] = []
        self._logger = get_logger("providers.chat_session")

    @property
    def history(self) -> List[Message]:
        return list(self._history)

    @property
    def sources(self) -> List[str]:
        return list(self._sources)

    def clear(self) -> None:
        self._history.clear()
        self._sources.clear()

    def build_system_prompt(self, query: str) -> tuple[str, List[str]]:
        """Return the grounded system prompt and the titles of the notes used."""
        prompt = CHAT_SYSTEM_PROMPT
        if self._search is None:
            return prompt, []
        try:
            results = self._search.search(query, SearchOptions(limit=self._settings.max_context_files or 5))
        except Exception as exc:  # noqa: BLE001 - search is a host collaborator; chat continues ungrounded
            self._logger.warning("vault search failed: %s", exc)
            return prompt, []
        if not results:
            return prompt, []
        prompt += "\n\n## Relevant Notes from Vault\n\n"
        for result in results:
            prompt += f"### [[{result.title}]]\n{truncate(result.content, CHAT_SOURCE_CHARS)}\n\n---\n\n"
        return prompt, [r.title for r in results]

    def send(self, text: str, *, stream: bool = True, on_delta: Optional[Callable[[str], None]] = None) -> ChatTurn:
        """Send a user message and return the assistant turn.

        Raises ``ProviderError`` when the stream breaks after emitting text or
        when both streaming and the blocking fallback fail; the user message
        is then dropped from the history.
        """
        text = text.strip()
        if not text:
            raise ValueError("message is empty")
        model = active_model(self._settings)
        self._history.append(Message(role="user", content=text))
        system_prompt, sources = self.build_system_prompt(text)
        request = ChatRequest(
            model=model,
            messages=[Message(role="system", content=system_prompt), *self._history],
            max_tokens=self._settings.max_tokens,
            temperature=self._settings.temperature,
            stream=stream,
        )
        try:
            reply, streamed = self._complete(request, stream, on_delta)
        except ProviderError:
            self._history.pop()
            raise
        if reply:
            self._history.append(Message(role="assistant", content=reply))
            self._sources.extend(s for s in sources if s not in self._sources)
        return ChatTurn(text=reply, display_text=clean_response_text(reply), sources=sources, streamed=streamed)

    def _complete(
        self,
        request: ChatRequest,
        stream: bool,
        on_delta: Optional[Callable[[str], None]],
    ) -> tuple[str, bool]:
        if stream:
            parts: List[str] = []
            try:
                return self._stream(request, on_delta, parts), True
            except ProviderError as err:
                context = LogContext(provider=self._provider.provider_id, model=request.model)
                if any(parts):
                    # Text already reached on_delta; a blocking retry would repeat it.
                    normalized_log_event(
                        self._logger,
                        "chat.stream_aborted",
                        context,
                        phase="mid_stream",
                        error_code=err.code.value,
                        emitted=True,
                        level=logging.WARNING,
                        emitted_chars=sum(len(p) for p in parts),
                        error=err.message,
                    )
                    raise
                normalized_log_event(
                    self._logger,
                    "chat.stream_fallback",
                    context,
                    phase="before_first_delta",
                    error_code=err.code.value,
                    emitted=False,
                    level=logging.WARNING,
                    error=err.message,
                )
        return self._provider.chat(request).text, False

    def _stream(
        self,
        request: ChatRequest,
        on_delta: Optional[Callable[[str], None]],
        parts: List[str],
    ) -> str:
        with self._provider.chat_stream(request) as response:
            for delta in response.stream:
                if delta.done:
                    break
                parts.append(delta.content)
                if on_delta is not None:
                    on_delta(delta.content)
        return "".join(parts)

    def save(self, now: Optional[datetime] = None) -> str:
        """Write the transcript through the configured persistence."""
        if self._persistence is None:
            raise RuntimeError("no chat persistence configured")
        if not self._history:
            raise ValueError("no messages to save")
        return self._persistence.save_chat(
            self._history,
            provider=self._settings.provider,
            model=active_model(self._settings),
            sources=self._sources,
            now=now,
        )


__all__ = ["ChatSession", "ChatTurn", "FileBlock", "extract_file_blocks", "CHAT_SYSTEM_PROMPT"]
