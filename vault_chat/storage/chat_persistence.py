"""Save and reload chat transcripts as Markdown notes.

File layout::

    ---
    created: 2025-01-31_142501
    provider: openrouter
    model: openai/gpt-4o
    sources:
      - "[[Note A]]"
    tags:
      - ai-chat
    ---

    **You:**

    question

    ---

    **Assistant:**

    answer
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import List, Optional, Sequence

from ..base.logging import get_logger, log_event
from ..base.models import Message
from ..config.defaults import DEFAULT_CHAT_FOLDER
from .note_storage import NoteStorage

MESSAGE_SEPARATOR = "\n\n---\n\n"
TIMESTAMP_FORMAT = "%Y-%m-%d_%H%M%S"

_ROLE_LABELS = {"user": "**You:**", "assistant": "**Assistant:**", "system": "**System:**"}
_UNSAFE_FILENAME_RE = re.compile(r'[\\/:*?"<>|#^\[\]]')
_FRONTMATTER_RE = re.compile(r"^---\n[\s\S]*?\n---\n")


def sanitize_filename(name: str, replacement: str = "") -> str:
    return _UNSAFE_FILENAME_RE.sub(replacement, name).strip()


def chat_title(messages: Sequence[Message]) -> str:
    """First 40 characters of the first user message, or ``"Chat"``."""
    for message in messages:
        if message.role == "user":
            return message.content[:40].strip() or "Chat"
    return "Chat"


def format_messages(messages: Sequence[Message]) -> str:
    return MESSAGE_SEPARATOR.join(f"{_ROLE_LABELS[m.role]}\n\n{m.content}" for m in messages)


def parse_chat_markdown(content: str) -> List[Message]:
    """Parse a saved transcript body back into messages.

    Parts without a known role label are ignored.
    """
    match = _FRONTMATTER_RE.match(content)
    body = content[match.end():] if match else content
    messages: List[Message] = []
    for part in re.split(r"\n---\n", body):
        trimmed = part.strip()
        for role, label in _ROLE_LABELS.items():
            if trimmed.startswith(label):
                messages.append(Message(role=role, content=trimmed[len(label):].strip()))  # type: ignore[arg-type]
                break
    return messages


class ChatPersistence:
    """Writes chat transcripts into ``folder`` of a ``NoteStorage``."""

    def __init__(self, storage: NoteStorage, folder: str = DEFAULT_CHAT_FOLDER) -> None:
        self._storage = storage
        self._folder = folder.strip("/") or DEFAULT_CHAT_FOLDER
        self._logger = get_logger("providers.storage")

    @property
    def folder(self) -> str:
        return self._folder

    def save_chat(
        self,
        messages: Sequence[Message],
        provider: str,
        model: str,
        sources: Sequence[str] = (),
        now: Optional[datetime] = None,
    ) -> str:
        """Write a new transcript note and return its vault path."""
        if not self._storage.exists(self._folder):
            self._storage.create_folder(self._folder)
        timestamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
        safe_title = sanitize_filename(chat_title(messages)) or "Chat"
        path = f"{self._folder}/{timestamp} {safe_title}.md"
        self._storage.write(path, self._frontmatter(timestamp, provider, model, sources) + format_messages(messages))
        log_event(self._logger, "chat.saved", path=path, messages=len(messages), provider=provider, model=model)
        return path

    def append_to_chat(self, path: str, messages: Sequence[Message]) -> None:
        """Append ``messages`` to an existing transcript."""
        if not messages:
            return
        existing = self._storage.read(path)
        self._storage.write(path, existing + MESSAGE_SEPARATOR + format_messages(messages))

    def load_chat(self, path: str) -> List[Message]:
        return parse_chat_markdown(self._storage.read(path))

    @staticmethod
    def _frontmatter(timestamp: str, provider: str, model: str, sources: Sequence[str]) -> str:
        if sources:
            sources_yaml = "\n".join(f'  - "[[{s}]]"' for s in sources)
        else:
            sources_yaml = "  - none"
        return (
            "---\n"
            f"created: {timestamp}\n"
            f"provider: {provider}\n"
            f"model: {model}\n"
            "sources:\n"
            f"{sources_yaml}\n"
            "tags:\n"
            "  - ai-chat\n"
            "---\n\n"
        )


__all__ = [
    "ChatPersistence",
    "chat_title",
    "format_messages",
    "parse_chat_markdown",
    "sanitize_filename",
]
