"""Vault storage: note storage collaborator and chat transcript persistence."""

from .note_storage import FileSystemNoteStorage, NoteStorage
from .chat_persistence import (
    ChatPersistence,
    chat_title,
    format_messages,
    parse_chat_markdown,
    sanitize_filename,
)

__all__ = [
    "NoteStorage",
    "FileSystemNoteStorage",
    "ChatPersistence",
    "chat_title",
    "format_messages",
    "parse_chat_markdown",
    "sanitize_filename",
]
