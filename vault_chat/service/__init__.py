"""Application services built on the provider layer: chat sessions, note writing and the CLI."""

from .chat_session import ChatSession, ChatTurn, FileBlock, extract_file_blocks
from .notes import NoteWriter, WrittenNote

__all__ = ["ChatSession", "ChatTurn", "FileBlock", "extract_file_blocks", "NoteWriter", "WrittenNote"]
