"""Note storage collaborator.

``NoteStorage`` is the slice of the host's vault API the core writes through.
``FileSystemNoteStorage`` implements it, plus the grounding ``DocumentStore``
view, over a plain directory tree (used by the CLI and tests); paths are
vault-relative with ``/`` separators.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class NoteStorage(Protocol):
    """Minimal vault file API."""

    def exists(self, path: str) -> bool:  # pragma: no cover - interface
        ...

    def read(self, path: str) -> str:  # pragma: no cover - interface
        ...

    def write(self, path: str, content: str) -> None:  # pragma: no cover - interface
        ...

    def create_folder(self, path: str) -> None:  # pragma: no cover - interface
        ...


class FileSystemNoteStorage:
    """``NoteStorage`` rooted at a local directory.

    Raises ``ValueError`` for paths escaping the root and ``FileNotFoundError``
    when reading a missing note.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, path: str) -> Path:
        target = (self._root / path).resolve()
        if target != self._root and self._root not in target.parents:
            raise ValueError(f"path escapes vault root: {path}")
        return target

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def read(self, path: str) -> str:
        return self._resolve(path).read_text(encoding="utf-8")

    def read_document(self, path: str) -> Optional[str]:
        """``DocumentStore`` view: the note text or ``None`` when missing."""
        target = self._resolve(path)
        if not target.is_file():
            return None
        return target.read_text(encoding="utf-8")

    def write(self, path: str, content: str) -> None:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

    def create_folder(self, path: str) -> None:
        self._resolve(path).mkdir(parents=True, exist_ok=True)


__all__ = ["NoteStorage", "FileSystemNoteStorage"]
