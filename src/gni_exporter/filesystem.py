from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from typing import TextIO


class FileSystem(Protocol):
    """File access used by the exporter. Paths are always absolute."""

    def open_file(self, path: Path) -> TextIO: ...

    def read_file(self, path: Path) -> bytes: ...


class LocalFileSystem:
    """:class:`FileSystem` backed by the local disk."""

    def open_file(self, path: Path) -> TextIO:
        """Open ``path`` for writing, truncating it and creating parent folders."""
        path.parent.mkdir(parents=True, exist_ok=True)
        return path.open("w", encoding="utf-8", newline="\n")

    def read_file(self, path: Path) -> bytes:
        return path.read_bytes()
