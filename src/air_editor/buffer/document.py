"""Line storage plus the file metadata a buffer carries around."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from air_editor.errors import BufferIOError

UNNAMED = "[No Name]"


@dataclass(slots=True)
class BufferDocument:
    """Ordered list of lines with path, read-only, and dirty metadata.

    The list always holds at least one line. ``trailing_newline`` remembers
    whether the file on disk ended in ``\\n`` so that saving an untouched
    buffer writes back exactly what was loaded.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    file_path: str = ""
    read_only: bool = False
    dirty: bool = False
    trailing_newline: bool = False
    version: int = 0

    @classmethod
    def from_text(cls, text: str, *, file_path: str = "") -> "BufferDocument":
        lines = text.split("\n")
        trailing = False
        if len(lines) > 1 and lines[-1] == "":
            lines.pop()
            trailing = True
        return cls(_lines=lines or [""], file_path=file_path, trailing_newline=trailing)

    @classmethod
    def load(cls, file_path: str = "") -> "BufferDocument":
        """Load ``file_path``; a missing or empty path yields one empty line."""

        if not file_path or not os.path.exists(file_path):
            return cls(file_path=file_path)
        try:
            with open(file_path, "r", encoding="utf-8", newline="") as handle:
                text = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise BufferIOError(str(exc), path=file_path) from exc
        document = cls.from_text(text, file_path=file_path)
        document.read_only = not os.access(file_path, os.W_OK)
        return document

    @property
    def base_name(self) -> str:
        if not self.file_path:
            return UNNAMED
        return os.path.basename(self.file_path)

    @property
    def text(self) -> str:
        content = "\n".join(self._lines)
        if self.trailing_newline:
            content += "\n"
        return content

    def save(self, file_path: str | None = None) -> str:
        """Write the whole buffer and clear ``dirty``; returns the path used."""

        target = file_path or self.file_path
        if not target:
            raise BufferIOError("no file path specified")
        try:
            with open(target, "w", encoding="utf-8", newline="") as handle:
                handle.write(self.text)
        except OSError as exc:
            raise BufferIOError(str(exc), path=target) from exc
        self.file_path = target
        self.read_only = False
        self.dirty = False
        return target

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def set_line(self, index: int, text: str) -> None:
        self._lines[index] = text
        self._touch()

    def insert_line(self, index: int, text: str) -> None:
        self._lines.insert(index, text)
        self._touch()

    def delete_line(self, index: int) -> str:
        removed = self._lines.pop(index)
        if not self._lines:
            self._lines.append("")
        self._touch()
        return removed

    def replace_lines(self, lines: Iterable[str]) -> None:
        """Swap in a whole new line list (used by undo/redo)."""

        self._lines = list(lines) or [""]
        self._touch()

    def _touch(self) -> None:
        self.version += 1
        self.dirty = True
