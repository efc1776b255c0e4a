"""High-level buffer façade combining document, cursor, registers, and undo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Optional, Tuple

from air_editor.errors import ReadOnlyBufferError
from air_editor.runtime import telemetry

from .document import BufferDocument
from .registers import RegisterBank
from .state import BufferState, Cursor
from .sync import BufferMirror
from .undo import UndoHistory
from .validation import clamp_cursor, ensure_cursor


def is_word_char(char: str) -> bool:
    return char.isalnum()


class Buffer:
    """The editable text plus everything that moves with it.

    All mutations go through a ``Transaction`` so the undo history sees the
    pre-edit lines before anything changes.
    """

    def __init__(
        self,
        *,
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        registers: Optional[RegisterBank] = None,
        undo: Optional[UndoHistory] = None,
        undo_limit: int = 100,
    ) -> None:
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.registers = registers or RegisterBank()
        self.undo_history = undo or UndoHistory(limit=undo_limit)
        self.logger = telemetry.get_logger("air_editor.buffer")

    @classmethod
    def open(cls, file_path: str = "", *, undo_limit: int = 100) -> "Buffer":
        return cls(document=BufferDocument.load(file_path), undo_limit=undo_limit)

    @classmethod
    def from_text(cls, text: str, *, file_path: str = "") -> "Buffer":
        return cls(document=BufferDocument.from_text(text, file_path=file_path))

    # -- read access -------------------------------------------------------

    @property
    def name(self) -> str:
        return self.document.base_name

    @property
    def lines(self) -> Tuple[str, ...]:
        return tuple(self.document.snapshot())

    @property
    def dirty(self) -> bool:
        return self.document.dirty

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def current_line(self) -> str:
        return self.document.get_line(self.state.cy)

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text="\n".join(self.document.snapshot()),
            cursor=self.state.cursor,
            name=self.name,
            dirty=self.document.dirty,
            version=self.document.version,
            attributes=dict(attributes or {}),
        )

    # -- editing -------------------------------------------------------------

    def insert_char(self, char: str) -> None:
        with Transaction(self, "insert_char"):
            line = self.current_line
            cx = min(self.state.cx, len(line))
            self.document.set_line(self.state.cy, line[:cx] + char + line[cx:])
            self.state.cx = cx + len(char)

    def insert_newline(self) -> None:
        with Transaction(self, "insert_newline"):
            line = self.current_line
            cx = min(self.state.cx, len(line))
            self.document.set_line(self.state.cy, line[:cx])
            self.document.insert_line(self.state.cy + 1, line[cx:])
            self.state.set_cursor(self.state.cy + 1, 0)

    def insert_text(self, text: str) -> None:
        """Insert possibly multi-line ``text``.

        The first segment goes in at the cursor, so the rest of the line stays
        on that row; every later segment becomes a line of its own below it.
        The cursor ends after the last segment.
        """

        segments = text.split("\n")
        with Transaction(self, "insert_text"):
            row = self.state.cy
            line = self.current_line
            cx = min(self.state.cx, len(line))
            self.document.set_line(row, line[:cx] + segments[0] + line[cx:])
            self.state.set_cursor(row, cx + len(segments[0]))
            for segment in segments[1:]:
                row += 1
                self.document.insert_line(row, segment)
                self.state.set_cursor(row, len(segment))

    def backspace(self) -> bool:
        cy, cx = self.state.cy, self.state.cx
        if cx == 0 and cy == 0:
            return False
        with Transaction(self, "backspace"):
            if cx > 0:
                line = self.current_line
                cx = min(cx, len(line))
                self.document.set_line(cy, line[: cx - 1] + line[cx:])
                self.state.cx = cx - 1
            else:
                previous = self.document.get_line(cy - 1)
                merged = previous + self.document.get_line(cy)
                self.document.set_line(cy - 1, merged)
                self.document.delete_line(cy)
                self.state.set_cursor(cy - 1, len(previous))
        return True

    def delete_char(self) -> bool:
        line = self.current_line
        cx = self.state.cx
        if cx >= len(line):
            return False
        with Transaction(self, "delete_char"):
            self.document.set_line(self.state.cy, line[:cx] + line[cx + 1 :])
        return True

    # -- motion --------------------------------------------------------------

    def set_cursor(self, row: int, col: int) -> None:
        ensure_cursor(self.document, (row, col))
        self.state.set_cursor(row, col)

    def move_horizontal(self, delta: int) -> None:
        line = self.current_line
        self.state.cx = max(0, min(self.state.cx + delta, len(line)))

    def move_vertical(self, delta: int) -> None:
        row = max(0, min(self.state.cy + delta, self.document.line_count - 1))
        col = min(self.state.cx, len(self.document.get_line(row)))
        self.state.set_cursor(row, col)

    def move_word_forward(self) -> None:
        row, col = self.state.cy, self.state.cx
        last_row = self.document.line_count - 1
        line = self.document.get_line(row)
        while col < len(line) and is_word_char(line[col]):
            col += 1
        while True:
            while col < len(line) and not is_word_char(line[col]):
                col += 1
            if col < len(line) or row == last_row:
                self.state.set_cursor(row, col)
                return
            row += 1
            col = 0
            line = self.document.get_line(row)

    def move_word_backward(self) -> None:
        row, col = self.state.cy, self.state.cx
        while True:
            line = self.document.get_line(row)
            index = min(col, len(line)) - 1
            while index >= 0 and not is_word_char(line[index]):
                index -= 1
            if index >= 0:
                while index > 0 and is_word_char(line[index - 1]):
                    index -= 1
                self.state.set_cursor(row, index)
                return
            if row == 0:
                self.state.set_cursor(0, 0)
                return
            row -= 1
            col = len(self.document.get_line(row))

    def goto_line(self, number: int) -> bool:
        """Jump to 1-indexed line ``number``; False when out of range."""

        if number < 1 or number > self.document.line_count:
            return False
        self.state.set_cursor(number - 1, 0)
        return True

    def goto_top(self) -> None:
        self.state.set_cursor(0, 0)

    def goto_bottom(self) -> None:
        self.state.set_cursor(self.document.line_count - 1, 0)

    # -- history -------------------------------------------------------------

    def undo(self) -> bool:
        """Restore the previous content; the cursor is only clamped, not restored."""

        previous = self.undo_history.undo(self.document.snapshot())
        if previous is None:
            return False
        self._restore(previous, "undo")
        return True

    def redo(self) -> bool:
        following = self.undo_history.redo(self.document.snapshot())
        if following is None:
            return False
        self._restore(following, "redo")
        return True

    def _restore(self, lines, label: str) -> None:
        self.document.replace_lines(lines)
        self.state.set_cursor(*clamp_cursor(self.document, self.state.cy, self.state.cx))
        telemetry.record_event(
            f"buffer.{label}",
            data={"lines": self.document.line_count},
            logger_name="air_editor.buffer",
        )

    # -- files ---------------------------------------------------------------

    def save(self, file_path: Optional[str] = None) -> str:
        path = self.document.save(file_path)
        telemetry.record_event(
            "buffer.save",
            data={"path": path, "lines": self.document.line_count},
            logger_name="air_editor.buffer",
        )
        return path

    def load(self, file_path: str) -> None:
        """Replace the document with ``file_path``; history starts over."""

        self.document = BufferDocument.load(file_path)
        self.state.set_cursor(0, 0)
        self.undo_history.reset()


class Transaction(AbstractContextManager["Transaction"]):
    """Snapshot the buffer into undo history, then let the caller mutate."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        document = self.buffer.document
        if document.read_only:
            raise ReadOnlyBufferError(f"{document.base_name} is read-only")
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            logger_name="air_editor.buffer",
            component=True,
            metadata={"buffer": self.buffer.name, "cursor": self.buffer.cursor},
        )
        self._span_cm.__enter__()
        self.buffer.undo_history.push(document.snapshot())
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "Transaction", "is_word_char"]
