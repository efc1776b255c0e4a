"""Cursor state tied to a buffer document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Cursor = Tuple[int, int]  # (row, column)


@dataclass(slots=True)
class BufferState:
    """Logical cursor position; ``cx`` is a character index, not a cell."""

    cx: int = 0
    cy: int = 0

    @property
    def cursor(self) -> Cursor:
        return (self.cy, self.cx)

    def set_cursor(self, row: int, col: int) -> None:
        self.cy = row
        self.cx = col
