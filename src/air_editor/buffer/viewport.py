"""Logical-to-rendered cursor mapping, scrolling, and line rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from rich.markup import escape

TAB_STOP = 4
CURSOR_STYLE = "reverse"
EMPTY_ROW = "~"


def render_column(line: str, cx: int, tab_stop: int = TAB_STOP) -> int:
    """Return the display cell of character index ``cx`` in ``line``."""

    rx = 0
    for index in range(cx):
        if index < len(line) and line[index] == "\t":
            rx += tab_stop - (rx % tab_stop)
        else:
            rx += 1
    return rx


def expand_tabs(line: str, tab_stop: int = TAB_STOP) -> str:
    cells: List[str] = []
    column = 0
    for char in line:
        if char == "\t":
            width = tab_stop - (column % tab_stop)
            cells.append(" " * width)
            column += width
        else:
            cells.append(char)
            column += 1
    return "".join(cells)


@dataclass(slots=True)
class Viewport:
    """Scroll offsets plus the size of the visible text area."""

    width: int = 0
    height: int = 0
    row_offset: int = 0
    col_offset: int = 0
    rx: int = 0
    tab_stop: int = TAB_STOP

    def resize(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)

    def reset(self) -> None:
        self.row_offset = 0
        self.col_offset = 0
        self.rx = 0

    def scroll_to_cursor(self, lines: Sequence[str], cx: int, cy: int) -> None:
        """Recompute ``rx`` and pull the offsets so the cursor is visible."""

        line = lines[cy] if 0 <= cy < len(lines) else ""
        self.rx = render_column(line, cx, self.tab_stop)
        if self.width <= 0 or self.height <= 0:
            return

        if cy < self.row_offset:
            self.row_offset = cy
        if cy >= self.row_offset + self.height:
            self.row_offset = cy - self.height + 1

        if self.rx < self.col_offset:
            self.col_offset = self.rx
        if self.rx >= self.col_offset + self.width:
            self.col_offset = self.rx - self.width + 1

    def render(
        self,
        lines: Sequence[str],
        cx: int,
        cy: int,
        *,
        draw_cursor: bool = False,
    ) -> List[str]:
        """Render the visible rows as Rich markup, one string per row.

        When ``draw_cursor`` is set the active line carries an inverted cell
        at the cursor (a trailing inverted space past the last character);
        the host never shows a real terminal cursor.
        """

        self.scroll_to_cursor(lines, cx, cy)
        rows: List[str] = []
        for screen_row in range(self.height):
            file_row = screen_row + self.row_offset
            if file_row >= len(lines):
                rows.append(EMPTY_ROW)
                continue
            visible = expand_tabs(lines[file_row], self.tab_stop)[
                self.col_offset : self.col_offset + self.width
            ]
            if draw_cursor and file_row == cy:
                rows.append(self._with_cursor(visible))
            else:
                rows.append(escape(visible))
        return rows

    def _with_cursor(self, visible: str) -> str:
        column = max(0, self.rx - self.col_offset)
        if column < len(visible):
            before, under, after = visible[:column], visible[column], visible[column + 1 :]
        else:
            before, under, after = visible, " ", ""
        return (
            f"{escape(before)}[{CURSOR_STYLE}]{escape(under)}[/{CURSOR_STYLE}]"
            f"{escape(after)}"
        )
