"""Forward search over the buffer and match cycling."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from air_editor.modes.base_mode import NORMAL, ModeContext, ModeResult

Match = Tuple[int, int]


def find_matches(lines: Sequence[str], query: str) -> List[Match]:
    """Every non-overlapping, case-sensitive occurrence as ``(row, col)``."""

    matches: List[Match] = []
    if not query:
        return matches
    for row, line in enumerate(lines):
        col = line.find(query)
        while col != -1:
            matches.append((row, col))
            col = line.find(query, col + len(query))
    return matches


def _first_from(matches: Sequence[Match], cursor: Match) -> int:
    for index, position in enumerate(matches):
        if position >= cursor:
            return index
    return 0


def submit_search(context: ModeContext, match) -> ModeResult:
    del match
    query = context.ui.command_text[1:]
    search = context.ui.search
    search.query = query
    search.matches = find_matches(context.buffer.lines, query)
    context.bus.emit("search.submit", query)
    if not query:
        search.index = -1
        return ModeResult(consumed=True, switch_to=NORMAL, status="search_cleared")
    if not search.matches:
        search.index = -1
        return ModeResult(
            consumed=True,
            switch_to=NORMAL,
            status="search_miss",
            message=f"Pattern not found: {query}",
        )
    search.index = _first_from(search.matches, context.buffer.cursor)
    context.buffer.set_cursor(*search.matches[search.index])
    count = len(search.matches)
    noun = "match" if count == 1 else "matches"
    return ModeResult(
        consumed=True,
        switch_to=NORMAL,
        status="search_hit",
        message=f"Search for '{query}': {count} {noun}",
    )


def _cycle(context: ModeContext, step: int) -> ModeResult:
    search = context.ui.search
    if not search.matches:
        return ModeResult(consumed=True, status="noop")
    lines = context.buffer.lines
    # Drop matches invalidated by edits since the search ran.
    search.matches = [
        (row, col)
        for row, col in search.matches
        if row < len(lines) and lines[row][col : col + len(search.query)] == search.query
    ]
    if not search.matches:
        search.index = -1
        return ModeResult(
            consumed=True, status="search_miss", message=f"Pattern not found: {search.query}"
        )
    search.index = (search.index + step) % len(search.matches)
    context.buffer.set_cursor(*search.matches[search.index])
    return ModeResult(
        consumed=True,
        status="search_cycle",
        message=f"/{search.query} [{search.index + 1}/{len(search.matches)}]",
    )


def next_match(context: ModeContext, match) -> ModeResult:
    del match
    return _cycle(context, 1)


def previous_match(context: ModeContext, match) -> ModeResult:
    del match
    return _cycle(context, -1)


__all__ = ["find_matches", "next_match", "previous_match", "submit_search"]
