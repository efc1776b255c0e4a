"""Snapshot-based undo/redo history."""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, List, Optional, Sequence

Snapshot = List[str]


class UndoHistory:
    """Two stacks of full line snapshots.

    The undo stack holds at most ``limit`` entries and drops the oldest first.
    The redo stack is unbounded but any fresh ``push`` empties it, even when
    the edit that follows turns out to change nothing.
    """

    def __init__(self, limit: int = 100) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        self.limit = limit
        self._undo: Deque[Snapshot] = deque(maxlen=limit)
        self._redo: List[Snapshot] = []
        self._lock = threading.Lock()

    def push(self, lines: Sequence[str]) -> None:
        with self._lock:
            self._undo.append(list(lines))
            self._redo.clear()

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def undo(self, current: Sequence[str]) -> Optional[Snapshot]:
        """Pop the newest snapshot, parking ``current`` on the redo stack."""

        with self._lock:
            if not self._undo:
                return None
            previous = self._undo.pop()
            self._redo.append(list(current))
            return previous

    def redo(self, current: Sequence[str]) -> Optional[Snapshot]:
        with self._lock:
            if not self._redo:
                return None
            following = self._redo.pop()
            self._undo.append(list(current))
            return following

    def reset(self) -> None:
        with self._lock:
            self._undo.clear()
            self._redo.clear()

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def peek_undo(self) -> Optional[Snapshot]:
        return list(self._undo[-1]) if self._undo else None

    def oldest_undo(self) -> Optional[Snapshot]:
        return list(self._undo[0]) if self._undo else None
