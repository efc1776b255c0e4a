"""Adapter boundary types for syncing buffers with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .state import Cursor


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    cursor: Cursor
    name: str
    dirty: bool
    version: int
    attributes: dict[str, str] = field(default_factory=dict)


class BufferSync(Protocol):
    """How adapters pull buffer state for rendering."""

    def pull_buffer(self) -> BufferMirror:
        """Return the latest buffer snapshot that the host should render."""
        ...
