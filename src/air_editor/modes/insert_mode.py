"""Insert mode: printable keys go straight into the buffer."""

from __future__ import annotations

from air_editor.errors import ReadOnlyBufferError

from .base_mode import INSERT, KeyInput, ModeResult
from .keymap_helpers import KeymapMode


class InsertMode(KeymapMode):
    name = INSERT

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        if key.modifiers or not key.text or not key.text.isprintable():
            return ModeResult(consumed=False, status="miss")
        try:
            self.context.buffer.insert_char(key.text)
        except ReadOnlyBufferError as exc:
            return ModeResult(consumed=True, status="read_only", message=str(exc))
        return ModeResult(consumed=True, status="insert")
