"""Normal mode: motions, single-key edits, and entry into other modes."""

from __future__ import annotations

from .base_mode import NORMAL, KeyInput, ModeResult
from .keymap_helpers import KeymapMode


class NormalMode(KeymapMode):
    name = NORMAL

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        # Unknown keys are swallowed so they never reach the host widget.
        del key
        return ModeResult(consumed=True, status="ignored")
