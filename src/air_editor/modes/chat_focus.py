"""Key handlers for the chat panel's input line and transcript view.

These are not editor modes. While the panel holds focus they receive every
key; the global layer and the active mode are skipped.
"""

from __future__ import annotations

from .base_mode import FOCUS_CHAT_INPUT, FOCUS_CHAT_VIEW, KeyInput, ModeResult
from .keymap_helpers import KeymapMode


class ChatInputHandler(KeymapMode):
    name = FOCUS_CHAT_INPUT

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        ui = self.context.ui
        if key.key == "BACKSPACE" and not key.modifiers:
            ui.chat_input = ui.chat_input[:-1]
            return ModeResult(consumed=True, status="editing")
        if key.text and not key.modifiers and key.text.isprintable():
            ui.chat_input += key.text
            return ModeResult(consumed=True, status="editing")
        return ModeResult(consumed=False, status="miss")


class ChatViewHandler(KeymapMode):
    name = FOCUS_CHAT_VIEW
