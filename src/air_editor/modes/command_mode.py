"""Command-line modes: ``:`` commands and ``/`` searches share one input line."""

from __future__ import annotations

from air_editor.runtime import telemetry

from .base_mode import COMMAND, NORMAL, SEARCH, KeyInput, ModeResult
from .keymap_helpers import KeymapMode, update_flag


class CommandMode(KeymapMode):
    """Edits ``context.ui.command_text``; bindings handle submit and cancel.

    The line always starts with ``prefix``. Backspacing over the prefix
    cancels back to normal mode.
    """

    name = COMMAND
    prefix = ":"

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.context.ui.command_text = self.prefix
        update_flag(self.context, f"{self.name}_active", True)
        self.context.bus.emit(f"{self.name}.start", None)

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        update_flag(self.context, f"{self.name}_active", False)
        self.context.ui.command_text = ""
        self.context.bus.emit(f"{self.name}.end", None)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        ui = self.context.ui
        if key.key == "BACKSPACE" and not key.modifiers:
            if len(ui.command_text) <= len(self.prefix):
                telemetry.record_event(
                    f"{self.name}.cancel", logger_name="air_editor.modes"
                )
                return ModeResult(consumed=True, switch_to=NORMAL, status="cancel")
            ui.command_text = ui.command_text[:-1]
            return ModeResult(consumed=True, status="editing")

        if key.text and not key.modifiers and key.text.isprintable():
            ui.command_text += key.text
            return ModeResult(consumed=True, status="editing")

        return ModeResult(consumed=False, status="miss")


class SearchMode(CommandMode):
    name = SEARCH
    prefix = "/"
