"""Textual-facing controller that turns editor state into widget updates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from rich.markup import escape

from air_editor.buffer import BufferMirror
from air_editor.chat import ChatMessage
from air_editor.modes import INSERT, KeyInput, ModeResult
from air_editor.modes.mode_manager import ModeManager
from air_editor.runtime import telemetry

# Textual key names mapped onto the tokens the keymaps are written in.
KEY_ALIASES: Dict[str, str] = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "delete": "DELETE",
    "tab": "TAB",
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
    "f2": "F2",
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_editor: Callable[[str], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    update_chat: Callable[[str, str], None] = _noop
    set_chat_visible: Callable[[bool], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop


def normalize_key(
    key: str, character: Optional[str] = None
) -> tuple[str, Optional[str], tuple[str, ...]]:
    """Split a Textual key name into ``(key, text, modifiers)``."""

    if key in KEY_ALIASES:
        return KEY_ALIASES[key], None, ()
    chorded = key.startswith(("ctrl+", "alt+", "meta+"))
    if not chorded and character and len(character) == 1 and character.isprintable():
        return character, character, ()
    if "+" in key and len(key) > 1:
        *modifiers, base = key.split("+")
        name = KEY_ALIASES.get(base, base)
        return name, None, tuple(modifiers)
    return key, None, ()


def render_chat(messages: Iterable[ChatMessage]) -> str:
    """Chat transcript as Rich markup; completed replies are numbered."""

    lines: List[str] = []
    number = 0
    for message in messages:
        content = escape(message.content)
        if message.role == "user":
            lines.append(f"[yellow]You:[/yellow] {content}")
        elif message.pending:
            lines.append(f"[green]AI:[/green] {content}")
        else:
            number += 1
            style = "red" if message.error else "green"
            lines.append(f"[{style}]AI #{number}:[/{style}] {content}")
    return "\n".join(lines)


class EditorAdapter:
    """Bridges ModeManager, the chat bridge, and bus events to Textual hooks."""

    def __init__(self, manager: ModeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self.logger = telemetry.get_logger("air_editor.adapters.textual")
        self._subscribe_events()
        bridge = manager.context.bridge
        if bridge is not None:
            bridge.subscribe(self._on_chat_update)
        self.refresh()

    @property
    def context(self):
        return self.manager.context

    @property
    def quit_requested(self) -> bool:
        return self.context.ui.quit_requested

    def handle_textual_key(
        self,
        key: str,
        *,
        character: Optional[str] = None,
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        name, text, modifiers = normalize_key(key, character)
        result = self.manager.handle_key(
            KeyInput(key=name, text=text, modifiers=modifiers)
        )
        self.logger.debug(
            f"key {key!r} -> {name!r} status={result.status} consumed={result.consumed}"
        )
        self.refresh()
        return result

    def resize(self, width: int, height: int) -> None:
        self.context.viewport.resize(width, height)
        self._refresh_editor()

    def tick(self) -> int:
        """Apply finished chat requests; called from the UI timer."""

        bridge = self.context.bridge
        if bridge is None:
            return 0
        return bridge.drain()

    def pull_buffer(self) -> BufferMirror:
        return self.context.buffer.mirror(
            attributes={"mode": self.manager.mode_name}
        )

    # -- rendering -----------------------------------------------------------

    def refresh(self) -> None:
        self._refresh_editor()
        self.hooks.update_status(self.status_markup())
        self.hooks.show_command(self.context.ui.command_text)
        self._refresh_chat()

    def editor_markup(self) -> str:
        buffer = self.context.buffer
        row, col = buffer.cursor
        rows = self.context.viewport.render(
            buffer.lines, col, row, draw_cursor=self.manager.mode_name == INSERT
        )
        return "\n".join(rows)

    def status_markup(self) -> str:
        ui = self.context.ui
        if ui.status:
            status = escape(ui.status)
        else:
            buffer = self.context.buffer
            row, col = buffer.cursor
            name = escape(buffer.name)
            if buffer.dirty:
                name += " \\[+]"
            mode = self.manager.mode_name.upper()
            status = f"[black on white] {mode} [/] {name} - {row + 1}:{col + 1}"
        if ui.debug_keys and ui.last_key:
            status += f" | Last Key: {escape(ui.last_key)}"
        return status

    def _refresh_editor(self) -> None:
        self.hooks.update_editor(self.editor_markup())

    def _refresh_chat(self) -> None:
        ui = self.context.ui
        self.hooks.set_chat_visible(ui.chat_visible)
        if ui.chat_visible:
            self.hooks.update_chat(render_chat(self.context.chat), ui.chat_input)

    def _on_chat_update(self, message: ChatMessage) -> None:
        self.hooks.handle_event("chat.complete", message)
        self._refresh_chat()

    def _subscribe_events(self) -> None:
        bus = self.context.bus
        for event in (
            "command.quit",
            "command.edit",
            "buffer.saved",
            "chat.toggle",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self.hooks.handle_event(name, payload)
            )


__all__ = ["EditorAdapter", "TextualUIHooks", "normalize_key", "render_chat"]
