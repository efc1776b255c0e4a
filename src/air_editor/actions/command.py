"""Actions that evaluate ``:`` command lines."""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict, List

from air_editor.errors import BufferIOError
from air_editor.modes.base_mode import NORMAL, ModeContext, ModeResult

from . import chat as chat_actions
from .core import save_buffer

CommandHandler = Callable[[ModeContext, List[str]], ModeResult]

DIRTY_QUIT_MESSAGE = "No write since last change (use q! to override)"
DIRTY_EDIT_MESSAGE = "No write since last change (use e! to override)"


def submit_command_line(context: ModeContext, match) -> ModeResult:
    del match
    text = context.ui.command_text[1:].strip()
    context.bus.emit("command.submit", text)
    if not text:
        return ModeResult(consumed=True, switch_to=NORMAL, status="command_empty")
    if text.isdecimal():
        return _goto_line(context, int(text))
    parts = text.split()
    command = parts[0]
    args = parts[1:]
    handler = _COMMAND_HANDLERS.get(command)
    if handler is None:
        return _unknown_command(context, command)
    result = handler(context, args)
    result.switch_to = NORMAL
    return result


def _unknown_command(context: ModeContext, command: str) -> ModeResult:
    context.bus.emit("command.error", command)
    return ModeResult(
        consumed=True,
        switch_to=NORMAL,
        status="command_error",
        message=f"Unknown command: {command}",
    )


def _goto_line(context: ModeContext, number: int) -> ModeResult:
    if not context.buffer.goto_line(number):
        return ModeResult(
            consumed=True,
            switch_to=NORMAL,
            status="command_error",
            message="Invalid line number",
        )
    return ModeResult(consumed=True, switch_to=NORMAL, status="command_goto")


def _request_quit(context: ModeContext, *, force: bool) -> None:
    context.ui.quit_requested = True
    context.bus.emit("command.quit", {"force": force})


def _handle_quit(
    context: ModeContext, args: List[str], *, force: bool = False
) -> ModeResult:
    del args
    if context.buffer.dirty and not force:
        return ModeResult(
            consumed=True, status="command_refused", message=DIRTY_QUIT_MESSAGE
        )
    _request_quit(context, force=force)
    status = "command_quit_force" if force else "command_quit"
    return ModeResult(consumed=True, status=status)


def _handle_write(context: ModeContext, args: List[str]) -> ModeResult:
    path = " ".join(args) or None
    return save_buffer(context, path)


def _handle_wq(context: ModeContext, args: List[str]) -> ModeResult:
    result = save_buffer(context, " ".join(args) or None)
    if not context.buffer.dirty:
        _request_quit(context, force=False)
        result.status = "command_wq"
    return result


def _handle_edit(
    context: ModeContext, args: List[str], *, force: bool = False
) -> ModeResult:
    if not args:
        return ModeResult(
            consumed=True, status="command_error", message="Usage: e <path>"
        )
    if context.buffer.dirty and not force:
        return ModeResult(
            consumed=True, status="command_refused", message=DIRTY_EDIT_MESSAGE
        )
    path = " ".join(args)
    try:
        context.buffer.load(path)
    except BufferIOError as exc:
        return ModeResult(
            consumed=True, status="command_error", message=f"Error opening file: {exc}"
        )
    context.viewport.reset()
    context.ui.search.matches.clear()
    context.ui.search.index = -1
    context.bus.emit("command.edit", {"path": path, "force": force})
    return ModeResult(
        consumed=True,
        status="command_edit",
        message=f"\"{context.buffer.name}\" {context.buffer.document.line_count}L",
    )


def _handle_chat(context: ModeContext, args: List[str]) -> ModeResult:
    del args
    return chat_actions.toggle_chat(context, None)


def _handle_debugkeys(context: ModeContext, args: List[str]) -> ModeResult:
    del args
    ui = context.ui
    ui.debug_keys = not ui.debug_keys
    state = "enabled" if ui.debug_keys else "disabled"
    return ModeResult(
        consumed=True, status="command_debugkeys", message=f"Key debugging {state}"
    )


def _handle_copy(context: ModeContext, args: List[str]) -> ModeResult:
    if len(args) != 1:
        return ModeResult(
            consumed=True,
            status="command_error",
            message="Usage: copy <response-number>",
        )
    try:
        number = int(args[0])
    except ValueError:
        return ModeResult(
            consumed=True, status="command_error", message="Invalid response number"
        )
    return chat_actions.copy_response(context, number)


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "q": _handle_quit,
    "quit": _handle_quit,
    "q!": partial(_handle_quit, force=True),
    "quit!": partial(_handle_quit, force=True),
    "w": _handle_write,
    "write": _handle_write,
    "wq": _handle_wq,
    "e": _handle_edit,
    "edit": _handle_edit,
    "e!": partial(_handle_edit, force=True),
    "edit!": partial(_handle_edit, force=True),
    "chat": _handle_chat,
    "debugkeys": _handle_debugkeys,
    "copy": _handle_copy,
}


__all__ = ["submit_command_line", "DIRTY_QUIT_MESSAGE"]
