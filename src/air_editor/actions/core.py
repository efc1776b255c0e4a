"""Core action implementations: mode switches, motions, edits, history."""

from __future__ import annotations

from functools import wraps
from typing import Callable, Optional

from air_editor.errors import BufferIOError, ReadOnlyBufferError
from air_editor.modes.base_mode import (
    COMMAND,
    INSERT,
    NORMAL,
    SEARCH,
    ModeContext,
    ModeResult,
)

Action = Callable[[ModeContext, object], ModeResult]


def editing(func: Action) -> Action:
    """Turn a read-only refusal into a status message."""

    @wraps(func)
    def wrapper(context: ModeContext, match: object) -> ModeResult:
        try:
            return func(context, match)
        except ReadOnlyBufferError as exc:
            return ModeResult(consumed=True, status="read_only", message=str(exc))

    return wrapper


# -- mode switches -----------------------------------------------------------


def enter_insert_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=INSERT, status="enter_insert")


def exit_to_normal_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=NORMAL, status="exit_to_normal")


def enter_command_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=COMMAND, status="enter_command")


def enter_search_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=SEARCH, status="enter_search")


# -- motions -----------------------------------------------------------------


def _moved(status: str) -> ModeResult:
    return ModeResult(consumed=True, status=status)


def move_left(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.move_horizontal(-1)
    return _moved("move")


def move_right(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.move_horizontal(1)
    return _moved("move")


def move_up(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.move_vertical(-1)
    return _moved("move")


def move_down(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.move_vertical(1)
    return _moved("move")


def word_forward(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.move_word_forward()
    return _moved("move_word")


def word_backward(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.move_word_backward()
    return _moved("move_word")


def goto_top(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.goto_top()
    return _moved("goto_top")


def goto_bottom(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.goto_bottom()
    return _moved("goto_bottom")


# -- edits -------------------------------------------------------------------


@editing
def insert_newline(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.insert_newline()
    return ModeResult(consumed=True, status="insert")


@editing
def insert_tab(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.insert_char("\t")
    return ModeResult(consumed=True, status="insert")


@editing
def backspace(context: ModeContext, match) -> ModeResult:
    del match
    changed = context.buffer.backspace()
    return ModeResult(consumed=True, status="delete" if changed else "noop")


@editing
def delete_char(context: ModeContext, match) -> ModeResult:
    del match
    changed = context.buffer.delete_char()
    return ModeResult(consumed=True, status="delete" if changed else "noop")


@editing
def paste_clipboard(context: ModeContext, match) -> ModeResult:
    del match
    value = context.registers.get()
    if not value.text:
        return ModeResult(consumed=True, status="noop", message="Clipboard is empty")
    context.buffer.insert_text(value.text)
    source = "AI response" if value.source == "chat" else "clipboard"
    return ModeResult(consumed=True, status="paste", message=f"Text pasted from {source}")


# -- history and files -------------------------------------------------------


def undo(context: ModeContext, match) -> ModeResult:
    del match
    if not context.buffer.undo():
        return ModeResult(consumed=True, status="noop", message="Already at oldest change")
    return ModeResult(consumed=True, status="undo")


def redo(context: ModeContext, match) -> ModeResult:
    del match
    if not context.buffer.redo():
        return ModeResult(consumed=True, status="noop", message="Already at newest change")
    return ModeResult(consumed=True, status="redo")


def save_buffer(context: ModeContext, path: Optional[str] = None) -> ModeResult:
    buffer = context.buffer
    try:
        buffer.save(path)
    except BufferIOError as exc:
        return ModeResult(
            consumed=True, status="save_error", message=f"Error saving file: {exc}"
        )
    context.bus.emit("buffer.saved", buffer.document.file_path)
    return ModeResult(consumed=True, status="saved", message=f"File '{buffer.name}' saved")


def save(context: ModeContext, match) -> ModeResult:
    del match
    return save_buffer(context)


def noop_action(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, status="noop")


__all__ = [
    "backspace",
    "delete_char",
    "editing",
    "enter_command_mode",
    "enter_insert_mode",
    "enter_search_mode",
    "exit_to_normal_mode",
    "goto_bottom",
    "goto_top",
    "insert_newline",
    "insert_tab",
    "move_down",
    "move_left",
    "move_right",
    "move_up",
    "noop_action",
    "paste_clipboard",
    "redo",
    "save",
    "save_buffer",
    "undo",
    "word_backward",
    "word_forward",
]
