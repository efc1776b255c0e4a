"""Chat panel actions: visibility, focus, submission, and copying replies."""

from __future__ import annotations

from air_editor.modes.base_mode import (
    FOCUS_CHAT_INPUT,
    FOCUS_CHAT_VIEW,
    FOCUS_EDITOR,
    ModeContext,
    ModeResult,
)

CHAT_SOURCE = "chat"


def toggle_chat(context: ModeContext, match) -> ModeResult:
    del match
    ui = context.ui
    ui.chat_visible = not ui.chat_visible
    ui.focus = FOCUS_CHAT_INPUT if ui.chat_visible else FOCUS_EDITOR
    context.bus.emit("chat.toggle", ui.chat_visible)
    return ModeResult(consumed=True, status="chat_toggle")


def focus_editor(context: ModeContext, match) -> ModeResult:
    del match
    context.ui.focus = FOCUS_EDITOR
    return ModeResult(consumed=True, status="focus")


def focus_chat_input(context: ModeContext, match) -> ModeResult:
    del match
    context.ui.focus = FOCUS_CHAT_INPUT
    return ModeResult(consumed=True, status="focus")


def focus_chat_view(context: ModeContext, match) -> ModeResult:
    del match
    context.ui.focus = FOCUS_CHAT_VIEW
    return ModeResult(consumed=True, status="focus")


def submit_chat(context: ModeContext, match) -> ModeResult:
    del match
    ui = context.ui
    if not ui.chat_input.strip():
        return ModeResult(consumed=True, status="noop")
    if context.bridge is None:
        return ModeResult(
            consumed=True, status="chat_unavailable", message="Chat is not available"
        )
    context.bridge.submit(ui.chat_input)
    ui.chat_input = ""
    ui.chat_scroll = 0
    return ModeResult(consumed=True, status="chat_submit")


def scroll_up(context: ModeContext, match) -> ModeResult:
    del match
    context.ui.chat_scroll += 1
    return ModeResult(consumed=True, status="scroll")


def scroll_down(context: ModeContext, match) -> ModeResult:
    del match
    context.ui.chat_scroll = max(0, context.ui.chat_scroll - 1)
    return ModeResult(consumed=True, status="scroll")


def copy_response(context: ModeContext, number: int) -> ModeResult:
    """Copy the ``number``-th completed reply; placeholders are not counted."""

    if number < 1:
        return ModeResult(
            consumed=True, status="copy_error", message="Invalid response number"
        )
    response = context.chat.response(number)
    if response is None:
        return ModeResult(
            consumed=True,
            status="copy_missing",
            message=f"AI response #{number} not found",
        )
    context.registers.copy(response.content, source=CHAT_SOURCE)
    return ModeResult(
        consumed=True,
        status="copy",
        message=(
            f"AI response #{number} copied. Press Ctrl+V in insert mode to paste."
        ),
    )


def copy_last_response(context: ModeContext, match) -> ModeResult:
    del match
    response = context.chat.last_response()
    if response is None:
        return ModeResult(
            consumed=True, status="copy_missing", message="No AI response found to copy"
        )
    context.registers.copy(response.content, source=CHAT_SOURCE)
    return ModeResult(
        consumed=True,
        status="copy",
        message="Last AI response copied to clipboard. Press Ctrl+V in insert mode to paste.",
    )


def copy_transcript(context: ModeContext, match) -> ModeResult:
    del match
    transcript = context.chat.transcript()
    if not transcript:
        return ModeResult(consumed=True, status="noop", message="Chat is empty")
    context.registers.copy(transcript, source=CHAT_SOURCE)
    return ModeResult(
        consumed=True, status="copy", message="Chat transcript copied to clipboard"
    )


__all__ = [
    "copy_last_response",
    "copy_response",
    "copy_transcript",
    "focus_chat_input",
    "focus_chat_view",
    "focus_editor",
    "scroll_down",
    "scroll_up",
    "submit_chat",
    "toggle_chat",
]
