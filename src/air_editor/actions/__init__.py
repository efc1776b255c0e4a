"""High-level editing verbs reused across modes."""

from .core import (
    backspace,
    delete_char,
    enter_command_mode,
    enter_insert_mode,
    enter_search_mode,
    exit_to_normal_mode,
    goto_bottom,
    goto_top,
    insert_newline,
    insert_tab,
    move_down,
    move_left,
    move_right,
    move_up,
    noop_action,
    paste_clipboard,
    redo,
    save,
    undo,
    word_backward,
    word_forward,
)
from .chat import (
    copy_last_response,
    copy_response,
    copy_transcript,
    focus_chat_input,
    focus_chat_view,
    focus_editor,
    scroll_down,
    scroll_up,
    submit_chat,
    toggle_chat,
)
from .command import submit_command_line
from .search import find_matches, next_match, previous_match, submit_search

__all__ = [
    "backspace",
    "copy_last_response",
    "copy_response",
    "copy_transcript",
    "delete_char",
    "enter_command_mode",
    "enter_insert_mode",
    "enter_search_mode",
    "exit_to_normal_mode",
    "find_matches",
    "focus_chat_input",
    "focus_chat_view",
    "focus_editor",
    "goto_bottom",
    "goto_top",
    "insert_newline",
    "insert_tab",
    "move_down",
    "move_left",
    "move_right",
    "move_up",
    "next_match",
    "noop_action",
    "paste_clipboard",
    "previous_match",
    "redo",
    "save",
    "scroll_down",
    "scroll_up",
    "submit_chat",
    "submit_command_line",
    "submit_search",
    "toggle_chat",
    "undo",
    "word_backward",
    "word_forward",
]
