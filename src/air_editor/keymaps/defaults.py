"""Built-in keymaps that seed each mode and focus layer with defaults."""

from __future__ import annotations

from typing import Sequence

from air_editor.actions import chat as chat_actions
from air_editor.actions import command as command_actions
from air_editor.actions import core as core_actions
from air_editor.actions import search as search_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="core.enter_insert",
        handler=core_actions.enter_insert_mode,
        description="Enter insert mode",
    ),
    ActionRef(
        id="core.exit_to_normal",
        handler=core_actions.exit_to_normal_mode,
        description="Return to normal mode",
    ),
    ActionRef(
        id="core.enter_command",
        handler=core_actions.enter_command_mode,
        description="Enter command-line mode",
    ),
    ActionRef(
        id="core.enter_search",
        handler=core_actions.enter_search_mode,
        description="Enter search mode",
    ),
    ActionRef(id="motion.left", handler=core_actions.move_left, description="Move left"),
    ActionRef(
        id="motion.right", handler=core_actions.move_right, description="Move right"
    ),
    ActionRef(id="motion.up", handler=core_actions.move_up, description="Move up"),
    ActionRef(id="motion.down", handler=core_actions.move_down, description="Move down"),
    ActionRef(
        id="motion.word_forward",
        handler=core_actions.word_forward,
        description="Start of next word",
    ),
    ActionRef(
        id="motion.word_backward",
        handler=core_actions.word_backward,
        description="Start of previous word",
    ),
    ActionRef(
        id="motion.goto_top", handler=core_actions.goto_top, description="First line"
    ),
    ActionRef(
        id="motion.goto_bottom",
        handler=core_actions.goto_bottom,
        description="Last line",
    ),
    ActionRef(
        id="edit.insert_newline",
        handler=core_actions.insert_newline,
        description="Split the line at the cursor",
    ),
    ActionRef(
        id="edit.insert_tab", handler=core_actions.insert_tab, description="Insert a tab"
    ),
    ActionRef(
        id="edit.backspace",
        handler=core_actions.backspace,
        description="Delete before the cursor",
    ),
    ActionRef(
        id="edit.delete_char",
        handler=core_actions.delete_char,
        description="Delete under the cursor",
    ),
    ActionRef(
        id="edit.paste",
        handler=core_actions.paste_clipboard,
        description="Paste the clipboard",
    ),
    ActionRef(id="history.undo", handler=core_actions.undo, description="Undo"),
    ActionRef(id="history.redo", handler=core_actions.redo, description="Redo"),
    ActionRef(id="file.save", handler=core_actions.save, description="Save the buffer"),
    ActionRef(
        id="command.submit_line",
        handler=command_actions.submit_command_line,
        description="Evaluate the active command line",
    ),
    ActionRef(
        id="search.submit",
        handler=search_actions.submit_search,
        description="Run the typed search",
    ),
    ActionRef(
        id="search.next", handler=search_actions.next_match, description="Next match"
    ),
    ActionRef(
        id="search.previous",
        handler=search_actions.previous_match,
        description="Previous match",
    ),
    ActionRef(
        id="chat.toggle",
        handler=chat_actions.toggle_chat,
        description="Show or hide the chat panel",
    ),
    ActionRef(
        id="chat.copy_last",
        handler=chat_actions.copy_last_response,
        description="Copy the last AI response",
    ),
    ActionRef(
        id="chat.copy_transcript",
        handler=chat_actions.copy_transcript,
        description="Copy the chat transcript",
    ),
    ActionRef(
        id="chat.submit",
        handler=chat_actions.submit_chat,
        description="Send the chat input",
    ),
    ActionRef(
        id="chat.focus_editor",
        handler=chat_actions.focus_editor,
        description="Focus the editor",
    ),
    ActionRef(
        id="chat.focus_input",
        handler=chat_actions.focus_chat_input,
        description="Focus the chat input",
    ),
    ActionRef(
        id="chat.focus_view",
        handler=chat_actions.focus_chat_view,
        description="Focus the chat transcript",
    ),
    ActionRef(
        id="chat.scroll_up",
        handler=chat_actions.scroll_up,
        description="Scroll the transcript up",
    ),
    ActionRef(
        id="chat.scroll_down",
        handler=chat_actions.scroll_down,
        description="Scroll the transcript down",
    ),
)


def _binding(
    mode: str,
    keys: str,
    action_id: str,
    description: str = "",
    *,
    when: Sequence[str] = (),
    name: str | None = None,
) -> Binding:
    tokens = keys.split()
    return Binding(
        id=f"{mode}.{name or action_id.split('.')[-1]}",
        mode=mode,
        sequence=KeySequence.from_strings(*tokens),
        action_id=action_id,
        description=description,
        when=tuple(when),  # type: ignore[arg-type]
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    # Global layer: resolved before the active mode.
    _binding("global", "ctrl+s", "file.save", "Save the buffer"),
    _binding("global", "ctrl+z", "history.undo", "Undo"),
    _binding("global", "ctrl+y", "history.redo", "Redo"),
    _binding("global", "ctrl+a", "chat.toggle", "Toggle chat", name="toggle_chat_a"),
    _binding("global", "ctrl+g", "chat.toggle", "Toggle chat", name="toggle_chat_g"),
    _binding("global", "F2", "chat.toggle", "Toggle chat", name="toggle_chat_f2"),
    _binding("global", "ctrl+c", "chat.copy_last", "Copy the last AI response"),
    # Normal mode.
    _binding("normal", "i", "core.enter_insert", "Enter insert mode"),
    _binding("normal", ":", "core.enter_command", "Enter command-line mode"),
    _binding("normal", "/", "core.enter_search", "Search forward"),
    _binding("normal", "h", "motion.left", name="left_h"),
    _binding("normal", "l", "motion.right", name="right_l"),
    _binding("normal", "k", "motion.up", name="up_k"),
    _binding("normal", "j", "motion.down", name="down_j"),
    _binding("normal", "LEFT", "motion.left", name="left_arrow"),
    _binding("normal", "RIGHT", "motion.right", name="right_arrow"),
    _binding("normal", "UP", "motion.up", name="up_arrow"),
    _binding("normal", "DOWN", "motion.down", name="down_arrow"),
    _binding("normal", "w", "motion.word_forward"),
    _binding("normal", "b", "motion.word_backward"),
    _binding("normal", "g g", "motion.goto_top", "Go to the first line"),
    _binding("normal", "G", "motion.goto_bottom", "Go to the last line"),
    _binding("normal", "u", "history.undo", "Undo"),
    _binding("normal", "x", "edit.delete_char", "Delete under the cursor"),
    _binding("normal", "n", "search.next", when=("search_active",)),
    _binding("normal", "N", "search.previous", when=("search_active",)),
    # Insert mode.
    _binding("insert", "ESC", "core.exit_to_normal", "Leave insert mode"),
    _binding("insert", "ENTER", "edit.insert_newline"),
    _binding("insert", "BACKSPACE", "edit.backspace"),
    _binding("insert", "DELETE", "edit.delete_char"),
    _binding("insert", "TAB", "edit.insert_tab"),
    _binding("insert", "LEFT", "motion.left"),
    _binding("insert", "RIGHT", "motion.right"),
    _binding("insert", "UP", "motion.up"),
    _binding("insert", "DOWN", "motion.down"),
    _binding("insert", "ctrl+v", "edit.paste", "Paste the clipboard"),
    # Command line and search line.
    _binding("command", "ESC", "core.exit_to_normal", "Cancel command line"),
    _binding("command", "ENTER", "command.submit_line", "Submit the command line"),
    _binding("search", "ESC", "core.exit_to_normal", "Cancel search"),
    _binding("search", "ENTER", "search.submit", "Run the search"),
    # Chat panel focus layers.
    _binding("chat_input", "ENTER", "chat.submit", "Send the message"),
    _binding("chat_input", "ESC", "chat.focus_editor"),
    _binding("chat_input", "TAB", "chat.focus_view"),
    _binding("chat_view", "ctrl+c", "chat.copy_transcript", "Copy the transcript"),
    _binding("chat_view", "TAB", "chat.focus_input"),
    _binding("chat_view", "ESC", "chat.focus_editor"),
    _binding("chat_view", "UP", "chat.scroll_up"),
    _binding("chat_view", "DOWN", "chat.scroll_down"),
)


def load_default_keymaps(registry: KeymapRegistry) -> None:
    """Register the built-in actions and every layer's bindings."""

    for action in DEFAULT_ACTIONS:
        registry.register_action(action)
    for binding in DEFAULT_BINDINGS:
        registry.register_binding(binding)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
