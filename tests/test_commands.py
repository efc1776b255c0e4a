from __future__ import annotations

from typing import List, Optional, Sequence

from air_editor.actions.command import DIRTY_QUIT_MESSAGE
from air_editor.buffer import Buffer
from air_editor.chat import ChatMessage
from air_editor.config import EditorConfig
from air_editor.editor import build_context, build_editor, build_manager
from air_editor.modes import KeyInput, ModeResult
from air_editor.modes.mode_manager import ModeManager


class EchoClient:
    def generate(self, history: Sequence[ChatMessage], prompt: str) -> str:
        return f"echo: {prompt}"


def run_inline(work, name: str) -> None:
    del name
    work()


def make_manager(text: str = "", *, file_path: str = "") -> ModeManager:
    buffer = Buffer.from_text(text, file_path=file_path)
    context = build_context(
        buffer, config=EditorConfig(), client=EchoClient(), spawn=run_inline
    )
    return build_manager(context)


def run_command(manager: ModeManager, command: str) -> Optional[ModeResult]:
    manager.handle_key(KeyInput(key=":", text=":"))
    for char in command:
        manager.handle_key(KeyInput(key=char, text=char))
    return manager.handle_key(KeyInput(key="ENTER"))


def test_quit_refuses_when_dirty() -> None:
    manager = make_manager("text")
    manager.context.buffer.insert_char("x")

    run_command(manager, "q")

    assert manager.context.ui.quit_requested is False
    assert manager.context.ui.status == DIRTY_QUIT_MESSAGE
    assert manager.mode_name == "normal"


def test_quit_when_clean_and_force_quit_when_dirty() -> None:
    clean = make_manager("text")
    run_command(clean, "q")
    assert clean.context.ui.quit_requested is True

    dirty = make_manager("text")
    dirty.context.buffer.insert_char("x")
    run_command(dirty, "q!")
    assert dirty.context.ui.quit_requested is True


def test_quit_emits_bus_event() -> None:
    manager = make_manager()
    payloads: List[object] = []
    manager.context.bus.subscribe("command.quit", payloads.append)

    run_command(manager, "q!")

    assert payloads == [{"force": True}]


def test_new_file_scenario(tmp_path) -> None:
    path = tmp_path / "new.txt"
    manager = build_editor(
        str(path), config=EditorConfig(), client=EchoClient(), spawn=run_inline
    )

    for token in ("i", "h", "e", "l", "l", "o"):
        manager.handle_key(KeyInput(key=token, text=token))
    manager.handle_key(KeyInput(key="ESC"))
    run_command(manager, "w")

    assert path.read_text(encoding="utf-8") == "hello"
    assert manager.context.ui.status == "File 'new.txt' saved"
    assert manager.context.buffer.dirty is False

    manager.handle_key(KeyInput(key="u", text="u"))
    assert manager.context.buffer.lines == ("hell",)
    assert manager.context.buffer.dirty is True


def test_write_with_path_saves_as(tmp_path) -> None:
    target = tmp_path / "copy.txt"
    manager = make_manager("body")

    run_command(manager, f"w {target}")

    assert target.read_text(encoding="utf-8") == "body"
    assert manager.context.buffer.name == "copy.txt"


def test_write_failure_keeps_editor_running() -> None:
    manager = make_manager("body")

    run_command(manager, "w")

    assert manager.context.ui.status == "Error saving file: no file path specified"
    assert manager.context.ui.quit_requested is False


def test_write_quit_saves_then_quits(tmp_path) -> None:
    path = tmp_path / "wq.txt"
    manager = make_manager("data", file_path=str(path))
    manager.context.buffer.insert_char(">")

    run_command(manager, "wq")

    assert path.read_text(encoding="utf-8") == ">data"
    assert manager.context.ui.quit_requested is True


def test_write_quit_does_not_quit_on_save_error() -> None:
    manager = make_manager("data")
    manager.context.buffer.insert_char(">")

    run_command(manager, "wq")

    assert manager.context.ui.quit_requested is False
    assert manager.context.ui.status.startswith("Error saving file")


def test_bare_number_moves_to_line() -> None:
    manager = make_manager("a\nb\nc")

    run_command(manager, "3")
    assert manager.context.buffer.cursor == (2, 0)

    run_command(manager, "9")
    assert manager.context.ui.status == "Invalid line number"
    assert manager.context.buffer.cursor == (2, 0)


def test_superscript_digit_is_an_unknown_command() -> None:
    manager = make_manager("a\nb")

    run_command(manager, "²")

    assert manager.context.ui.status == "Unknown command: ²"
    assert manager.context.buffer.cursor == (0, 0)
    assert manager.mode_name == "normal"


def test_unknown_and_empty_commands() -> None:
    manager = make_manager()

    run_command(manager, "frobnicate now")
    assert manager.context.ui.status == "Unknown command: frobnicate"

    result = run_command(manager, "")
    assert result is not None and result.status == "command_empty"
    assert manager.context.ui.status == ""
    assert manager.mode_name == "normal"


def test_chat_command_toggles_panel() -> None:
    manager = make_manager()

    run_command(manager, "chat")

    assert manager.context.ui.chat_visible is True
    assert manager.context.ui.focus == "chat_input"
    assert manager.mode_name == "normal"


def test_debugkeys_toggles_and_reports() -> None:
    manager = make_manager()

    run_command(manager, "debugkeys")
    assert manager.context.ui.debug_keys is True
    assert manager.context.ui.status == "Key debugging enabled"

    run_command(manager, "debugkeys")
    assert manager.context.ui.debug_keys is False
    assert manager.context.ui.status == "Key debugging disabled"


def test_copy_command_validates_arguments() -> None:
    manager = make_manager()

    run_command(manager, "copy")
    assert manager.context.ui.status == "Usage: copy <response-number>"

    run_command(manager, "copy two")
    assert manager.context.ui.status == "Invalid response number"

    run_command(manager, "copy 0")
    assert manager.context.ui.status == "Invalid response number"

    run_command(manager, "copy 1")
    assert manager.context.ui.status == "AI response #1 not found"


def test_copy_command_counts_only_completed_responses() -> None:
    manager = make_manager()
    chat = manager.context.chat
    chat.add_user("first")
    first = chat.add_placeholder()
    chat.add_user("second")
    chat.add_placeholder()
    chat.resolve(first.request_id, "reply one")

    run_command(manager, "copy 1")
    assert manager.context.registers.clipboard == "reply one"
    assert manager.context.ui.status == (
        "AI response #1 copied. Press Ctrl+V in insert mode to paste."
    )

    run_command(manager, "copy 2")
    assert manager.context.ui.status == "AI response #2 not found"


def test_edit_opens_file_and_resets_state(tmp_path) -> None:
    other = tmp_path / "other.txt"
    other.write_text("alpha\nbeta\n", encoding="utf-8")
    manager = make_manager("x\ny\nz")
    manager.context.buffer.set_cursor(2, 0)

    run_command(manager, f"e {other}")

    buffer = manager.context.buffer
    assert buffer.lines == ("alpha", "beta")
    assert buffer.cursor == (0, 0)
    assert buffer.undo() is False
    assert manager.context.viewport.row_offset == 0
    assert manager.context.ui.status == '"other.txt" 2L'


def test_edit_refuses_dirty_buffer_unless_forced(tmp_path) -> None:
    other = tmp_path / "other.txt"
    other.write_text("fresh", encoding="utf-8")
    manager = make_manager("old")
    manager.context.buffer.insert_char("!")

    run_command(manager, f"e {other}")
    assert manager.context.buffer.lines == ("!old",)
    assert manager.context.ui.status.startswith("No write since last change")

    run_command(manager, f"e! {other}")
    assert manager.context.buffer.lines == ("fresh",)


def test_edit_directory_reports_error(tmp_path) -> None:
    manager = make_manager("keep")

    run_command(manager, f"e {tmp_path}")

    assert manager.context.buffer.lines == ("keep",)
    assert manager.context.ui.status.startswith("Error opening file:")
