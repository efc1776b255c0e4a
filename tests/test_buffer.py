from __future__ import annotations

import random

import pytest

from air_editor.buffer import (
    Buffer,
    BufferDocument,
    BufferValidationError,
    UndoHistory,
    UNNAMED,
)
from air_editor.errors import BufferIOError, ReadOnlyBufferError


def make_buffer(text: str = "", **kwargs) -> Buffer:
    return Buffer.from_text(text, **kwargs)


def test_new_buffer_has_one_empty_line() -> None:
    buffer = Buffer()

    assert buffer.lines == ("",)
    assert buffer.cursor == (0, 0)
    assert buffer.dirty is False
    assert buffer.name == UNNAMED


def test_load_missing_file_starts_empty(tmp_path) -> None:
    path = tmp_path / "new.txt"

    buffer = Buffer.open(str(path))

    assert buffer.lines == ("",)
    assert buffer.name == "new.txt"
    assert not path.exists()


def test_load_drops_single_trailing_newline(tmp_path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("alpha\nbeta\n", encoding="utf-8")

    buffer = Buffer.open(str(path))

    assert buffer.lines == ("alpha", "beta")
    assert buffer.document.trailing_newline is True


def test_save_without_edits_is_byte_identical(tmp_path) -> None:
    for content in ("a\nb\n", "a\nb", "a\n\n", "\n", ""):
        path = tmp_path / "round.txt"
        path.write_bytes(content.encode("utf-8"))

        buffer = Buffer.open(str(path))
        buffer.save()

        assert path.read_bytes() == content.encode("utf-8")


def test_load_preserves_carriage_returns(tmp_path) -> None:
    path = tmp_path / "dos.txt"
    path.write_bytes(b"one\r\ntwo\r\n")

    buffer = Buffer.open(str(path))
    buffer.save()

    assert buffer.lines == ("one\r", "two\r")
    assert path.read_bytes() == b"one\r\ntwo\r\n"


def test_load_directory_raises_buffer_io_error(tmp_path) -> None:
    with pytest.raises(BufferIOError):
        Buffer.open(str(tmp_path))


def test_save_unnamed_buffer_fails() -> None:
    buffer = make_buffer("text")

    with pytest.raises(BufferIOError, match="no file path specified"):
        buffer.save()


def test_save_as_sets_path_and_clears_dirty(tmp_path) -> None:
    buffer = make_buffer("hello")
    buffer.insert_char("!")
    target = tmp_path / "out.txt"

    buffer.save(str(target))

    assert buffer.name == "out.txt"
    assert buffer.dirty is False
    assert target.read_text(encoding="utf-8") == "!hello"


def test_insert_char_and_newline_split_line() -> None:
    buffer = make_buffer("abcd")
    buffer.set_cursor(0, 2)

    buffer.insert_char("X")
    buffer.insert_newline()

    assert buffer.lines == ("abX", "cd")
    assert buffer.cursor == (1, 0)
    assert buffer.dirty is True


def test_insert_text_multiline_leaves_tail_on_first_row() -> None:
    buffer = make_buffer("head tail\nnext")
    buffer.set_cursor(0, 5)

    buffer.insert_text("one\ntwo\nthree ")

    assert buffer.lines == ("head onetail", "two", "three ", "next")
    assert buffer.cursor == (2, 6)


def test_backspace_joins_lines_and_is_noop_at_origin() -> None:
    buffer = make_buffer("ab\ncd")

    assert buffer.backspace() is False
    assert buffer.undo_history.undo_depth == 0

    buffer.set_cursor(1, 0)
    assert buffer.backspace() is True
    assert buffer.lines == ("abcd",)
    assert buffer.cursor == (0, 2)


def test_delete_char_at_end_of_line_is_noop() -> None:
    buffer = make_buffer("ab")
    buffer.set_cursor(0, 2)

    assert buffer.delete_char() is False
    assert buffer.undo_history.undo_depth == 0

    buffer.set_cursor(0, 0)
    assert buffer.delete_char() is True
    assert buffer.lines == ("b",)


def test_horizontal_motion_clamps_without_wrapping() -> None:
    buffer = make_buffer("ab\ncd")

    buffer.move_horizontal(-1)
    assert buffer.cursor == (0, 0)

    buffer.move_horizontal(5)
    assert buffer.cursor == (0, 2)


def test_vertical_motion_clamps_column_to_shorter_line() -> None:
    buffer = make_buffer("long line\nab")
    buffer.set_cursor(0, 8)

    buffer.move_vertical(1)
    assert buffer.cursor == (1, 2)

    buffer.move_vertical(10)
    assert buffer.cursor == (1, 2)


def test_word_motion_crosses_lines() -> None:
    buffer = make_buffer("foo, bar\n  baz")

    buffer.move_word_forward()
    assert buffer.cursor == (0, 5)
    buffer.move_word_forward()
    assert buffer.cursor == (1, 2)

    buffer.move_word_backward()
    assert buffer.cursor == (0, 5)
    buffer.move_word_backward()
    assert buffer.cursor == (0, 0)


def test_word_forward_stops_at_end_of_last_line() -> None:
    buffer = make_buffer("only")

    buffer.move_word_forward()

    assert buffer.cursor == (0, 4)


def test_goto_line_is_one_indexed() -> None:
    buffer = make_buffer("a\nb\nc")

    assert buffer.goto_line(2) is True
    assert buffer.cursor == (1, 0)
    assert buffer.goto_line(0) is False
    assert buffer.goto_line(4) is False
    assert buffer.cursor == (1, 0)


def test_goto_top_and_bottom() -> None:
    buffer = make_buffer("a\nbb\nccc")
    buffer.set_cursor(1, 1)

    buffer.goto_bottom()
    assert buffer.cursor == (2, 0)
    buffer.goto_top()
    assert buffer.cursor == (0, 0)


def test_set_cursor_rejects_out_of_range() -> None:
    buffer = make_buffer("ab")

    with pytest.raises(BufferValidationError):
        buffer.set_cursor(0, 3)


def test_undo_restores_content_and_clamps_cursor() -> None:
    buffer = make_buffer("ab")
    buffer.set_cursor(0, 2)
    buffer.insert_newline()
    buffer.insert_char("c")

    assert buffer.undo() is True
    assert buffer.lines == ("ab", "")
    assert buffer.undo() is True
    assert buffer.lines == ("ab",)
    assert buffer.cursor == (0, 0)
    assert buffer.dirty is True
    assert buffer.undo() is False


def test_redo_reapplies_and_new_edit_clears_redo() -> None:
    buffer = make_buffer("")
    buffer.insert_char("a")
    buffer.undo()

    assert buffer.redo() is True
    assert buffer.lines == ("a",)

    buffer.undo()
    buffer.insert_char("b")
    assert buffer.redo() is False
    assert buffer.lines == ("b",)


def test_undo_history_evicts_oldest_past_limit() -> None:
    history = UndoHistory(limit=2)
    history.push(["one"])
    history.push(["two"])
    history.push(["three"])

    assert history.undo_depth == 2
    assert history.oldest_undo() == ["two"]
    assert history.peek_undo() == ["three"]
    assert history.can_undo() is True
    assert history.can_redo() is False


def test_undo_history_rejects_non_positive_limit() -> None:
    with pytest.raises(ValueError):
        UndoHistory(limit=0)


def test_undo_snapshot_is_a_copy() -> None:
    history = UndoHistory()
    lines = ["a"]
    history.push(lines)
    lines.append("b")

    assert history.undo(["current"]) == ["a"]
    assert history.redo_depth == 1


def test_read_only_buffer_refuses_edits() -> None:
    buffer = Buffer(document=BufferDocument.from_text("locked"))
    buffer.document.read_only = True

    with pytest.raises(ReadOnlyBufferError):
        buffer.insert_char("x")
    assert buffer.lines == ("locked",)
    assert buffer.undo_history.undo_depth == 0


def test_load_replaces_document_and_resets_history(tmp_path) -> None:
    other = tmp_path / "other.txt"
    other.write_text("fresh\n", encoding="utf-8")
    buffer = make_buffer("old\ntext")
    buffer.set_cursor(1, 2)
    buffer.insert_char("!")

    buffer.load(str(other))

    assert buffer.lines == ("fresh",)
    assert buffer.cursor == (0, 0)
    assert buffer.dirty is False
    assert buffer.undo() is False


def test_mirror_reports_state() -> None:
    buffer = make_buffer("a\nb", file_path="/tmp/demo.txt")
    buffer.set_cursor(1, 1)

    mirror = buffer.mirror(attributes={"mode": "normal"})

    assert mirror.text == "a\nb"
    assert mirror.cursor == (1, 1)
    assert mirror.name == "demo.txt"
    assert mirror.attributes == {"mode": "normal"}


def _random_edit(buffer: Buffer, rng: random.Random) -> None:
    choice = rng.randrange(12)
    if choice < 3:
        buffer.insert_char(rng.choice("ab \t"))
    elif choice == 3:
        buffer.insert_newline()
    elif choice == 4:
        buffer.insert_text(rng.choice(["x\ny", "\n", "zz", "p\n\nq"]))
    elif choice == 5:
        buffer.backspace()
    elif choice == 6:
        buffer.delete_char()
    elif choice == 7:
        buffer.move_horizontal(rng.choice([-3, -1, 1, 3]))
    elif choice == 8:
        buffer.move_vertical(rng.choice([-2, -1, 1, 2]))
    elif choice == 9:
        rng.choice([buffer.move_word_forward, buffer.move_word_backward])()
    elif choice == 10:
        buffer.undo()
    else:
        buffer.redo()


@pytest.mark.parametrize("seed", range(8))
def test_random_edits_keep_cursor_in_bounds(seed: int) -> None:
    rng = random.Random(seed)
    buffer = make_buffer(rng.choice(["", "one two", "a\n\tb\nc d"]))

    for _ in range(400):
        _random_edit(buffer, rng)

        lines = buffer.lines
        row, col = buffer.cursor
        assert len(lines) >= 1
        assert 0 <= row < len(lines)
        assert 0 <= col <= len(lines[row])
