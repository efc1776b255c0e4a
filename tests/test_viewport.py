from __future__ import annotations

from air_editor.buffer import Viewport, expand_tabs, render_column


def make_viewport(width: int = 10, height: int = 3) -> Viewport:
    viewport = Viewport()
    viewport.resize(width, height)
    return viewport


def test_render_column_expands_tabs_to_next_stop() -> None:
    assert render_column("\tab", 0) == 0
    assert render_column("\tab", 1) == 4
    assert render_column("a\tb", 2) == 4
    assert render_column("abcd\tx", 5) == 8


def test_render_column_honours_custom_tab_stop() -> None:
    assert render_column("\tx", 1, tab_stop=8) == 8


def test_expand_tabs_uses_running_column() -> None:
    assert expand_tabs("a\tb") == "a   b"
    assert expand_tabs("\t\t") == " " * 8


def test_scroll_follows_cursor_down_and_back_up() -> None:
    viewport = make_viewport(height=3)
    lines = [str(n) for n in range(10)]

    viewport.scroll_to_cursor(lines, 0, 5)
    assert viewport.row_offset == 3

    viewport.scroll_to_cursor(lines, 0, 1)
    assert viewport.row_offset == 1


def test_scroll_tracks_rendered_column() -> None:
    viewport = make_viewport(width=4)
    lines = ["\t\tabc"]

    viewport.scroll_to_cursor(lines, 2, 0)

    assert viewport.rx == 8
    assert viewport.col_offset == 5


def test_zero_sized_viewport_only_updates_rx() -> None:
    viewport = Viewport()

    viewport.scroll_to_cursor(["\tx"], 1, 0)

    assert viewport.rx == 4
    assert viewport.row_offset == 0
    assert viewport.col_offset == 0


def test_render_draws_tildes_past_end() -> None:
    viewport = make_viewport(height=3)

    rows = viewport.render(["only"], 0, 0)

    assert rows == ["only", "~", "~"]


def test_render_escapes_markup() -> None:
    viewport = make_viewport(width=20, height=1)

    rows = viewport.render(["[bold]x"], 0, 0)

    assert rows == ["\\[bold]x"]


def test_render_cursor_cell_and_trailing_cursor() -> None:
    viewport = make_viewport(height=1)

    assert viewport.render(["abc"], 1, 0, draw_cursor=True) == [
        "a[reverse]b[/reverse]c"
    ]
    assert viewport.render(["abc"], 3, 0, draw_cursor=True) == [
        "abc[reverse] [/reverse]"
    ]


def test_reset_clears_offsets() -> None:
    viewport = make_viewport(width=2, height=1)
    viewport.scroll_to_cursor(["a", "bcdef"], 4, 1)

    viewport.reset()

    assert (viewport.row_offset, viewport.col_offset, viewport.rx) == (0, 0, 0)
