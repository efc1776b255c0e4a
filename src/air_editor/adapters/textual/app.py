"""Executable Textual app hosting the editor and its chat panel."""

from __future__ import annotations

import argparse
import sys
from typing import Any, Callable, Optional, Sequence

from rich.markup import escape
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Static

from air_editor import __version__
from air_editor.config import EditorConfig
from air_editor.editor import build_editor
from air_editor.errors import BufferIOError
from air_editor.modes.mode_manager import ModeManager
from air_editor.runtime import telemetry

from .controller import EditorAdapter, TextualUIHooks


class EditorView(Static, can_focus=True):
    """The text area. It keeps Textual focus for the whole session.

    Keys are handed to ``route_key`` here, before they bubble to the app, so a
    key the editor consumes never reaches an app-level binding.
    """

    def __init__(self, route_key: Callable[[events.Key], bool], **kwargs: Any) -> None:
        super().__init__("", **kwargs)
        self._route_key = route_key

    def on_key(self, event: events.Key) -> None:
        if self._route_key(event):
            event.prevent_default()
            event.stop()


class AirEditorApp(App[None]):
    """Editor pane, optional chat side panel, status bar and command line."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #main {
        height: 1fr;
    }

    #editor-view {
        width: 1fr;
        height: 1fr;
        overflow: hidden;
    }

    #chat-panel {
        border-left: solid $accent;
        display: none;
    }

    #chat-view {
        height: 1fr;
        padding: 0 1;
    }

    #chat-input {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
    }

    #status-line {
        height: 1;
        background: $surface-darken-1;
    }

    #command-line {
        height: 1;
    }
    """

    ENABLE_COMMAND_PALETTE = False
    BINDINGS = [Binding("ctrl+q", "quit", "Quit", priority=True)]

    def __init__(self, manager: ModeManager, *, config: Optional[EditorConfig] = None) -> None:
        super().__init__()
        self.manager = manager
        self.config = config or manager.context.config
        self.adapter: EditorAdapter | None = None
        self._editor_size = (0, 0)

    def compose(self) -> ComposeResult:
        with Horizontal(id="main"):
            yield EditorView(self._route_key, id="editor-view")
            with Vertical(id="chat-panel"):
                yield Static("", id="chat-view")
                yield Static("", id="chat-input")
        yield Static("", id="status-line")
        yield Static("", id="command-line")

    def on_mount(self) -> None:
        self.query_one("#chat-panel").styles.width = self.config.chat_panel_width
        hooks = TextualUIHooks(
            update_editor=self._update_editor,
            update_status=self._update_status,
            show_command=self._show_command,
            update_chat=self._update_chat,
            set_chat_visible=self._set_chat_visible,
            handle_event=self._handle_event,
        )
        self.adapter = EditorAdapter(self.manager, hooks)
        bridge = self.manager.context.bridge
        if bridge is not None:
            bridge.spawn = self._spawn_worker
            bridge.updates.on_post = self._wake_from_worker
        self.query_one(EditorView).focus()
        self.set_interval(self.config.tick_interval, self._tick)

    def _spawn_worker(self, work: Callable[[], None], name: str) -> None:
        self.run_worker(work, name=name, group="chat", thread=True, exit_on_error=False)

    def _wake_from_worker(self) -> None:
        # Posted from a chat worker thread.
        self.call_from_thread(self._tick)

    def _tick(self) -> None:
        adapter = self.adapter
        if adapter is None:
            return
        self._sync_size(adapter)
        adapter.tick()
        adapter.refresh()
        if adapter.quit_requested:
            self.exit()

    def _sync_size(self, adapter: EditorAdapter) -> None:
        region = self.query_one(EditorView).content_region
        size = (region.width, region.height)
        if size != self._editor_size:
            self._editor_size = size
            adapter.resize(*size)

    def _route_key(self, event: events.Key) -> bool:
        adapter = self.adapter
        if adapter is None:
            return False
        self._sync_size(adapter)
        result = adapter.handle_textual_key(event.key, character=event.character)
        if adapter.quit_requested:
            self.exit()
        return result.consumed

    def _update_editor(self, markup: str) -> None:
        self.query_one("#editor-view", Static).update(markup)

    def _update_status(self, markup: str) -> None:
        self.query_one("#status-line", Static).update(markup)

    def _show_command(self, command: str) -> None:
        self.query_one("#command-line", Static).update(escape(command))

    def _update_chat(self, transcript: str, input_text: str) -> None:
        scroll = self.manager.context.ui.chat_scroll
        lines = transcript.split("\n") if transcript else []
        if scroll:
            lines = lines[: max(0, len(lines) - scroll)]
        self.query_one("#chat-view", Static).update("\n".join(lines))
        self.query_one("#chat-input", Static).update(f"> {escape(input_text)}")

    def _set_chat_visible(self, visible: bool) -> None:
        self.query_one("#chat-panel").display = visible

    def _handle_event(self, name: str, payload: Any | None) -> None:
        telemetry.record_event(
            f"ui.{name}",
            level="debug",
            data={"payload": payload},
            logger_name="air_editor.adapters.textual",
        )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="air",
        description="Modal terminal text editor with an AI chat side panel.",
    )
    parser.add_argument("file", nargs="?", default="", help="File to open or create")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset="production")
    config = EditorConfig.from_env()
    try:
        manager = build_editor(args.file, config=config)
    except BufferIOError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    AirEditorApp(manager, config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual launch
    main()
