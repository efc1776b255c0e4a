"""Wire a buffer, chat bridge, and every mode into a ready ``ModeManager``."""

from __future__ import annotations

from typing import Optional

from air_editor.buffer import Buffer, Viewport
from air_editor.chat import ChatBridge, ChatClient, ChatHistory, GeminiClient
from air_editor.chat.bridge import Spawner, spawn_thread
from air_editor.config import EditorConfig
from air_editor.modes import (
    ChatInputHandler,
    ChatViewHandler,
    CommandMode,
    InsertMode,
    ModeBus,
    ModeContext,
    ModeManager,
    NormalMode,
    SearchMode,
)
from air_editor.runtime import telemetry


def build_context(
    buffer: Buffer,
    *,
    config: Optional[EditorConfig] = None,
    client: Optional[ChatClient] = None,
    spawn: Spawner = spawn_thread,
) -> ModeContext:
    config = config or EditorConfig()
    history = ChatHistory()
    client = client or GeminiClient(
        model=config.model,
        timeout=config.chat_timeout,
        api_key_env=config.api_key_env,
    )
    return ModeContext(
        buffer=buffer,
        registers=buffer.registers,
        bus=ModeBus(),
        viewport=Viewport(tab_stop=config.tab_stop),
        chat=history,
        bridge=ChatBridge(history, client, spawn=spawn),
        config=config,
    )


def build_manager(context: ModeContext) -> ModeManager:
    """Register every mode and chat focus handler; normal mode starts active."""

    manager = ModeManager(context)
    manager.register_mode(NormalMode)
    manager.register_mode(InsertMode)
    manager.register_mode(CommandMode)
    manager.register_mode(SearchMode)
    manager.register_focus_handler(ChatInputHandler)
    manager.register_focus_handler(ChatViewHandler)
    return manager


def build_editor(
    file_path: str = "",
    *,
    config: Optional[EditorConfig] = None,
    client: Optional[ChatClient] = None,
    spawn: Spawner = spawn_thread,
) -> ModeManager:
    """Open ``file_path`` (missing files start empty) and return the editor.

    Raises ``BufferIOError`` when the file exists but cannot be read.
    """

    config = config or EditorConfig.from_env()
    with telemetry.span(
        "editor::build",
        logger_name="air_editor",
        component="editor",
        metadata={"path": file_path or None},
    ):
        buffer = Buffer.open(file_path, undo_limit=config.undo_limit)
        context = build_context(buffer, config=config, client=client, spawn=spawn)
        return build_manager(context)


__all__ = ["build_context", "build_editor", "build_manager"]
