"""Mode manager, editor modes, and chat focus handlers."""

from .base_mode import (
    COMMAND,
    FOCUS_CHAT_INPUT,
    FOCUS_CHAT_VIEW,
    FOCUS_EDITOR,
    INSERT,
    NORMAL,
    SEARCH,
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
    SearchState,
    UIState,
)
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .command_mode import CommandMode, SearchMode
from .chat_focus import ChatInputHandler, ChatViewHandler
from .mode_manager import GLOBAL_LAYER, ModeManager

__all__ = [
    "COMMAND",
    "FOCUS_CHAT_INPUT",
    "FOCUS_CHAT_VIEW",
    "FOCUS_EDITOR",
    "GLOBAL_LAYER",
    "INSERT",
    "NORMAL",
    "SEARCH",
    "ChatInputHandler",
    "ChatViewHandler",
    "CommandMode",
    "InsertMode",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeManager",
    "ModeResult",
    "NormalMode",
    "SearchMode",
    "SearchState",
    "UIState",
]
