"""Base classes and the shared state every mode operates on."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

from air_editor.buffer import Buffer, RegisterBank, Viewport
from air_editor.chat import ChatHistory
from air_editor.config import EditorConfig

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from air_editor.chat import ChatBridge

NORMAL = "normal"
INSERT = "insert"
COMMAND = "command"
SEARCH = "search"

FOCUS_EDITOR = "editor"
FOCUS_CHAT_INPUT = "chat_input"
FOCUS_CHAT_VIEW = "chat_view"


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``.

    ``message`` is shown on the status bar; ``status`` is a machine-readable
    outcome code.
    """

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class SearchState:
    query: str = ""
    matches: List[Tuple[int, int]] = field(default_factory=list)
    index: int = -1


@dataclass(slots=True)
class UIState:
    """Editor-wide presentation state owned by the UI loop."""

    status: str = ""
    command_text: str = ""
    chat_input: str = ""
    chat_visible: bool = False
    chat_scroll: int = 0
    focus: str = FOCUS_EDITOR
    debug_keys: bool = False
    last_key: str = ""
    quit_requested: bool = False
    search: SearchState = field(default_factory=SearchState)


@dataclass(slots=True)
class ModeContext:
    """The single aggregate every mode and action mutates."""

    buffer: Buffer
    registers: RegisterBank
    bus: "ModeBus"
    viewport: Viewport = field(default_factory=Viewport)
    chat: ChatHistory = field(default_factory=ChatHistory)
    bridge: Optional["ChatBridge"] = None
    config: EditorConfig = field(default_factory=EditorConfig)
    ui: UIState = field(default_factory=UIState)
    extras: Dict[str, object] = field(default_factory=dict)


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(
        self, previous: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def reset_pending(self) -> None:
        """Forget any half-typed key sequence."""
