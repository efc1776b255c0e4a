"""Mode manager coordinating focus, the global layer, and the active mode."""

from __future__ import annotations

from typing import Dict, Optional, Type

from air_editor.keymaps import KeymapRegistry, KeymapResolver
from air_editor.runtime import telemetry

from .base_mode import FOCUS_EDITOR, KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import execute_match, key_to_token, update_flag

GLOBAL_LAYER = "global"


class ModeManager:
    """Owns the active mode, handles transitions, and dispatches key events.

    While a chat sub-component holds focus, its handler gets every key and
    nothing else runs. Otherwise the ``global`` keymap layer (save, undo,
    redo, chat toggle, copy) is tried first, then the active editor mode.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._focus_handlers: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.logger = telemetry.get_logger("air_editor.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="air_editor.keymaps"
        )
        if load_defaults and keymap_registry is None:
            from air_editor.keymaps.defaults import load_default_keymaps

            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="air_editor.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self.context.extras.setdefault("keymap_flags", {})
        self.context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def mode_name(self) -> str:
        return self._active or ""

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def register_focus_handler(self, handler_cls: Type[Mode]) -> Mode:
        handler = handler_cls(self.context)
        if handler.name in self._focus_handlers:
            raise ValueError(f"Focus handler '{handler.name}' already registered")
        self._focus_handlers[handler.name] = handler
        return handler

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.record_event(
            "mode.switch",
            data={"mode": name, "previous": previous.name if previous else None},
            logger_name="air_editor.modes",
        )

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        ui = self.context.ui
        ui.status = ""
        ui.last_key = key_to_token(key)
        self._sync_flags()
        with telemetry.span(
            name=f"mode::{mode.name}",
            logger_name="air_editor.modes",
            component=True,
            metadata={"key": ui.last_key, "mode": mode.name, "focus": ui.focus},
        ):
            result = self._dispatch(mode, key)
        return self._after_mode_result(result)

    def _dispatch(self, mode: Mode, key: KeyInput) -> ModeResult:
        focus = self.context.ui.focus
        handler = self._focus_handlers.get(focus) if focus != FOCUS_EDITOR else None
        if handler is not None:
            # The panel owns every key while focused; unconsumed ones are dropped.
            return handler.handle_key(key)

        result = self.keymap_resolver.resolve(
            GLOBAL_LAYER,
            (key_to_token(key),),
            context=self.context.extras["keymap_flags"],  # type: ignore[arg-type]
        )
        if result.status == "match" and result.match:
            mode.reset_pending()
            return execute_match(self.context, result.match)
        return mode.handle_key(key)

    def _after_mode_result(self, result: ModeResult) -> ModeResult:
        if result.switch_to:
            self.switch_mode(result.switch_to)
        if result.message:
            self.context.ui.status = result.message
        return result

    def _sync_flags(self) -> None:
        context = self.context
        update_flag(context, "search_active", bool(context.ui.search.matches))
        update_flag(context, "chat_visible", context.ui.chat_visible)
        update_flag(context, "read_only", context.buffer.document.read_only)
