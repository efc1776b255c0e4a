"""Helper utilities and the shared base for keymap-driven modes."""

from __future__ import annotations

from typing import List, Mapping, MutableMapping, cast

from air_editor.keymaps import KeymapResolver, KeyStroke, ResolutionMatch
from air_editor.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult


def key_to_token(key: KeyInput) -> str:
    return KeyStroke(key.key, modifiers=key.modifiers).token


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def keymap_flag_context(context: ModeContext) -> Mapping[str, bool]:
    flags = context.extras.setdefault("keymap_flags", {})
    return cast(Mapping[str, bool], flags)


def update_flag(context: ModeContext, key: str, value: bool) -> None:
    flags = cast(
        MutableMapping[str, bool], context.extras.setdefault("keymap_flags", {})
    )
    flags[key] = value


def execute_match(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    with telemetry.span(
        "keymaps::execute",
        component="keymaps",
        metadata={"binding_id": match.binding.id, "action": match.action.id},
    ):
        outcome = match.action(context, match)

    if isinstance(outcome, ModeResult):
        return outcome
    return ModeResult(consumed=True)


class KeymapMode(Mode):
    """Resolves keys against this mode's bindings before falling back.

    A key that resolves to a binding prefix (the first ``g`` of ``g g``) is
    held in a one-slot pending memory. When the next key does not continue
    the sequence the memory is dropped and that key is handled on its own.
    """

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"air_editor.modes.{self.name}")
        self._resolver = require_keymap_resolver(context)
        self._flags = keymap_flag_context(context)
        self._pending: List[str] = []

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def reset_pending(self) -> None:
        self._pending.clear()

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        token = key_to_token(key)
        had_pending = bool(self._pending)
        self._pending.append(token)
        result = self._resolver.resolve(
            self.name, tuple(self._pending), context=self._flags
        )

        if result.status == "match" and result.match:
            self._pending.clear()
            return execute_match(self.context, result.match)

        if result.status == "pending":
            return ModeResult(consumed=True, status="pending")

        self._pending.clear()
        if had_pending:
            return self.handle_key(key)
        return self.handle_unbound(key)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        """Called for keys with no binding in this mode."""

        del key
        return ModeResult(consumed=False, status="miss")


__all__ = [
    "KeymapMode",
    "execute_match",
    "key_to_token",
    "require_keymap_resolver",
    "keymap_flag_context",
    "update_flag",
]
