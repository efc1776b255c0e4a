"""Registry of editor actions and the key bindings that reach them."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Optional

from air_editor.runtime.telemetry import span

from .models import ActionRef, Binding


class KeymapConflictError(RuntimeError):
    """Raised when a new binding conflicts with existing entries."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns action references and the per-layer binding index."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._mode_index: Dict[str, Dict[str, set[str]]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        """Bumped on every binding change so resolvers rebuild their tries."""

        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        return self._actions[action_id]

    def get_binding(self, binding_id: str) -> Binding:
        return self._bindings[binding_id]

    def register_action(self, action: ActionRef) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )
            if binding.id in self._bindings:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            conflicts = self.detect_conflicts(binding)
            if conflicts:
                handle.add_metadata(
                    "conflicts", ",".join(conflict.id for conflict in conflicts)
                )
                raise KeymapConflictError(binding, conflicts)

            self._bindings[binding.id] = binding
            by_signature = self._mode_index.setdefault(binding.mode, {})
            by_signature.setdefault(binding.key_signature, set()).add(binding.id)
            self._revision += 1
            return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for bucket in self._mode_index.get(mode, {}).values():
            for binding_id in sorted(bucket):
                yield self._bindings[binding_id]

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        """Bindings on the same layer and keys whose ``when`` gates can both hold."""

        conflicts: list[Binding] = []
        for match_id in self._mode_index.get(binding.mode, {}).get(
            binding.key_signature, set()
        ):
            existing = self._bindings[match_id]
            if _contexts_overlap(binding, existing):
                conflicts.append(existing)
        return conflicts


def _contexts_overlap(left: Binding, right: Binding) -> bool:
    left_map = left.when_map
    right_map = right.when_map

    if not left.when and not right.when:
        return True

    for flag, expected in left_map.items():
        if flag in right_map and right_map[flag] != expected:
            return False

    # A gated binding may shadow an ungated one on the same keys.
    if not left.when or not right.when:
        return False

    return left_map == right_map


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
]
