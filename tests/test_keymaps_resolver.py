from __future__ import annotations

from air_editor.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
)
from air_editor.keymaps.defaults import load_default_keymaps


def make_resolver() -> tuple[KeymapRegistry, KeymapResolver]:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    return registry, KeymapResolver(registry)


def action_for(resolver: KeymapResolver, mode: str, *tokens: str, **flags: bool) -> str:
    result = resolver.resolve(mode, tokens, context=flags)
    assert result.status == "match", result
    assert result.match is not None
    return result.match.action.id


def test_gg_is_pending_then_goes_to_top() -> None:
    _, resolver = make_resolver()

    pending = resolver.resolve("normal", ("g",))

    assert pending.status == "pending"
    assert pending.next_expected == ("g",)
    assert action_for(resolver, "normal", "g", "g") == "motion.goto_top"
    assert resolver.resolve("normal", ("g", "x")).status == "miss"


def test_search_cycle_needs_active_search() -> None:
    _, resolver = make_resolver()

    assert resolver.resolve("normal", ("n",)).status == "miss"
    assert action_for(resolver, "normal", "n", search_active=True) == "search.next"
    assert action_for(resolver, "normal", "N", search_active=True) == "search.previous"


def test_ctrl_c_depends_on_layer() -> None:
    _, resolver = make_resolver()

    assert action_for(resolver, "global", "ctrl+c") == "chat.copy_last"
    assert action_for(resolver, "chat_view", "ctrl+c") == "chat.copy_transcript"
    assert resolver.resolve("chat_input", ("ctrl+c",)).status == "miss"


def test_printable_keys_are_unbound_in_text_layers() -> None:
    _, resolver = make_resolver()

    for mode in ("insert", "command", "search", "chat_input"):
        assert resolver.resolve(mode, ("i",)).status == "miss"
    assert action_for(resolver, "insert", "ctrl+v") == "edit.paste"


def test_gated_binding_wins_when_its_flag_holds() -> None:
    registry, resolver = make_resolver()
    assert action_for(resolver, "normal", "x") == "edit.delete_char"

    registry.register_action(ActionRef(id="core.refuse", handler=lambda *args: None))
    registry.register_binding(
        Binding(
            id="normal.x_read_only",
            mode="normal",
            sequence=KeySequence.from_strings("x"),
            action_id="core.refuse",
            when=("read_only",),
        )
    )

    assert action_for(resolver, "normal", "x") == "edit.delete_char"
    assert action_for(resolver, "normal", "x", read_only=True) == "core.refuse"


def test_unknown_layer_misses() -> None:
    _, resolver = make_resolver()

    assert resolver.resolve("replace", ("x",)).status == "miss"
