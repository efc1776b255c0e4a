import pytest

from air_editor.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeyStroke,
    KeymapConflictError,
    KeymapRegistry,
    WhenClause,
)
from air_editor.keymaps.defaults import DEFAULT_BINDINGS, load_default_keymaps


def make_registry() -> KeymapRegistry:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    return registry


def layer_map(registry: KeymapRegistry, mode: str) -> dict[str, str]:
    return {
        binding.key_signature: binding.action_id
        for binding in registry.iter_bindings(mode=mode)
    }


def test_defaults_cover_every_layer() -> None:
    registry = make_registry()

    modes = {binding.mode for binding in registry.iter_bindings()}

    assert modes == {
        "global",
        "normal",
        "insert",
        "command",
        "search",
        "chat_input",
        "chat_view",
    }
    assert len(list(registry.iter_bindings())) == len(DEFAULT_BINDINGS)


def test_global_layer_keys() -> None:
    assert layer_map(make_registry(), "global") == {
        "ctrl+s": "file.save",
        "ctrl+z": "history.undo",
        "ctrl+y": "history.redo",
        "ctrl+a": "chat.toggle",
        "ctrl+g": "chat.toggle",
        "F2": "chat.toggle",
        "ctrl+c": "chat.copy_last",
    }


def test_chat_layers_keys() -> None:
    registry = make_registry()

    assert layer_map(registry, "chat_input") == {
        "ENTER": "chat.submit",
        "ESC": "chat.focus_editor",
        "TAB": "chat.focus_view",
    }
    assert layer_map(registry, "chat_view") == {
        "ctrl+c": "chat.copy_transcript",
        "TAB": "chat.focus_input",
        "ESC": "chat.focus_editor",
        "UP": "chat.scroll_up",
        "DOWN": "chat.scroll_down",
    }


def test_command_and_search_lines_submit_on_enter() -> None:
    registry = make_registry()

    assert layer_map(registry, "command") == {
        "ESC": "core.exit_to_normal",
        "ENTER": "command.submit_line",
    }
    assert layer_map(registry, "search")["ENTER"] == "search.submit"


def test_search_cycle_bindings_are_gated() -> None:
    registry = make_registry()

    gated = {
        binding.key_signature: binding.when
        for binding in registry.iter_bindings(mode="normal")
        if binding.when
    }

    assert gated == {
        "n": (WhenClause("search_active"),),
        "N": (WhenClause("search_active"),),
    }


def test_loading_defaults_twice_is_rejected() -> None:
    registry = make_registry()

    with pytest.raises(ValueError):
        load_default_keymaps(registry)


def test_rebinding_taken_key_raises_conflict() -> None:
    registry = make_registry()
    clash = Binding(
        id="normal.delete_line",
        mode="normal",
        sequence=KeySequence.from_strings("x"),
        action_id="edit.backspace",
    )

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(clash)

    assert [b.id for b in excinfo.value.conflicts] == ["normal.delete_char"]


def test_gated_binding_may_share_keys_with_ungated_one() -> None:
    registry = make_registry()
    revision = registry.revision()

    registry.register_binding(
        Binding(
            id="normal.x_read_only",
            mode="normal",
            sequence=KeySequence.from_strings("x"),
            action_id="core.enter_command",
            when=("read_only",),
        )
    )

    assert registry.revision() == revision + 1
    assert registry.get_binding("normal.x_read_only").when == (WhenClause("read_only"),)


def test_binding_requires_registered_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(
            Binding(
                id="normal.q",
                mode="normal",
                sequence=KeySequence.from_strings("q"),
                action_id="macro.record",
            )
        )


def test_action_ref_requires_callable() -> None:
    with pytest.raises(TypeError):
        ActionRef(id="core.bad", handler="not callable")  # type: ignore[arg-type]


def test_key_stroke_parsing() -> None:
    assert KeyStroke.parse("ctrl+v") == KeyStroke("v", modifiers=("ctrl",))
    assert KeyStroke.parse("+") == KeyStroke("+")
    assert KeyStroke.parse("shift+ctrl+x").token == "ctrl+shift+x"
    assert KeySequence.from_strings("g", "g").tokens == ("g", "g")


def test_when_clause_negation() -> None:
    clause = WhenClause.parse("!read_only")

    assert clause == WhenClause("read_only", expected=False)
    assert clause.evaluate({}) is True
    assert clause.evaluate({"read_only": True}) is False
