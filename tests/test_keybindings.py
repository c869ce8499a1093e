"""Tests for keybinding registry behavior."""

import pytest

from wavconvert.ui.keybindings import (
    DEFAULT_KEYBINDS,
    KeybindConflictError,
    KeybindRegistry,
    KeybindSpec,
)


def _specs() -> tuple[KeybindSpec, ...]:
    return (
        KeybindSpec(id="a.one", label="One", default_sequence="Ctrl+1",
                    description="First action", in_footer=True),
        KeybindSpec(id="a.two", label="Two", default_sequence="Ctrl+2",
                    description="Second action"),
    )


def test_registry_uses_defaults_when_no_overrides() -> None:
    registry = KeybindRegistry(_specs())
    assert registry.sequence_for("a.one") == "Ctrl+1"
    assert registry.sequence_for("a.two") == "Ctrl+2"


def test_registry_applies_override() -> None:
    registry = KeybindRegistry(_specs(), {"a.two": "Ctrl+Shift+2"})
    assert registry.sequence_for("a.two") == "Ctrl+Shift+2"


def test_registry_rejects_non_string_sequence_override() -> None:
    with pytest.raises(ValueError):
        KeybindRegistry(_specs(), {"a.one": 42})  # type: ignore[dict-item]


def test_registry_detects_conflict() -> None:
    with pytest.raises(KeybindConflictError):
        KeybindRegistry(_specs(), {"a.two": "Ctrl+1"})


def test_registry_rejects_duplicate_ids() -> None:
    specs = _specs() + (_specs()[0],)
    with pytest.raises(ValueError):
        KeybindRegistry(specs)


def test_registry_unknown_id() -> None:
    with pytest.raises(KeyError):
        KeybindRegistry(_specs()).sequence_for("missing")


def test_empty_override_unbinds() -> None:
    registry = KeybindRegistry(_specs(), {"a.one": ""})
    assert registry.sequence_for("a.one") == ""
    assert registry.footer_hint() == "  "


def test_default_bindings() -> None:
    registry = KeybindRegistry(DEFAULT_KEYBINDS)
    assert registry.sequence_for("app.exit") == "Q"
    assert registry.sequence_for("list.next") == "Down"
    assert registry.sequence_for("list.previous") == "Up"
    assert registry.sequence_for("inventory.rescan") == "F5"


def test_default_footer_hint() -> None:
    assert KeybindRegistry().footer_hint() == " Quit <q>  Rescan <f5> "
