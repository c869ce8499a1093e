"""Keybindings for the inventory window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QWidget


@dataclass(frozen=True, slots=True)
class KeybindSpec:
    """Declarative keybinding specification."""

    id: str
    label: str
    default_sequence: str
    description: str
    in_footer: bool = False


class KeybindConflictError(ValueError):
    """Raised when two keybinds share the same shortcut."""


DEFAULT_KEYBINDS: tuple[KeybindSpec, ...] = (
    KeybindSpec(
        id="app.exit",
        label="Quit",
        default_sequence="Q",
        description="Close wavconvert.",
        in_footer=True,
    ),
    KeybindSpec(
        id="list.next",
        label="Down",
        default_sequence="Down",
        description="Move the highlight down one row.",
    ),
    KeybindSpec(
        id="list.previous",
        label="Up",
        default_sequence="Up",
        description="Move the highlight up one row.",
    ),
    KeybindSpec(
        id="inventory.rescan",
        label="Rescan",
        default_sequence="F5",
        description="Scan the directory again.",
        in_footer=True,
    ),
)


class KeybindRegistry:
    """Resolve keybind specs with overrides and validate conflicts."""

    def __init__(
        self,
        specs: tuple[KeybindSpec, ...] = DEFAULT_KEYBINDS,
        overrides: Mapping[str, str] | None = None,
    ) -> None:
        self._specs = specs
        self._sequences: dict[str, str] = {}
        data = dict(overrides or {})
        for spec in specs:
            if spec.id in self._sequences:
                raise ValueError(f"Duplicate keybind id: {spec.id}")
            raw = data.get(spec.id, spec.default_sequence)
            self._sequences[spec.id] = self._normalize_sequence(raw, spec.id)

        owners: dict[str, str] = {}
        for keybind_id, sequence in self._sequences.items():
            if not sequence:
                continue
            if sequence in owners:
                raise KeybindConflictError(
                    f"Shortcut conflict: {sequence} used by {owners[sequence]} and {keybind_id}"
                )
            owners[sequence] = keybind_id

    @staticmethod
    def _normalize_sequence(raw: str, keybind_id: str) -> str:
        if not isinstance(raw, str):
            raise ValueError(f"Shortcut override for {keybind_id} must be a string")
        text = raw.strip()
        if not text:
            return ""
        sequence = QKeySequence.fromString(text, QKeySequence.SequenceFormat.PortableText)
        if sequence.isEmpty():
            raise ValueError(f"Invalid shortcut sequence for {keybind_id}: {raw}")
        return sequence.toString(QKeySequence.SequenceFormat.PortableText)

    def sequence_for(self, keybind_id: str) -> str:
        if keybind_id not in self._sequences:
            raise KeyError(f"Unknown keybind id: {keybind_id}")
        return self._sequences[keybind_id]

    def footer_hint(self) -> str:
        """Short key reference shown under the list, e.g. `` Quit <q> ``."""
        parts = [
            f"{spec.label} <{self._sequences[spec.id].lower()}>"
            for spec in self._specs
            if spec.in_footer and self._sequences[spec.id]
        ]
        return f" {'  '.join(parts)} "


def create_bound_action(
    *,
    parent: QWidget,
    text: str,
    keybind_id: str,
    registry: KeybindRegistry,
    handler: Callable[[], None],
) -> QAction:
    """Create a QAction wired to a handler and shortcut from the registry."""

    action = QAction(text, parent)
    shortcut = registry.sequence_for(keybind_id)
    if shortcut:
        action.setShortcut(shortcut)
        action.setShortcutContext(Qt.ShortcutContext.WindowShortcut)
    action.triggered.connect(handler)
    return action
