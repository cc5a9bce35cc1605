"""Entry model: normalize menu input into a uniform list of entries.

A menu can be built from three kinds of input:
- a single label: ``"Install"``
- a flat list of labels: ``["Alpha", "Bravo"]``
- a label -> action mapping, possibly nested::

    {
        "Reboot": "shutdown -r now",    # Command
        "Editions": "@list-editions",   # InvokeThenNested
        "Tools": {"Shell": "bash"},     # NestedMenu
        "Done": None,                   # None
    }

The kind of input is decided once by classify_source(); normalize() then
turns it into Entry records.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import UnsupportedInputKind

# Marks a mapping value as "run this, then show its output as a sub-menu"
INVOKE_MARKER = "@"


class SourceKind(str, Enum):
    """Shape of the entries argument."""

    LABEL = "label"
    LABELS = "labels"
    MAPPING = "mapping"

    def __str__(self) -> str:
        return self.value


class ActionKind(str, Enum):
    """What confirming an entry does."""

    NONE = "none"
    COMMAND = "command"
    NESTED = "nested"
    INVOKE = "invoke"

    def __str__(self) -> str:
        return self.value

    @property
    def opens_menu(self) -> bool:
        """Whether confirming this action leads to a sub-menu."""
        return self in (ActionKind.NESTED, ActionKind.INVOKE)


@dataclass
class Entry:
    """One selectable row.

    ``kind`` and ``payload`` are set at construction and never change;
    ``selected`` is the only field mutated while a menu is shown.

    Attributes:
        label: Display text (non-empty).
        kind: Action kind.
        payload: Command string for COMMAND/INVOKE, nested source for NESTED,
            None otherwise.
        selected: Checkbox state in multi-select mode.
    """

    label: str
    kind: ActionKind = ActionKind.NONE
    payload: Any = None
    selected: bool = False

    @property
    def command(self) -> str | None:
        if self.kind in (ActionKind.COMMAND, ActionKind.INVOKE):
            return self.payload
        return None

    @property
    def opens_menu(self) -> bool:
        return self.kind.opens_menu


def classify_source(source: Any) -> SourceKind:
    """Decide which kind of input ``source`` is.

    Raises:
        UnsupportedInputKind: If source is not a str, list/tuple or mapping.
    """
    if isinstance(source, str):
        return SourceKind.LABEL
    if isinstance(source, Mapping):
        return SourceKind.MAPPING
    if isinstance(source, (list, tuple)):
        return SourceKind.LABELS
    raise UnsupportedInputKind(
        f"Unsupported entries type: {type(source).__name__} "
        "(expected a label, a list of labels, or a mapping)"
    )


def classify_action(value: Any) -> tuple[ActionKind, Any]:
    """Classify a mapping value into an (ActionKind, payload) pair."""
    if value is None or value == "":
        return ActionKind.NONE, None
    if isinstance(value, (Mapping, list, tuple)):
        return ActionKind.NESTED, value
    if isinstance(value, str):
        if value.startswith(INVOKE_MARKER):
            return ActionKind.INVOKE, value[len(INVOKE_MARKER):]
        return ActionKind.COMMAND, value
    raise UnsupportedInputKind(
        f"Unsupported action type: {type(value).__name__} "
        "(expected a command string, a nested menu, or nothing)"
    )


def _check_label(label: Any) -> str:
    if not isinstance(label, str):
        raise UnsupportedInputKind(f"Menu labels must be strings, got {type(label).__name__}")
    if not label:
        raise UnsupportedInputKind("Menu labels must not be empty")
    return label


def normalize(source: Any, sort: bool = False) -> list[Entry]:
    """Turn menu input into an ordered list of entries.

    Args:
        source: A label, a list of labels, or a label -> action mapping.
        sort: Order entries by label (case-sensitive, stable).

    Returns:
        New Entry objects, in input order unless sort is set.

    Raises:
        UnsupportedInputKind: If source (or any label/value in it) is malformed.
    """
    kind = classify_source(source)

    if kind is SourceKind.LABEL:
        entries = [Entry(_check_label(source))]
    elif kind is SourceKind.LABELS:
        entries = [Entry(_check_label(label)) for label in source]
    else:
        entries = []
        for label, value in source.items():
            action, payload = classify_action(value)
            entries.append(Entry(_check_label(label), action, payload))

    if sort:
        entries.sort(key=lambda entry: entry.label)
    return entries
