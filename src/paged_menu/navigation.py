"""Menu contexts and the stack used to return from sub-menus."""

from __future__ import annotations

from dataclasses import dataclass, field

from .entries import Entry
from .errors import StackEmpty


@dataclass
class MenuContext:
    """Title, entries and current page of one menu level."""

    title: str
    entries: list[Entry] = field(default_factory=list)
    page: int = 0


class NavigationStack:
    """LIFO of parent menu contexts.

    Two ancestors may share a title; nothing here is keyed by it.
    """

    def __init__(self) -> None:
        self._items: list[MenuContext] = []

    def push(self, context: MenuContext) -> None:
        self._items.append(context)

    def pop(self) -> MenuContext:
        """Remove and return the most recently pushed context.

        Raises:
            StackEmpty: If nothing was pushed.
        """
        if not self._items:
            raise StackEmpty("pop from empty navigation stack")
        return self._items.pop()

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)
