"""Input state machine for a menu session.

SessionState holds everything the session mutates: the active context,
its layout, the highlighted row, the navigation stack and the outcome.
InputStateMachine applies one key at a time to that state and reports how
much of the screen needs repainting, without drawing anything itself.

Keyboard controls:
    - Up/Down: Move highlight, crossing page boundaries
    - Home/End: First/last row of the page, then previous/next page
    - Left/Right, PageUp/PageDown: Previous/next page
    - Enter: Confirm (see InputStateMachine.confirm)
    - Esc/Backspace: Back to parent menu, or cancel at the root
    - Space: Toggle checkbox (multi-select only)
    - Insert/Delete: Check/uncheck every entry (multi-select only)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from .entries import ActionKind, Entry, normalize
from .keys import (
    is_back,
    is_delete,
    is_down,
    is_end,
    is_enter,
    is_home,
    is_insert,
    is_next_page,
    is_prev_page,
    is_space,
    is_up,
)
from .layout import Layout, compute_layout
from .navigation import MenuContext, NavigationStack
from .themes import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    """Session-wide input mode, fixed when the session starts."""

    BROWSING = "browsing"
    MULTI_SELECTING = "multi_selecting"

    def __str__(self) -> str:
        return self.value


class MenuStatus(str, Enum):
    """Session outcome; CONFIRMED and CANCELLED end the key loop."""

    RUNNING = "running"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

    def __str__(self) -> str:
        return self.value


class Redraw(Enum):
    """How much of the screen a transition invalidated."""

    NONE = "none"
    ROWS = "rows"
    PAGE = "page"
    CONTEXT = "context"


@dataclass(frozen=True)
class Transition:
    """Repaint request produced by one key.

    Attributes:
        redraw: Extent of the repaint.
        rows: Page-relative rows to repaint when redraw is ROWS.
    """

    redraw: Redraw = Redraw.NONE
    rows: tuple[int, ...] = ()


NO_CHANGE = Transition()


@dataclass
class SessionState:
    """Mutable state of one menu session.

    ``row`` is relative to the current page; the highlighted entry is
    ``context.entries[layout.page_start(context.page) + row]``.
    """

    context: MenuContext
    layout: Layout
    mode: Mode = Mode.BROWSING
    row: int = 0
    stack: NavigationStack = field(default_factory=NavigationStack)
    status: MenuStatus = MenuStatus.RUNNING
    result: Any = None

    @property
    def page(self) -> int:
        return self.context.page

    @property
    def index(self) -> int:
        """Absolute index of the highlighted entry."""
        return self.layout.page_start(self.context.page) + self.row

    @property
    def current_entry(self) -> Entry | None:
        if 0 <= self.index < len(self.context.entries):
            return self.context.entries[self.index]
        return None

    @property
    def finished(self) -> bool:
        return self.status is not MenuStatus.RUNNING


class InputStateMachine:
    """Applies key events to a SessionState.

    Args:
        state: Session state to mutate.
        execute: Called with the command string of a confirmed Command entry.
        invoke: Called with the command string of a confirmed ``@`` entry;
            its return value is normalized into the sub-menu's entries.
        sort: Sort entries of every sub-menu by label.
        terminal_size: Callable returning (width, height) for relayouts.
        theme: Layout constants.
    """

    def __init__(
        self,
        state: SessionState,
        execute: Callable[[str], Any],
        invoke: Callable[[str], Any],
        terminal_size: Callable[[], tuple[int, int]],
        sort: bool = False,
        theme: Theme = DEFAULT_THEME,
    ):
        self.state = state
        self.execute = execute
        self.invoke = invoke
        self.terminal_size = terminal_size
        self.sort = sort
        self.theme = theme

    @property
    def multi_select(self) -> bool:
        return self.state.mode is Mode.MULTI_SELECTING

    def layout_for(self, entries: list[Entry]) -> Layout:
        width, height = self.terminal_size()
        return compute_layout(
            entries,
            terminal_height=height,
            multi_select=self.multi_select,
            terminal_width=width,
            theme=self.theme,
        )

    def handle(self, key: str) -> Transition:
        """Apply one key press and return the repaint it requires."""
        if self.state.finished:
            return NO_CHANGE

        if is_back(key):
            return self.back()
        if is_enter(key):
            return self.confirm()
        if is_down(key):
            return self.down()
        if is_up(key):
            return self.up()
        if is_home(key):
            return self.home()
        if is_end(key):
            return self.end()
        if is_next_page(key):
            return self.next_page()
        if is_prev_page(key):
            return self.prev_page()

        if self.multi_select:
            if is_space(key):
                return self.toggle()
            if is_insert(key):
                return self.select_all(True)
            if is_delete(key):
                return self.select_all(False)

        return NO_CHANGE

    # ── movement ────────────────────────────────────────────────────────

    def _move_row(self, row: int) -> Transition:
        old = self.state.row
        if row == old:
            return NO_CHANGE
        self.state.row = row
        return Transition(Redraw.ROWS, (old, row))

    def _go_to_page(self, page: int, row: int = 0) -> Transition:
        self.state.context.page = page
        self.state.row = row
        logger.debug("Page %d/%d", page + 1, self.state.layout.page_count + 1)
        return Transition(Redraw.PAGE)

    def down(self) -> Transition:
        layout, page = self.state.layout, self.state.page
        if self.state.row < layout.last_row(page):
            return self._move_row(self.state.row + 1)
        if page < layout.page_count:
            return self._go_to_page(page + 1)
        return NO_CHANGE

    def up(self) -> Transition:
        layout, page = self.state.layout, self.state.page
        if self.state.row > 0:
            return self._move_row(self.state.row - 1)
        if page > 0:
            return self._go_to_page(page - 1, layout.last_row(page - 1))
        return NO_CHANGE

    def home(self) -> Transition:
        layout, page = self.state.layout, self.state.page
        if self.state.row > 0:
            return self._move_row(0)
        if page > 0:
            return self._go_to_page(page - 1, layout.last_row(page - 1))
        return NO_CHANGE

    def end(self) -> Transition:
        layout, page = self.state.layout, self.state.page
        last = layout.last_row(page)
        if self.state.row < last:
            return self._move_row(last)
        if page < layout.page_count:
            return self._go_to_page(page + 1)
        return NO_CHANGE

    def next_page(self) -> Transition:
        if self.state.page < self.state.layout.page_count:
            return self._go_to_page(self.state.page + 1)
        return NO_CHANGE

    def prev_page(self) -> Transition:
        if self.state.page > 0:
            return self._go_to_page(self.state.page - 1)
        return NO_CHANGE

    # ── multi-select ────────────────────────────────────────────────────

    def toggle(self) -> Transition:
        entry = self.state.current_entry
        if entry is None:
            return NO_CHANGE
        entry.selected = not entry.selected
        return Transition(Redraw.ROWS, (self.state.row,))

    def select_all(self, selected: bool) -> Transition:
        for entry in self.state.context.entries:
            entry.selected = selected
        return Transition(Redraw.PAGE)

    # ── context changes ─────────────────────────────────────────────────

    def show_context(self, context: MenuContext) -> Transition:
        """Make ``context`` active at page 0 with the first row highlighted."""
        context.page = 0
        self.state.context = context
        self.state.layout = self.layout_for(context.entries)
        self.state.row = 0
        return Transition(Redraw.CONTEXT)

    def descend(self, title: str, load: Callable[[], Any]) -> Transition:
        """Push the active context, then show a sub-menu built from ``load()``.

        The push happens first so that a sub-menu produced by a command
        returns to the menu it was opened from.
        """
        self.state.stack.push(self.state.context)
        logger.debug("Entering sub-menu %r (depth %d)", title, len(self.state.stack))
        entries = normalize(load(), sort=self.sort)
        return self.show_context(MenuContext(title=title, entries=entries))

    def back(self) -> Transition:
        if self.state.stack.is_empty():
            logger.debug("Cancelled at root menu")
            self.state.status = MenuStatus.CANCELLED
            self.state.result = None
            return NO_CHANGE
        parent = self.state.stack.pop()
        logger.debug("Returning to %r", parent.title)
        return self.show_context(parent)

    # ── confirmation ────────────────────────────────────────────────────

    def confirm(self) -> Transition:
        """Handle Enter.

        Multi-select: run the commands of checked Command entries and return
        the labels of every other checked entry, in display order.

        Browsing: act on the highlighted entry. A plain entry returns its
        label, a Command entry runs and returns None, a nested entry opens
        its sub-menu, and an ``@`` entry pushes the current menu before its
        command is invoked to produce the sub-menu.
        """
        if self.multi_select:
            labels = []
            for entry in self.state.context.entries:
                if not entry.selected:
                    continue
                if entry.kind is ActionKind.COMMAND:
                    self.execute(entry.command)
                else:
                    labels.append(entry.label)
            return self._finish(labels)

        entry = self.state.current_entry
        if entry is None:
            return NO_CHANGE

        if entry.kind is ActionKind.NONE:
            return self._finish(entry.label)
        if entry.kind is ActionKind.COMMAND:
            self.execute(entry.command)
            return self._finish(None)
        if entry.kind is ActionKind.NESTED:
            return self.descend(entry.label, lambda: entry.payload)
        return self.descend(entry.label, lambda: self.invoke(entry.command))

    def _finish(self, result: Any) -> Transition:
        self.state.status = MenuStatus.CONFIRMED
        self.state.result = result
        logger.debug("Confirmed: %r", result)
        return NO_CHANGE
