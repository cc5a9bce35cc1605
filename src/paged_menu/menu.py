"""Paged terminal menu session.

This module provides the Menu class, which ties the entry model, layout,
renderer and input state machine into one blocking key loop, and the
show_menu() convenience function.

Example:
    from paged_menu import show_menu

    choice = show_menu(
        {
            "Install": None,
            "Tools": {"Shell": "bash", "Editor": "vi"},
            "Editions": "@list-editions",
        },
        title="Setup",
    )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

import readchar
from rich.console import Console

from .entries import normalize
from .executor import invoke_command, run_command
from .layout import compute_layout
from .navigation import MenuContext
from .render import Renderer
from .state import (
    InputStateMachine,
    MenuStatus,
    Mode,
    Redraw,
    SessionState,
    Transition,
)
from .themes import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MenuResult:
    """Outcome of a menu session.

    Attributes:
        status: CONFIRMED or CANCELLED.
        value: Confirmed label, list of labels (multi-select), or None for a
            confirmed command entry and for a cancelled session.
    """

    status: MenuStatus
    value: Any = None

    @property
    def confirmed(self) -> bool:
        return self.status is MenuStatus.CONFIRMED


class Menu:
    """Interactive paged menu with nested sub-menus.

    Entries are validated when the menu is constructed, so malformed input
    fails before anything is drawn.

    Args:
        entries: A label, a list of labels, or a label -> action mapping.
        title: Title of the root menu.
        sort: Sort entries (and sub-menu entries) by label.
        multi_select: Show checkboxes; Enter confirms all checked entries.
        console: Rich Console to draw on (auto-created if not provided).
        theme: Glyphs and layout constants.
        execute: Runs the command of a confirmed Command entry.
        invoke: Runs the command of an ``@`` entry and returns sub-menu entries.
        read_key: Blocking key reader (defaults to readchar.readkey).

    Raises:
        UnsupportedInputKind: If entries is malformed.
    """

    def __init__(
        self,
        entries: Any,
        title: str = "Menu",
        sort: bool = False,
        multi_select: bool = False,
        console: Console | None = None,
        theme: Theme | None = None,
        execute: Callable[[str], Any] | None = None,
        invoke: Callable[[str], Any] | None = None,
        read_key: Callable[[], str] | None = None,
    ):
        self.title = title
        self.sort = sort
        self.mode = Mode.MULTI_SELECTING if multi_select else Mode.BROWSING
        self.entries = normalize(entries, sort=sort)
        self.console = console or Console()
        self.theme = theme or DEFAULT_THEME
        self.execute = execute or run_command
        self.invoke = invoke or invoke_command
        self.read_key = read_key or readchar.readkey
        self.renderer = Renderer(self.console, self.theme)

    def _terminal_size(self) -> tuple[int, int]:
        return self.console.width, self.console.height

    def _build_machine(self) -> InputStateMachine:
        width, height = self._terminal_size()
        layout = compute_layout(
            self.entries,
            terminal_height=height,
            multi_select=self.mode is Mode.MULTI_SELECTING,
            terminal_width=width,
            theme=self.theme,
        )
        context = MenuContext(title=self.title, entries=self.entries)
        return InputStateMachine(
            SessionState(context=context, layout=layout, mode=self.mode),
            execute=self.execute,
            invoke=self.invoke,
            terminal_size=self._terminal_size,
            sort=self.sort,
            theme=self.theme,
        )

    def _draw_context(self, state: SessionState) -> None:
        self.renderer.draw_title(state.context.title)
        self._draw_page(state)

    def _draw_page(self, state: SessionState) -> None:
        self.renderer.draw_full_page(
            state.layout, state.context.entries, state.row, state.page
        )
        if state.layout.page_count > 0:
            self.renderer.draw_header(
                state.page, state.layout.page_count, state.context.title
            )

    def _draw_rows(self, state: SessionState, rows: tuple[int, ...]) -> None:
        start = state.layout.page_start(state.page)
        for row in rows:
            entry = state.context.entries[start + row]
            self.renderer.update_row(row, entry, row == state.row, state.layout)

    def _apply(self, state: SessionState, transition: Transition) -> None:
        if transition.redraw is Redraw.ROWS:
            self._draw_rows(state, transition.rows)
        elif transition.redraw is Redraw.PAGE:
            self._draw_page(state)
        elif transition.redraw is Redraw.CONTEXT:
            self._draw_context(state)

    def run(self) -> MenuResult:
        """Display the menu and block until the user confirms or cancels.

        Returns:
            MenuResult with the session outcome. Ctrl+C counts as cancel.

        Raises:
            UnsupportedHost: If the console is not an interactive terminal, or
                stdin is not one while keys come from readchar.
        """
        self.renderer.check_host(check_input=self.read_key is readchar.readkey)
        machine = self._build_machine()
        state = machine.state

        self.renderer.begin()
        try:
            self._draw_context(state)
            while not state.finished:
                try:
                    key = self.read_key()
                except KeyboardInterrupt:
                    state.status = MenuStatus.CANCELLED
                    state.result = None
                    break
                self._apply(state, machine.handle(key))
        finally:
            self.renderer.finish()

        logger.debug("Menu %r finished: %s", self.title, state.status)
        return MenuResult(state.status, state.result)

    def show(self) -> Any:
        """Run the menu and return only the result value (None on cancel)."""
        return self.run().value


def run_menu(entries: Any, title: str = "Menu", sort: bool = False,
             multi_select: bool = False, **kwargs: Any) -> MenuResult:
    """Build a Menu and run it, returning the full MenuResult."""
    return Menu(entries, title=title, sort=sort, multi_select=multi_select, **kwargs).run()


def show_menu(entries: Any, title: str = "Menu", sort: bool = False,
              multi_select: bool = False, **kwargs: Any) -> Any:
    """Show a menu and return the selection.

    Returns:
        The confirmed label; a list of labels in multi-select mode (checked
        command entries are run and left out); None if a command entry was
        confirmed or the menu was cancelled.
    """
    return run_menu(entries, title=title, sort=sort, multi_select=multi_select, **kwargs).value
