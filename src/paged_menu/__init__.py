"""Paged interactive terminal menus.

A menu library for keyboard-driven selection lists that page when they do
not fit the terminal, open nested sub-menus, and optionally let the user
check several entries at once.

Example:
    from paged_menu import show_menu

    choice = show_menu(["Alpha", "Bravo", "Charlie"], title="Pick one")
    picked = show_menu(
        {"Docs": None, "Cleanup": "make clean", "Logs": None},
        multi_select=True,
    )  # ["Docs", "Logs"] if those were checked; "make clean" ran if checked
"""

import logging

__version__ = "0.1.0"

from .entries import ActionKind, Entry, SourceKind, classify_source, normalize
from .errors import MenuError, StackEmpty, UnsupportedHost, UnsupportedInputKind
from .layout import Layout, compute_layout
from .menu import Menu, MenuResult, run_menu, show_menu
from .navigation import MenuContext, NavigationStack
from .render import Renderer
from .state import InputStateMachine, MenuStatus, Mode, SessionState
from .themes import DEFAULT_THEME, Theme

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Main entry points
    "show_menu",
    "run_menu",
    "Menu",
    "MenuResult",
    "MenuStatus",
    # Entry model
    "Entry",
    "ActionKind",
    "SourceKind",
    "classify_source",
    "normalize",
    # Layout / rendering
    "Layout",
    "compute_layout",
    "Renderer",
    # Navigation / state
    "MenuContext",
    "NavigationStack",
    "InputStateMachine",
    "SessionState",
    "Mode",
    # Theming
    "Theme",
    "DEFAULT_THEME",
    # Errors
    "MenuError",
    "UnsupportedInputKind",
    "UnsupportedHost",
    "StackEmpty",
]
