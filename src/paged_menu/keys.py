"""Keyboard input helpers for paged_menu.

Helper functions for detecting key presses, so the state machine reads
as a list of readable checks instead of inline key tuples. Each helper
accepts the readchar constant plus the raw sequences other terminals send.
"""

from __future__ import annotations

import readchar


def is_enter(key: str) -> bool:
    """Check if key is Enter/Return."""
    return key in (readchar.key.ENTER, "\r", "\n")


def is_escape(key: str) -> bool:
    """Check if key is Escape (handles terminal variations).

    readchar reads one more character after a lone ESC, so Escape pressed
    just before another key arrives as ESC plus that key. Anything but a
    CSI (``[``) or SS3 (``O``) introducer counts as Escape.
    """
    if key in (readchar.key.ESC, "\x1b", "\x1b\x1b"):
        return True
    return len(key) == 2 and key[0] == "\x1b" and key[1] not in ("[", "O")


def is_backspace(key: str) -> bool:
    """Check if key is backspace (handles terminal variations)."""
    return key in (readchar.key.BACKSPACE, "\x7f", "\b")


def is_back(key: str) -> bool:
    """Check if key leaves the current menu (Escape or Backspace)."""
    return is_escape(key) or is_backspace(key)


def is_up(key: str) -> bool:
    return key in (readchar.key.UP, "\x1b[A", "\x1bOA")


def is_down(key: str) -> bool:
    return key in (readchar.key.DOWN, "\x1b[B", "\x1bOB")


def is_home(key: str) -> bool:
    return key in (readchar.key.HOME, "\x1b[H", "\x1b[1~", "\x1bOH")


def is_end(key: str) -> bool:
    return key in (readchar.key.END, "\x1b[F", "\x1b[4~", "\x1bOF")


def is_next_page(key: str) -> bool:
    """Check if key is Right arrow or PageDown."""
    return key in (readchar.key.RIGHT, readchar.key.PAGE_DOWN, "\x1b[C", "\x1b[6~")


def is_prev_page(key: str) -> bool:
    """Check if key is Left arrow or PageUp."""
    return key in (readchar.key.LEFT, readchar.key.PAGE_UP, "\x1b[D", "\x1b[5~")


def is_space(key: str) -> bool:
    """Check if key is space."""
    return key == " "


def is_insert(key: str) -> bool:
    return key in (readchar.key.INSERT, "\x1b[2~")


def is_delete(key: str) -> bool:
    return key in (readchar.key.SUPR, "\x1b[3~")
