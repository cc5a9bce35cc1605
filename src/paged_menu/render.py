"""Console renderer for paged menus.

Draws with absolute cursor addressing through Rich control codes, so a
highlight move repaints two rows and a page change repaints only the page
area. Screen layout, from the top::

    row 0              title            current/total
    row 1              (blank)
    rows 2..2+size-1   entries of the current page
"""

from __future__ import annotations

import sys
from typing import Sequence

from rich.console import Console
from rich.control import Control, ControlType
from rich.text import Text

from .entries import Entry
from .errors import UnsupportedHost
from .layout import Layout
from .themes import DEFAULT_THEME, Theme

TITLE_ROW = 0
FIRST_ENTRY_ROW = 2

_ERASE_LINE = Control((ControlType.ERASE_IN_LINE, 2))
_ERASE_TO_END = Control((ControlType.ERASE_IN_LINE, 0))


class Renderer:
    """Writes menu pages to a Rich console.

    Holds no menu state; only the last drawn layout so finish() knows where
    the menu area ends.
    """

    def __init__(self, console: Console, theme: Theme = DEFAULT_THEME):
        self.console = console
        self.theme = theme
        self._layout: Layout | None = None

    def check_host(self, check_input: bool = False) -> None:
        """Fail before drawing anything if the host cannot run a menu.

        Args:
            check_input: Also require stdin to be a terminal (keys are read
                from it in raw mode).

        Raises:
            UnsupportedHost: If output, or input when checked, is not an
                interactive terminal.
        """
        if not self.console.is_terminal or self.console.is_dumb_terminal:
            raise UnsupportedHost(
                "Menu requires an interactive terminal with cursor addressing"
            )
        if check_input and not (sys.stdin is not None and sys.stdin.isatty()):
            raise UnsupportedHost("Menu requires keyboard input from a terminal")

    def begin(self) -> None:
        """Hide the cursor and clear the screen for the first draw."""
        self.console.show_cursor(False)
        self.console.clear()

    def finish(self) -> None:
        """Park the cursor below the menu area and make it visible again."""
        if self._layout is not None:
            bottom = FIRST_ENTRY_ROW + self._layout.page_size
            self.console.control(Control.move_to(0, bottom))
        self.console.show_cursor(True)

    # ── formatting ──────────────────────────────────────────────────────

    def format_column(self, entry: Entry, layout: Layout) -> str:
        """Entry text padded to exactly ``layout.column_width`` characters."""
        theme = self.theme
        width = layout.column_width

        checkbox = ""
        if layout.multi_select:
            icon = theme.checked_icon if entry.selected else theme.unchecked_icon
            checkbox = icon.ljust(theme.checkbox_width)

        indicator = theme.nested_icon if entry.opens_menu else ""
        room = width - len(checkbox) - (len(indicator) + 1 if indicator else 0)
        label = entry.label
        if len(label) > room:
            keep = max(0, room - len(theme.ellipsis))
            label = (label[:keep] + theme.ellipsis)[: max(0, room)]

        text = checkbox + label
        if indicator:
            return text.ljust(width - len(indicator)) + indicator
        return text.ljust(width)

    def format_row(self, entry: Entry, layout: Layout) -> str:
        pad = " " * self.theme.padding
        return (
            f"{self.theme.row_prefix}{pad}"
            f"{self.format_column(entry, layout)}"
            f"{pad}{self.theme.row_suffix}"
        )

    # ── drawing ─────────────────────────────────────────────────────────

    def _write(self, text: str, style: str = "") -> None:
        self.console.print(Text(text, style=style), end="", soft_wrap=True)

    def draw_title(self, title: str) -> None:
        self.console.control(Control.move_to(0, TITLE_ROW), _ERASE_LINE)
        self._write(title, self.theme.title_style)

    def draw_header(self, page: int, page_count: int, title: str = "") -> None:
        """Write the right-aligned ``current/total`` indicator on the title line.

        Only the columns after the title are touched.
        """
        indicator = f"{page + 1}/{page_count + 1}"
        row_width = self._layout.row_width if self._layout else self.console.width
        column = max(row_width - len(indicator), len(title) + 1)
        self.console.control(Control.move_to(column, TITLE_ROW), _ERASE_TO_END)
        self._write(indicator)

    def update_row(self, row: int, entry: Entry | None, highlighted: bool, layout: Layout) -> None:
        """Repaint one page-relative row; ``entry=None`` leaves it blank."""
        self.console.control(Control.move_to(0, FIRST_ENTRY_ROW + row), _ERASE_LINE)
        if entry is not None:
            style = self.theme.highlight_style if highlighted else ""
            self._write(self.format_row(entry, layout), style)

    def draw_full_page(
        self,
        layout: Layout,
        entries: Sequence[Entry],
        selected_row: int,
        page: int,
    ) -> None:
        """Repaint every row of the page area, blanking rows past the last entry.

        Clears at most as many rows as either the previous or the new layout
        occupies, never the whole screen.
        """
        rows = layout.page_size
        if self._layout is not None:
            rows = max(rows, self._layout.page_size)
        self._layout = layout

        start, stop = layout.page_bounds(page)
        page_entries = entries[start:stop]
        for row in range(rows):
            entry = page_entries[row] if row < len(page_entries) else None
            self.update_row(row, entry, row == selected_row, layout)
