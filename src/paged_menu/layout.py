"""Page and column geometry for a menu level."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .entries import Entry
from .themes import DEFAULT_THEME, Theme


def page_count_for(entry_count: int, page_size: int) -> int:
    """Number of pages after the first: ceil((n - p) / p), at least 0."""
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return max(0, -(-(entry_count - page_size) // page_size))


@dataclass(frozen=True)
class Layout:
    """Geometry of one menu level.

    Pages are indexed 0..page_count inclusive; page_count == 0 means the
    whole menu fits on a single page.

    Attributes:
        entry_count: Number of entries laid out.
        page_size: Rows available per page (>= 1).
        page_count: Index of the last page.
        column_width: Width of the label column, checkbox and indicator included.
        row_width: Full row width including prefix, padding and suffix.
        multi_select: Whether rows carry a checkbox prefix.
    """

    entry_count: int
    page_size: int
    page_count: int
    column_width: int
    row_width: int
    multi_select: bool = False

    def page_start(self, page: int) -> int:
        return page * self.page_size

    def page_length(self, page: int) -> int:
        """Number of entries on ``page`` (the last page may be short)."""
        if not 0 <= page <= self.page_count:
            return 0
        return min(self.page_size, self.entry_count - self.page_start(page))

    def page_bounds(self, page: int) -> tuple[int, int]:
        """Half-open [start, stop) entry indices for ``page``."""
        start = self.page_start(page)
        return start, start + self.page_length(page)

    def last_row(self, page: int) -> int:
        """Page-relative index of the last row on ``page``."""
        return max(0, self.page_length(page) - 1)


def compute_layout(
    entries: Sequence[Entry],
    terminal_height: int,
    multi_select: bool = False,
    terminal_width: int | None = None,
    theme: Theme = DEFAULT_THEME,
) -> Layout:
    """Compute page size, page count and column width for ``entries``.

    A terminal too short for the chrome still gets one row per page.
    When ``terminal_width`` is given the column is narrowed so a row never
    wraps; the renderer truncates labels to fit. The column never gets
    narrower than the checkbox plus nested indicator, even if that wraps.
    """
    page_size = max(1, terminal_height - theme.chrome_lines)

    # Room a row needs besides its label: checkbox and nested indicator
    fixed = 0
    if multi_select:
        fixed += theme.checkbox_width
    if any(entry.opens_menu for entry in entries):
        fixed += len(theme.nested_icon) + 1
    longest = max((len(entry.label) for entry in entries), default=0)
    column_width = max(longest + fixed, theme.min_column_width)

    decoration = len(theme.row_prefix) + len(theme.row_suffix) + 2 * theme.padding
    if terminal_width is not None:
        # Leave the last column free so writing a full row never scrolls
        column_width = min(column_width, terminal_width - 1 - decoration)
    column_width = max(column_width, fixed, 1)

    return Layout(
        entry_count=len(entries),
        page_size=page_size,
        page_count=page_count_for(len(entries), page_size),
        column_width=column_width,
        row_width=decoration + column_width,
        multi_select=multi_select,
    )
