"""Fixed decoration constants for menu rendering.

The Theme dataclass holds the glyphs and layout constants used by the
layout engine and renderer. Only highlight inversion is styled.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any


@dataclass
class Theme:
    """Visual constants for the menu.

    Attributes:
        checked_icon: Checkbox glyph for a selected entry (multi-select).
        unchecked_icon: Checkbox glyph for an unselected entry.
        nested_icon: Indicator drawn right-aligned on rows that open a sub-menu.
        ellipsis: Marker appended to labels truncated to the column width.

        row_prefix: Text drawn before every row.
        row_suffix: Text drawn after every row.
        padding: Spaces between prefix/suffix and the column.
        min_column_width: Narrowest column, regardless of label lengths.
        chrome_lines: Terminal lines reserved for title and blank lines.

        highlight_style: Rich style for the selected row.
        title_style: Rich style for the title line.
    """

    # Glyphs
    checked_icon: str = "[x]"
    unchecked_icon: str = "[ ]"
    nested_icon: str = ">"
    ellipsis: str = "…"

    # Layout
    row_prefix: str = " "
    row_suffix: str = " "
    padding: int = 1
    min_column_width: int = 20
    chrome_lines: int = 4

    # Styles
    highlight_style: str = "reverse"
    title_style: str = "bold"

    @property
    def checkbox_width(self) -> int:
        """Width of the checkbox glyph plus its separating space."""
        return max(len(self.checked_icon), len(self.unchecked_icon)) + 1

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "Theme":
        """Build a theme from a config mapping, ignoring unknown keys."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


# Default theme used when none is specified
DEFAULT_THEME = Theme()
