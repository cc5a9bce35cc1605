"""Exception types raised by paged_menu."""

from __future__ import annotations


class MenuError(Exception):
    """Base class for menu errors."""


class UnsupportedInputKind(MenuError, TypeError):
    """Entries argument is not a label, a list of labels, or a label mapping."""


class UnsupportedHost(MenuError):
    """Console cannot be driven with direct cursor addressing."""


class StackEmpty(MenuError, IndexError):
    """Pop from an empty navigation stack."""
