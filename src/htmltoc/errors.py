"""Exceptions raised by the document-facing layer.

The outline and id algorithms themselves never fail; these only cover configuration that the
selector engine or the settings model rejects.
"""

from __future__ import annotations


class TocError(Exception):
    """Base class for htmltoc errors."""


class TocConfigError(TocError):
    """Options or settings are unusable."""


class TocSelectorError(TocConfigError):
    """A ``content`` or ``headings`` selector could not be compiled."""

    def __init__(self, selector: str, reason: str) -> None:
        super().__init__(f"invalid selector {selector!r}: {reason}")
        self.selector = selector
        self.reason = reason
