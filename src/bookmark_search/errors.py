"""Exception hierarchy for bookmark search."""

from __future__ import annotations


class BookmarkSearchError(Exception):
    """Base class for all errors raised by this package."""


class InvalidInputError(BookmarkSearchError, ValueError):
    """Raised when a caller violates the ranking input contract."""
