"""Exception hierarchy shared by the dictionary modules."""

from __future__ import annotations


class TableDictionaryError(Exception):
    """Base class for all dictionary failures."""


class InvalidInputError(TableDictionaryError, ValueError):
    """Raised when a caller passes a malformed attribute, filter or argument."""


class UnknownAttributeError(TableDictionaryError, LookupError):
    """Raised when an attribute has no recorded entry."""

    def __init__(self, table: str, attribute: object) -> None:
        super().__init__(
            f"Dictionary for table {table!r} does not know of attribute {attribute!r}, yet."
        )
        self.table = table
        self.attribute = attribute


class InvalidStateError(TableDictionaryError, RuntimeError):
    """Raised when a dictionary entry cannot be sampled or is inconsistent."""


class StorageError(TableDictionaryError, OSError):
    """Raised when a dictionary blob cannot be read, written or decoded."""
