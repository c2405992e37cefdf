"""Dictionary generation and lookup."""

from .dictionary import TableDictionary
from .entry import Entry

__all__ = ["Entry", "TableDictionary"]
