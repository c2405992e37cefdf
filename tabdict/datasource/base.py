"""Abstract row source definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Tuple

from ..templates.filters import FilterExpression
from ..values import plain_value

ValueCount = Tuple[object, int]

__all__ = ["RowSource", "ValueCount", "plain_value"]


class RowSource(ABC):
    """Common interface for fetching grouped value counts of one column."""

    @abstractmethod
    def query(
        self,
        table: str,
        attribute: str,
        expression: FilterExpression,
    ) -> List[ValueCount]:
        """Return ``(value, count)`` pairs grouped by value, count descending."""
