"""Per-attribute value distribution record."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, MutableMapping, Tuple


@dataclass
class Entry:
    """Aggregated value counts for one attribute."""

    attribute: str
    query: Dict[str, object]
    total_count: int
    values: List[Tuple[object, int]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.total_count == 0

    def is_consistent(self) -> bool:
        """True when the counts add up to ``total_count`` and values are distinct."""

        if sum(count for _, count in self.values) != self.total_count:
            return False
        if any(count <= 0 for _, count in self.values):
            return False
        seen = set()
        for value, _ in self.values:
            try:
                key = (type(value), value)
                if key in seen:
                    return False
                seen.add(key)
            except TypeError:
                continue
        return True

    def frequencies(self) -> Dict[object, float]:
        """Relative frequency of each value."""

        if self.total_count <= 0:
            return {}
        return {value: count / self.total_count for value, count in self.values}

    def to_dict(self) -> Dict[str, object]:
        """Serialize the entry into built-in Python types."""

        return {
            "attribute": self.attribute,
            "query": dict(self.query),
            "total_count": int(self.total_count),
            "values": [[value, int(count)] for value, count in self.values],
        }

    @classmethod
    def from_dict(cls, payload: MutableMapping[str, object]) -> "Entry":
        """Rehydrate an ``Entry`` from serialized content."""

        values = payload.get("values") or []
        return cls(
            attribute=str(payload["attribute"]),
            query=dict(payload.get("query") or {}),
            total_count=int(payload["total_count"]),
            values=[(value, int(count)) for value, count in values],
        )
