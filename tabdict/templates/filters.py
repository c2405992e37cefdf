"""Equality filter construction for grouped column queries."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple

from ..errors import InvalidInputError
from ..values import plain_value

ALWAYS_TRUE = "TRUE"


@dataclass(frozen=True)
class Predicate:
    """Single ``column <op> value`` constraint."""

    column: str
    value: object
    op: str = "="

    def render(self) -> str:
        if self.value is None:
            return f"{self.column} IS NULL"
        return f"{self.column} {self.op} {render_literal(self.value)}"


@dataclass(frozen=True)
class FilterExpression:
    """Conjunction of predicates; an empty conjunction matches every row."""

    predicates: Tuple[Predicate, ...] = ()

    @property
    def is_always_true(self) -> bool:
        return not self.predicates

    @property
    def columns(self) -> List[str]:
        return [pred.column for pred in self.predicates]

    @property
    def params(self) -> Tuple[object, ...]:
        """Values in predicate order, for parameter binding."""

        return tuple(pred.value for pred in self.predicates if pred.value is not None)

    def render(self) -> str:
        """Render the expression as SQL text with inlined literals."""

        if self.is_always_true:
            return ALWAYS_TRUE
        return " AND ".join(pred.render() for pred in self.predicates)

    def to_dict(self) -> List[List[object]]:
        return [[pred.column, pred.op, pred.value] for pred in self.predicates]

    @classmethod
    def from_dict(cls, payload: Optional[Sequence[Sequence[object]]]) -> "FilterExpression":
        predicates = []
        for column, op, value in payload or []:
            predicates.append(Predicate(column=str(column), value=value, op=str(op)))
        return cls(predicates=tuple(predicates))


def render_literal(value: object) -> str:
    """Render a scalar as a SQL literal; strings are quoted, numbers are not."""

    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, numbers.Number):
        return str(value)
    text = str(value).replace("'", "''")
    return f"'{text}'"


class FilterBuilder:
    """Build ``FilterExpression`` objects from column to value mappings."""

    def build(self, filters: Optional[Mapping[str, object]] = None) -> FilterExpression:
        if not filters:
            return FilterExpression()
        predicates: List[Predicate] = []
        for column, value in filters.items():
            if not isinstance(column, str) or not column:
                raise InvalidInputError(f"Filter columns need to be string names, got {column!r}")
            predicates.append(Predicate(column=column, value=plain_value(value)))
        return FilterExpression(predicates=tuple(predicates))


def build_filter(filters: Optional[Mapping[str, object]] = None) -> FilterExpression:
    """Shortcut for ``FilterBuilder().build``."""

    return FilterBuilder().build(filters)

