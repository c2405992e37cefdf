"""PostgreSQL-backed row source."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

import psycopg2
from psycopg2 import sql

from ..errors import InvalidInputError
from ..templates.filters import FilterExpression
from .base import RowSource, ValueCount, plain_value

logger = logging.getLogger(__name__)

_OPERATORS = {"=", "<>", "<", "<=", ">", ">="}


@dataclass
class _QualifiedTable:
    schema: str
    name: str


def _parse_table(identifier: str) -> _QualifiedTable:
    if "." in identifier:
        schema, name = identifier.split(".", 1)
    else:
        schema, name = "public", identifier
    return _QualifiedTable(schema=schema, name=name)


def build_where(expression: FilterExpression) -> sql.Composable:
    """Compose a parameterised WHERE body; values bind as ``%s``."""

    if expression.is_always_true:
        return sql.SQL("TRUE")
    clauses = []
    for pred in expression.predicates:
        if pred.op not in _OPERATORS:
            raise InvalidInputError(f"Unsupported filter operator: {pred.op}")
        if pred.value is None:
            clauses.append(sql.SQL("{} IS NULL").format(sql.Identifier(pred.column)))
        else:
            clauses.append(
                sql.SQL("{} " + pred.op + " %s").format(sql.Identifier(pred.column))
            )
    return sql.SQL(" AND ").join(clauses)


def build_query(table: str, attribute: str, expression: FilterExpression) -> sql.Composable:
    """Grouped count query for ``attribute`` ordered by frequency."""

    qualified = _parse_table(table)
    column = sql.Identifier(attribute)
    return sql.SQL(
        "SELECT {col}, COUNT({col}) AS count FROM {table} "
        "WHERE {where} GROUP BY {col} ORDER BY count DESC"
    ).format(
        col=column,
        table=sql.Identifier(qualified.schema, qualified.name),
        where=build_where(expression),
    )


class PostgresRowSource(RowSource):
    """Fetch grouped value counts from PostgreSQL."""

    def __init__(self, dsn: str) -> None:
        self._dsn = dsn

    def query(
        self,
        table: str,
        attribute: str,
        expression: FilterExpression,
    ) -> List[ValueCount]:
        query = build_query(table, attribute, expression)
        logger.debug("Querying %s.%s where %s", table, attribute, expression.render())
        with psycopg2.connect(self._dsn) as conn:
            with conn.cursor() as cursor:
                cursor.execute(query, expression.params)
                rows = cursor.fetchall()
        return [(plain_value(row[0]), int(row[1])) for row in rows]
