"""Row source abstractions for dictionary generation."""

from __future__ import annotations

from typing import Optional

from ..errors import InvalidInputError
from .base import RowSource
from .frame import FrameRowSource
from .postgres import PostgresRowSource

__all__ = [
    "RowSource",
    "FrameRowSource",
    "PostgresRowSource",
    "create_row_source",
]


def create_row_source(kind: str, ref: str, table: Optional[str] = None) -> RowSource:
    """Factory for row sources."""

    kind_lower = kind.lower()
    if kind_lower == "postgres":
        return PostgresRowSource(dsn=ref)
    if kind_lower in {"csv", "parquet"}:
        if not table:
            raise InvalidInputError(f"Table name is required for {kind_lower} sources.")
        if kind_lower == "csv":
            return FrameRowSource.from_csv(table, ref)
        return FrameRowSource.from_parquet(table, ref)
    raise InvalidInputError(f"Unsupported source kind: {kind}")
