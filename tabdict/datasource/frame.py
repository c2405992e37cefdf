"""pandas-backed row source for CSV, Parquet and in-memory tables."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping

import pandas as pd

from ..errors import InvalidInputError
from ..templates.filters import FilterExpression
from .base import RowSource, ValueCount, plain_value


class FrameRowSource(RowSource):
    """Group values of ``DataFrame`` tables held in memory."""

    def __init__(self, frames: Mapping[str, pd.DataFrame]) -> None:
        self._frames: Dict[str, pd.DataFrame] = dict(frames)

    @classmethod
    def from_csv(cls, table: str, path: str | Path, **read_csv_kwargs: object) -> "FrameRowSource":
        return cls({table: pd.read_csv(Path(path), **read_csv_kwargs)})

    @classmethod
    def from_parquet(cls, table: str, path: str | Path) -> "FrameRowSource":
        return cls({table: pd.read_parquet(Path(path))})

    @property
    def tables(self) -> List[str]:
        return list(self._frames)

    def _frame(self, table: str) -> pd.DataFrame:
        try:
            return self._frames[table]
        except KeyError:
            raise InvalidInputError(f"Unknown table: {table}") from None

    def _require_column(self, frame: pd.DataFrame, table: str, column: str) -> None:
        if column not in frame.columns:
            raise InvalidInputError(f"Table {table} has no column {column}")

    def query(
        self,
        table: str,
        attribute: str,
        expression: FilterExpression,
    ) -> List[ValueCount]:
        frame = self._frame(table)
        self._require_column(frame, table, attribute)

        mask = pd.Series(True, index=frame.index)
        for pred in expression.predicates:
            self._require_column(frame, table, pred.column)
            if pred.op != "=":
                raise InvalidInputError(f"Unsupported filter operator: {pred.op}")
            if pred.value is None:
                mask &= frame[pred.column].isna()
            else:
                mask &= frame[pred.column] == pred.value

        # groupby drops nulls, matching COUNT(column) ignoring NULL rows.
        column = frame.loc[mask, attribute]
        counts = column.groupby(column, sort=False).size()
        counts = counts.sort_values(ascending=False, kind="stable")
        return [(plain_value(value), int(count)) for value, count in counts.items()]
