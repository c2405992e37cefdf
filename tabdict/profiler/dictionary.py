"""Per-table value dictionaries and weighted sampling."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from ..datasource.base import RowSource
from ..errors import InvalidInputError, InvalidStateError, UnknownAttributeError
from ..sampler.lottery import draw
from ..sampler.random import RandomProvider, default_provider
from ..store import codec
from ..templates.filters import FilterBuilder
from .entry import Entry

logger = logging.getLogger(__name__)


def _require_name(attribute: object) -> str:
    if not isinstance(attribute, str) or not attribute:
        raise InvalidInputError(f"Attributes need to be string names, got {attribute!r}")
    return attribute


class TableDictionary:
    """Value frequency dictionary of an individual database table."""

    def __init__(
        self,
        table: str,
        source: Optional[RowSource] = None,
        rng: Optional[RandomProvider] = None,
        builder: Optional[FilterBuilder] = None,
    ) -> None:
        self._table = table
        self._source = source
        self._rng = rng if rng is not None else default_provider()
        self._builder = builder if builder is not None else FilterBuilder()
        self._entries: Dict[str, Entry] = {}

    @property
    def table(self) -> str:
        return self._table

    @property
    def entries(self) -> Dict[str, Entry]:
        return dict(self._entries)

    @property
    def attributes(self) -> List[str]:
        return list(self._entries)

    def bind(self, source: RowSource) -> None:
        """Attach the row source used by later ``generate`` calls."""

        self._source = source

    # ------------------------------------------------------------------ generation
    def bulk_generate(
        self,
        attributes: Sequence[str],
        filters: Optional[Mapping[str, object]] = None,
    ) -> None:
        """
        Generate entries for several attributes under the same filters.

        Every attribute name is validated before the first query runs, so an
        invalid element leaves the dictionary untouched.
        """

        if isinstance(attributes, str):
            raise InvalidInputError("Attributes must be a sequence of names, not a single string")
        names = list(attributes)
        for attribute in names:
            _require_name(attribute)
        for attribute in names:
            self.generate(attribute, None, filters)

    def generate(
        self,
        attribute: str,
        possible_values: Optional[Iterable[object]] = None,
        filters: Optional[Mapping[str, object]] = None,
    ) -> None:
        """
        Query the value distribution of ``attribute`` and record it.

        ``possible_values`` is reserved and currently ignored. An empty
        result is still recorded, so the attribute becomes known with a
        total count of zero.
        """

        _ = possible_values
        _require_name(attribute)
        if self._source is None:
            raise InvalidStateError(f"No row source bound to dictionary for {self._table}")

        expression = self._builder.build(filters)
        rows = self._source.query(self._table, attribute, expression)

        values = []
        total = 0
        for value, count in rows:
            count = int(count)
            if count <= 0:
                logger.debug("Skipping %s=%r with count %d", attribute, value, count)
                continue
            values.append((value, count))
            total += count

        self._entries[attribute] = Entry(
            attribute=attribute,
            query={
                "table": self._table,
                "attribute": attribute,
                "filters": expression.to_dict(),
                "where": expression.render(),
            },
            total_count=total,
            values=values,
        )
        logger.info(
            "Generated %s.%s: %d distinct values over %d rows",
            self._table,
            attribute,
            len(values),
            total,
        )

    # ------------------------------------------------------------------ lookup
    def has_entry(self, attribute: str) -> bool:
        return attribute in self._entries

    def get_entry(self, attribute: str) -> Optional[Entry]:
        """Return the entry for ``attribute`` or ``None`` when unknown."""

        return self._entries.get(attribute)

    # ------------------------------------------------------------------ sampling
    def sample_value(self, attribute: str) -> object:
        """Return a random value following the recorded distribution."""

        entry = self.get_entry(attribute)
        if entry is None:
            raise UnknownAttributeError(self._table, attribute)
        if entry.total_count <= 0:
            raise InvalidStateError(
                f"Attribute {attribute} of {self._table} has no observed values to sample"
            )
        return draw(entry.values, entry.total_count, self._rng)

    def sample_values(self, attribute: str, n: int) -> List[object]:
        if n < 0:
            raise InvalidInputError("Sample size must be non-negative")
        return [self.sample_value(attribute) for _ in range(n)]

    def sample_frame(self, attributes: Sequence[str], n: int) -> pd.DataFrame:
        """Draw ``n`` synthetic rows, each column sampled independently."""

        if isinstance(attributes, str):
            attributes = [attributes]
        for attribute in attributes:
            if not self.has_entry(attribute):
                raise UnknownAttributeError(self._table, attribute)
        columns = {attribute: self.sample_values(attribute, n) for attribute in attributes}
        return pd.DataFrame(columns, columns=list(attributes))

    # ------------------------------------------------------------------ persistence
    def serialize(self) -> bytes:
        """Serialize the entries for later use."""

        return codec.encode_entries(self._entries)

    def deserialize(self, data: bytes) -> None:
        """Replace the entries with those recovered from ``data``."""

        self._entries = codec.decode_entries(data)

    def __repr__(self) -> str:
        return f"TableDictionary(table={self._table!r}, attributes={self.attributes!r})"
