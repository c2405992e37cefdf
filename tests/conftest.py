from typing import Dict, List, Tuple

import pytest

from tabdict.datasource.base import RowSource
from tabdict.sampler.random import PythonRandom
from tabdict.store.blob import MemoryBlobStore


class FakeRowSource(RowSource):
    """Returns canned rows per attribute and records every call."""

    def __init__(self, rows: Dict[str, List[Tuple[object, int]]]):
        self.rows = rows
        self.calls = []

    def query(self, table, attribute, expression):
        self.calls.append((table, attribute, expression))
        return list(self.rows.get(attribute, []))


@pytest.fixture
def rows():
    return {
        "status": [("active", 9), ("closed", 1)],
        "region": [("north", 5), ("south", 3), ("east", 2)],
        "age": [(30, 4), (41, 2), (None, 0)],
        "nothing": [],
    }


@pytest.fixture
def source(rows):
    return FakeRowSource(rows)


@pytest.fixture
def rng():
    return PythonRandom(seed=1234)


@pytest.fixture
def blobs():
    return MemoryBlobStore()
