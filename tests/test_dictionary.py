from collections import Counter

import pytest

from tabdict.errors import InvalidInputError, InvalidStateError, UnknownAttributeError
from tabdict.profiler.dictionary import TableDictionary
from tabdict.profiler.entry import Entry
from tabdict.sampler.random import NumpyRandom


def test_generate_records_counts_and_query(source):
    dictionary = TableDictionary("customers", source=source)
    assert not dictionary.has_entry("status")

    dictionary.generate("status", filters={"country": "DE"})

    entry = dictionary.get_entry("status")
    assert dictionary.has_entry("status")
    assert entry.total_count == 10
    assert entry.values == [("active", 9), ("closed", 1)]
    assert entry.query["where"] == "country = 'DE'"
    assert entry.query["table"] == "customers"
    assert entry.is_consistent()

    table, attribute, expression = source.calls[0]
    assert (table, attribute) == ("customers", "status")
    assert expression.params == ("DE",)


def test_generate_ignores_possible_values(source):
    dictionary = TableDictionary("customers", source=source)
    dictionary.generate("region", ["north", "west"])
    assert [value for value, _ in dictionary.get_entry("region").values] == [
        "north",
        "south",
        "east",
    ]


def test_zero_count_rows_are_not_stored(source):
    dictionary = TableDictionary("customers", source=source)
    dictionary.generate("age")
    entry = dictionary.get_entry("age")
    assert entry.values == [(30, 4), (41, 2)]
    assert entry.total_count == 6


def test_empty_result_is_still_known(source):
    dictionary = TableDictionary("customers", source=source)
    dictionary.generate("nothing")

    assert dictionary.has_entry("nothing")
    entry = dictionary.get_entry("nothing")
    assert entry.total_count == 0
    assert entry.values == []
    with pytest.raises(InvalidStateError):
        dictionary.sample_value("nothing")


def test_generate_overwrites_entry(source, rows):
    dictionary = TableDictionary("customers", source=source)
    dictionary.generate("status")
    rows["status"] = [("closed", 2)]
    dictionary.generate("status")
    assert dictionary.get_entry("status").values == [("closed", 2)]


def test_generate_requires_source():
    with pytest.raises(InvalidStateError):
        TableDictionary("customers").generate("status")


def test_bulk_generate_in_order(source):
    dictionary = TableDictionary("customers", source=source)
    dictionary.bulk_generate(["status", "region"], {"country": "DE"})

    assert [call[1] for call in source.calls] == ["status", "region"]
    assert sorted(dictionary.attributes) == ["region", "status"]


def test_bulk_generate_validates_before_any_query(source):
    dictionary = TableDictionary("customers", source=source)
    with pytest.raises(InvalidInputError):
        dictionary.bulk_generate(["status", 42])

    assert source.calls == []
    assert not dictionary.has_entry("status")


def test_bulk_generate_rejects_bare_string(source):
    with pytest.raises(InvalidInputError):
        TableDictionary("customers", source=source).bulk_generate("status")


def test_get_entry_unknown_returns_none():
    assert TableDictionary("customers").get_entry("status") is None


def test_sample_unknown_attribute():
    with pytest.raises(UnknownAttributeError):
        TableDictionary("customers").sample_value("status")


def test_sample_follows_frequencies(source, rng):
    dictionary = TableDictionary("customers", source=source, rng=rng)
    dictionary.generate("status")

    n = 20_000
    counts = Counter(dictionary.sample_values("status", n))

    assert set(counts) == {"active", "closed"}
    assert counts["active"] / n == pytest.approx(0.9, abs=0.02)
    assert counts["closed"] / n == pytest.approx(0.1, abs=0.02)


def test_sampling_is_reproducible_with_seeded_provider(source):
    first = TableDictionary("customers", source=source, rng=NumpyRandom(3))
    second = TableDictionary("customers", source=source, rng=NumpyRandom(3))
    first.generate("region")
    second.generate("region")
    assert first.sample_values("region", 50) == second.sample_values("region", 50)


def test_inconsistent_entry_never_returns_default(rng):
    dictionary = TableDictionary("customers", rng=rng)
    dictionary._entries["broken"] = Entry(
        attribute="broken", query={}, total_count=100, values=[("a", 1)]
    )
    with pytest.raises(InvalidStateError):
        for _ in range(50):
            dictionary.sample_value("broken")


def test_sample_frame(source, rng):
    dictionary = TableDictionary("customers", source=source, rng=rng)
    dictionary.bulk_generate(["status", "region"])

    frame = dictionary.sample_frame(["status", "region"], 25)

    assert list(frame.columns) == ["status", "region"]
    assert len(frame) == 25
    assert set(frame["region"]) <= {"north", "south", "east"}
    with pytest.raises(UnknownAttributeError):
        dictionary.sample_frame(["missing"], 1)


def test_serialize_round_trip_keeps_table(source):
    dictionary = TableDictionary("customers", source=source)
    dictionary.bulk_generate(["status", "age", "nothing"])

    restored = TableDictionary("other")
    restored.deserialize(dictionary.serialize())

    assert restored.table == "other"
    assert restored.entries == dictionary.entries
