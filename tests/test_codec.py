import datetime as dt
from decimal import Decimal

import pytest
import yaml

from tabdict.errors import StorageError
from tabdict.profiler.entry import Entry
from tabdict.store.codec import FORMAT_VERSION, decode_entries, encode_entries


@pytest.fixture
def entries():
    return {
        "status": Entry(
            attribute="status",
            query={"table": "t", "attribute": "status", "filters": [["country", "=", "DE"]]},
            total_count=10,
            values=[("active", 9), ("closed", 1)],
        ),
        "age": Entry(attribute="age", query={}, total_count=6, values=[(30, 4), (41.5, 2)]),
        "empty": Entry(attribute="empty", query={}, total_count=0, values=[]),
    }


def test_round_trip(entries):
    assert decode_entries(encode_entries(entries)) == entries


def test_document_is_versioned(entries):
    payload = yaml.safe_load(encode_entries(entries).decode("utf-8"))
    assert payload["format_version"] == FORMAT_VERSION
    assert set(payload["entries"]) == {"status", "age", "empty"}


def test_unknown_version_rejected(entries):
    payload = yaml.safe_load(encode_entries(entries))
    payload["format_version"] = 99
    with pytest.raises(StorageError):
        decode_entries(yaml.safe_dump(payload).encode("utf-8"))


@pytest.mark.parametrize("blob", [b"just text", b"[1, 2", b"\xff\xfe", b"format_version: 1\nentries: {a: {}}"])
def test_malformed_blobs_rejected(blob):
    with pytest.raises(StorageError):
        decode_entries(blob)


def test_count_invariant_checked_on_decode():
    broken = {"a": Entry(attribute="a", query={}, total_count=5, values=[("x", 1)])}
    with pytest.raises(StorageError):
        decode_entries(encode_entries(broken))


def test_round_trip_of_non_yaml_scalars():
    values = [
        (Decimal("12.30"), 4),
        (dt.time(9, 30), 3),
        (dt.time(18, 0, tzinfo=dt.timezone.utc), 2),
        (dt.timedelta(days=2, seconds=5, microseconds=7), 2),
        (b"\x00\xffpayload", 1),
        (dt.datetime(2020, 1, 1, 12, 0), 1),
        (dt.date(2021, 5, 5), 1),
    ]
    entries = {
        "mixed": Entry(
            attribute="mixed",
            query={"filters": [["amount", "=", Decimal("1.5")]]},
            total_count=14,
            values=values,
        )
    }

    decoded = decode_entries(encode_entries(entries))

    assert decoded == entries
    assert [type(value) for value, _ in decoded["mixed"].values] == [
        type(value) for value, _ in values
    ]
    assert decoded["mixed"].query["filters"][0][2] == Decimal("1.5")


def test_memoryview_is_stored_as_bytes():
    entries = {
        "blob": Entry(attribute="blob", query={}, total_count=1, values=[(memoryview(b"ab"), 1)])
    }
    assert decode_entries(encode_entries(entries))["blob"].values == [(b"ab", 1)]


def test_close_decimals_stay_distinct():
    values = [(Decimal("1.00000000000000001"), 3), (Decimal("1.0"), 2)]
    entries = {"amount": Entry(attribute="amount", query={}, total_count=5, values=values)}

    decoded = decode_entries(encode_entries(entries))

    assert decoded["amount"].values == values
    assert decoded["amount"].is_consistent()


def test_unknown_type_tag_rejected():
    blob = yaml.safe_dump(
        {
            "format_version": FORMAT_VERSION,
            "entries": {
                "a": {
                    "attribute": "a",
                    "query": {},
                    "total_count": 1,
                    "values": [[{"$type": "uuid", "value": "x"}, 1]],
                }
            },
        }
    ).encode("utf-8")
    with pytest.raises(StorageError):
        decode_entries(blob)
