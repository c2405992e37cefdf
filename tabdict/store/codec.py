"""Versioned YAML encoding of dictionary entries."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Dict, Mapping

import yaml

from ..errors import StorageError
from ..profiler.entry import Entry
from ..values import plain_value

FORMAT_VERSION = 1

TYPE_TAG = "$type"


def _encode_value(value: object) -> object:
    """Replace scalars YAML cannot represent with tagged mappings."""

    value = plain_value(value)
    if isinstance(value, dict):
        return {key: _encode_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode_value(item) for item in value]
    if isinstance(value, Decimal):
        return {TYPE_TAG: "decimal", "value": str(value)}
    if isinstance(value, dt.time):
        return {TYPE_TAG: "time", "value": value.isoformat()}
    if isinstance(value, dt.timedelta):
        return {
            TYPE_TAG: "timedelta",
            "value": [value.days, value.seconds, value.microseconds],
        }
    # bytes, date and datetime are native YAML types (!!binary, !!timestamp).
    return value


def _decode_value(value: object) -> object:
    if isinstance(value, list):
        return [_decode_value(item) for item in value]
    if not isinstance(value, dict):
        return value
    if TYPE_TAG not in value:
        return {key: _decode_value(item) for key, item in value.items()}

    kind = value[TYPE_TAG]
    raw = value.get("value")
    try:
        if kind == "decimal":
            return Decimal(raw)
        if kind == "time":
            return dt.time.fromisoformat(raw)
        if kind == "timedelta":
            days, seconds, microseconds = raw
            return dt.timedelta(days=days, seconds=seconds, microseconds=microseconds)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise StorageError(f"Malformed {kind} value: {raw!r}") from exc
    raise StorageError(f"Unknown value type tag: {kind!r}")


def encode_entries(entries: Mapping[str, Entry]) -> bytes:
    """Encode ``entries`` into a UTF-8 YAML document."""

    payload = {
        "format_version": FORMAT_VERSION,
        "entries": {
            name: _encode_value(entry.to_dict()) for name, entry in entries.items()
        },
    }
    try:
        text = yaml.safe_dump(payload, sort_keys=True, allow_unicode=True)
    except yaml.YAMLError as exc:
        raise StorageError(f"Cannot encode dictionary entries: {exc}") from exc
    return text.encode("utf-8")


def decode_entries(data: bytes | str) -> Dict[str, Entry]:
    """Decode a document produced by ``encode_entries``."""

    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise StorageError(f"Dictionary blob is not UTF-8: {exc}") from exc
    try:
        payload = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise StorageError(f"Malformed dictionary blob: {exc}") from exc
    if not isinstance(payload, dict):
        raise StorageError("Dictionary blob must contain a mapping")

    version = payload.get("format_version")
    if version != FORMAT_VERSION:
        raise StorageError(f"Unsupported dictionary format version: {version!r}")

    entries: Dict[str, Entry] = {}
    for name, raw in (payload.get("entries") or {}).items():
        try:
            entry = Entry.from_dict(_decode_value(raw))
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise StorageError(f"Malformed entry for attribute {name!r}: {exc}") from exc
        if not entry.is_consistent():
            raise StorageError(f"Entry for attribute {name!r} fails the count invariant")
        entries[str(name)] = entry
    return entries
