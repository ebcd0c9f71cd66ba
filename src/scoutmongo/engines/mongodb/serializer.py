"""Value normalization for documents written to MongoDB."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, date, datetime, time
from typing import Any

from pydantic import BaseModel


def serialize(value: Any) -> Any:
    """Recursively convert ``value`` into something BSON can store.

    - ``datetime`` becomes an aware UTC ``datetime`` (naive values are taken
      as UTC); a bare ``date`` becomes midnight UTC.
    - BSON types, strings, bytes and other scalars pass through.
    - Mappings (and pydantic models) become ``dict``; any other iterable
      becomes ``list``. Elements are serialized in place of their key or
      position.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=UTC)

    if _is_native(value):
        return value

    if isinstance(value, BaseModel):
        value = value.model_dump()

    if isinstance(value, Mapping):
        return {key: serialize(item) for key, item in value.items()}

    return [serialize(item) for item in value]


def _is_native(value: Any) -> bool:
    # bson types (ObjectId, Decimal128, Int64, Binary, ...) carry _type_marker.
    if hasattr(value, "_type_marker") and not isinstance(value, Mapping):
        return True
    if isinstance(value, (str, bytes, bytearray, memoryview)):
        return True
    return not isinstance(value, (Iterable, BaseModel))
