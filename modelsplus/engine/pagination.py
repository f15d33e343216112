from __future__ import annotations

from typing import Any, Iterable, Sequence, TypeVar

T = TypeVar("T")


def paginate(records: Sequence[T], offset: int = 0, limit: int | None = None) -> list[T]:
    start = max(offset, 0)
    if limit is None or limit <= 0:
        return list(records[start:])
    return list(records[start : start + limit])


def select_fields(record: dict[str, Any], fields: Iterable[str]) -> dict[str, Any]:
    """Keep only the named top-level keys that the record has.

    An empty field list means no projection.
    """
    names = list(fields)
    if not names:
        return record
    return {name: record[name] for name in names if name in record}
