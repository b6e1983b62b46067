from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, Sequence, TypeVar

from app.safari.tables.columns import Record

R = TypeVar("R", bound=Record)


def to_search_text(value: Any) -> str:
    """String form of a field value used for substring search.

    ``None`` yields an empty string so missing values never match a query.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def record_matches(record: Record, query: str, search_fields: Sequence[str] = ()) -> bool:
    if not query:
        return True
    needle = query.lower()
    values: Iterable[Any] = (
        (record.get(field) for field in search_fields) if search_fields else record.values()
    )
    return any(needle in to_search_text(value).lower() for value in values)


def filter_records(records: Sequence[R], query: str | None, search_fields: Sequence[str] = ()) -> list[R]:
    if not query:
        return list(records)
    return [record for record in records if record_matches(record, query, search_fields)]
