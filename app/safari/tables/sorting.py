from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any, Literal, Sequence, TypeVar

from app.safari.tables.columns import Record

R = TypeVar("R", bound=Record)

SortDirection = Literal["asc", "desc"]

# Ordering of value kinds when a column mixes types.
_KIND_NUMBER = 0
_KIND_DATE = 1
_KIND_TEXT = 2
_KIND_OTHER = 3


@dataclass(frozen=True)
class SortState:
    key: str
    direction: SortDirection = "asc"

    def toggled(self) -> "SortState":
        return SortState(key=self.key, direction="desc" if self.direction == "asc" else "asc")


def toggle_sort(current: SortState | None, key: str) -> SortState:
    if current is not None and current.key == key:
        return current.toggled()
    return SortState(key=key, direction="asc")


def normalize_direction(value: str | None) -> SortDirection:
    return "desc" if str(value or "asc").lower() == "desc" else "asc"


def _as_naive_datetime(value: date) -> datetime:
    if not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def sort_key(value: Any) -> tuple:
    """Total ordering over heterogeneous field values.

    Missing values sort before every defined value. Defined values are grouped
    by kind so numbers never get compared against strings.
    """
    if value is None:
        return (0,)
    if isinstance(value, (bool, int, float, Decimal)):
        return (1, _KIND_NUMBER, value)
    if isinstance(value, date):
        return (1, _KIND_DATE, _as_naive_datetime(value))
    if isinstance(value, str):
        return (1, _KIND_TEXT, value)
    return (1, _KIND_OTHER, str(value))


def sort_records(records: Sequence[R], state: SortState | None) -> list[R]:
    if state is None:
        return list(records)
    return sorted(
        records,
        key=lambda record: sort_key(record.get(state.key)),
        reverse=state.direction == "desc",
    )
