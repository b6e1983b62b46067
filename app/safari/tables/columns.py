from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol

RecordId = str | int
Record = Mapping[str, Any]


class CellRenderer(Protocol):
    def __call__(self, value: Any, record: Record) -> Any: ...


@dataclass(frozen=True)
class Column:
    key: str
    label: str
    sortable: bool = False
    render: CellRenderer | None = None

    def render_cell(self, record: Record) -> Any:
        value = record.get(self.key)
        if self.render is None:
            return value
        return self.render(value, record)


@dataclass(frozen=True)
class BulkAction:
    label: str
    value: str
    variant: str = "outline"
