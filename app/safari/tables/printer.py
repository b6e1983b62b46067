from __future__ import annotations

from datetime import date
from typing import Any

from app.safari.tables.engine import TableEngine
from app.safari.tables.pagination import ELLIPSIS

EMPTY_VALUE = "—"


def normalize_value(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, str):
        clean = value.strip()
        return clean or EMPTY_VALUE
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _page_bar(engine: TableEngine) -> str:
    current = engine.current_page
    markers = []
    for marker in engine.page_window:
        if marker == ELLIPSIS:
            markers.append(ELLIPSIS)
        elif marker == current:
            markers.append(f"[{marker}]")
        else:
            markers.append(str(marker))
    return " ".join(markers)


def render_text_table(title: str, engine: TableEngine) -> str:
    lines = [title]
    rows = [engine.render_row(record) for record in engine.visible_rows]
    if not rows:
        lines.append("(no results)")
        return "\n".join(lines)

    selected = [engine.is_selected(record["id"]) for record in engine.visible_rows]
    widths = []
    for column in engine.columns:
        max_cell = max(len(normalize_value(row.get(column.key))) for row in rows)
        widths.append(max(len(column.label), max_cell))

    check_all = "[x]" if engine.is_all_selected else "[ ]"
    lines.append(" | ".join([check_all, *(column.label.ljust(widths[idx]) for idx, column in enumerate(engine.columns))]))
    lines.append("-+-".join(["---", *("-" * width for width in widths)]))
    for row, is_selected in zip(rows, selected):
        marker = "[x]" if is_selected else "[ ]"
        cells = (normalize_value(row.get(column.key)).ljust(widths[idx]) for idx, column in enumerate(engine.columns))
        lines.append(" | ".join([marker, *cells]))

    if engine.has_pagination:
        first, last, total = engine.showing()
        lines.append(f"Showing {first} to {last} of {total} results  {_page_bar(engine)}")
    return "\n".join(lines)
