from __future__ import annotations

import csv
import io
from typing import Any

from app.safari.tables.engine import TableEngine
from app.safari.tables.printer import EMPTY_VALUE, normalize_value


def _csv_value(value: Any) -> str:
    text = normalize_value(value)
    return "" if text == EMPTY_VALUE else text


def export_current_view(engine: TableEngine) -> str:
    """CSV of every filtered and sorted row, across all pages."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow([column.label for column in engine.columns])
    for record in engine.sorted_rows:
        rendered = engine.render_row(record)
        writer.writerow([_csv_value(rendered.get(column.key)) for column in engine.columns])
    return buffer.getvalue()
