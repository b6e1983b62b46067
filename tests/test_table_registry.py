from datetime import date

import pytest

from app.safari.core.error_catalog import AppError
from app.safari.tables.registry import build_default_registry, render_active, render_season_year


def test_default_registry_lists_backoffice_tables() -> None:
    registry = build_default_registry()

    assert registry.names() == ["agents", "customers", "hotel_seasons", "hotels", "parks", "transport_companies"]
    hotels = registry.get("hotels")
    assert hotels.source == "hotels"
    assert hotels.search_fields == ("hotel_name", "contact_email")
    assert [action.value for action in hotels.bulk_actions] == ["activate", "deactivate", "delete"]
    assert "contact_email" not in hotels.sortable_keys()


def test_unknown_table_raises_table_not_found() -> None:
    with pytest.raises(AppError) as excinfo:
        build_default_registry().get("invoices")

    assert excinfo.value.error.code == "TABLE_NOT_FOUND"


def test_season_table_renders_derived_columns() -> None:
    seasons = build_default_registry().get("hotel_seasons")
    record = {"id": 1, "season_name": "High", "start_date": date(2024, 6, 1), "end_date": date(2024, 10, 31)}

    assert seasons.is_season_table
    assert seasons.column("start_date").render_cell(record) == "Jun 1, 2024"
    assert render_season_year(None, record) == 2024
    assert seasons.column("status").render_cell(record) == "past"
    assert render_active(1, record) == "Active"


def test_season_status_uses_injected_clock() -> None:
    record = {"id": 1, "season_name": "High", "start_date": date(2024, 6, 1), "end_date": date(2024, 10, 31)}

    def status_on(day: date) -> str:
        return build_default_registry(today=lambda: day).get("hotel_seasons").column("status").render_cell(record)

    assert status_on(date(2024, 5, 1)) == "upcoming"
    assert status_on(date(2024, 7, 15)) == "active"
    assert status_on(date(2024, 11, 1)) == "past"
    assert build_default_registry().get("hotel_seasons").column("status").render_cell({"id": 2}) is None
