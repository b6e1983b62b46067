from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable

from app.safari.core.error_catalog import AppError, ErrorCatalog
from app.safari.seasons.management import format_season_date, season_status, season_year
from app.safari.tables.columns import BulkAction, CellRenderer, Column, Record

ACTIVATE = BulkAction(label="Activate", value="activate")
DEACTIVATE = BulkAction(label="Deactivate", value="deactivate")
DELETE = BulkAction(label="Delete", value="delete", variant="destructive")
COPY_TO_NEXT_YEAR = BulkAction(label="Copy to next year", value="copy_to_next_year")
ROLL_TO_CURRENT_YEAR = BulkAction(label="Roll to current year", value="roll_to_current_year", variant="secondary")


@dataclass(frozen=True)
class TableDefinition:
    name: str
    source: str
    title: str
    columns: tuple[Column, ...]
    description: str = ""
    search_fields: tuple[str, ...] = ()
    items_per_page: int | None = None
    bulk_actions: tuple[BulkAction, ...] = ()
    active_field: str | None = None
    is_season_table: bool = False

    def column(self, key: str) -> Column | None:
        return next((column for column in self.columns if column.key == key), None)

    def sortable_keys(self) -> set[str]:
        return {column.key for column in self.columns if column.sortable}

    def bulk_action(self, value: str) -> BulkAction | None:
        return next((action for action in self.bulk_actions if action.value == value), None)


def render_active(value: Any, record: Record) -> str:
    return "Active" if value else "Inactive"


def render_season_date(value: Any, record: Record) -> str:
    return format_season_date(value)


def render_season_year(value: Any, record: Record) -> int | None:
    start = record.get("start_date")
    return season_year(start) if start else None


def season_status_renderer(today: Callable[[], date] = date.today) -> CellRenderer:
    def render_season_status(value: Any, record: Record) -> str | None:
        if not record.get("start_date") or not record.get("end_date"):
            return None
        return season_status(record["start_date"], record["end_date"], today=today()).status

    return render_season_status


@dataclass
class TableRegistry:
    definitions: dict[str, TableDefinition] = field(default_factory=dict)

    def register(self, definition: TableDefinition) -> TableDefinition:
        self.definitions[definition.name] = definition
        return definition

    def get(self, name: str) -> TableDefinition:
        definition = self.definitions.get(name)
        if definition is None:
            raise AppError(ErrorCatalog.TABLE_NOT_FOUND, details={"table": name})
        return definition

    def names(self) -> list[str]:
        return sorted(self.definitions)


def build_default_registry(today: Callable[[], date] = date.today) -> TableRegistry:
    registry = TableRegistry()
    registry.register(
        TableDefinition(
            name="hotels",
            source="hotels",
            title="Hotels",
            description="Lodges, camps and hotels available for quotes",
            columns=(
                Column("hotel_name", "Hotel", sortable=True),
                Column("location", "Location", sortable=True),
                Column("category", "Category", sortable=True),
                Column("contact_email", "Email"),
                Column("is_active", "Status", sortable=True, render=render_active),
            ),
            search_fields=("hotel_name", "contact_email"),
            bulk_actions=(ACTIVATE, DEACTIVATE, DELETE),
            active_field="is_active",
        )
    )
    registry.register(
        TableDefinition(
            name="hotel_seasons",
            source="hotels_seasons",
            title="Hotel Seasons",
            description="Seasonal date ranges used by hotel rates",
            columns=(
                Column("hotel_id", "Hotel", sortable=True),
                Column("season_name", "Season", sortable=True),
                Column("start_date", "Start Date", sortable=True, render=render_season_date),
                Column("end_date", "End Date", sortable=True, render=render_season_date),
                Column("year", "Year", render=render_season_year),
                Column("status", "Status", render=season_status_renderer(today)),
            ),
            search_fields=("season_name",),
            bulk_actions=(COPY_TO_NEXT_YEAR, ROLL_TO_CURRENT_YEAR, DELETE),
            is_season_table=True,
        )
    )
    registry.register(
        TableDefinition(
            name="parks",
            source="national_parks",
            title="National Parks",
            columns=(
                Column("national_park_name", "Park", sortable=True),
                Column("country", "Country", sortable=True),
                Column("circuit", "Circuit", sortable=True),
                Column("is_active", "Status", sortable=True, render=render_active),
            ),
            search_fields=("national_park_name",),
            bulk_actions=(ACTIVATE, DEACTIVATE, DELETE),
            active_field="is_active",
        )
    )
    registry.register(
        TableDefinition(
            name="customers",
            source="customers",
            title="Customers",
            columns=(
                Column("name", "Name", sortable=True),
                Column("country", "Country", sortable=True),
                Column("customer_from", "Customer Since", sortable=True),
                Column("cus_is_active", "Status", sortable=True, render=render_active),
            ),
            bulk_actions=(ACTIVATE, DEACTIVATE, DELETE),
            active_field="cus_is_active",
        )
    )
    registry.register(
        TableDefinition(
            name="agents",
            source="agents",
            title="Agents",
            columns=(
                Column("agent_name", "Agent", sortable=True),
                Column("agent_email", "Email"),
                Column("country", "Country", sortable=True),
                Column("agent_is_active", "Status", sortable=True, render=render_active),
            ),
            search_fields=("agent_name", "agent_email"),
            bulk_actions=(ACTIVATE, DEACTIVATE, DELETE),
            active_field="agent_is_active",
        )
    )
    registry.register(
        TableDefinition(
            name="transport_companies",
            source="transport_companies",
            title="Transport Companies",
            columns=(
                Column("company_name", "Company", sortable=True),
                Column("city", "City", sortable=True),
                Column("transport_type", "Type", sortable=True),
            ),
            search_fields=("company_name", "city"),
            bulk_actions=(DELETE,),
        )
    )
    return registry
