from __future__ import annotations

import logging
from typing import Any, Sequence

from sqlalchemy.exc import SQLAlchemyError

from app.safari.core.config import settings
from app.safari.core.error_catalog import AppError, ErrorCatalog
from app.safari.core.logging import log_json
from app.safari.data.records import RecordSource
from app.safari.services.seasons import SeasonService
from app.safari.tables.cache import ListingCache
from app.safari.tables.engine import TableEngine
from app.safari.tables.export import export_current_view
from app.safari.tables.registry import TableDefinition, TableRegistry

logger = logging.getLogger(__name__)


def summarize_bulk_results(results: list[dict]) -> dict:
    success = sum(1 for item in results if item.get("result") == "success")
    return {"total": len(results), "success": success, "failed": len(results) - success}


class TableService:
    def __init__(
        self,
        registry: TableRegistry,
        source: RecordSource,
        cache: ListingCache,
        seasons: SeasonService | None = None,
    ):
        self.registry = registry
        self.source = source
        self.cache = cache
        self.seasons = seasons or SeasonService(source)

    @staticmethod
    def _cache_key(definition: TableDefinition) -> str:
        return f"table:{definition.source}"

    def rows(self, definition: TableDefinition) -> list[dict[str, Any]]:
        return self.cache.get_or_load(self._cache_key(definition), lambda: self.source.fetch_all(definition.source))

    def build_engine(
        self,
        definition: TableDefinition,
        *,
        search: str | None = None,
        sort_by: str | None = None,
        sort_dir: str = "asc",
        page_size: int | None = None,
        on_bulk_action=None,
    ) -> TableEngine:
        if sort_by and sort_by not in definition.sortable_keys():
            raise AppError(
                ErrorCatalog.VALIDATION_ERROR,
                details={"message": "Invalid sort_by", "sort_by": sort_by, "allowed": sorted(definition.sortable_keys())},
            )
        items_per_page = page_size or definition.items_per_page or settings.TABLE_DEFAULT_ITEMS_PER_PAGE
        engine = TableEngine(
            self.rows(definition),
            definition.columns,
            search_query=search,
            search_fields=definition.search_fields,
            items_per_page=min(items_per_page, settings.TABLE_MAX_ITEMS_PER_PAGE),
            bulk_actions=definition.bulk_actions,
            on_bulk_action=on_bulk_action,
        )
        engine.set_sort(sort_by, sort_dir)
        return engine

    def list_view(
        self,
        name: str,
        *,
        search: str | None = None,
        sort_by: str | None = None,
        sort_dir: str = "asc",
        page: int = 1,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        definition = self.registry.get(name)
        engine = self.build_engine(definition, search=search, sort_by=sort_by, sort_dir=sort_dir, page_size=page_size)
        engine.set_page(page)
        first, last, total = engine.showing()
        rows = [{"id": record["id"], **engine.render_row(record)} for record in engine.visible_rows]
        return {
            "table": definition.name,
            "title": definition.title,
            "columns": [
                {"key": column.key, "label": column.label, "sortable": column.sortable}
                for column in definition.columns
            ],
            "bulk_actions": [
                {"label": action.label, "value": action.value, "variant": action.variant}
                for action in definition.bulk_actions
            ],
            "rows": rows,
            "sort": {"key": engine.sort_state.key, "direction": engine.sort_state.direction} if engine.sort_state else None,
            "search": engine.search_query or None,
            "pagination": {
                "page": engine.current_page,
                "page_size": engine.items_per_page,
                "total_pages": engine.total_pages,
                "total": total,
                "count": len(rows),
                "first": first,
                "last": last,
                "page_window": engine.page_window,
            },
        }

    def export_csv(self, name: str, *, search: str | None = None, sort_by: str | None = None, sort_dir: str = "asc") -> str:
        definition = self.registry.get(name)
        return export_current_view(self.build_engine(definition, search=search, sort_by=sort_by, sort_dir=sort_dir))

    def bulk_action(self, name: str, action: str, ids: Sequence[Any]) -> dict[str, Any]:
        definition = self.registry.get(name)
        if definition.bulk_action(action) is None:
            raise AppError(
                ErrorCatalog.BULK_ACTION_NOT_SUPPORTED,
                details={"table": name, "action": action, "allowed": [item.value for item in definition.bulk_actions]},
            )

        # Ids resolve against freshly loaded rows.
        self.cache.invalidate_prefix(self._cache_key(definition))
        records = {str(row["id"]): row for row in self.rows(definition)}
        results: list[dict] = []

        def _handler(value: str, selected: list[Any]) -> None:
            for record_id in selected:
                results.append(self._apply_one(definition, value, record_id, records.get(str(record_id))))

        engine = self.build_engine(definition, on_bulk_action=_handler)
        resolved = [records[str(item)]["id"] if str(item) in records else item for item in ids]
        for record_id in dict.fromkeys(resolved):
            engine.toggle_select_row(record_id)
        try:
            engine.dispatch_bulk_action(action)
        finally:
            self.cache.invalidate_prefix(self._cache_key(definition))

        summary = summarize_bulk_results(results)
        log_json(logger, {"event": "table_bulk_action", "table": name, "action": action, **summary})
        return {"table": name, "action": action, "results": results, "summary": summary}

    def _apply_one(self, definition: TableDefinition, action: str, record_id: Any, record: dict | None) -> dict:
        if record is None:
            return {"id": record_id, "result": "error", "code": ErrorCatalog.RECORD_NOT_FOUND.code}
        try:
            affected = self._mutate(definition, action, record)
        except SQLAlchemyError as exc:
            logger.warning("bulk %s failed for %s id=%s: %s", action, definition.source, record_id, exc)
            return {"id": record_id, "result": "error", "code": ErrorCatalog.MUTATION_FAILED.code}
        if not affected:
            return {"id": record_id, "result": "error", "code": ErrorCatalog.RECORD_NOT_FOUND.code}
        return {"id": record_id, "result": "success"}

    def _mutate(self, definition: TableDefinition, action: str, record: dict) -> int:
        if action == "delete":
            return self.source.delete_many(definition.source, [record["id"]])
        if action in {"activate", "deactivate"} and definition.active_field:
            return self.source.update_many(
                definition.source,
                [record["id"]],
                {definition.active_field: action == "activate"},
            )
        if action == "copy_to_next_year" and definition.is_season_table:
            return self.seasons.copy_records([record])
        if action == "roll_to_current_year" and definition.is_season_table:
            return self.seasons.roll_record(record)
        raise AppError(ErrorCatalog.BULK_ACTION_NOT_SUPPORTED, details={"table": definition.name, "action": action})
