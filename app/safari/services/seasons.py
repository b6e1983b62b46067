from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Sequence

from app.safari.core.error_catalog import AppError, ErrorCatalog
from app.safari.core.logging import log_json
from app.safari.data.records import RecordSource
from app.safari.seasons.management import adjust_season_to_year, copy_season_to_year

logger = logging.getLogger(__name__)

SEASONS_SOURCE = "hotels_seasons"


class SeasonService:
    def __init__(self, source: RecordSource, *, table: str = SEASONS_SOURCE, today: Callable[[], date] = date.today):
        self.source = source
        self.table = table
        self._today = today

    def selected(self, ids: Sequence[Any]) -> list[dict[str, Any]]:
        wanted = {str(item) for item in ids}
        return [row for row in self.source.fetch_all(self.table) if str(row["id"]) in wanted]

    def copy_records(self, seasons: Sequence[dict[str, Any]], target_year: int | None = None) -> int:
        copies = [copy_season_to_year(season, target_year) for season in seasons]
        return self.source.insert_many(self.table, copies)

    def roll_record(self, season: dict[str, Any]) -> int:
        adjusted = adjust_season_to_year(season, today=self._today())
        return self.source.update_many(
            self.table,
            [season["id"]],
            {"start_date": adjusted["start_date"], "end_date": adjusted["end_date"]},
        )

    def copy_to_year(self, ids: Sequence[Any], target_year: int | None = None) -> dict[str, Any]:
        if not ids:
            raise AppError(ErrorCatalog.VALIDATION_ERROR, details={"message": "Select at least one season to copy"})
        seasons = self.selected(ids)
        found = {str(season["id"]) for season in seasons}
        missing = [item for item in ids if str(item) not in found]
        if missing:
            raise AppError(ErrorCatalog.RECORD_NOT_FOUND, details={"ids": missing})
        created = self.copy_records(seasons, target_year)
        log_json(
            logger,
            {"event": "seasons_copied", "table": self.table, "count": created, "target_year": target_year},
        )
        return {"created": created, "target_year": target_year}
