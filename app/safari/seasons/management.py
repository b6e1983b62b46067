"""Hotel season date utilities.

Seasons are plain records with ``start_date``/``end_date`` as :class:`date`
values (ISO strings are accepted on input). Everything that depends on the
current day takes ``today`` so callers and tests control the clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Literal

SeasonRecord = dict[str, Any]
SeasonPhase = Literal["active", "upcoming", "past"]


@dataclass(frozen=True)
class SeasonStatus:
    status: SeasonPhase
    days_until_start: int | None = None
    days_until_end: int | None = None
    days_since_end: int | None = None


def to_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date()


def _today(today: date | None) -> date:
    return today or date.today()


def with_year(value: date, year: int) -> date:
    # 29 February falls back to 28 February in non-leap years.
    try:
        return value.replace(year=year)
    except ValueError:
        return value.replace(year=year, day=28)


def season_status(start: date | str, end: date | str, today: date | None = None) -> SeasonStatus:
    start_day, end_day, now = to_date(start), to_date(end), _today(today)
    if now < start_day:
        return SeasonStatus(status="upcoming", days_until_start=(start_day - now).days)
    if now > end_day:
        return SeasonStatus(status="past", days_since_end=(now - end_day).days)
    return SeasonStatus(status="active", days_until_end=(end_day - now).days)


def is_season_past(end: date | str, today: date | None = None) -> bool:
    return _today(today) > to_date(end)


def season_year(start: date | str) -> int:
    return to_date(start).year


def copy_season_to_year(season: SeasonRecord, target_year: int | None = None) -> SeasonRecord:
    """Copy of ``season`` shifted to ``target_year`` (default: the following year).

    The copy has no ``id`` so the database assigns a new one. A season that
    crosses New Year keeps its span: only the start year is set, the end date
    moves by the same number of years.
    """
    start_day, end_day = to_date(season["start_date"]), to_date(season["end_date"])
    year = target_year or start_day.year + 1
    shift = year - start_day.year
    copied = {key: value for key, value in season.items() if key != "id"}
    copied["start_date"] = with_year(start_day, year)
    copied["end_date"] = with_year(end_day, end_day.year + shift)
    return copied


def adjust_season_to_year(season: SeasonRecord, year: int | None = None, today: date | None = None) -> SeasonRecord:
    """Rolling-year update: same season, dates moved to ``year`` (default: current year)."""
    start_day, end_day = to_date(season["start_date"]), to_date(season["end_date"])
    target = year or _today(today).year
    shift = target - start_day.year
    adjusted = dict(season)
    adjusted["start_date"] = with_year(start_day, target)
    adjusted["end_date"] = with_year(end_day, end_day.year + shift)
    return adjusted


def season_template(
    name: str,
    start_month: int,
    start_day: int,
    end_month: int,
    end_day: int,
    hotel_id: int,
    year: int,
) -> SeasonRecord:
    return {
        "season_name": name,
        "start_date": date(year, start_month, start_day),
        "end_date": date(year, end_month, end_day),
        "hotel_id": hotel_id,
    }


def generate_seasons_for_years(
    name: str,
    start_month: int,
    start_day: int,
    end_month: int,
    end_day: int,
    hotel_id: int,
    start_year: int,
    end_year: int,
) -> list[SeasonRecord]:
    return [
        season_template(name, start_month, start_day, end_month, end_day, hotel_id, year)
        for year in range(start_year, end_year + 1)
    ]


def past_seasons(seasons: Iterable[SeasonRecord], today: date | None = None) -> list[SeasonRecord]:
    return [season for season in seasons if is_season_past(season["end_date"], today)]


def seasons_by_year(seasons: Iterable[SeasonRecord], year: int) -> list[SeasonRecord]:
    return [season for season in seasons if season_year(season["start_date"]) == year]


def format_season_date(value: date | str | None) -> str:
    if value is None:
        return ""
    day = to_date(value)
    return f"{day.strftime('%b')} {day.day}, {day.year}"


def season_duration(start: date | str, end: date | str) -> int:
    """Length in days, both ends included."""
    return (to_date(end) - to_date(start)).days + 1


def seasons_overlap(start1: date | str, end1: date | str, start2: date | str, end2: date | str) -> bool:
    return to_date(start1) <= to_date(end2) and to_date(start2) <= to_date(end1)


def validate_season_dates(start: date | str, end: date | str, today: date | None = None) -> tuple[bool, str | None]:
    start_day, end_day = to_date(start), to_date(end)
    if start_day >= end_day:
        return False, "End date must be after start date"
    if start_day < _today(today):
        return False, "Start date cannot be in the past"
    return True, None
