from fastapi import Depends, Request
from sqlalchemy import Engine

from app.safari.data.records import RecordSource
from app.safari.services.seasons import SeasonService
from app.safari.services.tables import TableService
from app.safari.tables.cache import ListingCache
from app.safari.tables.registry import TableRegistry


def get_db_engine(request: Request) -> Engine:
    return request.app.state.db_engine


def get_record_source(request: Request) -> RecordSource:
    return request.app.state.record_source


def get_listing_cache(request: Request) -> ListingCache:
    return request.app.state.listing_cache


def get_registry(request: Request) -> TableRegistry:
    return request.app.state.table_registry


def get_season_service(source: RecordSource = Depends(get_record_source)) -> SeasonService:
    return SeasonService(source)


def get_table_service(
    registry: TableRegistry = Depends(get_registry),
    source: RecordSource = Depends(get_record_source),
    cache: ListingCache = Depends(get_listing_cache),
    seasons: SeasonService = Depends(get_season_service),
) -> TableService:
    return TableService(registry, source, cache, seasons)
