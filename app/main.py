from fastapi import FastAPI

from app.safari.api import api_router
from app.safari.core.config import settings
from app.safari.core.errors import setup_exception_handlers
from app.safari.core.logging import configure_logging
from app.safari.data.records import RecordSource, SqlAlchemyRecordSource
from app.safari.db import session
from app.safari.middleware.observability import ObservabilityMiddleware
from app.safari.middleware.trace import TraceIdMiddleware
from app.safari.tables.cache import ListingCache
from app.safari.tables.registry import TableRegistry, build_default_registry


def create_app(
    *,
    record_source: RecordSource | None = None,
    registry: TableRegistry | None = None,
    listing_cache: ListingCache | None = None,
) -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.APP_NAME)
    app.state.db_engine = session.engine
    app.state.record_source = record_source or SqlAlchemyRecordSource(session.engine)
    app.state.table_registry = registry or build_default_registry()
    app.state.listing_cache = listing_cache or ListingCache(ttl_seconds=settings.LISTING_CACHE_TTL_SECONDS)
    app.add_middleware(TraceIdMiddleware)
    app.add_middleware(ObservabilityMiddleware)
    setup_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()
