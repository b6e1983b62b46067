from fastapi import APIRouter, Depends, Request
from sqlalchemy import text

from app.safari.core.deps import get_db_engine
from app.safari.core.error_catalog import ErrorCatalog
from app.safari.core.errors import error_response

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    trace_id = getattr(request.state, "trace_id", "")
    return {"status": "ok", "trace_id": trace_id}


@router.get("/ready")
async def ready(request: Request, db_engine=Depends(get_db_engine)):
    trace_id = getattr(request.state, "trace_id", "")
    try:
        with db_engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as exc:
        return error_response(
            code=ErrorCatalog.DB_UNAVAILABLE.code,
            message=ErrorCatalog.DB_UNAVAILABLE.message,
            details=str(exc),
            trace_id=trace_id,
            status_code=ErrorCatalog.DB_UNAVAILABLE.status_code,
        )
    return {"status": "ready", "trace_id": trace_id}
