from fastapi import APIRouter, Depends, Request

from app.safari.core.deps import get_listing_cache, get_season_service
from app.safari.schemas.tables import SeasonCopyRequest, SeasonCopyResponse
from app.safari.services.seasons import SeasonService
from app.safari.tables.cache import ListingCache

router = APIRouter()


@router.post("/seasons/copy", response_model=SeasonCopyResponse, status_code=201)
def copy_seasons(
    request: Request,
    payload: SeasonCopyRequest,
    service: SeasonService = Depends(get_season_service),
    cache: ListingCache = Depends(get_listing_cache),
):
    outcome = service.copy_to_year(payload.ids, payload.target_year)
    cache.invalidate_prefix(f"table:{service.table}")
    return SeasonCopyResponse(**outcome, trace_id=getattr(request.state, "trace_id", ""))
