from fastapi import APIRouter

from app.safari.routers.health import router as health_router
from app.safari.routers.seasons import router as seasons_router
from app.safari.routers.tables import router as tables_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(tables_router, prefix="/safari", tags=["tables"])
api_router.include_router(seasons_router, prefix="/safari", tags=["seasons"])
