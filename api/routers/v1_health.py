import os
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from config import API_VERSION, SECTOR_BOUNDARIES
from api.routers.v1_sessions import get_registry
from services.compass_sessions import CompassSessionRegistry
from services.heading_engine import ALIGNMENT_HALF_WIDTH


router = APIRouter(prefix="/v1", tags=["health"])


@router.get("/health")
async def health(registry: CompassSessionRegistry = Depends(get_registry)):
    return {
        "status": "healthy",
        "version": API_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "active_sessions": registry.count(),
    }


@router.get("/version")
async def version():
    return {
        "version": API_VERSION,
        "build_date": os.getenv("BUILD_DATE", ""),
        "api_prefix": "/api/v1",
        "documentation_url": "/docs",
        "alignment_half_width_deg": ALIGNMENT_HALF_WIDTH,
        "sector_boundaries": SECTOR_BOUNDARIES.value,
    }
