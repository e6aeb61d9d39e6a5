"""
Compass Alignment API (FastAPI)
Hosts heading-alignment engines for compass clients: bearing lookups,
one-off evaluations and per-device sessions fed with heading updates.
"""
import logging
import os
from fastapi import FastAPI, APIRouter
from fastapi.middleware.cors import CORSMiddleware

import config
from api.routers.v1_compass import router as compass_router
from api.routers.v1_health import router as health_router
from api.routers.v1_sessions import router as sessions_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Compass Alignment API",
    description="Heading alignment, bearing and compass-rose classification for compass widgets.",
    version=config.API_VERSION,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API router (versionable)
api_router = APIRouter(prefix="/api", tags=["api"])
api_router.include_router(health_router)
api_router.include_router(compass_router)
api_router.include_router(sessions_router)


@app.get("/")
async def root():
    base_url = os.getenv("BASE_URL", f"http://localhost:{config.PORT}")
    return {
        "message": "Compass Alignment API",
        "version": config.API_VERSION,
        "environment": config.ENVIRONMENT,
        "base_url": base_url,
        "docs": f"{base_url}/docs",
        "health": f"{base_url}/health",
        "example_routes": {
            "bearing": f"{base_url}/api/v1/compass/bearing",
            "evaluate": f"{base_url}/api/v1/compass/evaluate",
            "sessions": f"{base_url}/api/v1/sessions",
        },
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "compass-alignment",
        "version": config.API_VERSION,
        "environment": config.ENVIRONMENT,
    }


# Mount router
app.include_router(api_router)
logger.info("Compass Alignment API configured (environment=%s, sector_boundaries=%s)",
            config.ENVIRONMENT, config.SECTOR_BOUNDARIES.value)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host="0.0.0.0", port=config.PORT, reload=True, log_level=config.LOG_LEVEL.lower())
