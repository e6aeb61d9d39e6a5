import logging
import os
from typing import List

from utils.geo_math import BoundaryPolicy

logger = logging.getLogger(__name__)


def parse_origins(value: str) -> List[str]:
    if value and value != "*":
        return [origin.strip() for origin in value.split(",") if origin.strip()]
    return ["*"]


def parse_boundary_policy(value: str) -> BoundaryPolicy:
    try:
        return BoundaryPolicy(value.strip().lower())
    except ValueError:
        logger.warning("Unknown COMPASS_SECTOR_BOUNDARIES value %r, falling back to %s",
                       value, BoundaryPolicy.OPEN.value)
        return BoundaryPolicy.OPEN


def parse_int(value: str, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
API_VERSION = os.getenv("API_VERSION", "1.0.0")
ALLOWED_ORIGINS = parse_origins(os.getenv("ALLOWED_ORIGINS", "*"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = parse_int(os.getenv("PORT", "8000"), 8000)

MAX_SESSIONS = parse_int(os.getenv("MAX_SESSIONS", "1000"), 1000)
SECTOR_BOUNDARIES = parse_boundary_policy(os.getenv("COMPASS_SECTOR_BOUNDARIES", "open"))
