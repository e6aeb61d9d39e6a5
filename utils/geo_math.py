import math
from enum import Enum
from typing import List, Tuple


FULL_TURN = 360.0

# (label, start, end) in degrees; N spans the 0/360 seam.
COMPASS_SECTORS: List[Tuple[str, float, float]] = [
    ("N", 330.0, 30.0),
    ("NE", 30.0, 60.0),
    ("E", 60.0, 120.0),
    ("SE", 120.0, 150.0),
    ("S", 150.0, 210.0),
    ("SW", 210.0, 240.0),
    ("W", 240.0, 300.0),
    ("NW", 300.0, 330.0),
]
UNCLASSIFIED = ""


class BoundaryPolicy(str, Enum):
    # OPEN leaves every sector boundary unclassified.
    OPEN = "open"
    # HALF_OPEN gives a boundary to the sector starting there.
    HALF_OPEN = "half_open"


SECTOR_BOUNDARY_POLICY = BoundaryPolicy.OPEN


def normalize_angle(degrees: float) -> float:
    if not math.isfinite(degrees):
        return 0.0
    value = degrees % FULL_TURN
    # tiny negatives round up to exactly 360.0
    if value >= FULL_TURN:
        return 0.0
    return value


def angular_distance(a: float, b: float) -> float:
    diff = abs(normalize_angle(a) - normalize_angle(b))
    return min(diff, FULL_TURN - diff)


def haversine_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    r = 6371.0
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return r * c


def calculate_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dlambda = math.radians(lon2 - lon1)
    y = math.sin(dlambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlambda)
    # atan2(0, 0) is 0.0, so coincident points stay finite
    bearing = math.degrees(math.atan2(y, x))
    return normalize_angle(bearing)


def _in_sector(heading: float, start: float, end: float, policy: BoundaryPolicy) -> bool:
    width = normalize_angle(end - start)
    offset = normalize_angle(heading - start)
    if policy == BoundaryPolicy.HALF_OPEN:
        return 0.0 <= offset < width
    return 0.0 < offset < width


def compass_label(heading: float, policy: BoundaryPolicy = SECTOR_BOUNDARY_POLICY) -> str:
    heading = normalize_angle(heading)
    for label, start, end in COMPASS_SECTORS:
        if _in_sector(heading, start, end, policy):
            return label
    return UNCLASSIFIED
