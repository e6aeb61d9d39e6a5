import threading
from dataclasses import dataclass

from utils.geo_math import (
    SECTOR_BOUNDARY_POLICY,
    BoundaryPolicy,
    angular_distance,
    calculate_bearing,
    compass_label,
    normalize_angle,
)


ALIGNMENT_HALF_WIDTH = 30.0
# separately normalized angles can differ by a few ULPs
ANGLE_EPSILON = 1e-9


@dataclass(frozen=True)
class GeoCoordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class AlignmentResult:
    is_aligned: bool
    proximity_ratio: float
    compass_label: str


class HeadingAlignmentEngine:
    """Compares a stream of fused headings against a target heading.

    The target is the only state. ``evaluate`` never looks at earlier
    readings, so the same heading always yields the same result for a
    given target.
    """

    def __init__(self, target: float = 0.0, boundary_policy: BoundaryPolicy = SECTOR_BOUNDARY_POLICY):
        self._lock = threading.Lock()
        self._target = normalize_angle(target)
        self.boundary_policy = boundary_policy

    @property
    def target_heading(self) -> float:
        with self._lock:
            return self._target

    def set_target(self, angle: float) -> float:
        target = normalize_angle(angle)
        with self._lock:
            self._target = target
        return target

    @staticmethod
    def bearing(origin: GeoCoordinate, destination: GeoCoordinate) -> float:
        return calculate_bearing(origin.latitude, origin.longitude, destination.latitude, destination.longitude)

    def aim_at(self, origin: GeoCoordinate, destination: GeoCoordinate) -> float:
        """Point the target at ``destination`` as seen from ``origin``."""
        return self.set_target(self.bearing(origin, destination))

    def evaluate(self, current: float) -> AlignmentResult:
        current = normalize_angle(current)
        target = self.target_heading
        aligned = is_within_window(current, target)
        ratio = proximity_ratio(current, target) if aligned else 0.0
        return AlignmentResult(
            is_aligned=aligned,
            proximity_ratio=ratio,
            compass_label=compass_label(current, self.boundary_policy),
        )


def is_within_window(current: float, target: float, half_width: float = ALIGNMENT_HALF_WIDTH) -> bool:
    """Inclusive window test around ``target``, measured along the short arc."""
    return angular_distance(current, target) <= half_width + ANGLE_EPSILON


def proximity_ratio(current: float, target: float, half_width: float = ALIGNMENT_HALF_WIDTH) -> float:
    distance = angular_distance(current, target)
    if distance <= ANGLE_EPSILON:
        return 1.0
    if distance >= half_width - ANGLE_EPSILON:
        return 0.0
    return 1.0 - distance / half_width
