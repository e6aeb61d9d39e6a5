import math
from dataclasses import dataclass

from services.heading_engine import AlignmentResult
from utils.geo_math import normalize_angle


INTENSITY_NONE = "none"
INTENSITY_FAINT = "faint"
INTENSITY_MEDIUM = "medium"
INTENSITY_STRONG = "strong"

MEDIUM_THRESHOLD = 0.5
STRONG_THRESHOLD = 0.85


@dataclass(frozen=True)
class FeedbackCue:
    intensity: str
    pulse: bool
    dial_rotation: float
    marker_rotation: float


def intensity_for(result: AlignmentResult) -> str:
    if not result.is_aligned:
        return INTENSITY_NONE
    if result.proximity_ratio >= STRONG_THRESHOLD:
        return INTENSITY_STRONG
    if result.proximity_ratio >= MEDIUM_THRESHOLD:
        return INTENSITY_MEDIUM
    return INTENSITY_FAINT


def _whole_degree(angle: float) -> int:
    return math.floor(normalize_angle(angle) + 0.5) % 360


def is_on_target(current: float, target: float) -> bool:
    # heading rounded half-up to a whole degree lands on the target degree
    return _whole_degree(current) == _whole_degree(target)


def feedback_for(result: AlignmentResult, current: float, target: float) -> FeedbackCue:
    current = normalize_angle(current)
    target = normalize_angle(target)
    return FeedbackCue(
        intensity=intensity_for(result),
        pulse=is_on_target(current, target),
        dial_rotation=current,
        marker_rotation=normalize_angle(target - current),
    )
