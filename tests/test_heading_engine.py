import math

import pytest

from services.heading_engine import (
    ALIGNMENT_HALF_WIDTH,
    AlignmentResult,
    GeoCoordinate,
    HeadingAlignmentEngine,
    is_within_window,
    proximity_ratio,
)
from utils.geo_math import BoundaryPolicy, normalize_angle


TARGETS = [0.0, 10.0, 29.0, 30.0, 45.0, 90.0, 180.0, 329.0, 330.0, 331.0, 350.0, 359.0]


def test_default_target_is_north():
    assert HeadingAlignmentEngine().target_heading == 0.0


@pytest.mark.parametrize("raw,expected", [(370.0, 10.0), (-10.0, 350.0), (720.0, 0.0), (-725.0, 355.0)])
def test_set_target_normalizes(raw, expected):
    engine = HeadingAlignmentEngine()
    assert engine.set_target(raw) == pytest.approx(expected)
    assert engine.target_heading == pytest.approx(expected)


def test_wraparound_window():
    engine = HeadingAlignmentEngine()
    engine.set_target(10)
    assert engine.evaluate(350).is_aligned
    assert engine.evaluate(20).is_aligned
    assert engine.evaluate(-15).is_aligned
    assert not engine.evaluate(100).is_aligned


def test_wraparound_window_above_330():
    engine = HeadingAlignmentEngine(target=350)
    assert engine.evaluate(15).is_aligned
    assert engine.evaluate(330).is_aligned
    assert not engine.evaluate(21).is_aligned
    assert not engine.evaluate(319).is_aligned


@pytest.mark.parametrize("target", TARGETS)
def test_center_is_exact(target):
    engine = HeadingAlignmentEngine(target=target)
    result = engine.evaluate(target)
    assert result.is_aligned
    assert result.proximity_ratio == 1.0


@pytest.mark.parametrize("target", TARGETS)
def test_window_edges_are_inclusive(target):
    engine = HeadingAlignmentEngine(target=target)
    for edge in (target + ALIGNMENT_HALF_WIDTH, target - ALIGNMENT_HALF_WIDTH):
        result = engine.evaluate(edge)
        assert result.is_aligned, edge
        assert result.proximity_ratio == 0.0
    assert not engine.evaluate(target + 31).is_aligned
    assert not engine.evaluate(target - 31).is_aligned


@pytest.mark.parametrize("target", TARGETS)
def test_ratio_is_continuous_across_seam(target):
    engine = HeadingAlignmentEngine(target=target)
    for offset in (-20, -5, 5, 20):
        result = engine.evaluate(target + offset)
        assert result.is_aligned
        assert result.proximity_ratio == pytest.approx(1 - abs(offset) / ALIGNMENT_HALF_WIDTH)


def test_ratio_is_zero_outside_window():
    engine = HeadingAlignmentEngine(target=90)
    result = engine.evaluate(200)
    assert not result.is_aligned
    assert result.proximity_ratio == 0.0


def test_north_target_scenario():
    engine = HeadingAlignmentEngine()
    engine.set_target(0)

    near = engine.evaluate(355)
    assert near.is_aligned
    assert near.proximity_ratio == pytest.approx(0.8333, abs=1e-3)
    assert near.compass_label == "N"

    away = engine.evaluate(180)
    assert away == AlignmentResult(is_aligned=False, proximity_ratio=0.0, compass_label="S")


def test_set_target_is_idempotent():
    engine = HeadingAlignmentEngine()
    engine.set_target(123.4)
    first = [engine.evaluate(h) for h in range(0, 360, 7)]
    engine.set_target(123.4)
    second = [engine.evaluate(h) for h in range(0, 360, 7)]
    assert first == second


def test_evaluate_has_no_memory_of_previous_readings():
    engine = HeadingAlignmentEngine(target=45)
    baseline = engine.evaluate(50)
    for heading in (0, 200, 44, 46, 359):
        engine.evaluate(heading)
    assert engine.evaluate(50) == baseline


def test_label_is_independent_of_alignment():
    engine = HeadingAlignmentEngine(target=180)
    assert engine.evaluate(90).compass_label == "E"
    assert engine.evaluate(30).compass_label == ""
    assert HeadingAlignmentEngine(boundary_policy=BoundaryPolicy.HALF_OPEN).evaluate(30).compass_label == "NE"


def test_non_finite_heading_is_treated_as_north():
    engine = HeadingAlignmentEngine()
    result = engine.evaluate(math.nan)
    assert result.is_aligned
    assert result.proximity_ratio == 1.0


def test_bearing_known_values():
    equator = GeoCoordinate(0.0, 0.0)
    assert HeadingAlignmentEngine.bearing(equator, GeoCoordinate(0.0, 90.0)) == pytest.approx(90.0)
    assert HeadingAlignmentEngine.bearing(equator, GeoCoordinate(90.0, 0.0)) == pytest.approx(0.0, abs=1e-9)
    same = GeoCoordinate(51.5, 0.0)
    assert math.isfinite(HeadingAlignmentEngine.bearing(same, same))


def test_bearing_does_not_touch_target():
    engine = HeadingAlignmentEngine(target=77)
    engine.bearing(GeoCoordinate(0.0, 0.0), GeoCoordinate(0.0, 90.0))
    assert engine.target_heading == 77.0


def test_aim_at_sets_target_to_bearing():
    engine = HeadingAlignmentEngine()
    target = engine.aim_at(GeoCoordinate(0.0, 0.0), GeoCoordinate(0.0, -90.0))
    assert target == pytest.approx(270.0)
    assert engine.evaluate(265).is_aligned


def test_geo_coordinate_is_immutable():
    point = GeoCoordinate(1.0, 2.0)
    with pytest.raises(AttributeError):
        point.latitude = 5.0


def test_window_helpers():
    assert is_within_window(normalize_angle(-30), 0.0)
    assert not is_within_window(31.0, 0.0)
    assert is_within_window(0.0, 330.0)
    assert proximity_ratio(15.0, 0.0) == pytest.approx(0.5)
    assert proximity_ratio(90.0, 0.0) == 0.0


@pytest.mark.parametrize("target", [-244.6, -28.473159, -719.3, 412.77, 1e4 + 0.1])
def test_window_edges_hold_for_unnormalized_targets(target):
    engine = HeadingAlignmentEngine(target=target)
    for edge in (target + ALIGNMENT_HALF_WIDTH, target - ALIGNMENT_HALF_WIDTH):
        result = engine.evaluate(edge)
        assert result.is_aligned, edge
        assert result.proximity_ratio == 0.0
    assert engine.evaluate(target).proximity_ratio == 1.0
    assert not engine.evaluate(target + 30.5).is_aligned


def test_window_edge_for_heading_computed_separately():
    engine = HeadingAlignmentEngine(target=-28.473159)
    assert engine.evaluate(1.526841).is_aligned
