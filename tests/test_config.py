import logging

from config import parse_boundary_policy, parse_int, parse_origins
from utils.geo_math import BoundaryPolicy


def test_parse_origins():
    assert parse_origins("*") == ["*"]
    assert parse_origins("") == ["*"]
    assert parse_origins("http://a.test, http://b.test") == ["http://a.test", "http://b.test"]


def test_parse_boundary_policy():
    assert parse_boundary_policy("half_open") is BoundaryPolicy.HALF_OPEN
    assert parse_boundary_policy(" OPEN ") is BoundaryPolicy.OPEN
    assert parse_boundary_policy("bogus") is BoundaryPolicy.OPEN


def test_parse_int():
    assert parse_int("42", 1) == 42
    assert parse_int("x", 7) == 7


def test_unknown_boundary_policy_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="config"):
        assert parse_boundary_policy("closed") is BoundaryPolicy.OPEN
    assert "closed" in caplog.text


def test_known_boundary_policy_is_quiet(caplog):
    with caplog.at_level(logging.WARNING, logger="config"):
        parse_boundary_policy("half_open")
    assert caplog.records == []
