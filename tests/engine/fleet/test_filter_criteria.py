"""Unit tests for FilterCriteria and range helpers (src/engine/fleet/criteria.py)."""

from __future__ import annotations

import pytest

from engine.fleet.criteria import (
    DISTANCE_UNBOUNDED,
    FUEL_MAX,
    FilterCriteria,
    clamp_range,
)

pytestmark = pytest.mark.unit


class TestDefaults:
    def test_fresh_criteria_is_default(self):
        c = FilterCriteria()
        assert c.is_default()
        assert c.fuel_min == 0
        assert c.fuel_max == FUEL_MAX
        assert c.distance_max == DISTANCE_UNBOUNDED
        assert c.affiliation == "All Types"
        assert c.distance_bounded is False

    def test_any_change_is_not_default(self):
        assert not FilterCriteria(has_satcom=True).is_default()
        assert not FilterCriteria(callsign="X").is_default()


class TestClampRange:
    def test_inside_bounds(self):
        assert clamp_range(10, 90, 0, 100) == (10, 90)

    def test_clamps_to_bounds(self):
        assert clamp_range(-5, 150, 0, 100) == (0, 100)

    def test_upper_never_below_lower(self):
        assert clamp_range(60, 20, 0, 100) == (60, 60)


class TestRanges:
    def test_fuel_range(self):
        c = FilterCriteria().with_fuel_range(30, 200)
        assert (c.fuel_min, c.fuel_max) == (30, 100)

    def test_distance_range_bounded(self):
        c = FilterCriteria().with_distance_range(100, 2500)
        assert (c.distance_min, c.distance_max) == (100, 2500)
        assert c.distance_bounded is True

    def test_distance_max_at_sentinel_is_unbounded(self):
        c = FilterCriteria().with_distance_range(0, 20_000)
        assert c.distance_max == DISTANCE_UNBOUNDED
        assert c.distance_bounded is False


class TestProtection:
    def test_set_and_clear_min(self):
        c = FilterCriteria().with_protection_min(3)
        assert c.protection_min_active and c.protection_min == 3
        c = c.with_protection_min(None)
        assert c.protection_min_active is False

    def test_min_above_max_clears_max(self):
        c = FilterCriteria().with_protection_max(2).with_protection_min(4)
        assert c.protection_min == 4
        assert c.protection_max_active is False

    def test_min_within_max_keeps_both(self):
        c = FilterCriteria().with_protection_max(5).with_protection_min(2)
        assert c.protection_max_active is True
        assert (c.protection_min, c.protection_max) == (2, 5)

    def test_returns_new_instance(self):
        base = FilterCriteria()
        base.with_protection_max(3)
        assert base.protection_max_active is False
