"""Unit tests for FleetConsole (src/engine/fleet/console.py)."""

from __future__ import annotations

import json

import pytest

from engine.fleet.console import DEFAULT_SORT_LABEL, FleetConsole
from engine.fleet.criteria import FilterCriteria
from engine.fleet.filtering import ViewMode
from engine.fleet.sorting import SortOrder
from engine.fleet.vehicle import VehicleRecord
from engine.simulation.kinematics import SimulationStep

pytestmark = pytest.mark.unit


@pytest.fixture
def console(vehicles):
    c = FleetConsole(step=SimulationStep(jitter=False))
    c.load_records(vehicles)
    return c


def _callsigns(records) -> list[str]:
    return [v.callsign for v in records]


class TestInitialState:
    def test_empty_console(self):
        c = FleetConsole()
        assert c.results_count == 0
        assert c.view_mode is ViewMode.UNFILTERED
        assert c.displayed is False
        assert c.sort_label == DEFAULT_SORT_LABEL

    def test_loaded_console_is_unfiltered(self, console):
        assert console.results_count == 5
        assert console.view_mode is ViewMode.UNFILTERED


class TestLoading:
    def test_load_file(self, tmp_path):
        path = tmp_path / "fleet.json"
        path.write_text(json.dumps([{"callsign": "A"}, {"callsign": "B"}]))
        c = FleetConsole()
        assert c.load(path) == 2
        assert c.results_count == 2

    def test_failed_load_keeps_fleet(self, console, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text('{"callsign": "A"}')
        assert console.load(path) is None
        assert len(console.store) == 5

    def test_reload_refreshes_view(self, console):
        console.update_criteria(affiliation="Friendly")
        console.load_records([VehicleRecord(callsign="Solo", affiliation="Friendly")])
        assert _callsigns(console.displayed_records()) == ["Solo"]
        assert console.view_mode is ViewMode.UNFILTERED


class TestFiltering:
    def test_update_criteria_narrows(self, console):
        console.update_criteria(affiliation="Friendly")
        assert console.view_mode is ViewMode.FILTERED
        assert console.results_count == 2
        assert _callsigns(console.displayed_records()) == ["Sabre", "Kestrel"]

    def test_clear_filters(self, console):
        console.update_criteria(affiliation="Hostile", has_satcom=True)
        assert console.results_count == 0
        console.clear_filters()
        assert console.criteria == FilterCriteria()
        assert console.results_count == 5

    def test_select_callsign_resolves_case(self, console):
        assert console.select_callsign("kestrel") == "Kestrel"
        assert console.criteria.callsign_active is True
        assert _callsigns(console.displayed_records()) == ["Kestrel"]

    def test_select_unknown_callsign_deactivates(self, console):
        console.select_callsign("Kestrel")
        assert console.select_callsign("Nobody") is None
        assert console.criteria.callsign_active is False
        assert console.results_count == 5

    def test_select_track_id(self, console):
        assert console.select_track_id("u-0099") == "U-0099"
        assert _callsigns(console.displayed_records()) == ["Ghost"]

    def test_set_target_refilters(self, console):
        view = console.view
        console.set_target(100, -50)
        assert console.target == (100.0, -50.0)
        assert console.view is not view


class TestDisplayAndSort:
    def test_sort_before_display_is_ignored(self, console):
        before = _callsigns(console.store)
        assert console.sort(SortOrder.FUEL_ASC) is False
        assert _callsigns(console.store) == before
        assert console.sort_label == DEFAULT_SORT_LABEL

    def test_display_sorts_closest_first(self, console):
        shown = console.display()
        assert console.displayed is True
        assert _callsigns(shown) == ["Viper", "Ghost", "Sabre", "Kestrel", "Harbor"]
        assert console.sort_label == DEFAULT_SORT_LABEL

    def test_sort_updates_label(self, console):
        console.display()
        assert console.sort(SortOrder.FUEL_DESC) is True
        assert console.sort_label == "Fuel: Full First"
        assert _callsigns(console.displayed_records()) == [
            "Kestrel", "Harbor", "Sabre", "Viper", "Ghost",
        ]

    def test_filtered_sort_leaves_store_alone(self, console):
        console.display()
        baseline = _callsigns(console.store)
        console.update_criteria(domain_active=True, domain="Land")
        console.sort(SortOrder.CLASSIFICATION_ASC)
        assert _callsigns(console.displayed_records()) == ["Ghost", "Viper", "Sabre"]
        assert _callsigns(console.store) == baseline

    def test_sort_on_empty_view_is_ignored(self, console):
        console.display()
        console.update_criteria(affiliation="Nobody")
        assert console.sort(SortOrder.PRIORITY_ASC) is False
        assert console.sort_label == DEFAULT_SORT_LABEL

    def test_display_resets_label(self, console):
        console.display()
        console.sort(SortOrder.PRIORITY_DESC)
        console.display()
        assert console.sort_label == DEFAULT_SORT_LABEL

    def test_vehicle_lookup(self, console):
        assert console.vehicle("Harbor").track_id == "N-2001"
        assert console.vehicle("harbor") is None


class TestTick:
    def test_tick_refreshes_distances(self, console):
        console.target = (3.0, 4.0)
        assert console.tick() == 5
        assert console.ticks == 1
        assert all(v.distance_to_target == pytest.approx(5.0) for v in console.store)

    def test_tick_does_not_refilter(self, console):
        console.update_criteria(distance_max=1000)
        assert _callsigns(console.displayed_records()) == ["Viper", "Ghost"]
        console.target = (1e6, 1e6)
        console.tick()
        assert _callsigns(console.displayed_records()) == ["Viper", "Ghost"]
        assert console.apply_filter().indices == []

    def test_tick_moves_vehicles(self):
        c = FleetConsole(step=SimulationStep(jitter=False))
        c.load_records([VehicleRecord(callsign="Mover", speed=36.0, heading=0.0)])
        c.tick(dt=2.0)
        assert c.store[0].pos_y == pytest.approx(20.0)


class TestSummary:
    def test_summary_fields(self, console):
        console.update_criteria(affiliation="Friendly")
        summary = console.summary()
        assert summary["count"] == 2
        assert summary["total"] == 5
        assert summary["mode"] == "filtered"
        assert summary["displayed"] is False
        assert summary["sort"] == DEFAULT_SORT_LABEL
        assert summary["target"] == {"x": 0.0, "y": 0.0}
        assert summary["live_updates"] is True
        assert summary["ticks"] == 0


class TestLiveUpdates:
    @staticmethod
    def _moving_console(live_updates: bool) -> FleetConsole:
        c = FleetConsole(step=SimulationStep(jitter=False), live_updates=live_updates)
        c.load_records([VehicleRecord(callsign="Mover", speed=36.0, heading=0.0)])
        c.display()
        return c

    def test_live_display_follows_ticks(self):
        c = self._moving_console(live_updates=True)
        c.tick()
        assert c.displayed_records()[0].pos_y == pytest.approx(10.0)

    def test_frozen_display_ignores_ticks(self):
        c = self._moving_console(live_updates=False)
        c.tick()
        assert c.displayed_records()[0].pos_y == 0.0
        assert c.store[0].pos_y == pytest.approx(10.0)

    def test_frozen_display_refreshes_on_display_sort_and_filter(self):
        c = self._moving_console(live_updates=False)
        c.tick()
        c.display()
        assert c.displayed_records()[0].pos_y == pytest.approx(10.0)
        c.tick()
        assert c.sort(SortOrder.FUEL_ASC) is True
        assert c.displayed_records()[0].pos_y == pytest.approx(20.0)
        c.tick()
        c.clear_filters()
        assert c.displayed_records()[0].pos_y == pytest.approx(30.0)

    def test_snapshot_is_a_copy(self):
        c = self._moving_console(live_updates=False)
        assert c.displayed_records()[0] is not c.store[0]

    def test_turning_off_freezes_current_rows(self):
        c = self._moving_console(live_updates=True)
        c.tick()
        c.set_live_updates(False)
        c.tick()
        assert c.live_updates is False
        assert c.displayed_records()[0].pos_y == pytest.approx(10.0)

    def test_turning_on_resumes_live_rows(self):
        c = self._moving_console(live_updates=False)
        c.tick()
        c.set_live_updates(True)
        assert c.displayed_records()[0].pos_y == pytest.approx(10.0)
        assert c.summary()["live_updates"] is True
