"""Shared fixtures for fleet tests."""

from __future__ import annotations

import pytest

from engine.fleet.store import VehicleStore
from engine.fleet.vehicle import VehicleRecord


def make_vehicle(callsign: str = "Alpha", **kw) -> VehicleRecord:
    kw.setdefault("track_id", f"T-{callsign}")
    return VehicleRecord(callsign=callsign, **kw)


@pytest.fixture
def vehicles() -> list[VehicleRecord]:
    """Five vehicles with distinct keys on every sortable dimension."""
    return [
        make_vehicle(
            "Sabre", track_id="T-7201", affiliation="Friendly", domain="Land",
            propulsion="Tracked (Heavy Terrain)", priority="High (Operational)",
            classification="Main Battle Tank", protection_level=6,
            has_satcom=True, has_active_defense=True,
            fuel_level=72.5, distance_to_target=1500.0,
        ),
        make_vehicle(
            "Kestrel", track_id="T-7310", affiliation="Friendly", domain="Air",
            propulsion="Rotary-Wing / VTOL", priority="Flash (Immediate)",
            classification="Unmanned Aerial System", protection_level=1,
            has_satcom=True, is_unmanned=True,
            fuel_level=91.0, distance_to_target=3000.0,
        ),
        make_vehicle(
            "Viper", track_id="H-0411", affiliation="Hostile", domain="Land",
            propulsion="Tracked (Heavy Terrain)", priority="Routine",
            classification="Infantry Fighting Vehicle", protection_level=3,
            is_amphibious=True,
            fuel_level=22.5, distance_to_target=400.0,
        ),
        make_vehicle(
            "Harbor", track_id="N-2001", affiliation="Neutral", domain="Maritime",
            propulsion="Amphibious", priority="Low (Deferred)",
            classification="Surface Combatant", protection_level=2,
            has_satcom=True, is_amphibious=True,
            fuel_level=80.0, distance_to_target=12000.0,
        ),
        make_vehicle(
            "Ghost", track_id="U-0099", affiliation="Unknown", domain="Land",
            propulsion="Articulated (All-Terrain)", priority="Bravo",
            classification="Armoured Personnel Carrier", protection_level=4,
            is_unmanned=True,
            fuel_level=5.0, distance_to_target=800.0,
        ),
    ]


@pytest.fixture
def store(vehicles) -> VehicleStore:
    s = VehicleStore()
    s.load(vehicles)
    return s
