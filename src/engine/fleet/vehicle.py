"""VehicleRecord — one tactical asset on the common operating picture.

Architecture
------------
VehicleRecord is a *flat dataclass*, in the same spirit as the simulation
targets: identity, classification, capability flags, specs and live
telemetry all sit on one object.  The store owns the records; filter views
and the simulation step only hold indices or iterate in place.

Telemetry fields (position, heading, speed, fuel, ammunition) are mutated
by the simulation step.  ``distance_to_target`` is *derived*: it is only
valid right after a tick and is never read from input files.

Coordinate convention:
    +X = East, +Y = North, meters.  Heading is a compass bearing in
    degrees, 0 = north (+Y), increasing clockwise.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

# camelCase key used in vehicle files -> dataclass attribute
_STRING_FIELDS: dict[str, str] = {
    "callsign": "callsign",
    "trackId": "track_id",
    "type": "type",
    "classification": "classification",
    "affiliation": "affiliation",
    "priority": "priority",
    "domain": "domain",
    "propulsion": "propulsion",
    "natoIcon": "nato_icon",
}

_BOOL_FIELDS: dict[str, str] = {
    "hasSatCom": "has_satcom",
    "isAmphibious": "is_amphibious",
    "isUnmanned": "is_unmanned",
    "hasActiveDefense": "has_active_defense",
}

_INT_FIELDS: dict[str, str] = {
    "protectionLevel": "protection_level",
}

_FLOAT_FIELDS: dict[str, str] = {
    "maxSpeed": "max_speed",
    "targetSpeed": "target_speed",
    "posX": "pos_x",
    "posY": "pos_y",
    "heading": "heading",
    "speed": "speed",
    "fuelLevel": "fuel_level",
    "ammunitionLevel": "ammunition_level",
}


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_bool(value: Any) -> bool:
    return value if isinstance(value, bool) else False


def _is_number(value: Any) -> bool:
    # bool is an int subclass; JSON true/false is never a number here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_int(value: Any) -> int:
    if not _is_number(value):
        return 0
    if isinstance(value, float) and not value.is_integer():
        return 0
    return int(value)


def _as_float(value: Any) -> float:
    return float(value) if _is_number(value) else 0.0


@dataclass
class VehicleRecord:
    """A single tactical asset.

    ``protection_level`` is a STANAG 4569 level (intended 1-6) and is not
    validated.  ``fuel_level`` and ``ammunition_level`` are percentages
    (intended 0-100) and are never clamped.
    """

    # Identity & classification
    callsign: str = ""
    track_id: str = ""
    type: str = ""
    classification: str = ""
    affiliation: str = ""  # "Friendly", "Hostile", "Neutral", "Unknown", free text
    priority: str = ""
    domain: str = ""
    propulsion: str = ""
    nato_icon: str = ""  # APP-6 symbol id, opaque

    # Capabilities
    has_satcom: bool = False
    is_amphibious: bool = False
    is_unmanned: bool = False
    has_active_defense: bool = False

    # Specs
    protection_level: int = 0
    max_speed: float = 0.0     # km/h
    target_speed: float = 0.0  # km/h, cruise speed the jitter band centres on

    # Telemetry
    pos_x: float = 0.0  # meters
    pos_y: float = 0.0  # meters
    heading: float = 0.0  # degrees, 0 = north, clockwise
    speed: float = 0.0  # km/h
    fuel_level: float = 100.0
    ammunition_level: float = 100.0
    distance_to_target: float = 0.0  # meters, recomputed every tick

    @classmethod
    def from_dict(cls, obj: Mapping[str, Any]) -> VehicleRecord:
        """Build a record from a flat camelCase object.

        Missing or wrongly typed fields fall back to "" / False / 0.
        ``distanceToTarget`` is ignored — the simulation computes it.
        """
        kwargs: dict[str, Any] = {}
        for key, attr in _STRING_FIELDS.items():
            kwargs[attr] = _as_str(obj.get(key))
        for key, attr in _BOOL_FIELDS.items():
            kwargs[attr] = _as_bool(obj.get(key))
        for key, attr in _INT_FIELDS.items():
            kwargs[attr] = _as_int(obj.get(key))
        for key, attr in _FLOAT_FIELDS.items():
            kwargs[attr] = _as_float(obj.get(key))
        kwargs["distance_to_target"] = 0.0
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the same camelCase keys the loader accepts."""
        data: dict[str, Any] = {}
        for fields in (_STRING_FIELDS, _BOOL_FIELDS, _INT_FIELDS, _FLOAT_FIELDS):
            for key, attr in fields.items():
                data[key] = getattr(self, attr)
        data["distanceToTarget"] = self.distance_to_target
        return data
