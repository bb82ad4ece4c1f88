"""FilterCriteria — one query against the vehicle store.

Every dimension is a flag + value pair: the value only constrains results
while its ``*_active`` flag is True.  Fuel and distance ranges, the four
capability flags and affiliation have no flag; they are always evaluated
and their defaults are chosen so that evaluation is a no-op.

A distance maximum at or above DISTANCE_UNBOUNDED means "no upper bound",
not a literal 10 km ceiling.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

ALL_AFFILIATIONS = "All Types"
AFFILIATIONS = (ALL_AFFILIATIONS, "Friendly", "Hostile", "Neutral", "Unknown")

FUEL_MIN = 0
FUEL_MAX = 100

DISTANCE_MIN = 0
DISTANCE_UNBOUNDED = 10000

PROTECTION_LEVELS = (1, 2, 3, 4, 5, 6)


def clamp_range(lower: int, upper: int, minimum: int, maximum: int) -> tuple[int, int]:
    """Bound a (lower, upper) pair to [minimum, maximum] without cross-over.

    The upper handle can never sit below the lower one.
    """
    lower = max(minimum, min(lower, maximum))
    upper = max(lower, min(upper, maximum))
    return lower, upper


@dataclass
class FilterCriteria:
    """Primitive filter inputs resolved by the presentation layer."""

    # Capabilities (requested => required)
    has_satcom: bool = False
    is_amphibious: bool = False
    is_unmanned: bool = False
    has_active_defense: bool = False

    # Identity
    callsign_active: bool = False
    callsign: str = ""
    track_id_active: bool = False
    track_id: str = ""

    # Classification
    domain_active: bool = False
    domain: str = ""
    propulsion_active: bool = False
    propulsion: str = ""
    priority_active: bool = False
    priority: str = ""

    # Protection
    protection_min_active: bool = False
    protection_min: int = 0
    protection_max_active: bool = False
    protection_max: int = 0

    # Telemetry ranges
    fuel_min: int = FUEL_MIN
    fuel_max: int = FUEL_MAX
    distance_min: int = DISTANCE_MIN
    distance_max: int = DISTANCE_UNBOUNDED

    affiliation: str = ALL_AFFILIATIONS

    @property
    def distance_bounded(self) -> bool:
        return self.distance_max < DISTANCE_UNBOUNDED

    def is_default(self) -> bool:
        """True when no field differs from a freshly cleared query."""
        return self == FilterCriteria()

    def with_fuel_range(self, lower: int, upper: int) -> FilterCriteria:
        lower, upper = clamp_range(lower, upper, FUEL_MIN, FUEL_MAX)
        return replace(self, fuel_min=lower, fuel_max=upper)

    def with_distance_range(self, lower: int, upper: int) -> FilterCriteria:
        lower, upper = clamp_range(lower, upper, DISTANCE_MIN, DISTANCE_UNBOUNDED)
        return replace(self, distance_min=lower, distance_max=upper)

    def with_protection_min(self, level: int | None) -> FilterCriteria:
        """Set or clear the minimum protection level.

        A minimum above the current maximum clears the maximum.
        """
        if level is None:
            return replace(self, protection_min_active=False, protection_min=0)
        updated = replace(self, protection_min_active=True, protection_min=level)
        if updated.protection_max_active and level > updated.protection_max:
            updated = replace(updated, protection_max_active=False, protection_max=0)
        return updated

    def with_protection_max(self, level: int | None) -> FilterCriteria:
        if level is None:
            return replace(self, protection_max_active=False, protection_max=0)
        return replace(self, protection_max_active=True, protection_max=level)
