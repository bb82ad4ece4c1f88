"""FilterEngine — evaluate FilterCriteria against the vehicle store.

Matching is a pure conjunction: a vehicle is kept iff every predicate
holds.  Inactive dimensions always pass; fuel, distance, capability and
affiliation checks always run but default to no-ops.  Output order is
store order.  Each call is a full O(n) scan with no index and no
incremental update — fine for hundreds to low thousands of vehicles.

FilteredView holds store *indices*, not record objects, together with the
store generation it was computed from.  Resolving a view after the store
was reloaded or re-sorted raises StaleViewError instead of silently
pointing at the wrong vehicles.

ViewMode is set here, every time the engine runs: FILTERED when the view
is narrower than the store, UNFILTERED otherwise.  A criteria set that
happens to match everything therefore reports UNFILTERED.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass, field

from .criteria import ALL_AFFILIATIONS, FilterCriteria
from .errors import StaleViewError
from .store import VehicleStore
from .vehicle import VehicleRecord


class ViewMode(str, enum.Enum):
    UNFILTERED = "unfiltered"  # display reads the store; sorting reorders the store
    FILTERED = "filtered"      # display reads the view; sorting reorders the view only


@dataclass
class FilteredView:
    """Ordered store indices that matched one criteria evaluation."""

    indices: list[int]
    generation: int
    mode: ViewMode = ViewMode.UNFILTERED
    criteria: FilterCriteria = field(default_factory=FilterCriteria)

    def __len__(self) -> int:
        return len(self.indices)

    def is_stale(self, store: VehicleStore) -> bool:
        return self.generation != store.generation

    def records(self, store: VehicleStore) -> list[VehicleRecord]:
        """Resolve the indices against *store*."""
        if self.is_stale(store):
            raise StaleViewError(self.generation, store.generation)
        items = store.all_mutable()
        return [items[i] for i in self.indices]

    def iter_records(self, store: VehicleStore) -> Iterator[VehicleRecord]:
        return iter(self.records(store))


class FilterEngine:
    """Stateless evaluator; one instance can serve any number of stores."""

    @staticmethod
    def matches(criteria: FilterCriteria, vehicle: VehicleRecord) -> bool:
        """True iff *vehicle* satisfies every predicate in *criteria*."""
        # Capabilities: requested means required
        if criteria.has_satcom and not vehicle.has_satcom:
            return False
        if criteria.is_amphibious and not vehicle.is_amphibious:
            return False
        if criteria.is_unmanned and not vehicle.is_unmanned:
            return False
        if criteria.has_active_defense and not vehicle.has_active_defense:
            return False

        # Identity
        if criteria.callsign_active and vehicle.callsign != criteria.callsign:
            return False
        if criteria.track_id_active and vehicle.track_id != criteria.track_id:
            return False

        # Classification
        if criteria.domain_active and vehicle.domain != criteria.domain:
            return False
        if criteria.propulsion_active and vehicle.propulsion != criteria.propulsion:
            return False
        if criteria.priority_active and vehicle.priority != criteria.priority:
            return False

        # Protection
        if criteria.protection_min_active and vehicle.protection_level < criteria.protection_min:
            return False
        if criteria.protection_max_active and vehicle.protection_level > criteria.protection_max:
            return False

        # Telemetry ranges
        if not criteria.fuel_min <= vehicle.fuel_level <= criteria.fuel_max:
            return False
        if vehicle.distance_to_target < criteria.distance_min:
            return False
        if criteria.distance_bounded and vehicle.distance_to_target > criteria.distance_max:
            return False

        if criteria.affiliation != ALL_AFFILIATIONS and vehicle.affiliation != criteria.affiliation:
            return False

        return True

    def apply(self, criteria: FilterCriteria, source: VehicleStore) -> FilteredView:
        """Scan *source* and return the matching indices in store order."""
        with source.lock:
            indices = [
                i for i, vehicle in enumerate(source.all_mutable())
                if self.matches(criteria, vehicle)
            ]
            mode = ViewMode.FILTERED if len(indices) != len(source) else ViewMode.UNFILTERED
            return FilteredView(
                indices=indices,
                generation=source.generation,
                mode=mode,
                criteria=criteria,
            )
