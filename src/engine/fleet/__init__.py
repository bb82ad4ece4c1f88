"""Fleet subsystem — vehicle records, store, filtering and sorting.

FleetConsole lives in ``engine.fleet.console`` and is imported from there;
it depends on the simulation package, which in turn uses these types.
"""
from .criteria import (
    AFFILIATIONS,
    ALL_AFFILIATIONS,
    DISTANCE_UNBOUNDED,
    PROTECTION_LEVELS,
    FilterCriteria,
    clamp_range,
)
from .errors import FleetError, FleetLoadError, StaleViewError, UnknownSortOrder
from .filtering import FilteredView, FilterEngine, ViewMode
from .loader import load_fleet, parse_vehicles, read_vehicles
from .sorting import SortOrder, SortSelector, sort_records
from .store import VehicleStore
from .vehicle import VehicleRecord

__all__ = [
    "AFFILIATIONS",
    "ALL_AFFILIATIONS",
    "DISTANCE_UNBOUNDED",
    "PROTECTION_LEVELS",
    "FilterCriteria",
    "FilterEngine",
    "FilteredView",
    "FleetError",
    "FleetLoadError",
    "SortOrder",
    "SortSelector",
    "StaleViewError",
    "UnknownSortOrder",
    "VehicleRecord",
    "VehicleStore",
    "ViewMode",
    "clamp_range",
    "load_fleet",
    "parse_vehicles",
    "read_vehicles",
    "sort_records",
]
