"""SortSelector — order either the full store or the current filtered view.

Eight orderings exist, an ascending/descending pair per key: distance to
target, fuel level, priority and classification (the last two compare
strings lexicographically).

Which collection gets sorted depends on the view's explicit ViewMode:

  UNFILTERED — the store itself is sorted in place and the view is rebuilt
  from the same criteria.  The new baseline order survives later filter
  changes, so "show everything" keeps the order the operator picked.

  FILTERED — only the view's index list is sorted.  The ordering is
  ephemeral and disappears with the next filter run.

If nothing is on display (empty view in FILTERED mode, empty store
otherwise) the sort is skipped and no state changes.

``list.sort`` is stable, so vehicles with equal keys keep their prior
relative order.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from typing import Any

from loguru import logger

from .errors import UnknownSortOrder
from .filtering import FilteredView, FilterEngine, ViewMode
from .store import VehicleStore
from .vehicle import VehicleRecord

SortKey = Callable[[VehicleRecord], Any]


def _distance(v: VehicleRecord) -> float:
    return v.distance_to_target


def _fuel(v: VehicleRecord) -> float:
    return v.fuel_level


def _priority(v: VehicleRecord) -> str:
    return v.priority


def _classification(v: VehicleRecord) -> str:
    return v.classification


class SortOrder(str, enum.Enum):
    """The eight orderings offered by the sort menu."""

    DISTANCE_ASC = "distance_asc"
    DISTANCE_DESC = "distance_desc"
    FUEL_ASC = "fuel_asc"
    FUEL_DESC = "fuel_desc"
    PRIORITY_ASC = "priority_asc"
    PRIORITY_DESC = "priority_desc"
    CLASSIFICATION_ASC = "classification_asc"
    CLASSIFICATION_DESC = "classification_desc"

    @property
    def key(self) -> SortKey:
        return _ORDERS[self][0]

    @property
    def descending(self) -> bool:
        return _ORDERS[self][1]

    @property
    def label(self) -> str:
        return _ORDERS[self][2]

    @classmethod
    def parse(cls, name: str) -> SortOrder:
        """Look up an order by value (``"fuel_desc"``) or member name."""
        normalized = name.strip().lower().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError:
            raise UnknownSortOrder(f"Unknown sort order: {name!r}") from None


# order -> (key, descending, menu label)
_ORDERS: dict[SortOrder, tuple[SortKey, bool, str]] = {
    SortOrder.DISTANCE_ASC: (_distance, False, "Distance: Closest First"),
    SortOrder.DISTANCE_DESC: (_distance, True, "Distance: Farthest First"),
    SortOrder.FUEL_ASC: (_fuel, False, "Fuel: Critical First"),
    SortOrder.FUEL_DESC: (_fuel, True, "Fuel: Full First"),
    SortOrder.PRIORITY_ASC: (_priority, False, "Priority (A-Z)"),
    SortOrder.PRIORITY_DESC: (_priority, True, "Priority (Z-A)"),
    SortOrder.CLASSIFICATION_ASC: (_classification, False, "Classification (A-Z)"),
    SortOrder.CLASSIFICATION_DESC: (_classification, True, "Classification (Z-A)"),
}


def sort_records(records: list[VehicleRecord], order: SortOrder) -> None:
    """Sort a record list in place by *order*."""
    records.sort(key=order.key, reverse=order.descending)


class SortSelector:
    """Applies a SortOrder to whichever collection is on display."""

    def __init__(self, engine: FilterEngine | None = None) -> None:
        self._engine = engine or FilterEngine()

    @staticmethod
    def displayed_count(view: FilteredView, store: VehicleStore) -> int:
        if view.mode is ViewMode.FILTERED:
            return len(view)
        return len(store)

    def sort(
        self,
        order: SortOrder,
        view: FilteredView,
        store: VehicleStore,
    ) -> FilteredView | None:
        """Sort and return the view to display next.

        Returns None when nothing is displayed and the sort was skipped.
        """
        with store.lock:
            if self.displayed_count(view, store) == 0:
                logger.debug(f"Sort {order.value} skipped: nothing displayed")
                return None

            if view.mode is ViewMode.FILTERED:
                records = store.all_mutable()
                view.records(store)  # raises StaleViewError on a stale view
                view.indices.sort(
                    key=lambda i: order.key(records[i]),
                    reverse=order.descending,
                )
                return view

            store.sort_in_place(order.key, reverse=order.descending)
            return self._engine.apply(view.criteria, store)
