"""FleetConsole — the operator-facing state around the fleet core.

The console is what a display layer talks to.  It keeps the state a
front-end would otherwise hold in widgets — the current criteria, the last
filtered view and its explicit ViewMode, whether results are on display,
the sort label, the mission target and the live-update flag — and routes
every action through the core:

    criteria change / target change  -> FilterEngine.apply
    sort menu                        -> SortSelector.sort
    heartbeat                        -> SimulationStep.tick

Every public method takes the store lock, so a SimulationClock calling
``tick`` from its own thread never interleaves with a filter or sort.

Filtering is *not* re-run after a tick: the view keeps its membership and
the display re-reads fresh telemetry through it.  Membership catches up on
the next filter event.  With live updates off the display instead serves a
copy of the rows taken at the last display, sort or filter event.
"""

from __future__ import annotations

import copy
from dataclasses import replace
from pathlib import Path
from typing import Any

from loguru import logger

from engine.simulation.kinematics import SimulationStep

from .criteria import FilterCriteria
from .filtering import FilteredView, FilterEngine, ViewMode
from .loader import load_fleet
from .sorting import SortOrder, SortSelector
from .store import VehicleStore
from .vehicle import VehicleRecord

DEFAULT_SORT_LABEL = "Sort"


class FleetConsole:
    """Single-operator session over one VehicleStore."""

    def __init__(
        self,
        store: VehicleStore | None = None,
        step: SimulationStep | None = None,
        target: tuple[float, float] = (0.0, 0.0),
        live_updates: bool = True,
    ) -> None:
        self.store = store if store is not None else VehicleStore()
        self.engine = FilterEngine()
        self.selector = SortSelector(self.engine)
        self.step = step or SimulationStep()
        self.criteria = FilterCriteria()
        self.target = (float(target[0]), float(target[1]))
        self.live_updates = live_updates
        self.displayed = False
        self.sort_label = DEFAULT_SORT_LABEL
        self.ticks = 0
        self._snapshot: list[VehicleRecord] | None = None
        self._view = self.engine.apply(self.criteria, self.store)
        self._refresh_snapshot()

    # -- Loading ------------------------------------------------------------

    def load(self, path: str | Path) -> int | None:
        """Load a vehicle file; on failure the current fleet stays."""
        with self.store.lock:
            count = load_fleet(path, self.store)
            self.apply_filter()
            return count

    def load_records(self, records: list[VehicleRecord] | list[dict]) -> bool:
        with self.store.lock:
            ok = self.store.load(records)
            self.apply_filter()
            return ok

    # -- Filtering ----------------------------------------------------------

    @property
    def view(self) -> FilteredView:
        return self._view

    @property
    def view_mode(self) -> ViewMode:
        return self._view.mode

    def apply_filter(self, criteria: FilterCriteria | None = None) -> FilteredView:
        """Re-run the filter, optionally with new criteria."""
        with self.store.lock:
            if criteria is not None:
                self.criteria = criteria
            self._view = self.engine.apply(self.criteria, self.store)
            self._refresh_snapshot()
            return self._view

    def update_criteria(self, **changes: Any) -> FilteredView:
        """Replace individual criteria fields and re-filter."""
        return self.apply_filter(replace(self.criteria, **changes))

    def clear_filters(self) -> FilteredView:
        return self.apply_filter(FilterCriteria())

    def select_callsign(self, text: str) -> str | None:
        """Activate the callsign filter if *text* names a known callsign.

        Matching is case-insensitive; unknown or empty text deactivates it.
        """
        with self.store.lock:
            resolved = self.store.resolve_callsign(text)
            self.update_criteria(
                callsign_active=resolved is not None,
                callsign=resolved or "",
            )
            return resolved

    def select_track_id(self, text: str) -> str | None:
        with self.store.lock:
            resolved = self.store.resolve_track_id(text)
            self.update_criteria(
                track_id_active=resolved is not None,
                track_id=resolved or "",
            )
            return resolved

    def set_target(self, x: float, y: float) -> FilteredView:
        """Move the mission target.  Distances refresh on the next tick."""
        self.target = (float(x), float(y))
        return self.apply_filter()

    @property
    def results_count(self) -> int:
        """Count shown on the results button."""
        if self._view.mode is ViewMode.FILTERED:
            return len(self._view)
        return len(self.store)

    # -- Display ------------------------------------------------------------

    def displayed_records(self) -> list[VehicleRecord]:
        """The collection a display layer should render, in order.

        With live updates off this is the copy taken at the last display,
        sort or filter event, so ticks do not move the rows on screen.
        """
        with self.store.lock:
            if not self.live_updates and self._snapshot is not None:
                return list(self._snapshot)
            return self._live_records()

    def _live_records(self) -> list[VehicleRecord]:
        if self._view.mode is ViewMode.FILTERED:
            return self._view.records(self.store)
        return list(self.store.all())

    def _refresh_snapshot(self) -> None:
        if self.live_updates:
            self._snapshot = None
        else:
            self._snapshot = [copy.copy(v) for v in self._live_records()]

    def set_live_updates(self, enabled: bool) -> None:
        """Toggle live updates.  Turning them off freezes the current rows."""
        with self.store.lock:
            self.live_updates = enabled
            self._refresh_snapshot()
        logger.info(f"Fleet live updates {'on' if enabled else 'off'}")

    def display(self) -> list[VehicleRecord]:
        """Show results with the default closest-first ordering."""
        with self.store.lock:
            self.displayed = True
            self.apply_filter()
            self.sort(SortOrder.DISTANCE_ASC)
            self.sort_label = DEFAULT_SORT_LABEL
            return self.displayed_records()

    def sort(self, order: SortOrder) -> bool:
        """Apply a sort order.  Returns False if nothing was displayed."""
        with self.store.lock:
            if not self.displayed:
                return False
            view = self.selector.sort(order, self._view, self.store)
            if view is None:
                return False
            self._view = view
            self.sort_label = order.label
            self._refresh_snapshot()
            return True

    def vehicle(self, callsign: str) -> VehicleRecord | None:
        with self.store.lock:
            return self.store.find(callsign)

    # -- Simulation ---------------------------------------------------------

    def tick(self, dt: float = 1.0) -> int:
        """Advance the fleet one simulation step toward the mission target."""
        with self.store.lock:
            count = self.step.tick(self.store, self.target[0], self.target[1], dt)
            self.ticks += 1
        logger.debug(f"Fleet tick {self.ticks}: advanced {count} vehicles")
        return count

    def summary(self) -> dict[str, Any]:
        with self.store.lock:
            return {
                "count": self.results_count,
                "total": len(self.store),
                "mode": self._view.mode.value,
                "displayed": self.displayed,
                "sort": self.sort_label,
                "target": {"x": self.target[0], "y": self.target[1]},
                "live_updates": self.live_updates,
                "ticks": self.ticks,
            }
