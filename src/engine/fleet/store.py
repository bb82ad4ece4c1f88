"""VehicleStore — authoritative ordered collection of VehicleRecords.

The store is the only writer of membership: ``load`` swaps the whole list
in one assignment, so a failed load leaves the previous list untouched.
There is no incremental add/remove.

``generation`` increments whenever membership or order changes (load,
in-place sort).  Filtered views remember the generation they were built
against and refuse to resolve once it moves on.  Simulation ticks mutate
telemetry only, so they do not bump the generation.

``lock`` is re-entrant and is held by FleetConsole around every load,
tick, filter and sort; readers outside the console should take it too.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from loguru import logger

from .errors import FleetLoadError
from .vehicle import VehicleRecord


def _coerce(item: Any, index: int) -> VehicleRecord:
    if isinstance(item, VehicleRecord):
        return item
    if isinstance(item, Mapping):
        return VehicleRecord.from_dict(item)
    raise FleetLoadError(
        f"element {index} is {type(item).__name__}, expected an object"
    )


class VehicleStore:
    """Owns the vehicle list in insertion order."""

    def __init__(self, records: Iterable[VehicleRecord] | None = None) -> None:
        self._records: list[VehicleRecord] = list(records) if records else []
        self._generation = 0
        self.lock = threading.RLock()

    # -- Membership ---------------------------------------------------------

    def load(self, records: Iterable[VehicleRecord | Mapping[str, Any]]) -> bool:
        """Replace the whole collection.

        Elements may be VehicleRecords or flat camelCase mappings.  Anything
        else (a non-sequence root, a non-object element) aborts the load:
        the failure is logged and the previous contents are kept.

        Returns True if the collection was replaced.
        """
        try:
            if isinstance(records, (Mapping, str, bytes)) or not isinstance(records, Iterable):
                raise FleetLoadError(
                    f"expected a sequence of vehicles, got {type(records).__name__}"
                )
            loaded = [_coerce(item, i) for i, item in enumerate(records)]
        except FleetLoadError as e:
            logger.warning(f"Fleet load aborted, keeping {len(self._records)} vehicles: {e}")
            return False

        with self.lock:
            self._records = loaded
            self._generation += 1
        logger.info(f"Fleet store indexed {len(loaded)} vehicles")
        return True

    # -- Access -------------------------------------------------------------

    def all(self) -> tuple[VehicleRecord, ...]:
        """Read-only snapshot of the records, in store order."""
        return tuple(self._records)

    def all_mutable(self) -> list[VehicleRecord]:
        """The live list.  Callers that reorder it must call ``touch``."""
        return self._records

    def sort_in_place(self, key: Callable[[VehicleRecord], Any], reverse: bool = False) -> None:
        with self.lock:
            self._records.sort(key=key, reverse=reverse)
            self._generation += 1

    def touch(self) -> None:
        """Mark the order as changed after an external in-place edit."""
        with self.lock:
            self._generation += 1

    @property
    def generation(self) -> int:
        return self._generation

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[VehicleRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> VehicleRecord:
        return self._records[index]

    # -- Identity lookups ---------------------------------------------------

    def callsigns(self) -> list[str]:
        """Distinct callsigns, sorted, for completion lists."""
        return sorted({r.callsign for r in self._records if r.callsign})

    def track_ids(self) -> list[str]:
        return sorted({r.track_id for r in self._records if r.track_id})

    def resolve_callsign(self, text: str) -> str | None:
        """Case-insensitive callsign lookup; returns the stored spelling."""
        return _resolve(text, self.callsigns())

    def resolve_track_id(self, text: str) -> str | None:
        return _resolve(text, self.track_ids())

    def find(self, callsign: str) -> VehicleRecord | None:
        """First record whose callsign matches exactly."""
        for record in self._records:
            if record.callsign == callsign:
                return record
        return None


def _resolve(text: str, candidates: list[str]) -> str | None:
    needle = text.strip().casefold()
    if not needle:
        return None
    for candidate in candidates:
        if candidate.casefold() == needle:
            return candidate
    return None
