"""Exceptions raised by the fleet subsystem.

Load failures never escape the public load entry points — they are caught,
logged, and the store keeps its previous contents.  The remaining errors
signal programming mistakes at the API boundary.
"""

from __future__ import annotations


class FleetError(Exception):
    """Base class for fleet errors."""


class FleetLoadError(FleetError):
    """A vehicle file could not be read, parsed, or has the wrong shape."""


class StaleViewError(FleetError):
    """A filtered view was read after the store it indexes changed."""

    def __init__(self, view_generation: int, store_generation: int) -> None:
        super().__init__(
            f"view computed for store generation {view_generation}, "
            f"store is now at generation {store_generation}"
        )
        self.view_generation = view_generation
        self.store_generation = store_generation


class UnknownSortOrder(FleetError, ValueError):
    """No sort order is registered under the requested name."""
