"""SimulationStep — advance every vehicle by one tick.

Per vehicle, in order:

  1. Take the current heading as the direction of travel for this tick
     (compass bearing: 0 = north/+Y, 90 = east/+X, clockwise).
  2. Jitter (moving vehicles only): redraw speed from a band around
     target_speed and nudge heading by up to one degree.  The band
     half-width depends on the *current* speed class:

        speed <  100 km/h   ->  3 % of target_speed
        speed <  300 km/h   ->  2 %
        otherwise           ->  1 %

     Exactly 100 km/h falls in the 2 % band here; the desktop console
     put it in the 1 % band.

     The upper bound is forced to at least lower + 1 so a zero or negative
     target speed still yields a valid draw instead of an error.
  3. First-order Euler step: convert km/h to m/s and move by speed * dt.
  4. Recompute distance_to_target against the mission target.

Fuel and ammunition are not consumed.  The step holds no timer of its own —
the host (SimulationClock) decides cadence and passes dt.
"""

from __future__ import annotations

import math
import random
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from engine.fleet.store import VehicleStore
    from engine.fleet.vehicle import VehicleRecord

KMH_PER_MS = 3.6

# (exclusive upper speed bound in km/h, band half-width as fraction of target_speed)
_JITTER_BANDS: tuple[tuple[float, float], ...] = (
    (100.0, 0.03),
    (300.0, 0.02),
    (math.inf, 0.01),
)

HEADING_JITTER_DEG = 1.0


def jitter_fraction(speed: float) -> float:
    """Band half-width fraction for a vehicle currently moving at *speed*."""
    for limit, fraction in _JITTER_BANDS:
        if speed < limit:
            return fraction
    return _JITTER_BANDS[-1][1]


def speed_band(speed: float, target_speed: float) -> tuple[float, float]:
    """Return the (lower, upper) draw interval for the next speed."""
    fraction = jitter_fraction(speed)
    lower = target_speed - target_speed * fraction
    upper = target_speed + target_speed * fraction
    lower = max(0.0, lower)
    upper = max(lower + 1.0, upper)
    return lower, upper


def heading_band(heading: float) -> tuple[float, float]:
    if heading > 0:
        return heading - HEADING_JITTER_DEG, heading + HEADING_JITTER_DEG
    return 0.0, HEADING_JITTER_DEG


def distance_between(x1: float, y1: float, x2: float, y2: float) -> float:
    return math.hypot(x2 - x1, y2 - y1)


class SimulationStep:
    """Stateless apart from its RNG and options; safe to reuse every tick."""

    def __init__(
        self,
        rng: random.Random | None = None,
        jitter: bool = True,
        normalize_heading: bool = True,
    ) -> None:
        self._rng = rng or random.Random()
        self.jitter = jitter
        self.normalize_heading = normalize_heading

    def _jitter(self, v: VehicleRecord) -> None:
        if v.speed <= 0:
            return
        lower, upper = speed_band(v.speed, v.target_speed)
        v.speed = self._rng.uniform(lower, upper)
        lo, hi = heading_band(v.heading)
        heading = self._rng.uniform(lo, hi)
        if self.normalize_heading:
            heading %= 360.0
        v.heading = heading

    def advance(
        self,
        vehicle: VehicleRecord,
        target_x: float,
        target_y: float,
        dt: float = 1.0,
    ) -> None:
        """Advance a single vehicle by *dt* seconds."""
        rad = math.radians(vehicle.heading)

        if self.jitter:
            self._jitter(vehicle)

        step = vehicle.speed / KMH_PER_MS * dt
        vehicle.pos_x += step * math.sin(rad)
        vehicle.pos_y += step * math.cos(rad)

        vehicle.distance_to_target = distance_between(
            vehicle.pos_x, vehicle.pos_y, target_x, target_y
        )

    def advance_all(
        self,
        vehicles: Iterable[VehicleRecord],
        target_x: float,
        target_y: float,
        dt: float = 1.0,
    ) -> int:
        count = 0
        for vehicle in vehicles:
            self.advance(vehicle, target_x, target_y, dt)
            count += 1
        return count

    def tick(
        self,
        store: VehicleStore,
        target_x: float,
        target_y: float,
        dt: float = 1.0,
    ) -> int:
        """Advance every vehicle in *store*.  Returns the number advanced."""
        with store.lock:
            return self.advance_all(store.all_mutable(), target_x, target_y, dt)
