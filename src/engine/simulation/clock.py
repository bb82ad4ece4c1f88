"""SimulationClock — host-owned periodic driver for fleet ticks.

Architecture
------------
The kinematic step has no timer of its own.  The host (the FastAPI
lifespan in ``app.main``, or a script) creates a SimulationClock around a
callback and owns its lifecycle.  The clock runs one daemon thread,
``fleet-tick``, that calls ``callback(dt)`` once per interval with the
fixed interval as ``dt``.

Mutual exclusion with filter/sort calls is the callback's job —
FleetConsole.tick() holds the store lock — so the clock never touches the
store directly.

The loop sleeps in short slices so ``stop()`` returns promptly even with a
long interval.  A callback exception is logged and the loop keeps going.
A tick thread that outlives the join timeout (a callback stuck on the store
lock) stays attached, and ``start()`` will not spawn a second loop beside it.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from loguru import logger

_SLEEP_SLICE = 0.05


class SimulationClock:
    """Calls *callback(dt)* every *interval* seconds on a daemon thread."""

    def __init__(
        self,
        callback: Callable[[float], object],
        interval: float = 1.0,
        join_timeout: float | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._callback = callback
        self.interval = interval
        self.join_timeout = join_timeout if join_timeout is not None else max(2.0, interval * 2)
        self._running = False
        self._thread: threading.Thread | None = None
        self._ticks = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def ticks(self) -> int:
        return self._ticks

    # -- Lifecycle ----------------------------------------------------------

    def start(self) -> None:
        if self._running:
            return
        if self._thread is not None and self._thread.is_alive():
            logger.warning("Simulation clock not restarted: previous tick thread still running")
            return
        self._running = True
        self._thread = threading.Thread(
            target=self._tick_loop, name="fleet-tick", daemon=True
        )
        self._thread.start()
        logger.info(f"Simulation clock started ({self.interval:.2f}s interval)")

    def stop(self) -> None:
        if not self._running and self._thread is None:
            return
        self._running = False
        if self._thread is not None:
            self._thread.join(timeout=self.join_timeout)
            if self._thread.is_alive():
                logger.warning("Simulation clock tick thread did not exit in time")
                return
            self._thread = None
        logger.info(f"Simulation clock stopped after {self._ticks} ticks")

    # -- Tick loop ----------------------------------------------------------

    def _tick_loop(self) -> None:
        next_tick = time.monotonic() + self.interval
        while self._running:
            remaining = next_tick - time.monotonic()
            if remaining > 0:
                time.sleep(min(remaining, _SLEEP_SLICE))
                continue
            next_tick += self.interval
            try:
                self._callback(self.interval)
            except Exception as e:
                logger.error(f"Simulation tick failed: {e}")
            self._ticks += 1
