"""FLEETWATCH - Tactical fleet picture.

Main FastAPI application.  The lifespan owns the fleet console and the
simulation clock; routers only read them from ``app.state``.
"""

import random
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from app.config import settings
from app.routers.fleet import router as fleet_router


# ---------------------------------------------------------------------------
# Subsystem startup helpers
# ---------------------------------------------------------------------------

def _create_fleet_console():
    """Create the console and load the configured fleet file."""
    from engine.fleet.console import FleetConsole
    from engine.simulation import SimulationStep

    rng = random.Random(settings.simulation_seed)
    step = SimulationStep(
        rng=rng,
        jitter=settings.simulation_jitter,
        normalize_heading=settings.simulation_normalize_heading,
    )
    console = FleetConsole(
        step=step,
        target=(settings.mission_target_x, settings.mission_target_y),
        live_updates=settings.live_updates,
    )

    if settings.fleet_autoload:
        path = settings.fleet_data_path
        if path.exists():
            count = console.load(path)
            if count is not None:
                logger.info(f"Fleet: {count} vehicles ready from {path}")
        else:
            logger.warning(f"Fleet data not found: {path}")

    logger.info("Fleet console created")
    return console


def _start_clock(console):
    """Start the periodic tick driver if simulation is enabled."""
    if not settings.simulation_enabled:
        return None

    from engine.simulation import SimulationClock

    clock = SimulationClock(console.tick, interval=settings.simulation_tick_interval)
    clock.start()
    return clock


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.app_name}")
    console = _create_fleet_console()
    app.state.fleet_console = console
    app.state.simulation_clock = _start_clock(console)

    yield

    clock = getattr(app.state, "simulation_clock", None)
    if clock is not None:
        clock.stop()
    logger.info(f"{settings.app_name} shut down")


app = FastAPI(
    title=settings.app_name,
    description="Live tactical fleet picture with filtering, sorting and simulation",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(fleet_router)


@app.get("/health")
async def health():
    """Liveness probe with fleet size and clock state."""
    console = getattr(app.state, "fleet_console", None)
    clock = getattr(app.state, "simulation_clock", None)
    return {
        "status": "ok",
        "vehicles": len(console.store) if console is not None else 0,
        "simulation": clock is not None and clock.running,
    }


def main() -> None:
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
