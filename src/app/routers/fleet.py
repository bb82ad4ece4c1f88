"""Fleet API — filtered/sorted vehicle picture, results count, mission target."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from loguru import logger
from pydantic import BaseModel, Field

from engine.fleet.criteria import (
    ALL_AFFILIATIONS,
    DISTANCE_UNBOUNDED,
    FUEL_MAX,
    FilterCriteria,
)
from engine.fleet.errors import UnknownSortOrder
from engine.fleet.sorting import SortOrder

router = APIRouter(prefix="/api/fleet", tags=["fleet"])


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class CriteriaRequest(BaseModel):
    """Filter inputs as resolved by the client.  Omitted fields are inactive."""

    has_satcom: bool = False
    is_amphibious: bool = False
    is_unmanned: bool = False
    has_active_defense: bool = False

    callsign: str | None = None
    track_id: str | None = None
    domain: str | None = None
    propulsion: str | None = None
    priority: str | None = None

    protection_min: int | None = None
    protection_max: int | None = None

    fuel_min: int = 0
    fuel_max: int = FUEL_MAX
    distance_min: int = 0
    distance_max: int = DISTANCE_UNBOUNDED

    affiliation: str = ALL_AFFILIATIONS

    def to_criteria(self) -> FilterCriteria:
        criteria = FilterCriteria(
            has_satcom=self.has_satcom,
            is_amphibious=self.is_amphibious,
            is_unmanned=self.is_unmanned,
            has_active_defense=self.has_active_defense,
            callsign_active=self.callsign is not None,
            callsign=self.callsign or "",
            track_id_active=self.track_id is not None,
            track_id=self.track_id or "",
            domain_active=self.domain is not None,
            domain=self.domain or "",
            propulsion_active=self.propulsion is not None,
            propulsion=self.propulsion or "",
            priority_active=self.priority is not None,
            priority=self.priority or "",
            affiliation=self.affiliation,
        )
        criteria = criteria.with_protection_max(self.protection_max)
        criteria = criteria.with_protection_min(self.protection_min)
        criteria = criteria.with_fuel_range(self.fuel_min, self.fuel_max)
        return criteria.with_distance_range(self.distance_min, self.distance_max)


class TargetRequest(BaseModel):
    """Mission target in local meters."""
    x: float
    y: float


class LiveUpdatesRequest(BaseModel):
    enabled: bool


class TickRequest(BaseModel):
    dt: float = Field(default=1.0, gt=0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _get_console(request: Request):
    console = getattr(request.app.state, "fleet_console", None)
    if console is None:
        raise HTTPException(503, "Fleet console not available")
    return console


def _picture(console) -> dict:
    data = console.summary()
    data["vehicles"] = [v.to_dict() for v in console.displayed_records()]
    return data


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("")
async def get_fleet(request: Request):
    """Current picture: displayed vehicles in order plus view state."""
    return _picture(_get_console(request))


@router.get("/count")
async def get_count(request: Request):
    console = _get_console(request)
    return {"count": console.results_count, "mode": console.view_mode.value}


@router.post("/filter")
async def apply_filter(body: CriteriaRequest, request: Request):
    console = _get_console(request)
    console.apply_filter(body.to_criteria())
    return console.summary()


@router.post("/filter/clear")
async def clear_filter(request: Request):
    console = _get_console(request)
    console.clear_filters()
    return console.summary()


@router.post("/display")
async def display(request: Request):
    """Show results, closest vehicles first."""
    console = _get_console(request)
    console.display()
    return _picture(console)


@router.post("/sort/{order}")
async def sort_fleet(order: str, request: Request):
    console = _get_console(request)
    try:
        sort_order = SortOrder.parse(order)
    except UnknownSortOrder as e:
        raise HTTPException(400, str(e))
    applied = console.sort(sort_order)
    data = _picture(console)
    data["skipped"] = not applied
    return data


@router.put("/target")
async def set_target(body: TargetRequest, request: Request):
    console = _get_console(request)
    console.set_target(body.x, body.y)
    return {"target": {"x": body.x, "y": body.y}, "count": console.results_count}


@router.put("/live-updates")
async def set_live_updates(body: LiveUpdatesRequest, request: Request):
    """Turn live updates on or off.  Off freezes the displayed rows."""
    console = _get_console(request)
    console.set_live_updates(body.enabled)
    return _picture(console)


@router.get("/callsigns")
async def list_callsigns(request: Request):
    return _get_console(request).store.callsigns()


@router.get("/track-ids")
async def list_track_ids(request: Request):
    return _get_console(request).store.track_ids()


@router.get("/vehicles/{callsign}")
async def get_vehicle(callsign: str, request: Request):
    vehicle = _get_console(request).vehicle(callsign)
    if vehicle is None:
        raise HTTPException(404, f"Vehicle not found: {callsign}")
    return vehicle.to_dict()


@router.post("/tick")
async def tick(request: Request, body: TickRequest | None = None):
    """Advance the simulation by one step outside the clock cadence."""
    console = _get_console(request)
    count = console.tick(body.dt if body is not None else 1.0)
    return {"advanced": count, "ticks": console.ticks}


@router.post("/reload")
async def reload_fleet(request: Request):
    from app.config import settings

    console = _get_console(request)
    count = console.load(settings.fleet_data_path)
    if count is None:
        logger.warning(f"Fleet reload failed, keeping {len(console.store)} vehicles")
        raise HTTPException(422, f"Fleet data could not be loaded from {settings.fleet_data_path}")
    return {"loaded": count, "count": console.results_count}
