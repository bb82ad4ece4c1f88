"""API routers."""
from .fleet import router as fleet_router

__all__ = ["fleet_router"]
