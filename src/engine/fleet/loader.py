"""Load a vehicle JSON file into a VehicleStore.

File format: a JSON array of flat objects with camelCase keys (see
``VehicleRecord.from_dict``).  Anything else — unreadable file, invalid
syntax, an object or scalar root, a non-object element — is a load error.
A non-object element aborts the whole file rather than becoming an
all-default record as it did in the desktop console.

The loader is stateless: ``read_vehicles`` parses and raises, and
``load_fleet`` is the fail-closed entry point that logs and leaves the
store untouched on any error.
"""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger

from .errors import FleetLoadError
from .store import VehicleStore
from .vehicle import VehicleRecord


def parse_vehicles(text: str) -> list[VehicleRecord]:
    """Parse vehicle JSON text.  Raises FleetLoadError."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise FleetLoadError(f"parse error at offset {e.pos}: {e.msg}") from e

    if not isinstance(data, list):
        raise FleetLoadError(f"JSON root must be an array, got {type(data).__name__}")

    vehicles: list[VehicleRecord] = []
    for idx, obj in enumerate(data):
        if not isinstance(obj, dict):
            raise FleetLoadError(f"element {idx} is not an object")
        vehicles.append(VehicleRecord.from_dict(obj))
    return vehicles


def read_vehicles(path: str | Path) -> list[VehicleRecord]:
    """Read and parse a vehicle file.  Raises FleetLoadError."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FleetLoadError(f"unable to open {path}: {e}") from e
    return parse_vehicles(text)


def load_fleet(path: str | Path, store: VehicleStore) -> int | None:
    """Populate *store* from *path*, replacing its contents.

    Returns the number of vehicles loaded, or None if the file could not be
    used (the store keeps whatever it held before).
    """
    try:
        vehicles = read_vehicles(path)
    except FleetLoadError as e:
        logger.warning(f"Fleet data not loaded from {path}: {e}")
        return None

    if not store.load(vehicles):
        return None
    logger.info(f"Fleet: loaded {len(vehicles)} vehicles from {path}")
    return len(vehicles)
