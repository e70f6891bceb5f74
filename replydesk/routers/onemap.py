"""Hexagon-binned feedback locations for the OneMap visualisation."""

import logging
from typing import List, Optional, Sequence

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..lib import hexbin
from ..models import User
from ..schemas.map import HexbinRequest
from ..services import record_service
from .auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/map", tags=["map"])


def _hexbin_payload(
    locations: Sequence[hexbin.Location],
    zoom: float,
    resolution: Optional[int] = None,
    center: Optional[Sequence[float]] = None,
    unparsed: int = 0,
):
    resolution = resolution if resolution is not None else hexbin.resolution_for_zoom(zoom)
    cells, skipped = hexbin.bin_locations(locations, resolution)
    mode = "locations"
    if not locations:
        logger.info("No locations provided, using grid mode instead")
        cells = hexbin.grid_cells(center or hexbin.DEFAULT_CENTER, resolution)
        mode = "grid"
    return {
        "resolution": resolution,
        "mode": mode,
        "cells": [cell.to_dict() for cell in cells],
        "skipped": skipped + unparsed,
        "validation": hexbin.validate_sample(locations),
    }


@router.post("/hexbins")
def hexbins(body: HexbinRequest, user: User = Depends(get_current_user)):
    locations = [
        hexbin.Location(x=loc.location_x, y=loc.location_y, name=loc.name, location=loc.location)
        for loc in body.locations
    ]
    return _hexbin_payload(locations, body.zoom, body.resolution, body.center)


def _record_locations(records) -> tuple:
    locations: List[hexbin.Location] = []
    unparsed = 0
    for record in records:
        try:
            x, y = float(record.location_x), float(record.location_y)
        except (TypeError, ValueError):
            unparsed += 1
            continue
        locations.append(hexbin.Location(x=x, y=y, name=record.location))
    return locations, unparsed


@router.get("/records")
def record_hexbins(
    zoom: float = Query(hexbin.DEFAULT_ZOOM),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """The officer's own records binned at the resolution for ``zoom``."""
    locations, unparsed = _record_locations(record_service.list_records_for_officer(db, user.id))
    return _hexbin_payload(locations, zoom, unparsed=unparsed)
