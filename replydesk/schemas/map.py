from typing import List, Optional, Tuple

from pydantic import Field

from .base import CamelModel


class MapLocation(CamelModel):
    name: Optional[str] = None
    location: Optional[str] = None
    location_x: float
    location_y: float


class HexbinRequest(CamelModel):
    locations: List[MapLocation] = Field(default_factory=list)
    zoom: float = 12
    resolution: Optional[int] = Field(None, ge=0, le=15)
    center: Optional[Tuple[float, float]] = None
