"""H3 hexagon binning of feedback locations for the OneMap view."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import h3

logger = logging.getLogger(__name__)

# Singapore bounding ranges
LAT_RANGE = (1.14, 1.5)
LNG_RANGE = (103.5, 104.5)
DEFAULT_CENTER = (1.3521, 103.8198)
DEFAULT_ZOOM = 12
GRID_RING_SIZE = 4


@dataclass
class Location:
    x: float
    y: float
    name: Optional[str] = None
    location: Optional[str] = None


@dataclass
class HexCell:
    cell_id: str
    count: int
    center: Tuple[float, float]
    boundary: List[Tuple[float, float]]
    intensity: float = 0.5
    fill_color: str = ""
    locations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cellId": self.cell_id,
            "count": self.count,
            "center": list(self.center),
            "boundary": [list(vertex) for vertex in self.boundary],
            "intensity": self.intensity,
            "fillColor": self.fill_color,
            "locations": self.locations,
        }


def _in_range(value: float, bounds: Tuple[float, float]) -> bool:
    return bounds[0] <= value <= bounds[1]


def normalize_coordinates(x: float, y: float) -> Optional[Tuple[float, float]]:
    """Return ``(lat, lng)`` for a point, swapping reversed pairs; None if unusable."""
    if _in_range(x, LAT_RANGE) and _in_range(y, LNG_RANGE):
        return x, y
    if _in_range(y, LAT_RANGE) and _in_range(x, LNG_RANGE):
        logger.debug("Swapped coordinates detected: %s,%s", x, y)
        return y, x
    return None


def resolution_for_zoom(zoom: float) -> int:
    if zoom <= 10:
        return 6
    if zoom <= 12:
        return 7
    if zoom <= 14:
        return 8
    return 9


def blue_scale(normalized: float) -> str:
    """Light to dark blue; larger values are darker."""
    intensity = int(255 * (1 - normalized))
    r = int(intensity * 0.5)
    g = int(intensity * 0.7)
    b = int(100 + 155 * (1 - normalized))
    return f"rgb({r}, {g}, {b})"


def _cell(cell_id: str, count: int) -> HexCell:
    return HexCell(
        cell_id=cell_id,
        count=count,
        center=tuple(h3.cell_to_latlng(cell_id)),
        boundary=[tuple(vertex) for vertex in h3.cell_to_boundary(cell_id)],
    )


def bin_locations(
    locations: Iterable[Location], resolution: int
) -> Tuple[List[HexCell], int]:
    """Count locations per H3 cell. Returns the cells and the number skipped."""
    counts: Dict[str, int] = {}
    names: Dict[str, List[str]] = {}
    skipped = 0

    for loc in locations:
        point = normalize_coordinates(loc.x, loc.y)
        if point is None:
            logger.warning("Invalid coordinates: %s,%s", loc.x, loc.y)
            skipped += 1
            continue
        cell_id = h3.latlng_to_cell(point[0], point[1], resolution)
        counts[cell_id] = counts.get(cell_id, 0) + 1
        label = loc.name or loc.location
        if label:
            names.setdefault(cell_id, []).append(label)

    if not counts:
        return [], skipped

    min_count = min(counts.values())
    max_count = max(counts.values())

    cells = []
    for cell_id, count in counts.items():
        cell = _cell(cell_id, count)
        cell.intensity = (
            (count - min_count) / (max_count - min_count) if max_count > min_count else 0.5
        )
        cell.fill_color = blue_scale(cell.intensity)
        cell.locations = names.get(cell_id, [])
        cells.append(cell)

    cells.sort(key=lambda c: c.count, reverse=True)
    return cells, skipped


def grid_cells(center: Sequence[float], resolution: int, ring_size: int = GRID_RING_SIZE) -> List[HexCell]:
    """Empty hexagon grid around ``center``, shown when there is nothing to bin."""
    center_cell = h3.latlng_to_cell(center[0], center[1], resolution)
    cells = []
    for cell_id in h3.grid_disk(center_cell, ring_size):
        cell = _cell(cell_id, 0)
        cell.intensity = 0.0
        cell.fill_color = blue_scale(0.0)
        cells.append(cell)
    return cells


def validate_sample(locations: Sequence[Location], sample_size: int = 5) -> Dict[str, Any]:
    """Inspect the first few locations and report how trustworthy the set looks."""
    sample = list(locations)[:sample_size]
    if not sample:
        return {"valid": True, "message": "No locations to validate", "severity": "none"}

    swapped = invalid = 0
    for loc in sample:
        if _in_range(loc.x, LAT_RANGE) and _in_range(loc.y, LNG_RANGE):
            continue
        if normalize_coordinates(loc.x, loc.y) is not None:
            swapped += 1
        else:
            invalid += 1

    if invalid:
        return {
            "valid": False,
            "message": f"{invalid} of {len(sample)} sampled locations fall outside Singapore",
            "severity": "high",
        }
    if swapped:
        return {
            "valid": False,
            "message": f"{swapped} of {len(sample)} sampled locations have latitude and longitude swapped",
            "severity": "medium",
        }
    return {"valid": True, "message": "Sampled coordinates look valid", "severity": "none"}


__all__ = [
    "Location",
    "HexCell",
    "normalize_coordinates",
    "resolution_for_zoom",
    "bin_locations",
    "grid_cells",
    "validate_sample",
    "blue_scale",
    "DEFAULT_CENTER",
    "DEFAULT_ZOOM",
]
