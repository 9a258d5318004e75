from __future__ import annotations

from math import sqrt
from typing import List, Optional, Sequence

from .geometry import dist_sq_deg, midpoint, point_in_polygon, polygon_centroid
from .schemas import Bounds, GeoPoint, HoleLayout

# Roughly 25 m either side of the tee-green axis.
CORRIDOR_HALF_WIDTH_DEG = 0.00012
LABEL_SEPARATION_DEG = 0.00035
LABEL_NUDGE_DEG = 0.0004
LABEL_MAX_PASSES = 8

# Lincoln Park area, for maps that have nothing better to fit.
DEFAULT_BOUNDS = Bounds(north=37.787, south=37.782, east=-122.496, west=-122.503)


def corridor_polygon(
    tee: GeoPoint, green: GeoPoint, half_width_deg: float = CORRIDOR_HALF_WIDTH_DEG
) -> List[GeoPoint]:
    """Rectangle of ``half_width_deg`` either side of the tee-green axis.

    Vertex order is tee-left, tee-right, green-right, green-left. A zero
    length axis uses a unit length, so tee == green yields a collapsed but
    finite quad.
    """

    dlat = green.lat - tee.lat
    dlon = green.lon - tee.lon
    length = sqrt(dlat * dlat + dlon * dlon) or 1.0
    perp_lat = (-dlon / length) * half_width_deg
    perp_lon = (dlat / length) * half_width_deg
    return [
        GeoPoint(lat=tee.lat + perp_lat, lon=tee.lon + perp_lon),
        GeoPoint(lat=tee.lat - perp_lat, lon=tee.lon - perp_lon),
        GeoPoint(lat=green.lat - perp_lat, lon=green.lon - perp_lon),
        GeoPoint(lat=green.lat + perp_lat, lon=green.lon + perp_lon),
    ]


def section_label_positions(
    sections: Sequence[Sequence[GeoPoint]],
    holes: Sequence[HoleLayout],
    *,
    separation_deg: float = LABEL_SEPARATION_DEG,
    nudge_deg: float = LABEL_NUDGE_DEG,
    max_passes: int = LABEL_MAX_PASSES,
) -> List[GeoPoint]:
    """Place one label per boundary section, pushed clear of hole labels.

    Each label starts at its section's centroid and is nudged away from the
    first hole midpoint or earlier label closer than ``separation_deg``. This
    is best effort: after ``max_passes`` the last position is kept even if it
    still overlaps something.
    """

    hole_midpoints = [midpoint(hole.tee, hole.green) for hole in holes]
    sep_sq = separation_deg * separation_deg
    placed: List[GeoPoint] = []

    for section in sections:
        pos = polygon_centroid(section)
        for _ in range(max_passes):
            conflict = _first_conflict(pos, hole_midpoints, sep_sq)
            if conflict is None:
                conflict = _first_conflict(pos, placed, sep_sq)
            if conflict is None:
                break
            dlat = pos.lat - conflict.lat
            dlon = pos.lon - conflict.lon
            length = sqrt(dlat * dlat + dlon * dlon) or 1.0
            pos = GeoPoint(
                lat=pos.lat + (dlat / length) * nudge_deg,
                lon=pos.lon + (dlon / length) * nudge_deg,
            )
        placed.append(pos)
    return placed


def _first_conflict(
    pos: GeoPoint, others: Sequence[GeoPoint], sep_sq: float
) -> Optional[GeoPoint]:
    return next((other for other in others if dist_sq_deg(pos, other) < sep_sq), None)


def close_ring(path: Sequence[GeoPoint]) -> List[GeoPoint]:
    if len(path) < 2 or path[0] == path[-1]:
        return list(path)
    return [*path, path[0]]


def hole_at_point(
    point: GeoPoint,
    holes: Sequence[HoleLayout],
    half_width_deg: float = CORRIDOR_HALF_WIDTH_DEG,
) -> Optional[int]:
    """Number of the first hole whose corridor contains ``point``."""

    for hole in holes:
        if point_in_polygon(point, corridor_polygon(hole.tee, hole.green, half_width_deg)):
            return hole.number
    return None


__all__ = [
    "CORRIDOR_HALF_WIDTH_DEG",
    "DEFAULT_BOUNDS",
    "LABEL_MAX_PASSES",
    "LABEL_NUDGE_DEG",
    "LABEL_SEPARATION_DEG",
    "close_ring",
    "corridor_polygon",
    "hole_at_point",
    "section_label_positions",
]
