from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt
from typing import Sequence

from .schemas import GeoPoint

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(p1: GeoPoint, p2: GeoPoint) -> float:
    """Compute haversine distance between two geographic points in meters."""

    lat1 = radians(p1.lat)
    lon1 = radians(p1.lon)
    lat2 = radians(p2.lat)
    lon2 = radians(p2.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_M * c


def is_in_circle(point: GeoPoint, center: GeoPoint, radius_m: float) -> bool:
    """True when ``point`` lies within ``radius_m`` of ``center`` (edge included)."""

    return haversine_m(point, center) <= radius_m


def point_in_polygon(point: GeoPoint, ring: Sequence[GeoPoint]) -> bool:
    """Ray-casting containment test in plain degree space.

    The ring is implicitly closed (last vertex connects back to the first);
    an explicitly closed ring works too. Rings with fewer than three
    vertices contain nothing.
    """

    n = len(ring)
    if n < 3:
        return False

    x = point.lon
    y = point.lat
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = ring[i].lon, ring[i].lat
        xj, yj = ring[j].lon, ring[j].lat
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def polygon_centroid(ring: Sequence[GeoPoint]) -> GeoPoint:
    """Vertex mean of ``ring``; an empty ring maps to (0, 0).

    Not area weighted: only used to anchor labels.
    """

    if not ring:
        return GeoPoint(lat=0.0, lon=0.0)
    n = len(ring)
    return GeoPoint(
        lat=sum(p.lat for p in ring) / n,
        lon=sum(p.lon for p in ring) / n,
    )


def midpoint(a: GeoPoint, b: GeoPoint) -> GeoPoint:
    return GeoPoint(lat=(a.lat + b.lat) / 2.0, lon=(a.lon + b.lon) / 2.0)


def dist_sq_deg(a: GeoPoint, b: GeoPoint) -> float:
    """Squared distance in degree space, for threshold comparisons."""

    dlat = a.lat - b.lat
    dlon = a.lon - b.lon
    return dlat * dlat + dlon * dlon


__all__ = [
    "EARTH_RADIUS_M",
    "dist_sq_deg",
    "haversine_m",
    "is_in_circle",
    "midpoint",
    "point_in_polygon",
    "polygon_centroid",
]
