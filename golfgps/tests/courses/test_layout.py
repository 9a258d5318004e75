from __future__ import annotations

import math

import pytest

from golfgps.courses.layout import (
    CORRIDOR_HALF_WIDTH_DEG,
    DEFAULT_BOUNDS,
    LABEL_NUDGE_DEG,
    close_ring,
    corridor_polygon,
    hole_at_point,
    section_label_positions,
)
from golfgps.courses.geometry import dist_sq_deg
from golfgps.courses.schemas import GeoPoint, HoleLayout


def _square(lat: float, lon: float, half: float = 0.0001):
    return [
        GeoPoint(lat=lat - half, lon=lon - half),
        GeoPoint(lat=lat - half, lon=lon + half),
        GeoPoint(lat=lat + half, lon=lon + half),
        GeoPoint(lat=lat + half, lon=lon - half),
    ]


HOLE = HoleLayout(
    number=7,
    tee=GeoPoint(lat=-0.0001, lon=0.0),
    green=GeoPoint(lat=0.0001, lon=0.0),
)


def test_corridor_is_offset_perpendicular_to_axis():
    tee = GeoPoint(lat=0.0, lon=0.0)
    green = GeoPoint(lat=1.0, lon=0.0)
    assert corridor_polygon(tee, green, 0.5) == [
        GeoPoint(lat=0.0, lon=0.5),
        GeoPoint(lat=0.0, lon=-0.5),
        GeoPoint(lat=1.0, lon=-0.5),
        GeoPoint(lat=1.0, lon=0.5),
    ]


def test_zero_length_corridor_stays_finite():
    tee = GeoPoint(lat=37.78, lon=-122.5)
    quad = corridor_polygon(tee, tee)
    assert len(quad) == 4
    for point in quad:
        assert math.isfinite(point.lat) and math.isfinite(point.lon)


def test_hole_at_point_uses_corridor():
    assert hole_at_point(GeoPoint(lat=0.0, lon=CORRIDOR_HALF_WIDTH_DEG / 2), [HOLE]) == 7
    assert hole_at_point(GeoPoint(lat=0.0, lon=CORRIDOR_HALF_WIDTH_DEG * 2), [HOLE]) is None
    assert hole_at_point(GeoPoint(lat=0.0, lon=0.0), []) is None


def test_label_sits_on_centroid_when_clear():
    positions = section_label_positions([_square(1.0, 1.0)], [HOLE])
    assert positions[0].lat == pytest.approx(1.0)
    assert positions[0].lon == pytest.approx(1.0)


def test_label_is_pushed_off_hole_midpoint():
    positions = section_label_positions([_square(0.0001, 0.0)], [HOLE])
    assert positions[0].lat == pytest.approx(0.0001 + LABEL_NUDGE_DEG)
    assert positions[0].lon == pytest.approx(0.0)


def test_later_labels_avoid_earlier_ones():
    sections = [_square(1.0, 1.0), _square(1.0, 1.0002)]
    first, second = section_label_positions(sections, [])
    assert dist_sq_deg(first, second) >= 0.00035**2


def test_label_placement_is_best_effort():
    positions = section_label_positions([_square(0.0001, 0.0)], [HOLE], max_passes=0)
    assert positions[0].lat == pytest.approx(0.0001)


def test_close_ring():
    ring = _square(0.0, 0.0)
    closed = close_ring(ring)
    assert closed[-1] == ring[0]
    assert len(closed) == 5
    assert close_ring(closed) == closed
    assert close_ring(ring[:1]) == ring[:1]


def test_default_bounds_are_sane():
    assert DEFAULT_BOUNDS.north > DEFAULT_BOUNDS.south
    assert DEFAULT_BOUNDS.east > DEFAULT_BOUNDS.west
