from __future__ import annotations

import pytest
from pydantic import ValidationError

from golfgps.courses.catalog import CourseName
from golfgps.courses.geometry import haversine_m
from golfgps.courses.registry import CourseRegistry
from golfgps.courses.schemas import Bounds, Course, GeoPoint
from golfgps.courses.service import CourseLookupService
from golfgps.tests.conftest import MARKER_COURSE, TEST_LINKS

OVERRIDE_TEE = GeoPoint(lat=10.0005, lon=20.0005)
OVERRIDE_GREEN = GeoPoint(lat=10.0015, lon=20.0015)


def test_unknown_course_and_hole_resolve_to_none(lookup):
    assert lookup.get_hole_count("Nope") == 0
    assert lookup.resolve_tee_green("Nope", 1) is None
    assert lookup.resolve_tee_green(TEST_LINKS, 42) is None
    assert lookup.resolve_hole_info(TEST_LINKS, 42) is None
    assert lookup.get_bounds("Nope") is None
    assert lookup.get_holes_for_course("Nope") == []


def test_hole_count(lookup):
    assert lookup.get_hole_count(TEST_LINKS) == 3
    assert lookup.get_hole_count(MARKER_COURSE) == 1


def test_tee_set_selects_named_marker_with_fallback_to_first(lookup):
    red = lookup.resolve_tee_green(TEST_LINKS, 2, "Red")
    assert red.tee == GeoPoint(lat=9.999, lon=19.998)
    for tee_set in (None, "Gold"):
        resolved = lookup.resolve_tee_green(TEST_LINKS, 2, tee_set)
        assert resolved.tee == GeoPoint(lat=10.002, lon=20.0)
    single = lookup.resolve_tee_green(TEST_LINKS, 1, "Blue")
    assert single.tee == GeoPoint(lat=10.0, lon=20.0)
    assert single.green == GeoPoint(lat=10.001, lon=20.001)


def test_yardage_derived_from_distance_when_not_recorded(lookup):
    info = lookup.resolve_hole_info(TEST_LINKS, 1)
    expected = round(
        haversine_m(GeoPoint(lat=10.0, lon=20.0), GeoPoint(lat=10.001, lon=20.001)) / 0.9144
    )
    assert info.par == 4
    assert info.stroke_index == 2
    assert info.yardage == expected
    assert 165 < info.yardage < 175


def test_yardage_follows_tee_set_marker(lookup):
    assert lookup.resolve_hole_info(TEST_LINKS, 2, "Red").yardage == 120
    assert lookup.resolve_hole_info(TEST_LINKS, 2).yardage == 150
    assert lookup.resolve_hole_info(TEST_LINKS, 2, "Gold").yardage == 150
    assert lookup.resolve_hole_info(TEST_LINKS, 3).yardage == 400
    assert lookup.resolve_hole_info(TEST_LINKS, 3, "Blue").yardage == 400


def test_override_takes_precedence_and_clears(lookup):
    static = lookup.resolve_tee_green(TEST_LINKS, 1)
    lookup.edits.set_tee_green_override(TEST_LINKS, 1, OVERRIDE_TEE, OVERRIDE_GREEN)

    for tee_set in (None, "Blue"):
        resolved = lookup.resolve_tee_green(TEST_LINKS, 1, tee_set)
        assert resolved.tee == OVERRIDE_TEE
        assert resolved.green == OVERRIDE_GREEN

    info = lookup.resolve_hole_info(TEST_LINKS, 1)
    assert info.par == 4
    assert info.stroke_index == 2

    assert lookup.edits.clear_hole_override(TEST_LINKS, 1)
    assert lookup.resolve_tee_green(TEST_LINKS, 1) == static


def test_bounds_cover_every_tee_marker(lookup):
    assert lookup.get_bounds(TEST_LINKS) == Bounds(
        north=10.005, south=9.999, east=20.004, west=19.998
    )


def test_bounds_use_override_points_and_refresh_after_edits(lookup):
    before = lookup.get_bounds(TEST_LINKS)
    lookup.edits.set_tee_green_override(
        TEST_LINKS, 3, GeoPoint(lat=10.004, lon=20.003), GeoPoint(lat=10.01, lon=20.01)
    )
    after = lookup.get_bounds(TEST_LINKS)
    assert after.north == 10.01
    assert after.east == 20.01
    assert after != before


def test_holes_for_course_refresh_after_override(lookup):
    first = lookup.get_holes_for_course(TEST_LINKS)
    assert [h.number for h in first] == [1, 2, 3]
    assert first[0].tee == GeoPoint(lat=10.0, lon=20.0)

    lookup.edits.set_tee_green_override(TEST_LINKS, 1, OVERRIDE_TEE, OVERRIDE_GREEN)
    assert lookup.get_holes_for_course(TEST_LINKS)[0].tee == OVERRIDE_TEE
    assert lookup.get_holes_for_course(TEST_LINKS, "Red")[1].tee == GeoPoint(lat=9.999, lon=19.998)


def test_unknown_tee_set_names_share_the_default_cache_entry(lookup):
    default = lookup.get_holes_for_course(TEST_LINKS)
    for index in range(40):
        assert lookup.get_holes_for_course(TEST_LINKS, f"junk{index}") == default
    lookup.get_holes_for_course(TEST_LINKS, "Red")
    assert len(lookup._memo) == 2


def test_cached_layouts_and_bounds_are_immutable(lookup):
    layout = lookup.get_holes_for_course(TEST_LINKS)[0]
    with pytest.raises(ValidationError):
        layout.tee = OVERRIDE_TEE
    bounds = lookup.get_bounds(TEST_LINKS)
    with pytest.raises(ValidationError):
        bounds.north = 0.0
    assert lookup.get_holes_for_course(TEST_LINKS)[0].tee == GeoPoint(lat=10.0, lon=20.0)


def test_edits_on_one_course_keep_other_courses_cached(lookup):
    marker_bounds = lookup.get_bounds(MARKER_COURSE)
    lookup.edits.set_tee_green_override(TEST_LINKS, 1, OVERRIDE_TEE, OVERRIDE_GREEN)
    assert lookup.edits.revision(MARKER_COURSE) == 0
    assert lookup.get_bounds(MARKER_COURSE) is marker_bounds


def test_bounds_none_for_course_without_holes():
    service = CourseLookupService(
        CourseRegistry.from_courses([Course(name="Empty", location="", holes=[])])
    )
    assert service.get_bounds("Empty") is None


def test_tee_set_names_fall_back_to_markers(lookup, catalog_lookup):
    assert catalog_lookup.get_tee_set_names(CourseName.LINCOLN_PARK) == ["Blue", "White", "Red"]
    assert lookup.get_tee_set_names(MARKER_COURSE) == ["Blue", "Red"]
    assert lookup.get_tee_set_names(TEST_LINKS) == []
    assert lookup.get_tee_set_names("Nope") == []


def test_tee_set_info_by_index(catalog_lookup):
    blue = catalog_lookup.get_tee_set_info(CourseName.LINCOLN_PARK, 0)
    assert blue.name == "Blue"
    assert blue.total_yardage == 5146
    assert catalog_lookup.get_tee_set_info(CourseName.LINCOLN_PARK, 3) is None
    assert catalog_lookup.get_tee_set_info(CourseName.LINCOLN_PARK, -1) is None


def test_effective_hole_data_fills_tee_and_green(lookup):
    data = lookup.get_effective_hole_data(TEST_LINKS, 1)
    assert data.tee == GeoPoint(lat=10.0, lon=20.0)
    assert data.green == GeoPoint(lat=10.001, lon=20.001)
    assert data.hazards == []
    assert lookup.get_effective_hole_data(TEST_LINKS, 9) is None


def test_effective_hole_data_keeps_editor_features(lookup):
    lookup.edits.add_tree(TEST_LINKS, 1, GeoPoint(lat=10.0004, lon=20.0004))
    data = lookup.get_effective_hole_data(TEST_LINKS, 1)
    assert len(data.trees) == 1
    assert data.green == GeoPoint(lat=10.001, lon=20.001)
    assert not lookup.edits.get_raw_hole_override(TEST_LINKS, 1).has_tee_green


def test_static_features_are_metric(catalog_lookup):
    features = catalog_lookup.get_hole_features_for_ai(CourseName.LINCOLN_PARK, 1)
    assert features.green.radius_m == pytest.approx(9.144)
    assert features.fairways[0].radius_m == pytest.approx(22 * 0.9144)
    assert len(features.bunkers) == 1
    assert features.fairway_polygons is None
    assert features.tree_obstacles[0].radius_m == 8
    assert features.tree_obstacles[0].height_m == 10


def test_tree_obstacles(catalog_lookup):
    trees = catalog_lookup.get_tree_obstacles(CourseName.LINCOLN_PARK, 13)
    assert [t.height_m for t in trees] == [11, 9]
    assert catalog_lookup.get_tree_obstacles(CourseName.LINCOLN_PARK, 30) == []
    assert catalog_lookup.get_tree_obstacles("Nope", 1) == []


def test_editor_features_replace_static_once_mapped(lookup):
    ring = [
        GeoPoint(lat=10.0002, lon=20.0002),
        GeoPoint(lat=10.0002, lon=20.0006),
        GeoPoint(lat=10.0006, lon=20.0006),
        GeoPoint(lat=10.0006, lon=20.0002),
    ]
    assert lookup.edits.add_fairway(TEST_LINKS, 1, ring)
    features = lookup.get_hole_features_for_ai(TEST_LINKS, 1)
    assert features.fairway_polygons == [ring]
    assert features.green.radius_m == 18.0
    assert features.green.center == GeoPoint(lat=10.001, lon=20.001)
