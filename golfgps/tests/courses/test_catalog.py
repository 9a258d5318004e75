from __future__ import annotations

import pytest

from golfgps.courses.catalog import CourseName, build_venues, placeholder_holes
from golfgps.courses.registry import CourseRegistry, UnknownCourseError, get_course_registry
from golfgps.courses.schemas import DEFAULT_TEE_NAME, Course, GeoPoint, Hole, TeeMarker
from golfgps.courses.scoring import validate_stroke_indices
from golfgps.courses.service import CourseLookupService


def test_every_enumerated_course_is_registered():
    registry = get_course_registry()
    assert sorted(registry.names()) == sorted(name.value for name in CourseName)
    for name in CourseName:
        assert name in registry
        assert registry.get(name) is registry.get(name.value)


def test_every_catalog_course_resolves_hole_one(catalog_lookup):
    for course in catalog_lookup.list_courses():
        assert catalog_lookup.get_hole_count(course.name) > 0
        assert catalog_lookup.resolve_tee_green(course.name, 1) is not None


def test_catalog_stroke_indices_are_permutations():
    for course in get_course_registry().courses():
        assert validate_stroke_indices(course) == [], course.name


def test_venues_group_courses():
    venues = {venue.name: venue for venue in build_venues()}
    harding = venues["TPC Harding Park"]
    assert [c.name for c in harding.courses] == [
        CourseName.TPC_HARDING_PARK.value,
        CourseName.FLEMING.value,
    ]
    assert len(venues["Half Moon Bay Golf Links"].courses) == 2


def test_lincoln_park_is_a_mapped_par_68():
    course = get_course_registry().require(CourseName.LINCOLN_PARK)
    assert course.mvp_complete
    assert len(course.holes) == 18
    assert course.total_par == 68
    assert [t.name for t in course.tee_sets] == ["Blue", "White", "Red"]


def test_golden_gate_park_holes_have_named_markers():
    course = get_course_registry().require(CourseName.GOLDEN_GATE_PARK)
    first = course.hole(1)
    assert [m.name for m in first.tees] == ["Blue", "White", "Red"]
    assert first.tee_marker("White").yardage == 164


def test_holes_without_markers_get_a_default_one():
    hole = Hole(number=1, par=4, yardage=380, tee=GeoPoint(lat=1.0, lon=1.0), green=GeoPoint(lat=1.001, lon=1.0))
    assert len(hole.tees) == 1
    assert hole.tees[0].name == DEFAULT_TEE_NAME
    assert hole.tees[0].yardage == 380
    assert hole.tee_marker() is hole.tees[0]


def test_hole_tee_defaults_to_first_marker():
    marker = TeeMarker(name="Blue", position=GeoPoint(lat=2.0, lon=2.0))
    hole = Hole(number=1, par=3, tees=[marker], green=GeoPoint(lat=2.001, lon=2.0))
    assert hole.tee == marker.position


def test_hole_needs_some_tee():
    with pytest.raises(ValueError):
        Hole(number=1, par=3, green=GeoPoint(lat=2.001, lon=2.0))


def test_short_placeholder_layouts_rank_stroke_indices():
    holes = placeholder_holes(GeoPoint(lat=0.0, lon=0.0), count=9)
    assert sorted(h.stroke_index for h in holes) == list(range(1, 10))


def test_registry_rejects_duplicate_names():
    course = Course(name="Twin", location="", holes=[])
    with pytest.raises(ValueError):
        CourseRegistry.from_courses([course, course])


def test_registry_require_unknown_raises():
    with pytest.raises(UnknownCourseError):
        get_course_registry().require("Pebble Beach")
    assert get_course_registry().get("Pebble Beach") is None


def test_verify_catalog_passes_for_shipped_data(catalog_lookup):
    report = catalog_lookup.verify_catalog()
    assert report.ok
    assert report.failures == []
    assert report.stroke_index_warnings == []


def test_verify_catalog_flags_course_missing_hole_one():
    broken = Course(
        name="Starts At Two",
        location="",
        holes=[
            Hole(
                number=2,
                par=4,
                stroke_index=1,
                tee=GeoPoint(lat=0.0, lon=0.0),
                green=GeoPoint(lat=0.001, lon=0.0),
            )
        ],
    )
    service = CourseLookupService(CourseRegistry.from_courses([broken]))
    report = service.verify_catalog()
    assert not report.ok
    assert report.failures == ["Starts At Two: hole 1 does not resolve"]
