"""Shared pytest fixtures for golfgps tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from golfgps.app import app
from golfgps.config import reset_settings_cache
from golfgps.courses.overrides import CourseEditStore
from golfgps.courses.registry import CourseRegistry, get_course_registry
from golfgps.courses.schemas import Course, GeoPoint, Hole, TeeMarker
from golfgps.courses.service import CourseLookupService, get_lookup_service

TEST_LINKS = "Test Links"
MARKER_COURSE = "Marker Course"


def build_test_links() -> Course:
    return Course(
        name=TEST_LINKS,
        location="Nowhere",
        holes=[
            Hole(
                number=1,
                par=4,
                stroke_index=2,
                tee=GeoPoint(lat=10.0, lon=20.0),
                green=GeoPoint(lat=10.001, lon=20.001),
            ),
            Hole(
                number=2,
                par=3,
                stroke_index=3,
                green=GeoPoint(lat=10.003, lon=20.002),
                tees=[
                    TeeMarker(name="Blue", position=GeoPoint(lat=10.002, lon=20.0), yardage=150),
                    TeeMarker(name="Red", position=GeoPoint(lat=9.999, lon=19.998), yardage=120),
                ],
            ),
            Hole(
                number=3,
                par=4,
                stroke_index=1,
                yardage=400,
                tee=GeoPoint(lat=10.004, lon=20.003),
                green=GeoPoint(lat=10.005, lon=20.004),
            ),
        ],
    )


def build_marker_course() -> Course:
    return Course(
        name=MARKER_COURSE,
        location="Nowhere",
        holes=[
            Hole(
                number=1,
                par=3,
                stroke_index=1,
                green=GeoPoint(lat=11.001, lon=21.0),
                tees=[
                    TeeMarker(name="Blue", position=GeoPoint(lat=11.0, lon=21.0)),
                    TeeMarker(name="Red", position=GeoPoint(lat=11.0005, lon=21.0)),
                ],
            )
        ],
    )


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def edit_store() -> CourseEditStore:
    return CourseEditStore()


@pytest.fixture
def test_registry() -> CourseRegistry:
    return CourseRegistry.from_courses([build_test_links(), build_marker_course()])


@pytest.fixture
def lookup(test_registry: CourseRegistry, edit_store: CourseEditStore) -> CourseLookupService:
    return CourseLookupService(test_registry, edit_store)


@pytest.fixture
def catalog_lookup(edit_store: CourseEditStore) -> CourseLookupService:
    return CourseLookupService(get_course_registry(), edit_store)


@pytest.fixture
def client(catalog_lookup, monkeypatch):
    monkeypatch.delenv("REQUIRE_API_KEY", raising=False)
    monkeypatch.delenv("EDITOR_TOKEN", raising=False)
    app.dependency_overrides[get_lookup_service] = lambda: catalog_lookup
    client = TestClient(app)
    yield client, catalog_lookup
    app.dependency_overrides.pop(get_lookup_service, None)
