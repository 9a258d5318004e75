from __future__ import annotations

import logging

import pytest

from golfgps.courses.registry import CourseRegistry
from golfgps.courses.schemas import Course, GeoPoint, Hole
from golfgps.courses.service import CourseLookupService
from golfgps.metrics import REGISTRY
from golfgps.startup_validation import validate_startup


def _broken_service() -> CourseLookupService:
    course = Course(
        name="Back Nine Only",
        location="",
        holes=[
            Hole(
                number=10,
                par=4,
                stroke_index=1,
                tee=GeoPoint(lat=0.0, lon=0.0),
                green=GeoPoint(lat=0.001, lon=0.0),
            )
        ],
    )
    return CourseLookupService(CourseRegistry.from_courses([course]))


def test_shipped_catalog_passes(monkeypatch, catalog_lookup):
    monkeypatch.delenv("REQUIRE_API_KEY", raising=False)
    report = validate_startup(catalog_lookup)
    assert report.ok
    assert REGISTRY.get_sample_value("golfgps_catalog_integrity_failures") == 0.0


def test_integrity_failure_is_logged_not_fatal(monkeypatch, caplog):
    monkeypatch.delenv("REQUIRE_API_KEY", raising=False)
    monkeypatch.delenv("STRICT_CATALOG", raising=False)
    with caplog.at_level(logging.WARNING, logger="golfgps.startup_validation"):
        report = validate_startup(_broken_service())
    assert not report.ok
    assert "Back Nine Only: hole 1 does not resolve" in caplog.text
    assert "stroke index 1 outside" not in caplog.text
    assert REGISTRY.get_sample_value("golfgps_catalog_integrity_failures") == 1.0


def test_strict_catalog_aborts_startup(monkeypatch):
    monkeypatch.delenv("REQUIRE_API_KEY", raising=False)
    monkeypatch.setenv("STRICT_CATALOG", "1")
    with pytest.raises(RuntimeError, match="Back Nine Only"):
        validate_startup(_broken_service())


def test_api_key_required_without_key(monkeypatch, catalog_lookup):
    monkeypatch.setenv("REQUIRE_API_KEY", "1")
    monkeypatch.delenv("API_KEY", raising=False)
    with pytest.raises(RuntimeError, match="API_KEY must be set"):
        validate_startup(catalog_lookup)
