"""Course catalog, geometry and lie classification."""

from .catalog import CourseName
from .overrides import CourseEditStore, get_course_edit_store
from .registry import CourseRegistry, UnknownCourseError, get_course_registry
from .schemas import Course, GeoPoint, Hole, TeeGreen, Venue
from .service import CatalogIntegrityReport, CourseLookupService, get_lookup_service

__all__ = [
    "CatalogIntegrityReport",
    "Course",
    "CourseEditStore",
    "CourseLookupService",
    "CourseName",
    "CourseRegistry",
    "GeoPoint",
    "Hole",
    "TeeGreen",
    "UnknownCourseError",
    "Venue",
    "get_course_edit_store",
    "get_course_registry",
    "get_lookup_service",
]
