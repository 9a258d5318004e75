from __future__ import annotations

from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Union

from .catalog import CourseName, build_venues
from .schemas import Course, Venue

CourseKey = Union[str, CourseName]


class UnknownCourseError(KeyError):
    """Raised when a course name is not registered."""


def _key(name: CourseKey) -> str:
    return name.value if isinstance(name, CourseName) else name


class CourseRegistry:
    """Name-keyed course catalog.

    Course names are the public key everywhere (round history, saved edits,
    UI), so duplicates are rejected when the registry is built.
    """

    def __init__(self, venues: Iterable[Venue]) -> None:
        self._venues: List[Venue] = list(venues)
        self._courses: Dict[str, Course] = {}
        for venue in self._venues:
            for course in venue.courses:
                if course.name in self._courses:
                    raise ValueError(f"duplicate course name: {course.name}")
                self._courses[course.name] = course

    @classmethod
    def from_courses(cls, courses: Iterable[Course]) -> "CourseRegistry":
        venues = [
            Venue(name=course.name, location=course.location, courses=[course])
            for course in courses
        ]
        return cls(venues)

    def get(self, name: CourseKey) -> Optional[Course]:
        return self._courses.get(_key(name))

    def require(self, name: CourseKey) -> Course:
        course = self.get(name)
        if course is None:
            raise UnknownCourseError(_key(name))
        return course

    def names(self) -> List[str]:
        return list(self._courses.keys())

    def courses(self) -> List[Course]:
        return list(self._courses.values())

    def venues(self) -> List[Venue]:
        return list(self._venues)

    def __contains__(self, name: object) -> bool:
        if isinstance(name, (str, CourseName)):
            return _key(name) in self._courses
        return False

    def __len__(self) -> int:
        return len(self._courses)


@lru_cache(maxsize=1)
def get_course_registry() -> CourseRegistry:
    return CourseRegistry(build_venues())


__all__ = ["CourseKey", "CourseRegistry", "UnknownCourseError", "get_course_registry"]
