from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable, Dict, List, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .edit_models import HoleOverride
from .features import (
    BoundedLie,
    classify_lie_with_bounds,
    hole_features_from_editor,
    hole_features_from_static,
    in_play_features,
)
from .geometry import haversine_m
from .overrides import CourseEditStore, get_course_edit_store
from .registry import CourseKey, CourseRegistry, get_course_registry
from .schemas import (
    DEFAULT_TEE_NAME,
    Bounds,
    Course,
    GeoPoint,
    Hole,
    HoleFeaturesForAI,
    HoleInfo,
    HoleLayout,
    TeeGreen,
    TeeSet,
    TreeObstacle,
    Venue,
)
from .scoring import validate_stroke_indices
from .units import meters_to_yards

_LOG = logging.getLogger(__name__)

T = TypeVar("T")


class CatalogIntegrityReport(BaseModel):
    ok: bool
    failures: List[str] = Field(default_factory=list)
    stroke_index_warnings: List[str] = Field(
        default_factory=list, alias="strokeIndexWarnings"
    )

    model_config = ConfigDict(populate_by_name=True)


class CourseLookupService:
    """Resolves tee/green positions, hole metadata and features for any course.

    Every course goes through the same path: an editor override for the hole
    wins, then the tee marker named by the tee set, then the hole's first
    marker. Unknown courses or holes resolve to ``None`` (or an empty list),
    never an exception.
    """

    def __init__(
        self,
        registry: Optional[CourseRegistry] = None,
        edits: Optional[CourseEditStore] = None,
    ) -> None:
        self._registry = registry or get_course_registry()
        self._edits = edits if edits is not None else CourseEditStore()
        self._memo: Dict[Tuple[str, str, Optional[str]], Tuple[int, object]] = {}

    @property
    def edits(self) -> CourseEditStore:
        return self._edits

    @property
    def registry(self) -> CourseRegistry:
        return self._registry

    def _cached(
        self, kind: str, course: Course, tee_set: Optional[str], compute: Callable[[], T]
    ) -> T:
        key = (kind, course.name, tee_set)
        revision = self._edits.revision(course.name)
        hit = self._memo.get(key)
        if hit is not None:
            if hit[0] == revision:
                return hit[1]  # type: ignore[return-value]
            _LOG.debug("dropping stale %s for %s (revision %s)", kind, course.name, revision)
        value = compute()
        self._memo[key] = (revision, value)
        return value

    # -- catalog -----------------------------------------------------------

    def get_course(self, course_name: CourseKey) -> Optional[Course]:
        return self._registry.get(course_name)

    def list_courses(self) -> List[Course]:
        return self._registry.courses()

    def list_venues(self) -> List[Venue]:
        return self._registry.venues()

    def get_hole_count(self, course_name: CourseKey) -> int:
        course = self._registry.get(course_name)
        return len(course.holes) if course else 0

    def _hole(self, course_name: CourseKey, hole_number: int) -> Tuple[Optional[Course], Optional[Hole]]:
        course = self._registry.get(course_name)
        if course is None:
            return None, None
        return course, course.hole(hole_number)

    # -- tee / green -----------------------------------------------------------

    @staticmethod
    def _has_tee_set(course: Course, tee_set: str) -> bool:
        return any(hole.tee_marker(tee_set) is not None for hole in course.holes)

    @staticmethod
    def _static_tee_green(hole: Hole, tee_set: Optional[str]) -> TeeGreen:
        marker = hole.tee_marker(tee_set) if tee_set else None
        if marker is None:
            marker = hole.tee_marker()
        tee = marker.position if marker is not None else hole.tee
        return TeeGreen(tee=tee, green=hole.green)

    def _resolve(self, course: Course, hole: Hole, tee_set: Optional[str]) -> TeeGreen:
        override = self._edits.get_tee_green_override(course.name, hole.number)
        if override is not None:
            return override
        return self._static_tee_green(hole, tee_set)

    def resolve_tee_green(
        self, course_name: CourseKey, hole_number: int, tee_set: Optional[str] = None
    ) -> Optional[TeeGreen]:
        course, hole = self._hole(course_name, hole_number)
        if course is None or hole is None:
            return None
        return self._resolve(course, hole, tee_set)

    def resolve_hole_info(
        self, course_name: CourseKey, hole_number: int, tee_set: Optional[str] = None
    ) -> Optional[HoleInfo]:
        """Par, yardage and stroke index for a hole.

        Yardage comes from the selected tee marker, then the hole's scorecard
        yardage (when no known tee set was requested), then the straight-line
        tee to green distance.
        """

        course, hole = self._hole(course_name, hole_number)
        if course is None or hole is None:
            return None
        named = hole.tee_marker(tee_set) if tee_set else None
        marker = named or hole.tee_marker()
        yardage = marker.yardage if marker is not None else None
        if yardage is None and named is None:
            yardage = hole.yardage
        if yardage is None:
            resolved = self._resolve(course, hole, tee_set)
            yardage = round(meters_to_yards(haversine_m(resolved.tee, resolved.green)))
        return HoleInfo(par=hole.par, yardage=yardage, stroke_index=hole.stroke_index)

    def get_holes_for_course(
        self, course_name: CourseKey, tee_set: Optional[str] = None
    ) -> List[HoleLayout]:
        course = self._registry.get(course_name)
        if course is None:
            return []
        if tee_set is not None and not self._has_tee_set(course, tee_set):
            # Unknown names resolve exactly like no selection.
            tee_set = None

        def _compute() -> List[HoleLayout]:
            layouts = []
            for hole in course.holes:
                resolved = self._resolve(course, hole, tee_set)
                layouts.append(
                    HoleLayout(number=hole.number, tee=resolved.tee, green=resolved.green)
                )
            return layouts

        return list(self._cached("holes", course, tee_set, _compute))

    def get_bounds(self, course_name: CourseKey) -> Optional[Bounds]:
        """Box around every tee marker and green of the course.

        Holes with an editor tee/green contribute those two points instead.
        """

        course = self._registry.get(course_name)
        if course is None or not course.holes:
            return None

        def _compute() -> Bounds:
            points: List[GeoPoint] = []
            for hole in course.holes:
                override = self._edits.get_tee_green_override(course.name, hole.number)
                if override is not None:
                    points.extend((override.tee, override.green))
                    continue
                points.extend(marker.position for marker in hole.tees)
                points.extend((hole.tee, hole.green))
            return Bounds(
                north=max(p.lat for p in points),
                south=min(p.lat for p in points),
                east=max(p.lon for p in points),
                west=min(p.lon for p in points),
            )

        return self._cached("bounds", course, None, _compute)

    # -- tee sets ------------------------------------------------------------

    def get_tee_set_names(self, course_name: CourseKey) -> List[str]:
        course = self._registry.get(course_name)
        if course is None:
            return []
        if course.tee_sets:
            return [tee_set.name for tee_set in course.tee_sets]
        first = course.hole(1)
        if first is None:
            return []
        return [marker.name for marker in first.tees if marker.name != DEFAULT_TEE_NAME]

    def get_tee_set_info(self, course_name: CourseKey, index: int) -> Optional[TeeSet]:
        course = self._registry.get(course_name)
        if course is None or not 0 <= index < len(course.tee_sets):
            return None
        return course.tee_sets[index]

    # -- features and lies ----------------------------------------------------

    def get_effective_hole_data(
        self, course_name: CourseKey, hole_number: int
    ) -> Optional[HoleOverride]:
        """Editor data for a hole with tee and green always filled in."""

        course, hole = self._hole(course_name, hole_number)
        if course is None or hole is None:
            return None
        data = self._edits.get_raw_hole_override(course.name, hole.number) or HoleOverride()
        resolved = self._resolve(course, hole, None)
        data.tee = resolved.tee
        data.green = resolved.green
        return data

    def _features(self, course: Course, hole: Hole) -> HoleFeaturesForAI:
        override = self._edits.get_raw_hole_override(course.name, hole.number)
        if override is not None and override.has_mapped_features:
            green = self._resolve(course, hole, None).green
            return hole_features_from_editor(override, green)
        return hole_features_from_static(hole)

    def get_hole_features_for_ai(
        self, course_name: CourseKey, hole_number: int
    ) -> Optional[HoleFeaturesForAI]:
        course, hole = self._hole(course_name, hole_number)
        if course is None or hole is None:
            return None
        return self._features(course, hole)

    def get_in_play_features(
        self, course_name: CourseKey, hole_number: int
    ) -> Optional[HoleFeaturesForAI]:
        """Features of a hole plus other mapped holes' features inside the boundary."""

        course, hole = self._hole(course_name, hole_number)
        if course is None or hole is None:
            return None
        return self._in_play(course, hole)

    def _in_play(self, course: Course, hole: Hole) -> HoleFeaturesForAI:
        others = []
        for other in course.holes:
            if other.number == hole.number:
                continue
            override = self._edits.get_raw_hole_override(course.name, other.number)
            if override is None or not override.has_mapped_features:
                continue
            others.append(self._features(course, other))
        boundary = self._edits.get_course_boundary(course.name)
        return in_play_features(self._features(course, hole), others, boundary)

    def classify_lie_at(
        self, course_name: CourseKey, hole_number: int, position: GeoPoint
    ) -> Optional[BoundedLie]:
        course, hole = self._hole(course_name, hole_number)
        if course is None or hole is None:
            return None
        features = self._in_play(course, hole)
        boundary = self._edits.get_course_boundary(course.name)
        return classify_lie_with_bounds(position, features, boundary)

    def get_tree_obstacles(
        self, course_name: CourseKey, hole_number: int
    ) -> List[TreeObstacle]:
        features = self.get_hole_features_for_ai(course_name, hole_number)
        return list(features.tree_obstacles) if features else []

    # -- integrity ---------------------------------------------------------------

    def verify_catalog(self) -> CatalogIntegrityReport:
        """Every course with holes must resolve hole 1."""

        failures: List[str] = []
        warnings: List[str] = []
        for course in self._registry.courses():
            if self.get_hole_count(course.name) > 0 and self.resolve_tee_green(course.name, 1) is None:
                failures.append(f"{course.name}: hole 1 does not resolve")
            warnings.extend(validate_stroke_indices(course))
        return CatalogIntegrityReport(
            ok=not failures, failures=failures, stroke_index_warnings=warnings
        )


@lru_cache(maxsize=1)
def get_lookup_service() -> CourseLookupService:
    return CourseLookupService(get_course_registry(), get_course_edit_store())


__all__ = ["CatalogIntegrityReport", "CourseLookupService", "get_lookup_service"]
