from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from golfgps.config import get_settings
from golfgps.courses.features import BoundedLie
from golfgps.courses.layout import (
    DEFAULT_BOUNDS,
    corridor_polygon,
    section_label_positions,
)
from golfgps.courses.schemas import (
    Bounds,
    Course,
    GeoPoint,
    HoleFeaturesForAI,
    HoleLayout,
    TeeSet,
    TreeObstacle,
    Venue,
)
from golfgps.courses.service import CourseLookupService, get_lookup_service
from golfgps.metrics import LIE_CLASSIFICATIONS
from golfgps.security import require_api_key

router = APIRouter(
    prefix="/api",
    tags=["courses"],
    dependencies=[Depends(require_api_key)],
)


class CourseSummaryOut(BaseModel):
    name: str
    location: str
    hole_count: int = Field(alias="holeCount")
    total_par: int = Field(alias="totalPar")
    mvp_complete: bool = Field(alias="mvpComplete")

    model_config = ConfigDict(populate_by_name=True)


class HoleOut(BaseModel):
    number: int
    tee: GeoPoint
    green: GeoPoint
    par: int
    yardage: Optional[int] = None
    stroke_index: Optional[int] = Field(default=None, alias="strokeIndex")
    customized: bool = False

    model_config = ConfigDict(populate_by_name=True)


class CorridorOut(BaseModel):
    number: int
    polygon: List[GeoPoint]


class TeeSetsOut(BaseModel):
    names: List[str]
    tee_sets: List[TeeSet] = Field(default_factory=list, alias="teeSets")

    model_config = ConfigDict(populate_by_name=True)


class LieRequest(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class LieOut(BaseModel):
    lie: BoundedLie


def _course_or_404(service: CourseLookupService, name: str) -> Course:
    course = service.get_course(name)
    if course is None:
        raise HTTPException(status_code=404, detail="course_not_found")
    return course


@router.get("/courses", response_model=list[CourseSummaryOut])
def list_courses(
    service: CourseLookupService = Depends(get_lookup_service),
) -> list[CourseSummaryOut]:
    return [
        CourseSummaryOut(
            name=course.name,
            location=course.location,
            hole_count=len(course.holes),
            total_par=course.total_par,
            mvp_complete=course.mvp_complete,
        )
        for course in service.list_courses()
    ]


@router.get("/venues", response_model=list[Venue])
def list_venues(
    service: CourseLookupService = Depends(get_lookup_service),
) -> list[Venue]:
    return service.list_venues()


@router.get("/courses/{name}", response_model=Course)
def get_course(
    name: str, service: CourseLookupService = Depends(get_lookup_service)
) -> Course:
    return _course_or_404(service, name)


@router.get("/courses/{name}/bounds", response_model=Bounds)
def get_bounds(
    name: str, service: CourseLookupService = Depends(get_lookup_service)
) -> Bounds:
    """Map extent of the course; courses with no mapped holes get the default area."""

    _course_or_404(service, name)
    return service.get_bounds(name) or DEFAULT_BOUNDS


@router.get("/courses/{name}/holes", response_model=list[HoleLayout])
def list_holes(
    name: str,
    tee_set: Optional[str] = Query(default=None, alias="teeSet"),
    service: CourseLookupService = Depends(get_lookup_service),
) -> list[HoleLayout]:
    _course_or_404(service, name)
    return service.get_holes_for_course(name, tee_set)


@router.get("/courses/{name}/tee-sets", response_model=TeeSetsOut)
def list_tee_sets(
    name: str, service: CourseLookupService = Depends(get_lookup_service)
) -> TeeSetsOut:
    """Selectable tee names plus whatever scorecard ratings the course has."""

    course = _course_or_404(service, name)
    ratings = [
        service.get_tee_set_info(name, index) for index in range(len(course.tee_sets))
    ]
    return TeeSetsOut(
        names=service.get_tee_set_names(name),
        tee_sets=[tee_set for tee_set in ratings if tee_set is not None],
    )


@router.get("/courses/{name}/holes/{number}", response_model=HoleOut)
def get_hole(
    name: str,
    number: int,
    tee_set: Optional[str] = Query(default=None, alias="teeSet"),
    service: CourseLookupService = Depends(get_lookup_service),
) -> HoleOut:
    course = _course_or_404(service, name)
    resolved = service.resolve_tee_green(name, number, tee_set)
    info = service.resolve_hole_info(name, number, tee_set)
    if resolved is None or info is None:
        raise HTTPException(status_code=404, detail="hole_not_found")
    return HoleOut(
        number=number,
        tee=resolved.tee,
        green=resolved.green,
        par=info.par,
        yardage=info.yardage,
        stroke_index=info.stroke_index,
        customized=service.edits.has_override(course.name, number),
    )


@router.get("/courses/{name}/holes/{number}/features", response_model=HoleFeaturesForAI)
def get_hole_features(
    name: str,
    number: int,
    in_play: bool = Query(default=False, alias="inPlay"),
    service: CourseLookupService = Depends(get_lookup_service),
) -> HoleFeaturesForAI:
    _course_or_404(service, name)
    if in_play:
        features = service.get_in_play_features(name, number)
    else:
        features = service.get_hole_features_for_ai(name, number)
    if features is None:
        raise HTTPException(status_code=404, detail="hole_not_found")
    return features


@router.get("/courses/{name}/holes/{number}/trees", response_model=list[TreeObstacle])
def get_hole_trees(
    name: str,
    number: int,
    service: CourseLookupService = Depends(get_lookup_service),
) -> list[TreeObstacle]:
    course = _course_or_404(service, name)
    if course.hole(number) is None:
        raise HTTPException(status_code=404, detail="hole_not_found")
    return service.get_tree_obstacles(name, number)


@router.post("/courses/{name}/holes/{number}/lie", response_model=LieOut)
def classify_lie(
    name: str,
    number: int,
    payload: LieRequest,
    service: CourseLookupService = Depends(get_lookup_service),
) -> LieOut:
    _course_or_404(service, name)
    lie = service.classify_lie_at(name, number, GeoPoint(lat=payload.lat, lon=payload.lon))
    if lie is None:
        raise HTTPException(status_code=404, detail="hole_not_found")
    LIE_CLASSIFICATIONS.labels(lie=lie).inc()
    return LieOut(lie=lie)


@router.get("/courses/{name}/corridors", response_model=list[CorridorOut])
def list_corridors(
    name: str,
    tee_set: Optional[str] = Query(default=None, alias="teeSet"),
    service: CourseLookupService = Depends(get_lookup_service),
) -> list[CorridorOut]:
    _course_or_404(service, name)
    half_width = get_settings().corridor_half_width_deg
    return [
        CorridorOut(
            number=hole.number,
            polygon=corridor_polygon(hole.tee, hole.green, half_width),
        )
        for hole in service.get_holes_for_course(name, tee_set)
    ]


@router.get("/courses/{name}/boundary/labels", response_model=list[GeoPoint])
def list_boundary_labels(
    name: str, service: CourseLookupService = Depends(get_lookup_service)
) -> list[GeoPoint]:
    course = _course_or_404(service, name)
    settings = get_settings()
    return section_label_positions(
        service.edits.get_course_boundary(course.name),
        service.get_holes_for_course(name),
        separation_deg=settings.label_separation_deg,
        nudge_deg=settings.label_nudge_deg,
        max_passes=settings.label_max_passes,
    )


__all__ = ["router"]
