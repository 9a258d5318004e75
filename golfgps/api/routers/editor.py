from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, ConfigDict, Field

from golfgps.courses.edit_models import HoleOverride
from golfgps.courses.schemas import Course, GeoPoint, TeeGreen
from golfgps.courses.service import CourseLookupService, get_lookup_service
from golfgps.security import require_api_key, require_editor_token

_LOG = logging.getLogger(__name__)

_WRITE_GUARD = [Depends(require_editor_token)]

router = APIRouter(
    prefix="/api/editor",
    tags=["editor"],
    dependencies=[Depends(require_api_key)],
)


class EditorCourseOut(BaseModel):
    name: str
    customized_holes: List[int] = Field(alias="customizedHoles")
    boundary: List[List[GeoPoint]] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class BoundarySectionIn(BaseModel):
    polygon: List[GeoPoint] = Field(min_length=3)


def _course_or_404(service: CourseLookupService, name: str) -> Course:
    course = service.get_course(name)
    if course is None:
        raise HTTPException(status_code=404, detail="course_not_found")
    return course


def _hole_or_404(course: Course, number: int) -> None:
    if course.hole(number) is None:
        raise HTTPException(status_code=404, detail="hole_not_found")


def _summary(service: CourseLookupService, course: Course) -> EditorCourseOut:
    return EditorCourseOut(
        name=course.name,
        customized_holes=service.edits.customized_holes(course.name),
        boundary=service.edits.get_course_boundary(course.name),
    )


@router.get("/courses/{name}", response_model=EditorCourseOut)
def get_editor_course(
    name: str, service: CourseLookupService = Depends(get_lookup_service)
) -> EditorCourseOut:
    course = _course_or_404(service, name)
    return _summary(service, course)


@router.get("/courses/{name}/holes/{number}", response_model=HoleOverride)
def get_editor_hole(
    name: str,
    number: int,
    service: CourseLookupService = Depends(get_lookup_service),
) -> HoleOverride:
    """Editor data for a hole, with tee and green resolved from the catalog when unset."""

    course = _course_or_404(service, name)
    _hole_or_404(course, number)
    data = service.get_effective_hole_data(course.name, number)
    if data is None:
        raise HTTPException(status_code=404, detail="hole_not_found")
    return data


@router.put(
    "/courses/{name}/holes/{number}/tee-green",
    response_model=TeeGreen,
    dependencies=_WRITE_GUARD,
)
def put_tee_green(
    name: str,
    number: int,
    payload: TeeGreen,
    service: CourseLookupService = Depends(get_lookup_service),
) -> TeeGreen:
    course = _course_or_404(service, name)
    _hole_or_404(course, number)
    service.edits.set_tee_green_override(course.name, number, payload.tee, payload.green)
    _LOG.info("tee/green override saved for %s hole %s", course.name, number)
    return payload


@router.delete(
    "/courses/{name}/holes/{number}/tee-green",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=_WRITE_GUARD,
)
def delete_tee_green(
    name: str,
    number: int,
    service: CourseLookupService = Depends(get_lookup_service),
) -> Response:
    course = _course_or_404(service, name)
    _hole_or_404(course, number)
    service.edits.clear_tee_green_override(course.name, number)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/courses/{name}/holes/{number}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=_WRITE_GUARD,
)
def discard_hole_edits(
    name: str,
    number: int,
    service: CourseLookupService = Depends(get_lookup_service),
) -> Response:
    """Throw away every edit on the hole so it resolves from the catalog again."""

    course = _course_or_404(service, name)
    _hole_or_404(course, number)
    if service.edits.clear_hole_override(course.name, number):
        _LOG.info("discarded edits for %s hole %s", course.name, number)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/courses/{name}/boundary", response_model=List[List[GeoPoint]])
def get_boundary(
    name: str, service: CourseLookupService = Depends(get_lookup_service)
) -> List[List[GeoPoint]]:
    course = _course_or_404(service, name)
    return service.edits.get_course_boundary(course.name)


@router.post(
    "/courses/{name}/boundary",
    response_model=EditorCourseOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=_WRITE_GUARD,
)
def add_boundary_section(
    name: str,
    payload: BoundarySectionIn,
    service: CourseLookupService = Depends(get_lookup_service),
) -> EditorCourseOut:
    course = _course_or_404(service, name)
    service.edits.add_course_boundary_section(course.name, payload.polygon)
    return _summary(service, course)


@router.delete(
    "/courses/{name}/boundary/{index}",
    response_model=EditorCourseOut,
    dependencies=_WRITE_GUARD,
)
def delete_boundary_section(
    name: str,
    index: int,
    service: CourseLookupService = Depends(get_lookup_service),
) -> EditorCourseOut:
    course = _course_or_404(service, name)
    if not service.edits.remove_course_boundary_section(course.name, index):
        raise HTTPException(status_code=404, detail="boundary_section_not_found")
    return _summary(service, course)


__all__ = ["router"]
