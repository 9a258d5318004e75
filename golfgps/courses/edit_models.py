from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .schemas import GeoPoint, Polygon

HazardType = Literal["water", "bunker", "out_of_bounds"]
HazardStake = Literal["red", "yellow"]
OBSide = Literal["left", "right"]

LEGACY_HAZARD_RADIUS_M = 10.0


class HazardCircle(BaseModel):
    id: str
    type: HazardType
    shape: Literal["circle"] = "circle"
    center: GeoPoint
    radius_m: float = Field(alias="radiusM")
    stake: Optional[HazardStake] = None
    ob_side: Optional[OBSide] = Field(default=None, alias="obSide")

    model_config = ConfigDict(populate_by_name=True)


class HazardPolygon(BaseModel):
    id: str
    type: HazardType
    shape: Literal["polygon"] = "polygon"
    vertices: Polygon
    stake: Optional[HazardStake] = None
    ob_side: Optional[OBSide] = Field(default=None, alias="obSide")

    model_config = ConfigDict(populate_by_name=True)


Hazard = Annotated[Union[HazardCircle, HazardPolygon], Field(discriminator="shape")]


def _normalize_legacy_hazard(raw: Any) -> Any:
    """Hazards saved before shapes existed carry no ``shape`` key."""

    if not isinstance(raw, dict) or raw.get("shape") in ("circle", "polygon"):
        return raw
    data = dict(raw)
    vertices = data.get("vertices")
    if isinstance(vertices, list) and len(vertices) >= 3:
        data["shape"] = "polygon"
        data.pop("center", None)
        data.pop("radiusM", None)
        data.pop("radius_m", None)
        return data
    data["shape"] = "circle"
    data.pop("vertices", None)
    data.setdefault("center", {"lat": 0.0, "lon": 0.0})
    if "radius_m" not in data and "radiusM" not in data:
        data["radiusM"] = LEGACY_HAZARD_RADIUS_M
    return data


class TreeShape(BaseModel):
    id: str
    center: GeoPoint
    radius_m: float = Field(alias="radiusM")
    height_m: Optional[float] = Field(default=None, alias="heightM")

    model_config = ConfigDict(populate_by_name=True)


class TreePatch(BaseModel):
    """Dense cluster of trees drawn as a polygon."""

    id: str
    vertices: Polygon


class PinPosition(BaseModel):
    id: str
    position: GeoPoint


class HoleOverride(BaseModel):
    """Editor data for one hole, layered over the static catalog."""

    tee: Optional[GeoPoint] = None
    green: Optional[GeoPoint] = None
    pins: List[PinPosition] = Field(default_factory=list)
    hazards: List[Hazard] = Field(default_factory=list)
    trees: List[TreeShape] = Field(default_factory=list)
    tree_patches: List[TreePatch] = Field(default_factory=list, alias="treePatches")
    fairways: List[Polygon] = Field(default_factory=list)
    boundary: Optional[Polygon] = None
    green_boundary: Optional[Polygon] = Field(default=None, alias="greenBoundary")

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _migrate_legacy(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        legacy_fairway = data.pop("fairway", None)
        if legacy_fairway and not data.get("fairways"):
            data["fairways"] = [legacy_fairway]
        hazards = data.get("hazards")
        if isinstance(hazards, list):
            data["hazards"] = [_normalize_legacy_hazard(h) for h in hazards]
        return data

    @property
    def has_tee_green(self) -> bool:
        return self.tee is not None and self.green is not None

    @property
    def has_mapped_features(self) -> bool:
        return bool(
            self.hazards
            or self.trees
            or self.tree_patches
            or self.fairways
            or self.green_boundary
        )

    @property
    def is_empty(self) -> bool:
        return not (
            self.tee is not None
            or self.green is not None
            or self.pins
            or self.boundary is not None
            or self.has_mapped_features
        )


class CoursePreset(BaseModel):
    id: str
    name: str
    created_at: datetime = Field(alias="createdAt")
    holes: Dict[int, HoleOverride] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)


class CourseEdits(BaseModel):
    """Everything the editor stores for one course."""

    overrides: Dict[int, HoleOverride] = Field(default_factory=dict)
    presets: List[CoursePreset] = Field(default_factory=list)
    course_boundary: List[Polygon] = Field(default_factory=list, alias="courseBoundary")

    model_config = ConfigDict(populate_by_name=True)


__all__ = [
    "CourseEdits",
    "CoursePreset",
    "Hazard",
    "HazardCircle",
    "HazardPolygon",
    "HazardStake",
    "HazardType",
    "HoleOverride",
    "OBSide",
    "PinPosition",
    "TreePatch",
    "TreeShape",
]
