from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .units import yards_to_meters

FeatureType = Literal["tee", "fairway", "green", "bunker", "water", "rough", "tree"]
LieType = Literal["green", "water", "bunker", "fairway", "rough"]

DEFAULT_TEE_NAME = "Default"


class GeoPoint(BaseModel):
    """WGS84 position in decimal degrees."""

    lat: float
    lon: float

    model_config = ConfigDict(frozen=True)


Polygon = List[GeoPoint]


class TeeMarker(BaseModel):
    """One named tee box on a hole, e.g. Blue or Red."""

    name: str
    position: GeoPoint
    yardage: Optional[int] = None


class TeeSet(BaseModel):
    """Scorecard summary for a named tee set."""

    name: str
    total_yardage: int = Field(alias="totalYardage")
    course_rating: float = Field(alias="courseRating")
    slope_rating: int = Field(alias="slopeRating")

    model_config = ConfigDict(populate_by_name=True)


class HoleFeature(BaseModel):
    """Scorecard landmark or hazard.

    Raw scorecard radii are in yards (``radius_yd``). Trees are surveyed in
    metres and use ``radius_m`` instead.
    """

    type: FeatureType
    position: GeoPoint
    name: Optional[str] = None
    radius_yd: Optional[float] = Field(default=None, alias="radiusYd")
    radius_m: Optional[float] = Field(default=None, alias="radiusM")
    height_m: Optional[float] = Field(default=None, alias="heightM")

    model_config = ConfigDict(populate_by_name=True)

    def radius_meters(self) -> Optional[float]:
        if self.radius_m is not None:
            return self.radius_m
        if self.radius_yd is not None:
            return yards_to_meters(self.radius_yd)
        return None


class Hole(BaseModel):
    """A single hole.

    Every hole exposes at least one tee marker: holes declared with only a
    default ``tee`` get a synthesised ``Default`` marker, so resolution never
    needs to special-case single-tee courses.
    """

    number: int
    par: int
    green: GeoPoint
    tee: Optional[GeoPoint] = None
    tees: List[TeeMarker] = Field(default_factory=list)
    stroke_index: Optional[int] = Field(default=None, alias="strokeIndex")
    yardage: Optional[int] = None
    features: List[HoleFeature] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="after")
    def _ensure_tee_markers(self) -> "Hole":
        if self.tee is None:
            if not self.tees:
                raise ValueError(f"hole {self.number} has no tee position")
            self.tee = self.tees[0].position
        if not self.tees:
            self.tees = [
                TeeMarker(name=DEFAULT_TEE_NAME, position=self.tee, yardage=self.yardage)
            ]
        return self

    def tee_marker(self, name: Optional[str] = None) -> Optional[TeeMarker]:
        if name is None:
            return self.tees[0]
        return next((marker for marker in self.tees if marker.name == name), None)

    def features_of(self, feature_type: FeatureType) -> List[HoleFeature]:
        return [feature for feature in self.features if feature.type == feature_type]


class Course(BaseModel):
    name: str
    location: str
    holes: List[Hole] = Field(default_factory=list)
    tee_sets: List[TeeSet] = Field(default_factory=list, alias="teeSets")
    mvp_complete: bool = Field(default=False, alias="mvpComplete")

    model_config = ConfigDict(populate_by_name=True)

    def hole(self, number: int) -> Optional[Hole]:
        return next((hole for hole in self.holes if hole.number == number), None)

    @property
    def total_par(self) -> int:
        return sum(hole.par for hole in self.holes)


class Venue(BaseModel):
    """A club that hosts one or more courses."""

    name: str
    location: str
    courses: List[Course] = Field(default_factory=list)


class TeeGreen(BaseModel):
    tee: GeoPoint
    green: GeoPoint


class HoleInfo(BaseModel):
    par: int
    yardage: Optional[int] = None
    stroke_index: Optional[int] = Field(default=None, alias="strokeIndex")

    model_config = ConfigDict(populate_by_name=True)


class HoleLayout(BaseModel):
    number: int
    tee: GeoPoint
    green: GeoPoint

    model_config = ConfigDict(frozen=True)


class Bounds(BaseModel):
    north: float
    south: float
    east: float
    west: float

    model_config = ConfigDict(frozen=True)


class CircleFeature(BaseModel):
    center: GeoPoint
    radius_m: float = Field(alias="radiusM")

    model_config = ConfigDict(populate_by_name=True)


class TreeObstacle(BaseModel):
    """Tree or tree patch used by shot physics for collision checks."""

    position: GeoPoint
    radius_m: float = Field(alias="radiusM")
    height_m: float = Field(alias="heightM")
    vertices: Optional[List[GeoPoint]] = None

    model_config = ConfigDict(populate_by_name=True)


class HoleFeaturesForAI(BaseModel):
    """Metric feature view of one hole used for lie detection and targeting."""

    fairways: List[CircleFeature] = Field(default_factory=list)
    fairway_polygons: Optional[List[Polygon]] = Field(
        default=None, alias="fairwayPolygons"
    )
    bunkers: List[CircleFeature] = Field(default_factory=list)
    green: CircleFeature
    other_greens: List[CircleFeature] = Field(default_factory=list, alias="otherGreens")
    water: List[CircleFeature] = Field(default_factory=list)
    tree_obstacles: List[TreeObstacle] = Field(
        default_factory=list, alias="treeObstacles"
    )

    model_config = ConfigDict(populate_by_name=True)


class CircleRegion(BaseModel):
    type: Literal["circle"] = "circle"
    center: GeoPoint
    radius_m: float = Field(alias="radiusM")

    model_config = ConfigDict(populate_by_name=True)


class PolygonRegion(BaseModel):
    type: Literal["polygon"] = "polygon"
    coordinates: List[GeoPoint]


Region = Union[CircleRegion, PolygonRegion]


class HoleRegions(BaseModel):
    """Generic circle/polygon regions of a hole, grouped by terrain."""

    water: List[Region] = Field(default_factory=list)
    green: Region
    bunker: List[Region] = Field(default_factory=list)
    fairway: List[Region] = Field(default_factory=list)


__all__ = [
    "Bounds",
    "CircleFeature",
    "CircleRegion",
    "Course",
    "DEFAULT_TEE_NAME",
    "FeatureType",
    "GeoPoint",
    "Hole",
    "HoleFeature",
    "HoleFeaturesForAI",
    "HoleInfo",
    "HoleLayout",
    "HoleRegions",
    "LieType",
    "Polygon",
    "PolygonRegion",
    "Region",
    "TeeGreen",
    "TeeMarker",
    "TeeSet",
    "TreeObstacle",
    "Venue",
]
