"""Lie classification and the metric feature view used by shot simulation.

Lies are decided by a fixed precedence, first match wins::

    water > green (own or another hole's) > bunker
          > editor fairway polygon > fairway circle > rough

Water and greens win because static data often draws them overlapping the
approach circles. Hand-drawn fairway polygons are checked before the coarser
fairway circles.
"""

from __future__ import annotations

from typing import Iterable, List, Literal, Optional, Sequence, Union

from .edit_models import HazardCircle, HoleOverride
from .geometry import haversine_m, is_in_circle, point_in_polygon
from .schemas import (
    CircleFeature,
    CircleRegion,
    FeatureType,
    GeoPoint,
    Hole,
    HoleFeaturesForAI,
    HoleRegions,
    LieType,
    Polygon,
    Region,
    TreeObstacle,
)
from .units import yards_to_meters

BoundedLie = Union[LieType, Literal["ob"]]

DEFAULT_GREEN_RADIUS_YD = 10.0
DEFAULT_TREE_HEIGHT_M = 10.0
DEFAULT_EDITOR_TREE_RADIUS_M = 5.0
EDITOR_GREEN_RADIUS_M = 18.0
TREE_PATCH_HEIGHT_M = 12.0

POLYGON_CIRCLE_PADDING_M = 5.0
POLYGON_CIRCLE_MIN_RADIUS_M = 15.0
EMPTY_POLYGON_RADIUS_M = 20.0


def circle_from_polygon(points: Sequence[GeoPoint]) -> CircleFeature:
    """Enclosing circle approximation of a drawn polygon."""

    if not points:
        return CircleFeature(center=GeoPoint(lat=0.0, lon=0.0), radius_m=EMPTY_POLYGON_RADIUS_M)
    n = len(points)
    center = GeoPoint(
        lat=sum(p.lat for p in points) / n,
        lon=sum(p.lon for p in points) / n,
    )
    furthest = max(haversine_m(center, p) for p in points)
    radius = max(POLYGON_CIRCLE_MIN_RADIUS_M, furthest + POLYGON_CIRCLE_PADDING_M)
    return CircleFeature(center=center, radius_m=radius)


def _circles(hole: Hole, feature_type: FeatureType) -> List[CircleFeature]:
    circles: List[CircleFeature] = []
    for feature in hole.features_of(feature_type):
        radius = feature.radius_meters()
        if radius is None:
            continue
        circles.append(CircleFeature(center=feature.position, radius_m=radius))
    return circles


def static_tree_obstacles(hole: Hole) -> List[TreeObstacle]:
    obstacles: List[TreeObstacle] = []
    for feature in hole.features_of("tree"):
        radius = feature.radius_meters()
        if radius is None:
            continue
        obstacles.append(
            TreeObstacle(
                position=feature.position,
                radius_m=radius,
                height_m=feature.height_m if feature.height_m is not None else DEFAULT_TREE_HEIGHT_M,
            )
        )
    return obstacles


def hole_features_from_static(hole: Hole) -> HoleFeaturesForAI:
    """Metric view of a catalog hole; scorecard radii are converted from yards."""

    green_feature = next(iter(hole.features_of("green")), None)
    if green_feature is not None:
        radius = green_feature.radius_meters()
        green = CircleFeature(
            center=green_feature.position,
            radius_m=radius if radius is not None else yards_to_meters(DEFAULT_GREEN_RADIUS_YD),
        )
    else:
        green = CircleFeature(
            center=hole.green, radius_m=yards_to_meters(DEFAULT_GREEN_RADIUS_YD)
        )
    return HoleFeaturesForAI(
        fairways=_circles(hole, "fairway"),
        bunkers=_circles(hole, "bunker"),
        green=green,
        water=_circles(hole, "water"),
        tree_obstacles=static_tree_obstacles(hole),
    )


def _hazard_circle(hazard) -> CircleFeature:
    if isinstance(hazard, HazardCircle):
        return CircleFeature(center=hazard.center, radius_m=hazard.radius_m)
    return circle_from_polygon(hazard.vertices)


def editor_tree_obstacles(override: HoleOverride) -> List[TreeObstacle]:
    obstacles = [
        TreeObstacle(
            position=tree.center,
            radius_m=tree.radius_m or DEFAULT_EDITOR_TREE_RADIUS_M,
            height_m=tree.height_m if tree.height_m is not None else DEFAULT_TREE_HEIGHT_M,
        )
        for tree in override.trees
    ]
    for patch in override.tree_patches:
        circle = circle_from_polygon(patch.vertices)
        obstacles.append(
            TreeObstacle(
                position=circle.center,
                radius_m=circle.radius_m,
                height_m=TREE_PATCH_HEIGHT_M,
                vertices=list(patch.vertices),
            )
        )
    return obstacles


def hole_features_from_editor(override: HoleOverride, green: GeoPoint) -> HoleFeaturesForAI:
    """Feature view of editor-mapped data.

    ``green`` is the resolved green position; the override may only carry
    mapped features without its own tee/green.
    """

    fairway_polygons: Optional[List[Polygon]] = (
        [list(path) for path in override.fairways] if override.fairways else None
    )
    if override.green_boundary and len(override.green_boundary) >= 3:
        green_circle = circle_from_polygon(override.green_boundary)
    else:
        green_circle = CircleFeature(
            center=override.green or green, radius_m=EDITOR_GREEN_RADIUS_M
        )
    return HoleFeaturesForAI(
        fairways=[circle_from_polygon(path) for path in override.fairways],
        fairway_polygons=fairway_polygons,
        bunkers=[_hazard_circle(h) for h in override.hazards if h.type == "bunker"],
        green=green_circle,
        water=[_hazard_circle(h) for h in override.hazards if h.type == "water"],
        tree_obstacles=editor_tree_obstacles(override),
    )


def is_in_bounds(position: GeoPoint, boundary: Sequence[Sequence[GeoPoint]]) -> bool:
    """Inside any boundary section; everything is in bounds when none is drawn."""

    if not boundary:
        return True
    return any(
        len(section) >= 3 and point_in_polygon(position, section) for section in boundary
    )


def in_play_features(
    current: HoleFeaturesForAI,
    others: Iterable[HoleFeaturesForAI],
    boundary: Sequence[Sequence[GeoPoint]],
) -> HoleFeaturesForAI:
    """Merge neighbouring holes' features that sit inside the course boundary.

    Adjacent greens land in ``other_greens`` so a ball on another hole's
    green still reads as green.
    """

    def _inside(circle: CircleFeature) -> bool:
        return is_in_bounds(circle.center, boundary)

    fairways = list(current.fairways)
    bunkers = list(current.bunkers)
    water = list(current.water)
    other_greens = list(current.other_greens)
    trees = list(current.tree_obstacles)
    for features in others:
        fairways.extend(c for c in features.fairways if _inside(c))
        bunkers.extend(c for c in features.bunkers if _inside(c))
        water.extend(c for c in features.water if _inside(c))
        if _inside(features.green):
            other_greens.append(features.green)
        trees.extend(t for t in features.tree_obstacles if is_in_bounds(t.position, boundary))
    return HoleFeaturesForAI(
        fairways=fairways,
        fairway_polygons=current.fairway_polygons,
        bunkers=bunkers,
        green=current.green,
        other_greens=other_greens,
        water=water,
        tree_obstacles=trees,
    )


def _in_any(position: GeoPoint, circles: Iterable[CircleFeature]) -> bool:
    return any(is_in_circle(position, c.center, c.radius_m) for c in circles)


def classify_lie(position: GeoPoint, features: HoleFeaturesForAI) -> LieType:
    if _in_any(position, features.water):
        return "water"
    if is_in_circle(position, features.green.center, features.green.radius_m):
        return "green"
    if _in_any(position, features.other_greens):
        return "green"
    if _in_any(position, features.bunkers):
        return "bunker"
    for path in features.fairway_polygons or []:
        if point_in_polygon(position, path):
            return "fairway"
    if _in_any(position, features.fairways):
        return "fairway"
    return "rough"


def classify_lie_with_bounds(
    position: GeoPoint,
    features: HoleFeaturesForAI,
    boundary: Sequence[Sequence[GeoPoint]],
) -> BoundedLie:
    if not is_in_bounds(position, boundary):
        return "ob"
    return classify_lie(position, features)


def _in_region(position: GeoPoint, region: Region) -> bool:
    if isinstance(region, CircleRegion):
        return is_in_circle(position, region.center, region.radius_m)
    return point_in_polygon(position, region.coordinates)


def detect_lie(position: GeoPoint, regions: HoleRegions) -> LieType:
    """Same precedence as :func:`classify_lie` over generic circle/polygon regions."""

    if any(_in_region(position, r) for r in regions.water):
        return "water"
    if _in_region(position, regions.green):
        return "green"
    if any(_in_region(position, r) for r in regions.bunker):
        return "bunker"
    if any(_in_region(position, r) for r in regions.fairway):
        return "fairway"
    return "rough"


__all__ = [
    "BoundedLie",
    "DEFAULT_GREEN_RADIUS_YD",
    "DEFAULT_TREE_HEIGHT_M",
    "EDITOR_GREEN_RADIUS_M",
    "TREE_PATCH_HEIGHT_M",
    "circle_from_polygon",
    "classify_lie",
    "classify_lie_with_bounds",
    "detect_lie",
    "editor_tree_obstacles",
    "hole_features_from_editor",
    "hole_features_from_static",
    "in_play_features",
    "is_in_bounds",
    "static_tree_obstacles",
]
