from __future__ import annotations

import json
import logging
import re
import uuid
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from pydantic import ValidationError

from ..config import get_settings
from ..metrics import COURSE_EDITS
from .edit_models import (
    CourseEdits,
    CoursePreset,
    HazardCircle,
    HazardPolygon,
    HazardStake,
    HazardType,
    HoleOverride,
    OBSide,
    PinPosition,
    TreePatch,
    TreeShape,
)
from .schemas import GeoPoint, TeeGreen

_LOG = logging.getLogger(__name__)

HAZARD_RADIUS_RANGE_M = (1.0, 50.0)
TREE_RADIUS_RANGE_M = (2.0, 20.0)
DEFAULT_TREE_RADIUS_M = 5.0


def _clamp(value: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return max(low, min(high, value))


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def _ring(points: Sequence[GeoPoint]) -> List[GeoPoint]:
    return [GeoPoint(lat=p.lat, lon=p.lon) for p in points]


class CourseEditStore:
    """Editor overrides for every course, keyed by course name.

    Reads hand out deep copies. When ``base_dir`` is set, each course is
    persisted to its own JSON file and loaded lazily on first access.
    """

    def __init__(self, base_dir: str | Path | None = None) -> None:
        self._base_dir = Path(base_dir).expanduser().resolve() if base_dir else None
        self._edits: Dict[str, CourseEdits] = {}
        self._revisions: Dict[str, int] = {}

    # -- persistence -------------------------------------------------------

    def _course_path(self, course_name: str) -> Optional[Path]:
        if self._base_dir is None:
            return None
        safe = re.sub(r"\s+", "_", course_name).replace("/", "_")
        return self._base_dir / f"{safe}.json"

    def _read_edits(self, course_name: str) -> CourseEdits:
        path = self._course_path(course_name)
        if path is None or not path.exists():
            return CourseEdits()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return CourseEdits.model_validate(data)
        except (OSError, ValueError, ValidationError):
            _LOG.warning("ignoring unreadable course edits at %s", path, exc_info=True)
            return CourseEdits()

    def _write_edits(self, course_name: str, edits: CourseEdits) -> None:
        path = self._course_path(course_name)
        if path is None:
            return
        payload = edits.model_dump(mode="json", by_alias=True)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        except OSError:
            _LOG.warning("failed to persist course edits for %s", course_name, exc_info=True)

    def _edits_for(self, course_name: str) -> CourseEdits:
        edits = self._edits.get(course_name)
        if edits is None:
            edits = self._read_edits(course_name)
            self._edits[course_name] = edits
        return edits

    def _commit(self, course_name: str, edits: CourseEdits) -> None:
        self._edits[course_name] = edits
        self._revisions[course_name] = self._revisions.get(course_name, 0) + 1
        COURSE_EDITS.labels(course=course_name).inc()
        self._write_edits(course_name, edits)

    def revision(self, course_name: str) -> int:
        """Counter bumped on every write to ``course_name``."""

        return self._revisions.get(course_name, 0)

    def load(self, course_name: str) -> CourseEdits:
        return self._edits_for(course_name).model_copy(deep=True)

    # -- whole-hole overrides ----------------------------------------------

    def get_raw_hole_override(
        self, course_name: str, hole_number: int
    ) -> Optional[HoleOverride]:
        override = self._edits_for(course_name).overrides.get(hole_number)
        return override.model_copy(deep=True) if override else None

    def get_hole_override(
        self, course_name: str, hole_number: int
    ) -> Optional[HoleOverride]:
        """Hole override, only when the editor has placed both tee and green."""

        override = self.get_raw_hole_override(course_name, hole_number)
        if override is None or not override.has_tee_green:
            return None
        return override

    def update_hole_override(
        self,
        course_name: str,
        hole_number: int,
        mutate: Callable[[HoleOverride], None],
    ) -> HoleOverride:
        edits = self.load(course_name)
        override = edits.overrides.get(hole_number) or HoleOverride()
        mutate(override)
        edits.overrides[hole_number] = override
        self._commit(course_name, edits)
        return override.model_copy(deep=True)

    def has_override(self, course_name: str, hole_number: int) -> bool:
        return hole_number in self._edits_for(course_name).overrides

    def customized_holes(self, course_name: str) -> List[int]:
        return sorted(self._edits_for(course_name).overrides.keys())

    def clear_hole_override(self, course_name: str, hole_number: int) -> bool:
        """Drop every edit on a hole so it resolves from static data again."""

        edits = self.load(course_name)
        if edits.overrides.pop(hole_number, None) is None:
            return False
        self._commit(course_name, edits)
        return True

    # -- tee / green ---------------------------------------------------------

    def get_tee_green_override(
        self, course_name: str, hole_number: int
    ) -> Optional[TeeGreen]:
        override = self._edits_for(course_name).overrides.get(hole_number)
        if override is None or override.tee is None or override.green is None:
            return None
        return TeeGreen(tee=override.tee, green=override.green)

    def set_tee_green_override(
        self, course_name: str, hole_number: int, tee: GeoPoint, green: GeoPoint
    ) -> None:
        def _apply(override: HoleOverride) -> None:
            override.tee = tee
            override.green = green

        self.update_hole_override(course_name, hole_number, _apply)

    def clear_tee_green_override(self, course_name: str, hole_number: int) -> bool:
        """Forget the editor tee and green, keeping the hole's other edits.

        The hole entry is dropped once nothing else is left on it.
        """

        edits = self.load(course_name)
        override = edits.overrides.get(hole_number)
        if override is None or (override.tee is None and override.green is None):
            return False
        override.tee = None
        override.green = None
        if override.is_empty:
            del edits.overrides[hole_number]
        self._commit(course_name, edits)
        return True

    # -- hazards ---------------------------------------------------------------

    def add_hazard_circle(
        self,
        course_name: str,
        hole_number: int,
        hazard_type: HazardType,
        center: GeoPoint,
        radius_m: float,
        *,
        stake: HazardStake | None = None,
        ob_side: OBSide | None = None,
    ) -> str:
        hazard = HazardCircle(
            id=_new_id("hazard"),
            type=hazard_type,
            center=center,
            radius_m=_clamp(radius_m, HAZARD_RADIUS_RANGE_M),
            stake=stake,
            ob_side=ob_side if hazard_type == "out_of_bounds" else None,
        )
        self.update_hole_override(
            course_name, hole_number, lambda o: o.hazards.append(hazard)
        )
        return hazard.id

    def add_hazard_polygon(
        self,
        course_name: str,
        hole_number: int,
        hazard_type: HazardType,
        vertices: Sequence[GeoPoint],
        *,
        stake: HazardStake | None = None,
        ob_side: OBSide | None = None,
    ) -> Optional[str]:
        if len(vertices) < 3:
            return None
        hazard = HazardPolygon(
            id=_new_id("hazard"),
            type=hazard_type,
            vertices=_ring(vertices),
            stake=stake if hazard_type in ("water", "out_of_bounds") else None,
            ob_side=ob_side if hazard_type == "out_of_bounds" else None,
        )
        self.update_hole_override(
            course_name, hole_number, lambda o: o.hazards.append(hazard)
        )
        return hazard.id

    def remove_hazard(self, course_name: str, hole_number: int, hazard_id: str) -> None:
        if not self.has_override(course_name, hole_number):
            return

        def _apply(override: HoleOverride) -> None:
            override.hazards = [h for h in override.hazards if h.id != hazard_id]

        self.update_hole_override(course_name, hole_number, _apply)

    def update_hazard_radius(
        self, course_name: str, hole_number: int, hazard_id: str, radius_m: float
    ) -> None:
        if not self.has_override(course_name, hole_number):
            return
        radius = _clamp(radius_m, HAZARD_RADIUS_RANGE_M)

        def _apply(override: HoleOverride) -> None:
            for hazard in override.hazards:
                if hazard.id == hazard_id and isinstance(hazard, HazardCircle):
                    hazard.radius_m = radius

        self.update_hole_override(course_name, hole_number, _apply)

    def move_hazard(
        self, course_name: str, hole_number: int, hazard_id: str, center: GeoPoint
    ) -> None:
        if not self.has_override(course_name, hole_number):
            return

        def _apply(override: HoleOverride) -> None:
            for hazard in override.hazards:
                if hazard.id == hazard_id and isinstance(hazard, HazardCircle):
                    hazard.center = center

        self.update_hole_override(course_name, hole_number, _apply)

    # -- trees -----------------------------------------------------------------

    def add_tree(
        self,
        course_name: str,
        hole_number: int,
        center: GeoPoint,
        radius_m: float = DEFAULT_TREE_RADIUS_M,
        height_m: float | None = None,
    ) -> str:
        tree = TreeShape(
            id=_new_id("tree"),
            center=center,
            radius_m=_clamp(radius_m, TREE_RADIUS_RANGE_M),
            height_m=height_m,
        )
        self.update_hole_override(course_name, hole_number, lambda o: o.trees.append(tree))
        return tree.id

    def update_tree_radius(
        self, course_name: str, hole_number: int, tree_id: str, radius_m: float
    ) -> None:
        if not self.has_override(course_name, hole_number):
            return
        radius = _clamp(radius_m, TREE_RADIUS_RANGE_M)

        def _apply(override: HoleOverride) -> None:
            for tree in override.trees:
                if tree.id == tree_id:
                    tree.radius_m = radius

        self.update_hole_override(course_name, hole_number, _apply)

    def move_tree(
        self, course_name: str, hole_number: int, tree_id: str, center: GeoPoint
    ) -> None:
        if not self.has_override(course_name, hole_number):
            return

        def _apply(override: HoleOverride) -> None:
            for tree in override.trees:
                if tree.id == tree_id:
                    tree.center = center

        self.update_hole_override(course_name, hole_number, _apply)

    def remove_tree(self, course_name: str, hole_number: int, tree_id: str) -> None:
        if not self.has_override(course_name, hole_number):
            return

        def _apply(override: HoleOverride) -> None:
            override.trees = [t for t in override.trees if t.id != tree_id]

        self.update_hole_override(course_name, hole_number, _apply)

    def add_tree_patch(
        self, course_name: str, hole_number: int, vertices: Sequence[GeoPoint]
    ) -> Optional[str]:
        if len(vertices) < 3:
            return None
        patch = TreePatch(id=_new_id("treepatch"), vertices=_ring(vertices))
        self.update_hole_override(
            course_name, hole_number, lambda o: o.tree_patches.append(patch)
        )
        return patch.id

    def remove_tree_patch(self, course_name: str, hole_number: int, patch_id: str) -> None:
        if not self.has_override(course_name, hole_number):
            return

        def _apply(override: HoleOverride) -> None:
            override.tree_patches = [p for p in override.tree_patches if p.id != patch_id]

        self.update_hole_override(course_name, hole_number, _apply)

    # -- pins ------------------------------------------------------------------

    def add_pin(self, course_name: str, hole_number: int, position: GeoPoint) -> str:
        pin = PinPosition(id=_new_id("pin"), position=position)
        self.update_hole_override(course_name, hole_number, lambda o: o.pins.append(pin))
        return pin.id

    def remove_pin(self, course_name: str, hole_number: int, pin_id: str) -> None:
        if not self.has_override(course_name, hole_number):
            return

        def _apply(override: HoleOverride) -> None:
            override.pins = [p for p in override.pins if p.id != pin_id]

        self.update_hole_override(course_name, hole_number, _apply)

    # -- fairways and outlines -------------------------------------------------

    def add_fairway(
        self, course_name: str, hole_number: int, path: Sequence[GeoPoint]
    ) -> bool:
        if len(path) < 3:
            return False
        ring = _ring(path)
        self.update_hole_override(course_name, hole_number, lambda o: o.fairways.append(ring))
        return True

    def update_fairway(
        self,
        course_name: str,
        hole_number: int,
        index: int,
        path: Sequence[GeoPoint],
    ) -> bool:
        override = self.get_raw_hole_override(course_name, hole_number)
        if len(path) < 3 or override is None or not 0 <= index < len(override.fairways):
            return False
        ring = _ring(path)

        def _apply(o: HoleOverride) -> None:
            o.fairways[index] = ring

        self.update_hole_override(course_name, hole_number, _apply)
        return True

    def remove_fairway(self, course_name: str, hole_number: int, index: int) -> None:
        override = self.get_raw_hole_override(course_name, hole_number)
        if override is None or not 0 <= index < len(override.fairways):
            return
        self.update_hole_override(course_name, hole_number, lambda o: o.fairways.pop(index))

    def set_green_boundary(
        self, course_name: str, hole_number: int, path: Sequence[GeoPoint]
    ) -> None:
        ring = _ring(path) or None

        def _apply(override: HoleOverride) -> None:
            override.green_boundary = ring

        self.update_hole_override(course_name, hole_number, _apply)

    def set_hole_boundary(
        self, course_name: str, hole_number: int, path: Sequence[GeoPoint]
    ) -> None:
        ring = _ring(path) or None

        def _apply(override: HoleOverride) -> None:
            override.boundary = ring

        self.update_hole_override(course_name, hole_number, _apply)

    def clear_mapped_features(self, course_name: str, hole_number: int) -> None:
        """Drop mapped features ahead of a fresh mapping pass.

        Tee, green, pins and the hole boundary are kept.
        """

        def _apply(override: HoleOverride) -> None:
            override.hazards = []
            override.trees = []
            override.tree_patches = []
            override.fairways = []
            override.green_boundary = None

        self.update_hole_override(course_name, hole_number, _apply)

    # -- course boundary -------------------------------------------------------

    def get_course_boundary(self, course_name: str) -> List[List[GeoPoint]]:
        return [list(section) for section in self._edits_for(course_name).course_boundary]

    def add_course_boundary_section(
        self, course_name: str, polygon: Sequence[GeoPoint]
    ) -> bool:
        if len(polygon) < 3:
            return False
        edits = self.load(course_name)
        edits.course_boundary.append(_ring(polygon))
        self._commit(course_name, edits)
        return True

    def remove_course_boundary_section(self, course_name: str, index: int) -> bool:
        edits = self.load(course_name)
        if not 0 <= index < len(edits.course_boundary):
            return False
        edits.course_boundary.pop(index)
        self._commit(course_name, edits)
        return True

    def set_course_boundary(
        self, course_name: str, sections: Sequence[Sequence[GeoPoint]]
    ) -> None:
        edits = self.load(course_name)
        edits.course_boundary = [_ring(section) for section in sections]
        self._commit(course_name, edits)

    # -- presets ---------------------------------------------------------------

    def list_presets(self, course_name: str) -> List[CoursePreset]:
        return self.load(course_name).presets

    def save_preset(self, course_name: str, name: str) -> CoursePreset:
        """Snapshot every hole that has both tee and green placed."""

        edits = self.load(course_name)
        preset = CoursePreset(
            id=_new_id("preset"),
            name=name,
            created_at=datetime.now(timezone.utc),
            holes={
                number: override.model_copy(deep=True)
                for number, override in edits.overrides.items()
                if override.has_tee_green
            },
        )
        edits.presets.append(preset)
        self._commit(course_name, edits)
        return preset.model_copy(deep=True)

    def load_preset(self, course_name: str, preset_id: str) -> bool:
        edits = self.load(course_name)
        preset = next((p for p in edits.presets if p.id == preset_id), None)
        if preset is None:
            return False
        edits.overrides = {
            number: override.model_copy(deep=True)
            for number, override in preset.holes.items()
        }
        self._commit(course_name, edits)
        return True

    def delete_preset(self, course_name: str, preset_id: str) -> None:
        edits = self.load(course_name)
        remaining = [p for p in edits.presets if p.id != preset_id]
        if len(remaining) == len(edits.presets):
            return
        edits.presets = remaining
        self._commit(course_name, edits)


@lru_cache(maxsize=1)
def get_course_edit_store() -> CourseEditStore:
    return CourseEditStore(get_settings().edits_path)


__all__ = [
    "CourseEditStore",
    "DEFAULT_TREE_RADIUS_M",
    "HAZARD_RADIUS_RANGE_M",
    "TREE_RADIUS_RANGE_M",
    "get_course_edit_store",
]
