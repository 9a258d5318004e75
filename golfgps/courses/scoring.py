from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Optional

from .schemas import Course, Hole


def receives_stroke(stroke_index: Optional[int], handicap: int) -> bool:
    """A hole gets a handicap stroke when its index is within the handicap."""

    return stroke_index is not None and stroke_index <= handicap


def net_score(gross: int, stroke_index: Optional[int], handicap: int) -> int:
    return gross - 1 if receives_stroke(stroke_index, handicap) else gross


def total_par(holes: Iterable[Hole]) -> int:
    return sum(hole.par for hole in holes)


def total_yardage(holes: Iterable[Hole]) -> int:
    return sum(hole.yardage or 0 for hole in holes)


def validate_stroke_indices(course: Course) -> List[str]:
    """Problems with the course's stroke indices; empty when they form 1..N.

    Never raises: bad indices only degrade net scoring, so callers report
    these as warnings.
    """

    problems: List[str] = []
    count = len(course.holes)
    indices = []
    for hole in course.holes:
        if hole.stroke_index is None:
            problems.append(f"{course.name}: hole {hole.number} has no stroke index")
            continue
        if not 1 <= hole.stroke_index <= count:
            problems.append(
                f"{course.name}: hole {hole.number} stroke index {hole.stroke_index} "
                f"outside 1..{count}"
            )
        indices.append(hole.stroke_index)
    for index, seen in sorted(Counter(indices).items()):
        if seen > 1:
            problems.append(f"{course.name}: stroke index {index} used {seen} times")
    return problems


__all__ = [
    "net_score",
    "receives_stroke",
    "total_par",
    "total_yardage",
    "validate_stroke_indices",
]
