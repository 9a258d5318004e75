from __future__ import annotations

from enum import Enum
from math import cos, sin
from typing import List, Sequence

from .lincoln_park import LINCOLN_PARK_TEE_SETS, build_lincoln_park_holes
from .schemas import Course, GeoPoint, Hole, TeeMarker, TeeSet, Venue

PLACEHOLDER_STEP_DEG = 0.0004

# Par 72 template: par 3s at 3, 8, 12, 16; par 5s at 6, 13, 15, 18.
_PLACEHOLDER_PARS = (4, 4, 3, 4, 4, 5, 4, 3, 4, 4, 4, 3, 5, 4, 5, 3, 4, 5)
_PLACEHOLDER_STROKE_INDEX = (7, 5, 15, 11, 3, 1, 9, 17, 13, 4, 8, 12, 2, 6, 14, 18, 10, 16)


class CourseName(str, Enum):
    LINCOLN_PARK = "Lincoln Park Golf Course"
    GOLDEN_GATE_PARK = "Golden Gate Park Golf Course"
    TPC_HARDING_PARK = "TPC Harding Park"
    FLEMING = "Fleming Course"
    HALF_MOON_BAY_OCEAN = "Half Moon Bay - Ocean Course"
    HALF_MOON_BAY_OLD = "Half Moon Bay - Old Course"


def _placeholder_layout(base: GeoPoint, index: int) -> tuple[GeoPoint, GeoPoint]:
    t = index * 0.6
    tee = GeoPoint(
        lat=base.lat + sin(t) * PLACEHOLDER_STEP_DEG * 8,
        lon=base.lon + cos(t) * PLACEHOLDER_STEP_DEG * 8,
    )
    green = GeoPoint(
        lat=tee.lat + PLACEHOLDER_STEP_DEG * 2,
        lon=tee.lon + PLACEHOLDER_STEP_DEG * 1.5,
    )
    return tee, green


def placeholder_holes(base: GeoPoint, count: int = 18) -> List[Hole]:
    """Lay out ``count`` holes on a ring around ``base`` for courses not yet mapped."""

    # Re-rank the template indices so shorter layouts still number 1..count.
    template = _PLACEHOLDER_STROKE_INDEX[:count]
    ranking = {value: rank for rank, value in enumerate(sorted(template), start=1)}
    holes: List[Hole] = []
    for index in range(count):
        tee, green = _placeholder_layout(base, index)
        holes.append(
            Hole(
                number=index + 1,
                par=_PLACEHOLDER_PARS[index],
                stroke_index=ranking[template[index]],
                tee=tee,
                green=green,
            )
        )
    return holes


def _ggp_hole(
    number: int,
    stroke_index: int,
    tee: tuple[float, float],
    green: tuple[float, float],
    yardages: Sequence[int],
) -> Hole:
    tee_point = GeoPoint(lat=tee[0], lon=tee[1])
    return Hole(
        number=number,
        par=3,
        stroke_index=stroke_index,
        tee=tee_point,
        green=GeoPoint(lat=green[0], lon=green[1]),
        tees=[
            TeeMarker(name=name, position=tee_point, yardage=yardage)
            for name, yardage in zip(("Blue", "White", "Red"), yardages)
        ],
    )


def _golden_gate_park() -> Course:
    holes = [
        _ggp_hole(1, 4, (37.76854, -122.50525), (37.76793, -122.50505), (157, 164, 133)),
        _ggp_hole(2, 6, (37.76780, -122.50490), (37.76820, -122.50470), (120, 131, 88)),
        _ggp_hole(3, 9, (37.76840, -122.50450), (37.76880, -122.50430), (126, 109, 99)),
        _ggp_hole(4, 2, (37.76900, -122.50410), (37.76940, -122.50390), (111, 178, 74)),
        _ggp_hole(5, 1, (37.76960, -122.50370), (37.77000, -122.50350), (154, 183, 110)),
        _ggp_hole(6, 8, (37.77020, -122.50330), (37.77060, -122.50310), (134, 113, 106)),
        _ggp_hole(7, 5, (37.77080, -122.50290), (37.77120, -122.50270), (148, 163, 82)),
        _ggp_hole(8, 7, (37.77140, -122.50250), (37.77180, -122.50230), (90, 123, 70)),
        _ggp_hole(9, 3, (37.77200, -122.50210), (37.77240, -122.50190), (171, 193, 99)),
    ]
    return Course(
        name=CourseName.GOLDEN_GATE_PARK.value,
        location="San Francisco, CA",
        holes=holes,
        tee_sets=[
            TeeSet(name="Blue", total_yardage=1211, course_rating=36.0, slope_rating=82),
            TeeSet(name="White", total_yardage=1357, course_rating=35.3, slope_rating=80),
            TeeSet(name="Red", total_yardage=861, course_rating=34.0, slope_rating=78),
        ],
    )


def _lincoln_park() -> Course:
    return Course(
        name=CourseName.LINCOLN_PARK.value,
        location="San Francisco, CA",
        holes=build_lincoln_park_holes(),
        tee_sets=list(LINCOLN_PARK_TEE_SETS),
        mvp_complete=True,
    )


_TPC_HARDING_BASE = GeoPoint(lat=37.724, lon=-122.493)

# par, championship yardage, stroke index
_TPC_HARDING_SCORECARD = (
    (4, 395, 7), (4, 449, 5), (3, 183, 15), (5, 606, 11), (4, 429, 3), (4, 473, 1),
    (4, 344, 9), (3, 230, 17), (5, 525, 13), (5, 562, 4), (3, 200, 8), (5, 494, 12),
    (4, 428, 2), (4, 467, 6), (4, 405, 14), (4, 336, 18), (3, 175, 10), (4, 468, 16),
)


def _tpc_harding_park() -> Course:
    holes: List[Hole] = []
    for index, (par, yardage, stroke_index) in enumerate(_TPC_HARDING_SCORECARD):
        tee, green = _placeholder_layout(_TPC_HARDING_BASE, index)
        holes.append(
            Hole(
                number=index + 1,
                par=par,
                stroke_index=stroke_index,
                yardage=yardage,
                tee=tee,
                green=green,
            )
        )
    return Course(
        name=CourseName.TPC_HARDING_PARK.value,
        location="San Francisco, CA",
        holes=holes,
        tee_sets=[
            TeeSet(name="Tour", total_yardage=7154, course_rating=74.9, slope_rating=136),
            TeeSet(name="Blue", total_yardage=6845, course_rating=72.8, slope_rating=126),
            TeeSet(name="White", total_yardage=6405, course_rating=70.6, slope_rating=123),
            TeeSet(name="Gold", total_yardage=5375, course_rating=70.4, slope_rating=116),
            TeeSet(name="Red", total_yardage=5875, course_rating=73.4, slope_rating=131),
        ],
    )


def _fleming() -> Course:
    return Course(
        name=CourseName.FLEMING.value,
        location="San Francisco, CA",
        holes=placeholder_holes(GeoPoint(lat=37.723, lon=-122.494), count=9),
        tee_sets=[
            TeeSet(name="White", total_yardage=2250, course_rating=31.0, slope_rating=95),
        ],
    )


def _half_moon_bay_ocean() -> Course:
    return Course(
        name=CourseName.HALF_MOON_BAY_OCEAN.value,
        location="Half Moon Bay, CA",
        holes=placeholder_holes(GeoPoint(lat=37.4347, lon=-122.4399)),
        tee_sets=[
            TeeSet(name="Blue", total_yardage=6850, course_rating=72.5, slope_rating=132),
            TeeSet(name="White", total_yardage=6420, course_rating=70.2, slope_rating=126),
        ],
    )


def _half_moon_bay_old() -> Course:
    return Course(
        name=CourseName.HALF_MOON_BAY_OLD.value,
        location="Half Moon Bay, CA",
        holes=placeholder_holes(GeoPoint(lat=37.436, lon=-122.442)),
        tee_sets=[
            TeeSet(name="Blue", total_yardage=6720, course_rating=71.8, slope_rating=128),
            TeeSet(name="White", total_yardage=6310, course_rating=69.6, slope_rating=122),
        ],
    )


def build_venues() -> List[Venue]:
    """Build the static venue catalog; each course appears in exactly one venue."""

    tpc = _tpc_harding_park()
    return [
        Venue(
            name="Lincoln Park Golf Course",
            location="San Francisco, CA",
            courses=[_lincoln_park()],
        ),
        Venue(
            name="Golden Gate Park Golf Course",
            location="San Francisco, CA",
            courses=[_golden_gate_park()],
        ),
        Venue(
            name="TPC Harding Park",
            location="San Francisco, CA",
            courses=[tpc, _fleming()],
        ),
        Venue(
            name="Half Moon Bay Golf Links",
            location="Half Moon Bay, CA",
            courses=[_half_moon_bay_ocean(), _half_moon_bay_old()],
        ),
    ]


__all__ = ["CourseName", "PLACEHOLDER_STEP_DEG", "build_venues", "placeholder_holes"]
