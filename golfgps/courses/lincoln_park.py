"""Lincoln Park Golf Course (San Francisco) hole layout.

Scorecard radii are in yards; trees were surveyed in metres and sit along
the tree line roughly 45 m off the tee-green axis.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .schemas import GeoPoint, Hole, HoleFeature, TeeSet

LatLon = Tuple[float, float]

# number, par, yardage, stroke index, tee, green, green radius (yd),
# landing zone (lat, lon, radius yd), bunkers (name, lat, lon, radius yd),
# trees (name, lat, lon, radius m, height m)
_HOLES: Sequence[tuple] = (
    (1, 4, 369, 6, (37.78237186701465, -122.49481822364827), (37.78399164867041, -122.49732070604578), 10,
     (37.7845, -122.5000, 22),
     [("Right Fairway Bunker", 37.7848, -122.4998, 6)],
     [("Tree line R", 37.78318, -122.49557, 8, 10)]),
    (2, 4, 309, 15, (37.783342, -122.497522), (37.785038, -122.498981), 9,
     (37.7848, -122.4972, 20),
     [("Front Bunker", 37.7850, -122.4970, 5)],
     [("Tree line L", 37.78419, -122.49875, 8, 10)]),
    (3, 3, 147, 18, (37.786827, -122.501433), (37.786374, -122.503015), 10,
     (37.7856, -122.4970, 16),
     [("Left Fairway Bunker", 37.7857, -122.4972, 5)],
     [("Tree line R", 37.78662, -122.50215, 6, 8)]),
    (4, 4, 422, 2, (37.786359, -122.501714), (37.784746, -122.504300), 8,
     (37.7864, -122.4982, 24),
     [("Right Greenside Bunker", 37.7867, -122.4985, 5)],
     [("Tree line L", 37.78558, -122.50358, 8, 10)]),
    (5, 4, 375, 5, (37.784343, -122.504069), (37.785988, -122.501258), 10,
     (37.7874, -122.4994, 23),
     [("Left Fairway Bunker", 37.7876, -122.4996, 6)],
     [("Tree line R", 37.78520, -122.50258, 8, 10)]),
    (6, 4, 396, 4, (37.784228, -122.501562), (37.782040, -122.500938), 9,
     (37.7883, -122.5003, 23),
     [("Front Left Bunker", 37.7886, -122.5005, 5), ("Front Right Bunker", 37.7886, -122.5003, 5)],
     [("Tree line L", 37.78318, -122.50142, 8, 10)]),
    (7, 4, 368, 7, (37.781559, -122.500885), (37.782131, -122.497582), 10,
     (37.7891, -122.5010, 22),
     [],
     [("Tree line R", 37.78192, -122.49892, 7, 8)]),
    (8, 3, 168, 12, (37.781827, -122.497508), (37.782106, -122.495849), 10,
     (37.7897, -122.5020, 18),
     [("Right Fairway Bunker", 37.7898, -122.5018, 6)],
     [("Tree line L", 37.78188, -122.49778, 6, 9)]),
    (9, 4, 318, 14, (37.782470, -122.495606), (37.782509, -122.498816), 10,
     (37.7896, -122.5028, 21),
     [],
     [("Tree line R", 37.78252, -122.49718, 8, 10)]),
    (10, 4, 351, 10, (37.782313, -122.499485), (37.784273, -122.500006), 10,
     (37.7886, -122.5036, 22),
     [("Left Fairway Bunker", 37.7884, -122.5037, 6)],
     [("Tree line L", 37.78326, -122.50042, 8, 10)]),
    (11, 4, 287, 13, (37.784434, -122.499766), (37.782939, -122.497966), 9,
     (37.7878, -122.5042, 20),
     [("Front Bunker", 37.7876, -122.5043, 5)],
     [("Tree line R", 37.78378, -122.49862, 7, 9)]),
    (12, 3, 184, 11, (37.783685, -122.497507), (37.785137, -122.498589), 10,
     (37.7870, -122.5048, 18),
     [("Right Fairway Bunker", 37.7869, -122.5047, 6), ("Left Greenside Bunker", 37.7867, -122.5050, 5)],
     [("Tree line L", 37.78434, -122.49908, 6, 8)]),
    (13, 5, 503, 1, (37.785571, -122.498797), (37.783152, -122.494693), 10,
     (37.7862, -122.5048, 25),
     [],
     [("Tree line R", 37.78442, -122.49638, 9, 11), ("Tree line R", 37.78358, -122.49522, 7, 9)]),
    (14, 4, 349, 8, (37.783492, -122.494471), (37.784676, -122.496535), 9,
     (37.7854, -122.5040, 22),
     [("Right Greenside Bunker", 37.7852, -122.5038, 5)],
     [("Tree line L", 37.78398, -122.49608, 8, 10)]),
    (15, 4, 414, 3, (37.784924, -122.496366), (37.786019, -122.498909), 10,
     (37.7846, -122.5030, 24),
     [("Left Fairway Bunker", 37.7845, -122.5028, 6), ("Right Greenside Bunker", 37.7842, -122.5025, 5)],
     [("Tree line L", 37.78544, -122.49852, 8, 10)]),
    (16, 3, 169, 17, (37.786050, -122.498143), (37.785140, -122.495955), 9,
     (37.7839, -122.5020, 18),
     [("Front Left Bunker", 37.7838, -122.5019, 5)],
     [("Tree line R", 37.78554, -122.49658, 6, 8)]),
    (17, 3, 175, 16, (37.786297, -122.496995), (37.786299, -122.494539), 10,
     (37.7838, -122.5010, 18),
     [("Right Fairway Bunker", 37.7839, -122.5008, 6)],
     [("Tree line L", 37.78608, -122.49598, 6, 9)]),
    (18, 4, 346, 9, (37.785944, -122.494148), (37.782706, -122.494163), 10,
     (37.7838, -122.4998, 22),
     [("Left Fairway Bunker", 37.7837, -122.4996, 6), ("Right Greenside Bunker", 37.7835, -122.4993, 5)],
     [("Tree line R", 37.78442, -122.49652, 8, 10)]),
)

LINCOLN_PARK_TEE_SETS: List[TeeSet] = [
    TeeSet(name="Blue", total_yardage=5146, course_rating=65.9, slope_rating=113),
    TeeSet(name="White", total_yardage=4948, course_rating=65.0, slope_rating=107),
    TeeSet(name="Red", total_yardage=4732, course_rating=67.4, slope_rating=113),
]


def _point(coords: LatLon) -> GeoPoint:
    return GeoPoint(lat=coords[0], lon=coords[1])


def _build_hole(row: tuple) -> Hole:
    number, par, yardage, stroke_index, tee, green, green_radius, landing, bunkers, trees = row
    features: List[HoleFeature] = [
        HoleFeature(type="tee", name=f"Hole {number} Tee", position=_point(tee)),
        HoleFeature(
            type="fairway",
            name="Landing Zone",
            position=_point(landing[:2]),
            radius_yd=landing[2],
        ),
    ]
    for name, lat, lon, radius in bunkers:
        features.append(
            HoleFeature(
                type="bunker",
                name=name,
                position=GeoPoint(lat=lat, lon=lon),
                radius_yd=radius,
            )
        )
    features.append(
        HoleFeature(
            type="green",
            name=f"Hole {number} Green",
            position=_point(green),
            radius_yd=green_radius,
        )
    )
    for name, lat, lon, radius_m, height_m in trees:
        features.append(
            HoleFeature(
                type="tree",
                name=name,
                position=GeoPoint(lat=lat, lon=lon),
                radius_m=radius_m,
                height_m=height_m,
            )
        )
    return Hole(
        number=number,
        par=par,
        stroke_index=stroke_index,
        yardage=yardage,
        tee=_point(tee),
        green=_point(green),
        features=features,
    )


def build_lincoln_park_holes() -> List[Hole]:
    return [_build_hole(row) for row in _HOLES]


__all__ = ["LINCOLN_PARK_TEE_SETS", "build_lincoln_park_holes"]
