from __future__ import annotations

YARDS_TO_METERS = 0.9144


def yards_to_meters(yards: float) -> float:
    return yards * YARDS_TO_METERS


def meters_to_yards(meters: float) -> float:
    return meters / YARDS_TO_METERS


__all__ = ["YARDS_TO_METERS", "yards_to_meters", "meters_to_yards"]
