"""Greedy nearest-neighbor route ordering.

The tour is built by repeatedly moving to the closest remaining point. It is
a deterministic approximation, not an optimal TSP solution: on equal
distances the point listed first in the input wins.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from ...models.domain import Coordinate, GeoPoint
from ..geospatial import distance_km
from .models import FromCoordinate, FromFirstPoint, StartLocation


def resolve_start(start: Optional[Coordinate] = None) -> StartLocation:
    """Decide where the tour begins.

    Without an explicit start the first input point seeds the current
    location. It is not removed from the pool, so it is always picked first.
    """

    if start is not None:
        return FromCoordinate(coordinate=Coordinate(lat=start.lat, lng=start.lng))
    return FromFirstPoint()


def _initial_location(points: Sequence[GeoPoint], start: StartLocation) -> Coordinate:
    if isinstance(start, FromCoordinate):
        return start.coordinate
    return points[0].coordinate


def order_points(points: Sequence[GeoPoint], start: Optional[Coordinate] = None) -> list[GeoPoint]:
    """Return the points in nearest-neighbor visiting order as a new list."""

    if not points:
        return []

    current = _initial_location(points, resolve_start(start))
    remaining = list(points)
    ordered: list[GeoPoint] = []

    while remaining:
        # all-NaN distances fall back to the first remaining point
        nearest_index = 0
        best = math.inf
        for index, candidate in enumerate(remaining):
            d = distance_km(current, candidate)
            if d < best:
                best = d
                nearest_index = index

        nearest = remaining.pop(nearest_index)
        ordered.append(nearest)
        current = nearest.coordinate

    return ordered


def nearest_neighbor_order(points: Sequence[GeoPoint], start: Optional[Coordinate] = None) -> list[str]:
    """Return point ids in nearest-neighbor visiting order."""

    return [point.id for point in order_points(points, start)]


def route_length_km(ordered_points: Sequence[GeoPoint | Coordinate]) -> float:
    """Sum of leg distances along the given order, unrounded."""

    total = 0.0
    for index in range(len(ordered_points) - 1):
        total += distance_km(ordered_points[index], ordered_points[index + 1])
    return total


def round_distance_km(total: float) -> float:
    """Round a distance to one decimal place for display.

    Halves round up. Non-finite totals are returned unchanged.
    """

    if not math.isfinite(total):
        return total
    return math.floor(total * 10 + 0.5) / 10
