"""Routing orchestration service."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Optional, Sequence

from ...data.points_repository import confirm_point, list_points
from ...models.domain import Coordinate, GeoPoint
from ..geospatial import distance_km
from .models import OptimizedRoute, RouteProgress
from .nearest_neighbor import order_points, resolve_start, route_length_km


def get_points(include_visited: bool = True) -> tuple[GeoPoint, ...]:
    points = list_points(include_visited=include_visited)
    logging.info(f"Retrieved {len(points)} delivery points (include_visited={include_visited})")
    return points


def optimize(points: Optional[Sequence[GeoPoint]] = None, start: Optional[Coordinate] = None) -> OptimizedRoute:
    """Order points for delivery starting from the courier's position when known.

    When no points are supplied the stored unvisited points are used.
    """
    if points is None:
        points = list_points(include_visited=False)

    ordered = order_points(points, start)
    route = OptimizedRoute(
        points=ordered,
        order=[point.id for point in ordered],
        distance_km=route_length_km(ordered),
        start=resolve_start(start),
    )
    logging.info(
        f"Optimized route over {len(ordered)} points, start={'coordinate' if start else 'first point'}, "
        f"distance={route.distance_km:.3f} km"
    )
    return route


def confirm(point_id: str) -> datetime:
    """Record delivery of a point."""
    if not point_id or not point_id.strip():
        raise ValueError("Point id is required")

    confirmed_at = confirm_point(point_id)
    if confirmed_at is None:
        raise LookupError(f"Point '{point_id}' not found")
    logging.info(f"Point '{point_id}' confirmed at {confirmed_at.isoformat()}")
    return confirmed_at


def progress(points: Sequence[GeoPoint]) -> RouteProgress:
    """Summarize how much of the route is left, keeping the listed order."""
    remaining = [point for point in points if not point.visited]
    return RouteProgress(
        total=len(points),
        remaining=len(remaining),
        visited=len(points) - len(remaining),
        distance_km=route_length_km(remaining),
        next_point=remaining[0] if remaining else None,
        completed=bool(points) and not remaining,
    )


def nearest_unvisited(points: Sequence[GeoPoint], position: Coordinate) -> Optional[tuple[GeoPoint, float]]:
    """Find the unvisited point closest to the courier, first listed wins on ties."""
    nearest: Optional[GeoPoint] = None
    best = math.inf
    for point in points:
        if point.visited:
            continue
        d = distance_km(position, point)
        if nearest is None or d < best:
            nearest = point
            best = d
    if nearest is None:
        return None
    return nearest, best
