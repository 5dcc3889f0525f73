"""Serializers for routing outputs."""

from __future__ import annotations

import math
from typing import Any, Optional, Sequence

from ...models.domain import Coordinate, GeoPoint
from ..routing.models import FromCoordinate, OptimizedRoute
from ..routing.nearest_neighbor import round_distance_km


def display_distance_km(total: float) -> Optional[float]:
    """Rounded distance for JSON payloads; None when the total is not finite."""
    if not math.isfinite(total):
        return None
    return round_distance_km(total)


def point_to_json(point: GeoPoint) -> dict[str, Any]:
    return {
        "id": point.id,
        "name": point.name,
        "lat": point.lat,
        "lng": point.lng,
        "visited": point.visited,
        "info": point.info,
        "confirmed_at": point.confirmed_at.isoformat() if point.confirmed_at else None,
    }


def route_to_json(route: OptimizedRoute) -> dict[str, Any]:
    start = None
    if isinstance(route.start, FromCoordinate):
        start = {"lat": route.start.coordinate.lat, "lng": route.start.coordinate.lng}
    return {
        "order": list(route.order),
        "distance_km": display_distance_km(route.distance_km),
        "start": start,
        "points": [point_to_json(point) for point in route.points],
    }


def route_to_geojson(points: Sequence[GeoPoint], start: Optional[Coordinate] = None) -> dict[str, Any]:
    """Render an ordered route as a GeoJSON FeatureCollection.

    Each stop becomes a Point feature carrying its visiting sequence; when
    there are at least two positions a LineString joins them in order.
    GeoJSON positions are [lng, lat].
    """
    features: list[dict[str, Any]] = []
    for sequence, point in enumerate(points, start=1):
        features.append(
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [point.lng, point.lat]},
                "properties": {
                    "id": point.id,
                    "name": point.name,
                    "sequence": sequence,
                    "visited": point.visited,
                },
            }
        )

    line: list[list[float]] = []
    if start is not None:
        line.append([start.lng, start.lat])
    line.extend([point.lng, point.lat] for point in points)
    if len(line) >= 2:
        features.append(
            {
                "type": "Feature",
                "geometry": {"type": "LineString", "coordinates": line},
                "properties": {"kind": "route", "stops": len(points)},
            }
        )

    return {"type": "FeatureCollection", "features": features}
