"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from ...models.domain import Coordinate, GeoPoint


@dataclass(slots=True, frozen=True)
class FromCoordinate:
    """Start the tour at a caller-supplied coordinate."""

    coordinate: Coordinate


@dataclass(slots=True, frozen=True)
class FromFirstPoint:
    """Start the tour at the first input point, which stays in the candidate pool."""


StartLocation = Union[FromCoordinate, FromFirstPoint]


@dataclass(slots=True)
class OptimizedRoute:
    points: List[GeoPoint]
    order: List[str]
    distance_km: float
    start: StartLocation = field(default_factory=FromFirstPoint)


@dataclass(slots=True)
class RouteProgress:
    total: int
    remaining: int
    visited: int
    distance_km: float
    next_point: Optional[GeoPoint]
    completed: bool
