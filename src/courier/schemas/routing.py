"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .points import CoordinateModel, PointModel


class OptimizeRequest(BaseModel):
    points: Optional[List[PointModel]] = Field(
        default=None,
        description="Points to order. If omitted, the stored unvisited points are used.",
    )
    start: Optional[CoordinateModel] = Field(
        default=None,
        description="Courier position. If omitted, the first point is the starting location.",
    )


class OptimizeResponse(BaseModel):
    points: List[PointModel]
    order: List[str]
    distance_km: Optional[float] = Field(
        ..., description="Route length rounded to one decimal place, null when a coordinate is malformed."
    )
    metadata: dict


class ProgressResponse(BaseModel):
    total: int
    remaining: int
    visited: int
    distance_km: Optional[float]
    next_point: Optional[PointModel] = None
    completed: bool


class NearestResponse(BaseModel):
    point: PointModel
    distance_km: Optional[float]
    platform: Literal["ios", "android", "web"]
    navigation_url: str
