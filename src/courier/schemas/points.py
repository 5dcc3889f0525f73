"""Delivery point request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ..models.domain import Coordinate, GeoPoint


class CoordinateModel(BaseModel):
    lat: float = Field(..., allow_inf_nan=False)
    lng: float = Field(..., allow_inf_nan=False)

    def to_domain(self) -> Coordinate:
        return Coordinate(lat=self.lat, lng=self.lng)


class PointModel(BaseModel):
    id: str = Field(..., min_length=1)
    lat: float = Field(..., allow_inf_nan=False)
    lng: float = Field(..., allow_inf_nan=False)
    name: Optional[str] = None
    visited: bool = False
    info: Optional[str] = None
    confirmed_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, point: GeoPoint) -> "PointModel":
        return cls(
            id=point.id,
            lat=point.lat,
            lng=point.lng,
            name=point.name,
            visited=point.visited,
            info=point.info,
            confirmed_at=point.confirmed_at,
        )

    def to_domain(self) -> GeoPoint:
        return GeoPoint(
            id=self.id,
            lat=self.lat,
            lng=self.lng,
            name=self.name,
            visited=self.visited,
            info=self.info,
            confirmed_at=self.confirmed_at,
        )


class PointsResponse(BaseModel):
    points: List[PointModel]


class ConfirmResponse(BaseModel):
    ok: bool = True
    point_id: str
    confirmed_at: datetime


class NavigationResponse(BaseModel):
    point_id: str
    platform: Literal["ios", "android", "web"]
    url: str
