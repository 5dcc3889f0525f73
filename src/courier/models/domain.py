"""Domain models for delivery points and coordinates."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True, frozen=True)
class Coordinate:
    """A bare latitude/longitude pair, e.g. the courier's live GPS fix."""

    lat: float
    lng: float


@dataclass(slots=True)
class GeoPoint:
    """Represents a delivery point as read from storage."""

    id: str
    lat: float
    lng: float
    name: Optional[str] = None
    visited: bool = False
    info: Optional[str] = None
    confirmed_at: Optional[datetime] = None

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(lat=self.lat, lng=self.lng)
