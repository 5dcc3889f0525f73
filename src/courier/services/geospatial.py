"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Protocol

EARTH_RADIUS_KM = 6371.0


class HasLatLng(Protocol):
    lat: float
    lng: float


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula.

    Non-finite input yields NaN instead of raising, so malformed coordinates
    surface in the result rather than being coerced.
    """

    if not all(math.isfinite(value) for value in (lat1, lng1, lat2, lng2)):
        return math.nan

    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)
    # huge finite inputs can overflow the difference
    if not (math.isfinite(d_phi) and math.isfinite(d_lambda)):
        return math.nan

    h = math.sin(d_phi / 2) ** 2 + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lambda / 2) ** 2
    # rounding can push h just past 1 for antipodal points
    if h > 1.0:
        h = 1.0
    elif h < 0.0:
        h = 0.0
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


def distance_km(a: HasLatLng, b: HasLatLng) -> float:
    """Great-circle distance in kilometres between two points or coordinates."""

    return haversine_km(a.lat, a.lng, b.lat, b.lng)
