"""Deep links into external turn-by-turn navigation apps."""

from __future__ import annotations

import re
from typing import Literal, Optional

from ..models.domain import Coordinate, GeoPoint

Platform = Literal["ios", "android", "web"]

_IOS_PATTERN = re.compile(r"iPad|iPhone|iPod")
_ANDROID_PATTERN = re.compile(r"Android")


def detect_platform(user_agent: Optional[str]) -> Platform:
    if not user_agent:
        return "web"
    if _IOS_PATTERN.search(user_agent):
        return "ios"
    if _ANDROID_PATTERN.search(user_agent):
        return "android"
    return "web"


def navigation_url(point: GeoPoint | Coordinate, platform: Platform = "web") -> str:
    """Build a driving-directions link to the point for the given platform."""

    destination = f"{point.lat},{point.lng}"
    if platform == "ios":
        return f"maps://maps.apple.com/?daddr={destination}&dirflg=d"
    if platform == "android":
        return f"google.navigation:q={destination}"
    return f"https://www.google.com/maps/dir/?api=1&destination={destination}&travelmode=driving"
