"""Delivery point endpoints."""

from __future__ import annotations

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Header, HTTPException, Query, status

from ...data.points_repository import PointStorageError
from ...schemas.points import ConfirmResponse, NavigationResponse, PointModel, PointsResponse
from ...services.navigation import detect_platform, navigation_url
from ...services.routing.service import confirm, get_points

router = APIRouter(prefix="/points", tags=["points"])


@router.get("", response_model=PointsResponse, status_code=status.HTTP_200_OK)
def list_delivery_points(
    include_visited: bool = Query(default=True, description="Include points already delivered"),
) -> PointsResponse:
    try:
        points = get_points(include_visited=include_visited)
    except PointStorageError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error listing points: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load delivery points",
        ) from exc
    return PointsResponse(points=[PointModel.from_domain(point) for point in points])


@router.post("/{point_id}/confirm", response_model=ConfirmResponse, status_code=status.HTTP_200_OK)
def confirm_delivery(point_id: str) -> ConfirmResponse:
    """Mark a point as delivered."""
    try:
        confirmed_at = confirm(point_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except PointStorageError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error confirming point {point_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to confirm delivery point",
        ) from exc
    return ConfirmResponse(point_id=point_id, confirmed_at=confirmed_at)


@router.get("/{point_id}/navigate", response_model=NavigationResponse, status_code=status.HTTP_200_OK)
def navigate_to_point(
    point_id: str,
    platform: Optional[Literal["ios", "android", "web"]] = Query(default=None),
    user_agent: Optional[str] = Header(default=None),
) -> NavigationResponse:
    """Return a deep link to driving directions, chosen from the caller's platform."""
    try:
        points = get_points(include_visited=True)
    except PointStorageError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error loading point {point_id} for navigation: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load delivery points",
        ) from exc

    point = next((candidate for candidate in points if candidate.id == point_id), None)
    if point is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Point '{point_id}' not found")

    resolved = platform or detect_platform(user_agent)
    return NavigationResponse(point_id=point.id, platform=resolved, url=navigation_url(point, resolved))
