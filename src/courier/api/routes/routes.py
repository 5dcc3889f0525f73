"""Routing endpoints."""

from __future__ import annotations

import logging
import math
from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Query, status

from ...data.points_repository import PointStorageError
from ...models.domain import Coordinate
from ...schemas.points import PointModel
from ...schemas.routing import NearestResponse, OptimizeRequest, OptimizeResponse, ProgressResponse
from ...services.navigation import detect_platform, navigation_url
from ...services.outputs.routing_formatter import display_distance_km, route_to_geojson, route_to_json
from ...services.routing.service import get_points, nearest_unvisited, optimize, progress

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/optimize", response_model=OptimizeResponse, status_code=status.HTTP_200_OK)
def optimize_route(payload: OptimizeRequest) -> OptimizeResponse:
    points = [point.to_domain() for point in payload.points] if payload.points is not None else None
    start = payload.start.to_domain() if payload.start else None
    try:
        route = optimize(points, start)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except PointStorageError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error optimizing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to optimize route",
        ) from exc

    body = route_to_json(route)
    if body["distance_km"] is None:
        logging.warning(f"Route over {len(route.order)} points has a non-finite length, check point coordinates")
    metadata = {
        "status": "complete",
        "algorithm": "nearest_neighbor",
        "source": "request" if payload.points is not None else "storage",
        "start": "coordinate" if start else "first_point",
        "start_coordinate": body["start"],
        "distance_km_unrounded": route.distance_km if math.isfinite(route.distance_km) else None,
        "map_overlays": {"route": route_to_geojson(route.points, start)},
    }
    return OptimizeResponse(
        points=body["points"],
        order=body["order"],
        distance_km=body["distance_km"],
        metadata=metadata,
    )


@router.get("/progress", response_model=ProgressResponse, status_code=status.HTTP_200_OK)
def route_progress() -> ProgressResponse:
    """Summarize delivered and remaining points in their stored order."""
    try:
        summary = progress(get_points(include_visited=True))
    except PointStorageError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error summarizing route progress: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load route progress",
        ) from exc

    return ProgressResponse(
        total=summary.total,
        remaining=summary.remaining,
        visited=summary.visited,
        distance_km=display_distance_km(summary.distance_km),
        next_point=PointModel.from_domain(summary.next_point) if summary.next_point else None,
        completed=summary.completed,
    )


@router.get("/nearest", response_model=NearestResponse, status_code=status.HTTP_200_OK)
def nearest_point(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    user_agent: Optional[str] = Header(default=None),
) -> NearestResponse:
    """Find the closest undelivered point to the courier and link to directions."""
    try:
        points = get_points(include_visited=False)
    except PointStorageError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error finding nearest point: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load delivery points",
        ) from exc

    found = nearest_unvisited(points, Coordinate(lat=lat, lng=lng))
    if found is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="All points have been delivered")

    point, distance = found
    platform = detect_platform(user_agent)
    return NearestResponse(
        point=PointModel.from_domain(point),
        distance_km=display_distance_km(distance),
        platform=platform,
        navigation_url=navigation_url(point, platform),
    )
