"""Data access helpers for listing and confirming delivery points."""

from __future__ import annotations

import csv
import functools
import logging
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import GeoPoint


class PointStorageError(RuntimeError):
    """Raised when the points store cannot be read or written."""


def _coerce_float(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Unable to parse float from value '{value}'") from exc


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in {"1", "true", "yes", "y", "t"}


def _coerce_timestamp(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def point_from_record(record: Mapping[str, Any]) -> GeoPoint:
    """Build a GeoPoint from a storage row, filling the same defaults as the map client."""

    return GeoPoint(
        id=str(record.get("id") or "").strip(),
        name=record.get("name") or "",
        lat=_coerce_float(record.get("lat")),
        lng=_coerce_float(record.get("lng")),
        visited=_coerce_bool(record.get("visited")),
        info=record.get("info") or "",
        confirmed_at=_coerce_timestamp(record.get("confirmed_at")),
    )


def _points_from_records(records: Iterable[Mapping[str, Any]]) -> tuple[GeoPoint, ...]:
    points = []
    for record in records:
        point = point_from_record(record)
        if not point.id:
            continue  # rows without an id cannot be confirmed later
        if not (math.isfinite(point.lat) and math.isfinite(point.lng)):
            logging.warning(f"Skipping point '{point.id}' with non-finite coordinates ({point.lat}, {point.lng})")
            continue
        points.append(point)
    return tuple(points)


@functools.lru_cache(maxsize=1)
def load_points_from_file(source: Optional[Path] = None) -> tuple[GeoPoint, ...]:
    """Load points from the configured CSV file."""

    csv_path = source or settings.points_file
    if not csv_path.exists():
        raise FileNotFoundError(f"Points file not found: {csv_path}")

    with csv_path.open(mode="r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise ValueError(f"Points file '{csv_path}' is missing a header row.")
        return _points_from_records(reader)


def _load_points_from_database() -> Optional[tuple[GeoPoint, ...]]:
    supabase = get_supabase_client()
    if not supabase:
        return None

    try:
        response = supabase.table(settings.points_table).select("*").execute()
    except Exception as exc:
        logging.error(f"Failed to load points from table '{settings.points_table}': {exc}")
        raise PointStorageError("Failed to load delivery points") from exc
    return _points_from_records(response.data or [])


def list_points(include_visited: bool = True) -> tuple[GeoPoint, ...]:
    """Return stored points, from Supabase when configured, otherwise from the CSV file."""

    points = _load_points_from_database()
    if points is None:
        logging.info(f"Supabase not configured, reading points from {settings.points_file}")
        points = load_points_from_file()

    if include_visited:
        return points
    return tuple(point for point in points if not point.visited)


def confirm_point(point_id: str) -> Optional[datetime]:
    """Mark a point as delivered and stamp the confirmation time.

    Returns:
        The confirmation timestamp, or None if no point has the given id.
    """
    if not point_id or not point_id.strip():
        raise ValueError("Point id is required")

    supabase = get_supabase_client()
    if not supabase:
        raise PointStorageError("Supabase not configured - points cannot be confirmed")

    confirmed_at = datetime.now(timezone.utc)
    try:
        response = (
            supabase.table(settings.points_table)
            .update({"visited": True, "confirmed_at": confirmed_at.isoformat()})
            .eq("id", point_id.strip())
            .execute()
        )
    except Exception as exc:
        logging.error(f"Failed to confirm point '{point_id}': {exc}")
        raise PointStorageError("Failed to confirm delivery point") from exc

    if not response.data:
        return None
    return confirmed_at
