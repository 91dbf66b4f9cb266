"""Parsing of raw branch rows into strict snapshot value types.

Storage hands back loosely typed JSON: coordinates may be strings, the
delivery flag may be a boolean, a string or missing, and ``zones`` may not be
a list at all. Everything is normalised here so the geometry code only ever
sees :class:`Point`, :class:`Zone` and :class:`Branch` values. Bad records are
dropped with a warning instead of failing the whole snapshot.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping, Optional

from ..errors import InvalidCoordinateError
from ..models.domain import Branch, Point, Zone, delivery_flag_enabled
from ..services.geospatial import is_valid_coordinate

logger = logging.getLogger(__name__)


def _to_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return float(text)
        except ValueError:
            return None
    return None


def parse_coordinate(value: Any) -> float:
    """Coerce a request coordinate (number or numeric string) to a finite float."""

    number = _to_float(value)
    if number is None or not math.isfinite(number):
        raise InvalidCoordinateError(f"Coordinate {value!r} is not a finite number.")
    return number


def parse_query_point(lat: Any, lng: Any) -> Point:
    """Build the query point for a coverage check, rejecting anything invalid."""

    latitude = parse_coordinate(lat)
    longitude = parse_coordinate(lng)
    if not is_valid_coordinate(latitude, longitude):
        raise InvalidCoordinateError(f"Coordinate ({latitude}, {longitude}) is out of range.")
    return Point(lat=latitude, lng=longitude)


def parse_point(raw: Any) -> Optional[Point]:
    """Parse a stored vertex (``{"lat", "lng"}`` or ``[lat, lng]``); None when malformed."""

    if isinstance(raw, Mapping):
        lat, lng = raw.get("lat"), raw.get("lng")
    elif isinstance(raw, (list, tuple)) and len(raw) == 2:
        lat, lng = raw
    else:
        return None

    latitude, longitude = _to_float(lat), _to_float(lng)
    if latitude is None or longitude is None:
        return None
    if not is_valid_coordinate(latitude, longitude):
        return None
    return Point(lat=latitude, lng=longitude)


def parse_delivery_flag(raw: Any) -> bool:
    return delivery_flag_enabled(raw)


def _parse_fee(raw: Any) -> Optional[float]:
    """Missing fee means free delivery; unreadable, non-finite or negative fees are None."""
    if raw is None or raw == "":
        return 0.0
    fee = _to_float(raw)
    if fee is None or not math.isfinite(fee) or fee < 0:
        return None
    return fee


def _parse_polygon(raw_polygon: Any, name: str) -> tuple[Point, ...]:
    if not isinstance(raw_polygon, list):
        logger.warning(f"Zone '{name}' has no polygon list")
        return ()

    vertices: list[Point] = []
    for raw_point in raw_polygon:
        point = parse_point(raw_point)
        if point is None:
            # Dropping a single vertex would reshape the geofence.
            logger.warning(f"Zone '{name}' has malformed vertex {raw_point!r}; it will not match any point")
            return ()
        vertices.append(point)
    return tuple(vertices)


def parse_zone(raw: Any) -> Optional[Zone]:
    """Parse one stored zone object.

    A zone whose polygon is missing, has a malformed vertex or has fewer than
    three vertices is kept with that polygon emptied or short: it never
    matches a point but still appears in the catalog.
    """

    if not isinstance(raw, Mapping):
        logger.warning(f"Skipping zone that is not an object: {type(raw).__name__}")
        return None

    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        logger.warning("Skipping zone without a name")
        return None

    fee = _parse_fee(raw.get("delivery_fee"))
    if fee is None:
        logger.warning(f"Skipping zone '{name}' with invalid delivery fee {raw.get('delivery_fee')!r}")
        return None

    city = raw.get("city")
    return Zone(
        name=name,
        delivery_fee=fee,
        polygon=_parse_polygon(raw.get("polygon"), name),
        city=city if isinstance(city, str) and city.strip() else None,
    )


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_branch(row: Any) -> Optional[Branch]:
    """Parse a branch row as returned by the branches table."""

    if not isinstance(row, Mapping):
        logger.warning(f"Skipping branch row that is not an object: {type(row).__name__}")
        return None

    branch_id = row.get("id")
    if branch_id is None or isinstance(branch_id, bool):
        logger.warning("Skipping branch row without an id")
        return None

    raw_zones = row.get("zones")
    zones: list[Zone] = []
    if isinstance(raw_zones, list):
        for raw_zone in raw_zones:
            zone = parse_zone(raw_zone)
            if zone is not None:
                zones.append(zone)

    return Branch(
        id=branch_id,
        name=str(row.get("name") or ""),
        zones=tuple(zones),
        is_active=row.get("is_active", True) is not False,
        is_delivery_available=parse_delivery_flag(row.get("is_delivery_available")),
        opening_time=_optional_str(row.get("opening_time")),
        closing_time=_optional_str(row.get("closing_time")),
    )


def parse_branches(rows: Iterable[Any]) -> tuple[Branch, ...]:
    branches: list[Branch] = []
    for row in rows:
        branch = parse_branch(row)
        if branch is not None:
            branches.append(branch)
    return tuple(branches)
