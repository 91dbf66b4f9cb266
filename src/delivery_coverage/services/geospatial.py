"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

from ..models.domain import Point

MIN_POLYGON_VERTICES = 3


def is_valid_coordinate(lat: float, lng: float) -> bool:
    """Return True for finite degrees with lat in [-90, 90] and lng in [-180, 180]."""

    if not (math.isfinite(lat) and math.isfinite(lng)):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Even-odd ray casting test treating longitude as x and latitude as y.

    A ray is cast from the point towards +x. An edge counts as crossed when one
    endpoint lies strictly above the point and the other does not, so each
    shared vertex is counted once. With this half-open rule a point lying
    exactly on a south or west boundary of a shape is inside, while a point on
    a north or east boundary is outside.

    Polygons with fewer than three vertices never contain anything.
    """

    count = len(polygon)
    if count < MIN_POLYGON_VERTICES:
        return False

    x, y = point.lng, point.lat
    inside = False
    previous = polygon[-1]
    for current in polygon:
        xi, yi = current.lng, current.lat
        xj, yj = previous.lng, previous.lat
        if (yi > y) != (yj > y):
            crossing_x = xi + (y - yi) * (xj - xi) / (yj - yi)
            if x < crossing_x:
                inside = not inside
        previous = current
    return inside
