"""Two-pass coverage resolution over a branch snapshot."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence

from ...models.domain import (
    Branch,
    CoverageDecision,
    Covered,
    DeliveryUnavailable,
    NotCovered,
    Point,
    Zone,
)
from ..geospatial import point_in_polygon


def branch_zones(branch: Branch) -> Sequence[Zone]:
    """Return the branch zones, treating a missing or non-list value as empty."""

    zones = getattr(branch, "zones", None)
    if isinstance(zones, (list, tuple)):
        return zones
    return ()


def _matchable_polygon(zone: Zone) -> Sequence[Point]:
    """Return the zone polygon, or nothing when it holds anything but Point vertices."""

    polygon = getattr(zone, "polygon", None)
    if not isinstance(polygon, (list, tuple)):
        return ()
    if not all(isinstance(vertex, Point) for vertex in polygon):
        return ()
    return polygon


def _first_match(branches: Iterable[Branch], point: Point) -> Optional[tuple[Branch, Zone]]:
    for branch in branches:
        for zone in branch_zones(branch):
            if point_in_polygon(point, _matchable_polygon(zone)):
                return branch, zone
    return None


def _active(branches: Iterable[Branch]) -> Iterator[Branch]:
    return (branch for branch in branches if branch.is_active)


def resolve(branches: Sequence[Branch], point: Point) -> CoverageDecision:
    """Classify ``point`` against the snapshot.

    Delivery-enabled branches are searched first, in list order, then zone
    order; the first containing zone wins. Only when none of them matches are
    delivery-disabled branches searched, in the same order, to report that the
    location is served by a branch that is not delivering right now.
    """

    branches = tuple(branches)

    match = _first_match((b for b in _active(branches) if b.delivery_enabled), point)
    if match is not None:
        branch, zone = match
        return Covered(
            branch_id=branch.id,
            branch_name=branch.name,
            zone_name=zone.name,
            delivery_fee=zone.delivery_fee,
            opening_time=branch.opening_time,
            closing_time=branch.closing_time,
        )

    match = _first_match((b for b in _active(branches) if not b.delivery_enabled), point)
    if match is not None:
        branch, zone = match
        return DeliveryUnavailable(
            branch_id=branch.id,
            branch_name=branch.name,
            zone_name=zone.name,
            opening_time=branch.opening_time,
            closing_time=branch.closing_time,
        )

    return NotCovered()
