"""Flattened zone catalog used by the storefront area dropdown."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Branch, CatalogEntry, Zone
from .resolver import branch_zones


def _group_for(zone: Zone, branch: Branch) -> str:
    if zone.city and zone.city.strip():
        return zone.city
    return branch.name


def build_catalog(branches: Sequence[Branch]) -> list[CatalogEntry]:
    """List every zone of every active branch, sorted by zone name.

    Zones of branches with delivery switched off are kept and flagged
    ``is_available=False``. The sort is stable and compares names by code
    point, so equal names keep branch-then-zone order.
    """

    entries: list[CatalogEntry] = []
    for branch in branches:
        if not branch.is_active:
            continue
        available = branch.delivery_enabled
        for zone in branch_zones(branch):
            entries.append(
                CatalogEntry(
                    name=zone.name,
                    branch_id=branch.id,
                    branch_name=branch.name,
                    delivery_fee=zone.delivery_fee,
                    group=_group_for(zone, branch),
                    is_available=available,
                    opening_time=branch.opening_time or None,
                    closing_time=branch.closing_time or None,
                )
            )

    entries.sort(key=lambda entry: entry.name)
    return entries
