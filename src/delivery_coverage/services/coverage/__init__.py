"""Coverage resolution and zone catalog services."""

from .catalog import build_catalog
from .resolver import branch_zones, resolve

__all__ = ["build_catalog", "branch_zones", "resolve"]
