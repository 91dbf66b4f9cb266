"""Export services."""

from .geojson import (
    polygon_from_geojson,
    zone_to_record,
    zones_to_feature_collection,
)

__all__ = [
    "polygon_from_geojson",
    "zone_to_record",
    "zones_to_feature_collection",
]
