"""GeoJSON conversion for delivery zone polygons."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence

from shapely.errors import ShapelyError
from shapely.geometry import Polygon, mapping, shape
from shapely.validation import explain_validity

from ...models.domain import Branch, Point, Zone
from ..coverage.resolver import branch_zones
from ..geospatial import MIN_POLYGON_VERTICES, is_valid_coordinate


def zone_to_polygon(zone: Zone) -> Polygon:
    """Build a shapely polygon in (lng, lat) order, as GeoJSON expects."""
    if len(zone.polygon) < MIN_POLYGON_VERTICES:
        raise ValueError(f"Zone '{zone.name}' has fewer than {MIN_POLYGON_VERTICES} vertices")
    return Polygon([(point.lng, point.lat) for point in zone.polygon])


def zones_to_feature_collection(branches: Sequence[Branch]) -> Dict[str, Any]:
    """Export every drawable zone of every active branch as a FeatureCollection.

    Args:
        branches: Branch snapshot

    Returns:
        GeoJSON FeatureCollection; degenerate zones are left out
    """
    features: List[Dict[str, Any]] = []
    for branch in branches:
        if not branch.is_active:
            continue
        for zone in branch_zones(branch):
            try:
                polygon = zone_to_polygon(zone)
            except ValueError:
                continue
            features.append({
                "type": "Feature",
                "geometry": mapping(polygon),
                "properties": {
                    "name": zone.name,
                    "branch_id": branch.id,
                    "branch_name": branch.name,
                    "delivery_fee": zone.delivery_fee,
                    "group": zone.city or branch.name,
                    "is_available": branch.delivery_enabled,
                },
            })
    return {"type": "FeatureCollection", "features": features}


def _extract_geometry(payload: Any) -> Any:
    if isinstance(payload, list):
        return {"type": "Polygon", "coordinates": payload}
    if not isinstance(payload, Mapping):
        raise ValueError("GeoJSON payload must be an object or a coordinate array")

    kind = payload.get("type")
    if kind == "FeatureCollection":
        features = payload.get("features") or []
        if len(features) != 1:
            raise ValueError("FeatureCollection must contain exactly one feature")
        return _extract_geometry(features[0])
    if kind == "Feature":
        return _extract_geometry(payload.get("geometry"))
    if kind is None and "coordinates" in payload:
        return {"type": "Polygon", "coordinates": payload["coordinates"]}
    return payload


def polygon_from_geojson(payload: Any) -> tuple[Point, ...]:
    """Convert a GeoJSON polygon into zone vertices.

    Accepts a Polygon geometry, a Feature or single-feature FeatureCollection
    wrapping one, a single-part MultiPolygon, or a bare ``[[[lng, lat], ...]]``
    ring array. GeoJSON stores (lng, lat); the returned points are swapped
    back to lat/lng and the repeated closing vertex is dropped.

    Raises:
        ValueError: if the payload is not a valid, non-empty polygon
    """
    geometry = _extract_geometry(payload)
    try:
        geom = shape(geometry)
    except (ShapelyError, AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Could not read polygon coordinates: {exc}") from exc

    if geom.geom_type == "MultiPolygon":
        parts = list(geom.geoms)
        if len(parts) != 1:
            raise ValueError("MultiPolygon must contain exactly one polygon")
        geom = parts[0]
    if geom.geom_type != "Polygon" or geom.is_empty:
        raise ValueError(f"Expected a Polygon geometry, got {geom.geom_type}")
    if not geom.is_valid:
        raise ValueError(f"Polygon is not valid: {explain_validity(geom)}")

    coords = list(geom.exterior.coords)
    if len(coords) > 1 and coords[0] == coords[-1]:
        coords = coords[:-1]

    points: list[Point] = []
    for coord in coords:
        lng, lat = float(coord[0]), float(coord[1])
        if not is_valid_coordinate(lat, lng):
            raise ValueError(f"Vertex ({lat}, {lng}) is outside valid latitude/longitude range")
        points.append(Point(lat=lat, lng=lng))

    if len(points) < MIN_POLYGON_VERTICES:
        raise ValueError(f"Polygon must have at least {MIN_POLYGON_VERTICES} distinct vertices")
    return tuple(points)


def zone_to_record(zone: Zone) -> Dict[str, Any]:
    """Serialize a zone into the JSON shape stored on branch rows."""
    record: Dict[str, Any] = {
        "name": zone.name,
        "delivery_fee": zone.delivery_fee,
        "polygon": [{"lat": point.lat, "lng": point.lng} for point in zone.polygon],
    }
    if zone.city:
        record["city"] = zone.city
    return record
