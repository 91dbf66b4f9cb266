"""Coverage check and zone catalog endpoints."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Sequence

from fastapi import APIRouter, Depends, HTTPException, status

from ...data.branch_repository import SnapshotProvider, get_snapshot_provider
from ...data.snapshot import parse_query_point
from ...errors import InvalidCoordinateError, SnapshotUnavailableError
from ...models.domain import Branch, Zone
from ...schemas.coverage import (
    CoverageRequest,
    CoverageResponse,
    StoredZoneModel,
    ZoneCatalogEntryModel,
    ZoneImportRequest,
)
from ...services.coverage import build_catalog, resolve
from ...services.export import polygon_from_geojson, zone_to_record, zones_to_feature_collection

logger = logging.getLogger(__name__)

INVALID_COORDINATES_DETAIL = "Invalid coordinates provided"
BRANCH_FETCH_FAILED_DETAIL = "Failed to fetch branch data"
ZONE_FETCH_FAILED_DETAIL = "Failed to fetch zones"

router = APIRouter(prefix="/coverage", tags=["coverage"])
legacy_router = APIRouter(prefix="/geo", tags=["coverage"], include_in_schema=False)


def _load_snapshot(provider: SnapshotProvider, detail: str) -> Sequence[Branch]:
    try:
        return provider.fetch_active_branches()
    except SnapshotUnavailableError as exc:
        logger.error(f"Branch snapshot unavailable: {exc}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail) from exc


@router.post(
    "/check",
    response_model=CoverageResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def check_coverage(
    payload: CoverageRequest,
    provider: SnapshotProvider = Depends(get_snapshot_provider),
) -> CoverageResponse:
    """Decide which branch, if any, delivers to the given coordinate."""
    try:
        point = parse_query_point(payload.lat, payload.lng)
    except InvalidCoordinateError as exc:
        logger.info(f"Rejected coverage check: {exc}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_COORDINATES_DETAIL) from exc

    branches = _load_snapshot(provider, BRANCH_FETCH_FAILED_DETAIL)
    decision = resolve(branches, point)
    logger.debug(f"Coverage for ({point.lat}, {point.lng}): {type(decision).__name__}")
    return CoverageResponse.from_decision(decision)


@router.get("/zones", response_model=List[ZoneCatalogEntryModel], status_code=status.HTTP_200_OK)
def list_zones(provider: SnapshotProvider = Depends(get_snapshot_provider)) -> List[ZoneCatalogEntryModel]:
    """Flattened list of every zone across active branches, sorted by name."""
    branches = _load_snapshot(provider, ZONE_FETCH_FAILED_DETAIL)
    catalog = build_catalog(branches)
    logger.debug(f"Built zone catalog with {len(catalog)} entries from {len(branches)} branch(es)")
    return [ZoneCatalogEntryModel.from_entry(entry) for entry in catalog]


@router.get("/zones/geojson", status_code=status.HTTP_200_OK)
def list_zones_geojson(provider: SnapshotProvider = Depends(get_snapshot_provider)) -> dict:
    """Zone polygons as a GeoJSON FeatureCollection for map overlays."""
    branches = _load_snapshot(provider, ZONE_FETCH_FAILED_DETAIL)
    return zones_to_feature_collection(branches)


@router.post("/zones/import", response_model=StoredZoneModel, response_model_exclude_none=True)
def import_zone(payload: ZoneImportRequest) -> StoredZoneModel:
    """Convert a GeoJSON polygon into the zone object stored on a branch row."""
    try:
        polygon = polygon_from_geojson(payload.geojson)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    name = (payload.name or "").strip()
    if not name:
        name = f"Imported Zone {datetime.now(timezone.utc):%H:%M:%S}"
    city = (payload.city or "").strip() or None
    zone = Zone(name=name, delivery_fee=payload.delivery_fee, polygon=polygon, city=city)
    return StoredZoneModel(**zone_to_record(zone))


legacy_router.add_api_route(
    "/check-coverage",
    check_coverage,
    methods=["POST"],
    response_model=CoverageResponse,
    response_model_exclude_none=True,
)
legacy_router.add_api_route(
    "/zones",
    list_zones,
    methods=["GET"],
    response_model=List[ZoneCatalogEntryModel],
)
