"""Pydantic request/response models for coverage endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from ..models.domain import CatalogEntry, CoverageDecision, Covered, DeliveryUnavailable

BranchIdModel = Union[int, str]


class CoverageRequest(BaseModel):
    # Coordinates are validated by the route so that numeric strings are accepted
    # and every failure maps to the same client error.
    lat: Any = Field(default=None, description="Latitude in degrees (number or numeric string).")
    lng: Any = Field(default=None, description="Longitude in degrees (number or numeric string).")


class CoverageResponse(BaseModel):
    covered: bool
    delivery_unavailable: Optional[bool] = None
    branch_id: Optional[BranchIdModel] = None
    branch_name: Optional[str] = None
    zone_name: Optional[str] = None
    delivery_fee: Optional[float] = None
    opening_time: Optional[str] = None
    closing_time: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_decision(cls, decision: CoverageDecision) -> "CoverageResponse":
        if isinstance(decision, Covered):
            return cls(covered=True, **asdict(decision))
        if isinstance(decision, DeliveryUnavailable):
            return cls(covered=False, delivery_unavailable=True, **asdict(decision))
        return cls(covered=False, message=decision.message)


class ZoneCatalogEntryModel(BaseModel):
    name: str
    branch_id: BranchIdModel
    branch_name: str
    delivery_fee: float
    group: str
    is_available: bool
    opening_time: Optional[str] = None
    closing_time: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> "ZoneCatalogEntryModel":
        return cls(**asdict(entry))


class PointModel(BaseModel):
    lat: float
    lng: float


class ZoneImportRequest(BaseModel):
    geojson: Any = Field(..., description="GeoJSON Polygon, Feature, or [[[lng, lat], ...]] ring array.")
    name: Optional[str] = Field(default=None, description="Zone display name.")
    delivery_fee: float = Field(default=0.0, ge=0.0, description="Delivery fee charged for this zone.")
    city: Optional[str] = Field(default=None, description="Optional area tag used to group the zone.")


class StoredZoneModel(BaseModel):
    name: str
    delivery_fee: float
    polygon: list[PointModel]
    city: Optional[str] = None
