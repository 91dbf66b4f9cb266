"""Domain models for branches, delivery zones and coverage decisions."""

from dataclasses import dataclass
from typing import Any, Optional, Union

NOT_COVERED_MESSAGE = "Location is outside all delivery zones."
DELIVERY_UNAVAILABLE_MESSAGE = "Delivery temporarily unavailable for this branch"

BranchId = Union[int, str]


def delivery_flag_enabled(value: Any) -> bool:
    """Delivery is opt-out: only ``False`` or the string ``"false"`` disable it."""

    return value is not False and value != "false"


@dataclass(frozen=True, slots=True)
class Point:
    """Geographic coordinate in degrees."""

    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class Zone:
    """Polygonal delivery area owned by a branch.

    The polygon is implicitly closed: the last vertex connects back to the first.
    """

    name: str
    delivery_fee: float
    polygon: tuple[Point, ...]
    city: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Branch:
    """Snapshot of a physical service location and its ordered zones."""

    id: BranchId
    name: str
    zones: tuple[Zone, ...] = ()
    is_active: bool = True
    is_delivery_available: Any = True
    opening_time: Optional[str] = None
    closing_time: Optional[str] = None

    @property
    def delivery_enabled(self) -> bool:
        return delivery_flag_enabled(self.is_delivery_available)


@dataclass(frozen=True, slots=True)
class Covered:
    branch_id: BranchId
    branch_name: str
    zone_name: str
    delivery_fee: float
    opening_time: Optional[str] = None
    closing_time: Optional[str] = None


@dataclass(frozen=True, slots=True)
class DeliveryUnavailable:
    """A zone matched but the owning branch is not accepting deliveries."""

    branch_id: BranchId
    branch_name: str
    zone_name: str
    opening_time: Optional[str] = None
    closing_time: Optional[str] = None
    message: str = DELIVERY_UNAVAILABLE_MESSAGE


@dataclass(frozen=True, slots=True)
class NotCovered:
    message: str = NOT_COVERED_MESSAGE


CoverageDecision = Union[Covered, DeliveryUnavailable, NotCovered]


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """One selectable zone in the flattened zone catalog."""

    name: str
    branch_id: BranchId
    branch_name: str
    delivery_fee: float
    group: str
    is_available: bool
    opening_time: Optional[str] = None
    closing_time: Optional[str] = None
