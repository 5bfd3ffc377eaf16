"""
Purpose: Core data models for the delivery partners domain.
What it does:
Defines the structure of a Partner, its vehicle type and account status
without relying on any ORM. Location pings and availability toggles produce
new instances; the dispatch core only ever reads them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from geo import Location


class PartnerType(str, Enum):
    """
    Vehicle class of a partner. Decides which dispatch stage can use them.
    """
    WALKER = "WALKER"
    BIKE = "BIKE"
    EV = "EV"


class PartnerStatus(str, Enum):
    """
    Account status. Only ACTIVE partners (KYC approved) are dispatchable.
    """
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


@dataclass(frozen=True)
class Partner:
    """
    A stateless snapshot of a delivery partner at a point in time.
    """
    id: str
    partner_type: PartnerType
    location: Location | None
    name: str = ""
    available: bool = False
    status: PartnerStatus = PartnerStatus.INACTIVE

    rating: float = 0.0
    total_deliveries: int = 0
    successful_deliveries: int = 0
    last_location_update: datetime | None = None

    def __post_init__(self):
        if not 0.0 <= self.rating <= 5.0:
            raise ValueError(f"Partner {self.id} rating {self.rating} outside [0, 5]")
        if self.total_deliveries < 0:
            raise ValueError(f"Partner {self.id} has negative total_deliveries")
        if not 0 <= self.successful_deliveries <= self.total_deliveries:
            raise ValueError(
                f"Partner {self.id} successful_deliveries must be within [0, total_deliveries]"
            )

    @property
    def is_dispatchable(self) -> bool:
        return self.available and self.status == PartnerStatus.ACTIVE and self.location is not None

    @property
    def success_rate(self) -> float:
        return self.successful_deliveries / max(self.total_deliveries, 1)

    @classmethod
    def new(
        cls,
        partner_id: str,
        partner_type: str | PartnerType,
        lat: float | None = None,
        lon: float | None = None,
        *,
        name: str = "",
        available: bool = True,
        status: str | PartnerStatus = PartnerStatus.ACTIVE,
        rating: float = 0.0,
        total_deliveries: int = 0,
        successful_deliveries: int = 0,
    ) -> Partner:
        if isinstance(partner_type, str):
            partner_type = PartnerType(partner_type)
        if isinstance(status, str):
            status = PartnerStatus(status)

        location = None
        if lat is not None and lon is not None:
            location = Location(latitude=lat, longitude=lon)

        return cls(
            id=partner_id,
            partner_type=partner_type,
            location=location,
            name=name or partner_id,
            available=available,
            status=status,
            rating=rating,
            total_deliveries=total_deliveries,
            successful_deliveries=successful_deliveries,
        )
