"""National courier networks used by the last dispatch stage."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CourierStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


@dataclass(frozen=True)
class CourierPartner:
    """
    A courier company. Couriers are not geofenced: the cascade picks them
    purely on historical success rate.
    """
    id: str
    display_name: str
    status: CourierStatus = CourierStatus.ACTIVE
    success_rate: float = 0.0

    def __post_init__(self):
        if not 0.0 <= self.success_rate <= 1.0:
            raise ValueError(f"Courier {self.id} success_rate {self.success_rate} outside [0, 1]")

    @classmethod
    def from_dict(cls, data: dict) -> CourierPartner:
        return cls(
            id=str(data["id"]),
            display_name=str(data.get("displayName") or data.get("display_name") or data["id"]),
            status=CourierStatus(str(data.get("status", "ACTIVE")).upper()),
            success_rate=float(data.get("successRate", data.get("success_rate", 0.0))),
        )
