"""
Purpose: Coordinates and great-circle distance.
What it does:
- Location: an immutable (latitude, longitude) pair, range checked.
- distance_km: haversine distance on a spherical Earth of radius 6371 km.

Rule: Pure functions only. No directory lookups, no I/O.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

EARTH_RADIUS_KM = 6371.0


class InvalidLocationError(ValueError):
    """Raised when a coordinate is outside the valid lat/lon range."""
    pass


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidLocationError(f"latitude {self.latitude} outside [-90, 90]")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidLocationError(f"longitude {self.longitude} outside [-180, 180]")

    @classmethod
    def from_pair(cls, lat_lon: Tuple[float, float]) -> Location:
        latitude, longitude = lat_lon
        return cls(latitude=float(latitude), longitude=float(longitude))

    def as_pair(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)


def distance_km(a: Location, b: Location) -> float:
    """Haversine distance between two locations in kilometres."""

    phi1, phi2 = math.radians(a.latitude), math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # clamp: rounding can push h a hair above 1 for antipodal points
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
