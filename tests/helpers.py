import math
from datetime import datetime, timezone

from geo import EARTH_RADIUS_KM, Location

FIXED_NOW = datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)

# km per degree of latitude along a meridian (exact under haversine)
KM_PER_DEGREE_LAT = EARTH_RADIUS_KM * math.pi / 180


def north_of(origin: Location, km: float) -> Location:
    return Location(origin.latitude + km / KM_PER_DEGREE_LAT, origin.longitude)


def south_of(origin: Location, km: float) -> Location:
    return Location(origin.latitude - km / KM_PER_DEGREE_LAT, origin.longitude)
