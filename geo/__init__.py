#Marks geo as a package.
#Re-exports the coordinate type and the great-circle distance so other
#modules import from geo without knowing internal file names.
#No business logic.

from .distance import Location, InvalidLocationError, distance_km, EARTH_RADIUS_KM

__all__ = [
    "Location",
    "InvalidLocationError",
    "distance_km",
    "EARTH_RADIUS_KM",
]
