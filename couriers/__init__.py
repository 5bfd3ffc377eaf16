#Marks couriers as a package.
#Re-exports the courier model and the two registry adapters
#(in-memory, HTTP) so dispatch imports from couriers directly.
#No business logic.

from .models import CourierPartner, CourierStatus
from .registry import (
    CourierRegistryError,
    InMemoryCourierRegistry,
    HttpCourierRegistry,
)

__all__ = [
    "CourierPartner",
    "CourierStatus",
    "CourierRegistryError",
    "InMemoryCourierRegistry",
    "HttpCourierRegistry",
]
