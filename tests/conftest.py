import pytest

from couriers import CourierPartner, InMemoryCourierRegistry
from dispatch import DispatchCascade, InMemoryDispatchLedger
from geo import Location
from partners import InMemoryPartnerDirectory

from helpers import FIXED_NOW, north_of


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def vendor_location():
    return Location(12.90, 77.60)


@pytest.fixture
def customer_location(vendor_location):
    # customer 1 km north of the vendor
    return north_of(vendor_location, 1.0)


@pytest.fixture
def directory(clock):
    with InMemoryPartnerDirectory(clock=clock) as store:
        yield store


@pytest.fixture
def ledger():
    with InMemoryDispatchLedger() as store:
        yield store


@pytest.fixture
def courier_registry():
    with InMemoryCourierRegistry([
        CourierPartner("C-2", "Ecom Express", success_rate=0.91),
        CourierPartner("C-1", "Blue Dart", success_rate=0.97),
    ]) as store:
        yield store


@pytest.fixture
def empty_courier_registry():
    with InMemoryCourierRegistry() as store:
        yield store


@pytest.fixture
def cascade(directory, courier_registry, ledger, clock):
    return DispatchCascade(directory, courier_registry, ledger, clock=clock)
