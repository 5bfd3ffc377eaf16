import threading
from decimal import Decimal

import pandas as pd
import pytest

from geo import Location
from partners import (
    InMemoryPartnerDirectory,
    Partner,
    PartnerStatus,
    PartnerType,
    estimate_earnings,
    partners_from_frame,
)
from storage import RecordNotFoundError, StoreClosedError

from helpers import FIXED_NOW


def test_claim_is_exclusive(directory):
    directory.add(Partner.new("w1", PartnerType.WALKER, 12.90, 77.60))

    assert directory.claim("w1", "order-a") is True
    assert directory.claim("w1", "order-b") is False
    assert directory.get("w1").available is False
    assert directory.claimed_by("w1") == "order-a"


def test_release_only_by_claiming_order(directory):
    directory.add(Partner.new("w1", PartnerType.WALKER, 12.90, 77.60))
    directory.claim("w1", "order-a")

    assert directory.release("w1", "order-b") is False
    assert directory.get("w1").available is False

    assert directory.release("w1", "order-a") is True
    assert directory.get("w1").available is True
    assert directory.claimed_by("w1") is None


def test_cannot_claim_inactive_or_offline_partner(directory):
    directory.add(Partner.new("inactive", PartnerType.BIKE, 12.90, 77.60, status=PartnerStatus.INACTIVE))
    directory.add(Partner.new("offline", PartnerType.BIKE, 12.90, 77.60, available=False))

    assert directory.claim("inactive", "o") is False
    assert directory.claim("offline", "o") is False
    assert directory.claim("missing", "o") is False


def test_concurrent_claims_have_exactly_one_winner(directory):
    directory.add(Partner.new("w1", PartnerType.WALKER, 12.90, 77.60))
    winners = []
    barrier = threading.Barrier(20)

    def worker(index):
        barrier.wait()
        if directory.claim("w1", f"order-{index}"):
            winners.append(index)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(winners) == 1


def test_location_ping_and_availability_toggle(directory):
    directory.add(Partner.new("b1", PartnerType.BIKE))

    updated = directory.update_location("b1", Location(12.95, 77.61))
    assert updated.location == Location(12.95, 77.61)
    assert updated.last_location_update == FIXED_NOW

    directory.claim("b1", "order-a")
    directory.set_availability("b1", False)
    assert directory.claimed_by("b1") is None

    assert directory.set_availability("b1", True).available is True


def test_unknown_partner_raises(directory):
    with pytest.raises(RecordNotFoundError):
        directory.get("nope")
    with pytest.raises(RecordNotFoundError):
        directory.update_location("nope", Location(0, 0))


def test_closed_directory_rejects_use():
    directory = InMemoryPartnerDirectory()
    with pytest.raises(StoreClosedError):
        directory.add(Partner.new("w1", PartnerType.WALKER, 12.90, 77.60))

    directory.open()
    directory.add(Partner.new("w1", PartnerType.WALKER, 12.90, 77.60))
    directory.close()
    with pytest.raises(StoreClosedError):
        directory.list_partners()


def test_list_partners_filters_by_type(directory):
    directory.add(Partner.new("w1", PartnerType.WALKER, 12.90, 77.60))
    directory.add(Partner.new("e1", PartnerType.EV, 12.90, 77.60))

    assert {p.id for p in directory.list_partners()} == {"w1", "e1"}
    assert [p.id for p in directory.list_partners([PartnerType.EV])] == ["e1"]


def test_partner_rejects_inconsistent_delivery_counts():
    with pytest.raises(ValueError):
        Partner.new("x", PartnerType.WALKER, total_deliveries=10, successful_deliveries=11)
    with pytest.raises(ValueError):
        Partner.new("x", PartnerType.WALKER, rating=5.5)


def test_partners_from_frame():
    frame = pd.DataFrame([
        {"partner_id": "P-1", "name": "Asha", "partner_type": "walker", "lat": 12.9, "lon": 77.6,
         "available": True, "status": "ACTIVE", "rating": 4.5,
         "total_deliveries": 100, "successful_deliveries": 90},
        {"partner_id": "P-2", "name": None, "partner_type": "BIKE", "lat": None, "lon": None,
         "available": "false", "status": "inactive", "rating": 3.0,
         "total_deliveries": 0, "successful_deliveries": 0},
    ])

    first, second = partners_from_frame(frame)

    assert first.partner_type == PartnerType.WALKER
    assert first.location == Location(12.9, 77.6)
    assert first.name == "Asha"
    assert first.success_rate == pytest.approx(0.9)

    assert second.location is None
    assert second.available is False
    assert second.status == PartnerStatus.INACTIVE
    assert second.name == "P-2"


def test_partners_from_frame_requires_core_columns():
    with pytest.raises(ValueError, match="lat"):
        partners_from_frame(pd.DataFrame([{"partner_id": "P-1", "partner_type": "WALKER", "lon": 1.0}]))


@pytest.mark.parametrize("order_total, expected", [
    (0, Decimal("0.00")),
    (500, Decimal("25.00")),
    (1999.99, Decimal("100.00")),
    (5000, Decimal("100.00")),
])
def test_estimate_earnings(order_total, expected):
    assert estimate_earnings(order_total) == expected


def test_going_online_does_not_break_a_claim(directory):
    directory.add(Partner.new("w1", PartnerType.WALKER, 12.90, 77.60))
    directory.claim("w1", "order-a")

    # partner app re-sends "online" while the offer is pending
    directory.set_availability("w1", True)

    assert directory.get("w1").available is False
    assert directory.claim("w1", "order-b") is False
    assert directory.claimed_by("w1") == "order-a"

    assert directory.release("w1", "order-a") is True
    assert directory.claim("w1", "order-b") is True
