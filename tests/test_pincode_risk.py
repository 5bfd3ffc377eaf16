import threading

import pytest

from storage import StoreError
from trust import (
    InMemoryPincodeRiskStore,
    InvalidPincodeError,
    PincodeRiskTracker,
    RiskCategory,
)

from helpers import FIXED_NOW


class BrokenStore:
    def get(self, pincode):
        raise StoreError("analytics db unreachable")

    def save(self, record):
        raise StoreError("analytics db unreachable")


@pytest.fixture
def tracker():
    with InMemoryPincodeRiskStore() as store:
        yield PincodeRiskTracker(store, clock=lambda: FIXED_NOW)


def test_unknown_pincode_is_neutral(tracker):
    assert tracker.risk_for("560001") == 0.5
    assert tracker.get("560001") is None


def test_first_good_outcome_seeds_low_risk(tracker):
    record = tracker.update("560001")

    assert record.total_orders == 1
    assert record.risk_score == 0.2
    assert record.last_updated == FIXED_NOW
    assert tracker.risk_for("560001") == 0.2


def test_first_bad_outcome_seeds_neutral_risk(tracker):
    assert tracker.update("560002", was_returned=True).risk_score == 0.5
    assert tracker.update("560003", was_cancelled=True).risk_score == 0.5


def test_risk_is_recomputed_from_counts(tracker):
    tracker.update("560001", was_returned=True)
    second = tracker.update("560001")

    assert second.total_orders == 2
    assert second.returned_orders == 1
    # 1/2 returned * 0.6, replacing the cold-start prior
    assert second.risk_score == pytest.approx(0.3)

    third = tracker.update("560001", was_cancelled=True)
    assert third.risk_score == pytest.approx((1 / 3) * 0.6 + (1 / 3) * 0.4)

    fourth = tracker.update("560001")
    # fewer bad outcomes in proportion, so risk goes down
    assert fourth.risk_score < third.risk_score


def test_risk_is_capped_at_one(tracker):
    tracker.update("110001", was_returned=True, was_cancelled=True)
    record = tracker.update("110001", was_returned=True, was_cancelled=True)
    assert record.risk_score == 1.0


@pytest.mark.parametrize("pincode", ["56001", "5600011", "56O001", "", None])
def test_invalid_pincodes_are_rejected(tracker, pincode):
    with pytest.raises(InvalidPincodeError):
        tracker.update(pincode)


@pytest.mark.parametrize("score, category", [
    (0.1, RiskCategory.LOW),
    (0.4, RiskCategory.LOW),
    (0.41, RiskCategory.MEDIUM),
    (0.7, RiskCategory.MEDIUM),
    (0.71, RiskCategory.HIGH),
])
def test_risk_categories(tracker, score, category):
    assert tracker.category_for(score) == category


def test_store_outage_fails_open():
    tracker = PincodeRiskTracker(BrokenStore())

    assert tracker.risk_for("560001") == 0.5
    assert tracker.update("560001", was_returned=True) is None


def test_concurrent_updates_are_not_lost(tracker):
    barrier = threading.Barrier(20)

    def report(index):
        barrier.wait()
        tracker.update("560001", was_returned=index % 2 == 0)

    threads = [threading.Thread(target=report, args=(i,)) for i in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    record = tracker.get("560001")
    assert record.total_orders == 20
    assert record.returned_orders == 10
    assert record.risk_score == pytest.approx(0.3)
