"""
Purpose: Buyer trust service (the risk engine entry point).
What it does:
- refresh_trust_score: recompute and persist one buyer's score
- record_order_placed / record_order_outcome: feed order history back in
- payment_options: what the checkout may offer this buyer
- is_suspicious_checkout: flag checkouts too fast for a human

Every read-modify-write on a buyer runs under that buyer's lock. Analytics
store outages degrade to safe defaults and are logged; checkout is never
blocked by them.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Optional

from storage import KeyedLocks, RecordNotFoundError, StoreError

from .models import BuyerRecord, PaymentOptions
from .payment_policy import PaymentPolicyResolver
from .pincode_risk import PincodeRiskTracker, validate_pincode
from .policy import TrustPolicy, default_trust_policy
from .scoring import TrustScoreCalculator

logger = logging.getLogger(__name__)


class BuyerTrustService:

    def __init__(
        self,
        profiles,
        pincode_tracker: PincodeRiskTracker,
        policy: Optional[TrustPolicy] = None,
        calculator: Optional[TrustScoreCalculator] = None,
        resolver: Optional[PaymentPolicyResolver] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.profiles = profiles
        self.pincode_tracker = pincode_tracker
        self.policy = policy or default_trust_policy()
        self.calculator = calculator or TrustScoreCalculator(self.policy)
        self.resolver = resolver or PaymentPolicyResolver(self.policy)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._locks = KeyedLocks()

    def register_buyer(self, buyer_id: str, created_at: Optional[datetime] = None) -> BuyerRecord:
        """Create a neutral record. An already known buyer keeps their history."""
        with self._locks.hold(buyer_id):
            existing = self.profiles.get(buyer_id)
            if existing is not None:
                return existing
            record = BuyerRecord(
                buyer_id=buyer_id,
                created_at=created_at or self._clock(),
                trust_score=self.policy.default_trust_score,
            )
            self.profiles.save(record)
        return record

    def refresh_trust_score(self, buyer_id: str, pincode: str) -> float:
        validate_pincode(pincode)
        with self._locks.hold(buyer_id):
            return self._refresh(buyer_id, pincode)

    def record_order_placed(self, buyer_id: str) -> BuyerRecord:
        with self._locks.hold(buyer_id):
            record = self._require(buyer_id)
            updated = replace(record, total_orders=record.total_orders + 1)
            self.profiles.save(updated)
            return updated

    def record_order_outcome(
        self,
        buyer_id: str,
        pincode: str,
        was_returned: bool = False,
        was_cancelled: bool = False,
    ) -> float:
        """
        Count a returned / cancelled order against the buyer and the
        destination pincode, then rescore the buyer. Returns the new score.
        """
        validate_pincode(pincode)

        with self._locks.hold(buyer_id):
            try:
                record = self.profiles.get(buyer_id)
            except StoreError as exc:
                logger.warning(f"Buyer store unavailable, outcome for {buyer_id} not counted: {exc}")
                self.pincode_tracker.update(pincode, was_returned=was_returned, was_cancelled=was_cancelled)
                return self.policy.default_trust_score

            if record is None:
                raise RecordNotFoundError(f"Buyer {buyer_id} not found")

            returned_orders = record.returned_orders + (1 if was_returned else 0)
            cancelled_orders = record.cancelled_orders + (1 if was_cancelled else 0)
            updated = replace(
                record,
                returned_orders=returned_orders,
                cancelled_orders=cancelled_orders,
                # an outcome always belongs to an order, even one placed before tracking
                total_orders=max(record.total_orders, returned_orders, cancelled_orders),
            )
            try:
                self.profiles.save(updated)
            except StoreError as exc:
                logger.warning(f"Buyer store write failed, outcome for {buyer_id} not counted: {exc}")

            self.pincode_tracker.update(pincode, was_returned=was_returned, was_cancelled=was_cancelled)
            return self._refresh(buyer_id, pincode)

    def trust_score(self, buyer_id: str) -> float:
        """Last persisted score, without recomputing."""
        try:
            record = self.profiles.get(buyer_id)
        except StoreError as exc:
            logger.warning(f"Buyer store unavailable, using default score for {buyer_id}: {exc}")
            return self.policy.default_trust_score
        if record is None:
            raise RecordNotFoundError(f"Buyer {buyer_id} not found")
        return record.trust_score

    def payment_options(self, buyer_id: str) -> PaymentOptions:
        return self.resolver.options_for(buyer_id, self.trust_score(buyer_id))

    def is_suspicious_checkout(self, checkout_seconds: float) -> bool:
        return checkout_seconds < self.policy.min_checkout_seconds

    def _require(self, buyer_id: str) -> BuyerRecord:
        record = self.profiles.get(buyer_id)
        if record is None:
            raise RecordNotFoundError(f"Buyer {buyer_id} not found")
        return record

    def _refresh(self, buyer_id: str, pincode: str) -> float:
        try:
            record = self.profiles.get(buyer_id)
        except StoreError as exc:
            logger.warning(f"Buyer store unavailable, using default score for {buyer_id}: {exc}")
            return self.policy.default_trust_score

        if record is None:
            return self.policy.default_trust_score

        now = self._clock()
        pincode_risk = self.pincode_tracker.risk_for(pincode)
        score = self.calculator.score(record.to_profile(now), pincode_risk)

        try:
            self.profiles.save(replace(record, trust_score=score, last_score_update=now))
        except StoreError as exc:
            logger.warning(f"Buyer store write failed, keeping previous score for {buyer_id}: {exc}")
            return record.trust_score

        logger.info(f"Buyer {buyer_id} trust score {score:.3f} ({self.calculator.category(score).value})")
        return score
