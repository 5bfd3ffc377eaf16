"""
Purpose: Rolling, outcome-driven risk score per postal zone.
What it does:
- update(): count one order outcome for a pincode and recompute its score
- risk_for(): current score, 0.5 for unknown pincodes
- category_for(): LOW / MEDIUM / HIGH bands

The score is recomputed from raw counts on every update, never blended with
the previous value, so it can move in either direction as orders arrive and
is noisy for pincodes with few orders.

Store failures never block checkout: reads fall back to the unknown-pincode
risk and failed writes are logged and skipped.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Callable, Optional

from storage import KeyedLocks, StoreError

from .models import PincodeRisk, RiskCategory
from .policy import TrustPolicy, default_trust_policy

logger = logging.getLogger(__name__)

PINCODE_PATTERN = re.compile(r"[0-9]{6}")


class InvalidPincodeError(ValueError):
    """Raised when a pincode is not exactly six digits."""
    pass


def validate_pincode(pincode: str) -> str:
    if not isinstance(pincode, str) or not PINCODE_PATTERN.fullmatch(pincode):
        raise InvalidPincodeError(f"Invalid pincode {pincode!r}: expected 6 digits")
    return pincode


class PincodeRiskTracker:

    def __init__(
        self,
        store,
        policy: Optional[TrustPolicy] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.policy = policy or default_trust_policy()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._locks = KeyedLocks()

    def get(self, pincode: str) -> Optional[PincodeRisk]:
        validate_pincode(pincode)
        return self.store.get(pincode)

    def risk_for(self, pincode: str) -> float:
        validate_pincode(pincode)
        try:
            record = self.store.get(pincode)
        except StoreError as exc:
            logger.warning(
                f"Pincode risk store unavailable, using default risk "
                f"{self.policy.unknown_pincode_risk} for {pincode}: {exc}"
            )
            return self.policy.unknown_pincode_risk

        if record is None:
            return self.policy.unknown_pincode_risk
        return record.risk_score

    def update(self, pincode: str, was_returned: bool = False, was_cancelled: bool = False) -> Optional[PincodeRisk]:
        """
        Returns the stored record, or None when the store could not be
        read or written (logged, not raised).
        """
        validate_pincode(pincode)

        with self._locks.hold(pincode):
            try:
                existing = self.store.get(pincode)
            except StoreError as exc:
                logger.warning(f"Skipping risk update for {pincode}, store read failed: {exc}")
                return None

            record = self._next_record(pincode, existing, was_returned, was_cancelled)

            try:
                self.store.save(record)
            except StoreError as exc:
                logger.warning(f"Skipping risk update for {pincode}, store write failed: {exc}")
                return None

        logger.debug(f"Pincode {pincode} risk now {record.risk_score:.3f} over {record.total_orders} order(s)")
        return record

    def _next_record(
        self,
        pincode: str,
        existing: Optional[PincodeRisk],
        was_returned: bool,
        was_cancelled: bool,
    ) -> PincodeRisk:
        policy = self.policy
        now = self._clock()

        if existing is None:
            prior = policy.first_outcome_bad_risk if (was_returned or was_cancelled) else policy.first_outcome_good_risk
            return PincodeRisk(
                pincode=pincode,
                total_orders=1,
                returned_orders=1 if was_returned else 0,
                cancelled_orders=1 if was_cancelled else 0,
                risk_score=prior,
                last_updated=now,
            )

        total_orders = existing.total_orders + 1
        returned_orders = existing.returned_orders + (1 if was_returned else 0)
        cancelled_orders = existing.cancelled_orders + (1 if was_cancelled else 0)

        return_rate = returned_orders / total_orders
        cancel_rate = cancelled_orders / total_orders
        risk_score = min(return_rate * policy.return_rate_weight + cancel_rate * policy.cancel_rate_weight, 1.0)

        return PincodeRisk(
            pincode=pincode,
            total_orders=total_orders,
            returned_orders=returned_orders,
            cancelled_orders=cancelled_orders,
            risk_score=risk_score,
            last_updated=now,
        )

    def category_for(self, risk_score: float) -> RiskCategory:
        if risk_score > self.policy.high_risk_threshold:
            return RiskCategory.HIGH
        if risk_score > self.policy.medium_risk_threshold:
            return RiskCategory.MEDIUM
        return RiskCategory.LOW
