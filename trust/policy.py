"""
Purpose: Central configuration for buyer trust scoring and payment gating.
What it does:

Stores all tunable weights and thresholds of the risk engine:

score = 0.6 * delivery_success - 0.3 * pincode_risk + 0.1 * maturity - 0.05 * cancels
PLATINUM > 0.8 >= STANDARD > 0.5 >= HIGH_RISK
COD commitment fee for STANDARD buyers: 29

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class TrustPolicy:
    """
    Central configuration for the buyer trust score and pincode risk.
    """

    # --- Buyer trust score weights ---
    delivery_success_weight: float = 0.6
    pincode_risk_weight: float = 0.3
    account_maturity_weight: float = 0.1
    cancellation_penalty: float = 0.05

    # Account age at which maturity saturates.
    maturity_horizon_days: int = 365

    # Delivery success assumed for a buyer with no orders yet.
    new_buyer_delivery_success: float = 0.5

    # Score returned when a buyer is unknown or the store is down.
    default_trust_score: float = 0.5

    # --- Payment bands ---
    platinum_threshold: float = 0.8
    standard_threshold: float = 0.5
    commitment_fee: Decimal = Decimal("29")

    # --- Pincode risk ---
    unknown_pincode_risk: float = 0.5
    # Cold-start prior for a pincode's very first outcome.
    first_outcome_bad_risk: float = 0.5
    first_outcome_good_risk: float = 0.2
    return_rate_weight: float = 0.6
    cancel_rate_weight: float = 0.4
    high_risk_threshold: float = 0.7
    medium_risk_threshold: float = 0.4

    # --- Bot detection ---
    # Checkouts faster than this are flagged for review.
    min_checkout_seconds: float = 30

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if not 0 <= self.standard_threshold < self.platinum_threshold <= 1:
            raise ValueError("need 0 <= standard_threshold < platinum_threshold <= 1")

        if not 0 <= self.medium_risk_threshold < self.high_risk_threshold <= 1:
            raise ValueError("need 0 <= medium_risk_threshold < high_risk_threshold <= 1")

        if self.maturity_horizon_days <= 0:
            raise ValueError("maturity_horizon_days must be > 0")

        if self.commitment_fee < 0:
            raise ValueError("commitment_fee must be >= 0")

        for name in ("unknown_pincode_risk", "first_outcome_bad_risk", "first_outcome_good_risk",
                     "default_trust_score", "new_buyer_delivery_success"):
            if not 0 <= getattr(self, name) <= 1:
                raise ValueError(f"{name} must be within [0, 1]")

        weights = (
            self.delivery_success_weight,
            self.pincode_risk_weight,
            self.account_maturity_weight,
            self.cancellation_penalty,
            self.return_rate_weight,
            self.cancel_rate_weight,
        )
        if any(weight < 0 for weight in weights):
            raise ValueError("weights must be >= 0")


def default_trust_policy() -> TrustPolicy:
    """
    Convenience factory for the default policy.
    """
    p = TrustPolicy()
    p.validate()
    return p
