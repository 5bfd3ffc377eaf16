"""
Purpose: Buyer Trust Score (BTS) calculation.
What it does:
Blends order-completion history, location risk and account maturity into a
score clamped to [0, 1]:

delivery_success = (total - returned) / total, or 0.5 for a new buyer
raw = 0.6 * delivery_success - 0.3 * pincode_risk + 0.1 * maturity - 0.05 * cancelled
score = clamp(raw, 0, 1)

Rule: Pure calculation. Reading profiles and risk happens in the service.
"""

from __future__ import annotations

from typing import Optional

from .models import BuyerProfile, TrustCategory
from .policy import TrustPolicy, default_trust_policy


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(value, high))


class TrustScoreCalculator:

    def __init__(self, policy: Optional[TrustPolicy] = None):
        self.policy = policy or default_trust_policy()

    def delivery_success(self, profile: BuyerProfile) -> float:
        if profile.total_orders > 0:
            return (profile.total_orders - profile.returned_orders) / profile.total_orders
        return self.policy.new_buyer_delivery_success

    def account_maturity(self, profile: BuyerProfile) -> float:
        return min(profile.account_age_days / self.policy.maturity_horizon_days, 1.0)

    def score(self, profile: BuyerProfile, pincode_risk: float) -> float:
        if not 0.0 <= pincode_risk <= 1.0:
            raise ValueError(f"pincode_risk {pincode_risk} outside [0, 1]")

        policy = self.policy
        raw = (
            self.delivery_success(profile) * policy.delivery_success_weight
            - pincode_risk * policy.pincode_risk_weight
            + self.account_maturity(profile) * policy.account_maturity_weight
            - profile.cancelled_orders * policy.cancellation_penalty
        )
        return clamp(raw)

    def category(self, score: float) -> TrustCategory:
        return trust_category(score, self.policy)


def trust_category(score: float, policy: Optional[TrustPolicy] = None) -> TrustCategory:
    policy = policy or default_trust_policy()
    if score > policy.platinum_threshold:
        return TrustCategory.PLATINUM
    if score > policy.standard_threshold:
        return TrustCategory.STANDARD
    return TrustCategory.HIGH_RISK
