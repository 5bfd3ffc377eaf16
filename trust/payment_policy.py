"""
Purpose: Map a trust score to what the buyer may pay with.
What it does:

| Category  | Methods                                  | COD fee |
| PLATINUM  | everything incl. COD and BNPL            | 0       |
| STANDARD  | prepaid + COD_WITH_DEPOSIT (no plain COD) | 29      |
| HIGH_RISK | prepaid only                             | 0       |
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, FrozenSet, Optional

from .models import PaymentMethod, PaymentOptions, TrustCategory
from .policy import TrustPolicy, default_trust_policy
from .scoring import trust_category

PREPAID = frozenset({
    PaymentMethod.UPI,
    PaymentMethod.CARD,
    PaymentMethod.NETBANKING,
    PaymentMethod.WALLET,
})

METHODS_BY_CATEGORY: Dict[TrustCategory, FrozenSet[PaymentMethod]] = {
    TrustCategory.PLATINUM: PREPAID | {PaymentMethod.COD, PaymentMethod.BNPL},
    TrustCategory.STANDARD: PREPAID | {PaymentMethod.COD_WITH_DEPOSIT},
    TrustCategory.HIGH_RISK: PREPAID,
}

COD_METHODS = frozenset({PaymentMethod.COD, PaymentMethod.COD_WITH_DEPOSIT})


class PaymentPolicyResolver:

    def __init__(self, policy: Optional[TrustPolicy] = None):
        self.policy = policy or default_trust_policy()

    def category(self, score: float) -> TrustCategory:
        return trust_category(score, self.policy)

    def methods(self, score: float) -> FrozenSet[PaymentMethod]:
        return METHODS_BY_CATEGORY[self.category(score)]

    def commitment_fee(self, score: float) -> Decimal:
        fees = {
            TrustCategory.PLATINUM: Decimal("0"),
            TrustCategory.STANDARD: self.policy.commitment_fee,
            # COD is not offered at all
            TrustCategory.HIGH_RISK: Decimal("0"),
        }
        return fees[self.category(score)]

    def cod_available(self, score: float) -> bool:
        return bool(self.methods(score) & COD_METHODS)

    def options_for(self, buyer_id: str, score: float) -> PaymentOptions:
        category = self.category(score)
        methods = self.methods(score)
        fee = self.commitment_fee(score)

        if fee > 0:
            message = f"COD available with {fee} commitment fee"
        elif category == TrustCategory.PLATINUM:
            message = "All payment methods available"
        else:
            message = "COD not available for your account"

        return PaymentOptions(
            buyer_id=buyer_id,
            trust_score=score,
            category=category,
            # stable order for display: enum declaration order
            methods=tuple(method for method in PaymentMethod if method in methods),
            cod_available=bool(methods & COD_METHODS),
            commitment_fee=fee,
            message=message,
        )
