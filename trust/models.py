"""
Purpose: Domain models for buyer trust and location risk.
What it does:
- BuyerRecord: what the buyer profile store keeps per buyer
- BuyerProfile: the scoring input derived from a record at a point in time
- PincodeRisk: rolling outcome counts and risk score for one postal zone
- Enums: TrustCategory, PaymentMethod, RiskCategory
- PaymentOptions: the checkout-facing answer for one buyer
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Tuple


class TrustCategory(str, Enum):
    PLATINUM = "PLATINUM"
    STANDARD = "STANDARD"
    HIGH_RISK = "HIGH_RISK"


class PaymentMethod(str, Enum):
    UPI = "UPI"
    CARD = "CARD"
    NETBANKING = "NETBANKING"
    WALLET = "WALLET"
    COD = "COD"
    COD_WITH_DEPOSIT = "COD_WITH_DEPOSIT"
    BNPL = "BNPL"  # deferred payment


class RiskCategory(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass(frozen=True)
class BuyerProfile:
    total_orders: int = 0
    returned_orders: int = 0
    cancelled_orders: int = 0
    account_age_days: int = 0

    def __post_init__(self):
        for name in ("total_orders", "returned_orders", "cancelled_orders", "account_age_days"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")


@dataclass(frozen=True)
class BuyerRecord:
    buyer_id: str
    created_at: datetime
    total_orders: int = 0
    returned_orders: int = 0
    cancelled_orders: int = 0
    trust_score: float = 0.5
    last_score_update: datetime | None = None

    def account_age_days(self, now: datetime) -> int:
        return max(0, (now - self.created_at).days)

    def to_profile(self, now: datetime) -> BuyerProfile:
        return BuyerProfile(
            total_orders=self.total_orders,
            returned_orders=self.returned_orders,
            cancelled_orders=self.cancelled_orders,
            account_age_days=self.account_age_days(now),
        )


@dataclass(frozen=True)
class PincodeRisk:
    pincode: str
    total_orders: int
    returned_orders: int
    cancelled_orders: int
    risk_score: float
    last_updated: datetime


@dataclass(frozen=True)
class PaymentOptions:
    buyer_id: str
    trust_score: float
    category: TrustCategory
    methods: Tuple[PaymentMethod, ...]
    cod_available: bool
    commitment_fee: Decimal
    message: str
