"""
Buyer trust / risk engine package.

Public API:
- Domain models: BuyerProfile, BuyerRecord, PincodeRisk, PaymentOptions,
  TrustCategory, PaymentMethod, RiskCategory
- Scoring: TrustScoreCalculator, trust_category
- Payment gating: PaymentPolicyResolver
- Location risk: PincodeRiskTracker, InvalidPincodeError
- Stores: InMemoryBuyerProfileStore, InMemoryPincodeRiskStore
- Entry point: BuyerTrustService
"""
from .models import (
    BuyerProfile,
    BuyerRecord,
    PincodeRisk,
    PaymentOptions,
    TrustCategory,
    PaymentMethod,
    RiskCategory,
)
from .policy import TrustPolicy, default_trust_policy
from .scoring import TrustScoreCalculator, trust_category
from .payment_policy import PaymentPolicyResolver
from .pincode_risk import PincodeRiskTracker, InvalidPincodeError, validate_pincode
from .stores import InMemoryBuyerProfileStore, InMemoryPincodeRiskStore
from .service import BuyerTrustService

__all__ = [
    "BuyerProfile",
    "BuyerRecord",
    "PincodeRisk",
    "PaymentOptions",
    "TrustCategory",
    "PaymentMethod",
    "RiskCategory",
    "TrustPolicy",
    "default_trust_policy",
    "TrustScoreCalculator",
    "trust_category",
    "PaymentPolicyResolver",
    "PincodeRiskTracker",
    "InvalidPincodeError",
    "validate_pincode",
    "InMemoryBuyerProfileStore",
    "InMemoryPincodeRiskStore",
    "BuyerTrustService",
]
