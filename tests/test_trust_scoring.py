from decimal import Decimal

import pytest

from trust import (
    BuyerProfile,
    PaymentMethod,
    PaymentPolicyResolver,
    TrustCategory,
    TrustScoreCalculator,
    trust_category,
)

PREPAID = {PaymentMethod.UPI, PaymentMethod.CARD, PaymentMethod.NETBANKING, PaymentMethod.WALLET}


@pytest.fixture
def calculator():
    return TrustScoreCalculator()


@pytest.fixture
def resolver():
    return PaymentPolicyResolver()


def test_established_buyer_in_safe_pincode(calculator, resolver):
    profile = BuyerProfile(total_orders=10, returned_orders=1, cancelled_orders=0, account_age_days=365)

    assert calculator.delivery_success(profile) == pytest.approx(0.9)
    assert calculator.account_maturity(profile) == 1.0

    score = calculator.score(profile, 0.2)
    assert score == pytest.approx(0.58)
    assert calculator.category(score) == TrustCategory.STANDARD

    options = resolver.options_for("buyer-1", score)
    assert options.cod_available
    assert options.commitment_fee == Decimal("29")
    assert PaymentMethod.COD_WITH_DEPOSIT in options.methods
    assert PaymentMethod.COD not in options.methods
    assert options.message == "COD available with 29 commitment fee"


def test_new_buyer_in_risky_pincode(calculator, resolver):
    profile = BuyerProfile()

    assert calculator.delivery_success(profile) == 0.5
    score = calculator.score(profile, 0.8)
    assert score == pytest.approx(0.06)

    options = resolver.options_for("buyer-2", score)
    assert options.category == TrustCategory.HIGH_RISK
    assert set(options.methods) == PREPAID
    assert not options.cod_available
    assert options.commitment_fee == Decimal("0")
    assert options.message == "COD not available for your account"


def test_score_is_clamped(calculator):
    serial_canceller = BuyerProfile(total_orders=1000, returned_orders=0, cancelled_orders=1000, account_age_days=30)
    assert calculator.score(serial_canceller, 0.0) == 0.0

    everyone_returns = BuyerProfile(total_orders=5, returned_orders=5, account_age_days=0)
    assert calculator.score(everyone_returns, 1.0) == 0.0

    best_possible = BuyerProfile(total_orders=50, returned_orders=0, account_age_days=3650)
    assert calculator.score(best_possible, 0.0) == pytest.approx(0.7)


def test_account_maturity_caps_at_one_year(calculator):
    assert calculator.account_maturity(BuyerProfile(account_age_days=73)) == pytest.approx(0.2)
    assert calculator.account_maturity(BuyerProfile(account_age_days=5000)) == 1.0


def test_pincode_risk_must_be_a_probability(calculator):
    with pytest.raises(ValueError):
        calculator.score(BuyerProfile(), 1.5)


def test_profile_rejects_negative_counts():
    with pytest.raises(ValueError):
        BuyerProfile(total_orders=-1)


@pytest.mark.parametrize("score, category", [
    (0.0, TrustCategory.HIGH_RISK),
    (0.5, TrustCategory.HIGH_RISK),
    (0.51, TrustCategory.STANDARD),
    (0.8, TrustCategory.STANDARD),
    (0.81, TrustCategory.PLATINUM),
    (1.0, TrustCategory.PLATINUM),
])
def test_category_thresholds_are_strict(score, category):
    assert trust_category(score) == category


def test_platinum_buyers_get_everything(resolver):
    options = resolver.options_for("buyer-3", 0.85)

    assert options.category == TrustCategory.PLATINUM
    assert set(options.methods) == PREPAID | {PaymentMethod.COD, PaymentMethod.BNPL}
    assert options.commitment_fee == Decimal("0")
    assert options.message == "All payment methods available"


def test_methods_never_leak_between_bands(resolver):
    assert PaymentMethod.BNPL not in resolver.methods(0.6)
    assert PaymentMethod.COD not in resolver.methods(0.6)
    assert not resolver.methods(0.3) & {PaymentMethod.COD, PaymentMethod.COD_WITH_DEPOSIT, PaymentMethod.BNPL}
