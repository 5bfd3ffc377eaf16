"""Payout estimate shown to a partner before they take a delivery."""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

COMMISSION_RATE = Decimal("0.05")
MAX_EARNING_CAP = Decimal("100")


def estimate_earnings(order_total: Decimal | float | int) -> Decimal:
    """5% of the order total, capped per delivery."""
    total = Decimal(str(order_total))
    if total <= 0:
        return Decimal("0.00")
    earning = min(total * COMMISSION_RATE, MAX_EARNING_CAP)
    return earning.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
