from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum

from ..models import DispatchStage


class OfferStateException(Exception):
    """Raised when an invalid offer transition is attempted."""
    pass


class OfferStatus(str, Enum):
    OFFERED = "OFFERED"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"
    TIMED_OUT = "TIMED_OUT"


@dataclass(frozen=True)
class Offer:
    """
    A delivery offer made to one partner for one order.
    OFFERED is the only non-terminal state.
    """
    order_id: str
    partner_id: str
    stage: DispatchStage
    offered_at: datetime
    deadline: datetime
    status: OfferStatus = OfferStatus.OFFERED
    resolved_at: datetime | None = None
    offer_id: str = ""

    @property
    def is_open(self) -> bool:
        return self.status == OfferStatus.OFFERED

    @property
    def timeout_seconds(self) -> float:
        return max(0.0, (self.deadline - self.offered_at).total_seconds())


def make_offer(order_id: str, partner_id: str, stage: DispatchStage, offered_at: datetime, timeout_seconds: float) -> Offer:
    return Offer(
        order_id=order_id,
        partner_id=partner_id,
        stage=stage,
        offered_at=offered_at,
        deadline=offered_at + timedelta(seconds=timeout_seconds),
        offer_id=str(uuid.uuid4()),
    )


def _resolve(offer: Offer, status: OfferStatus, at: datetime) -> Offer:
    if not offer.is_open:
        raise OfferStateException(
            f"Offer {offer.offer_id} for order {offer.order_id} is already {offer.status.value}"
        )
    # Because Offer is a frozen dataclass, we return a new instance via replace
    return replace(offer, status=status, resolved_at=at)


def accept_offer(offer: Offer, at: datetime) -> Offer:
    """Called when the partner confirms the delivery."""
    return _resolve(offer, OfferStatus.ACCEPTED, at)


def decline_offer(offer: Offer, at: datetime) -> Offer:
    return _resolve(offer, OfferStatus.DECLINED, at)


def expire_offer(offer: Offer, at: datetime) -> Offer:
    """Called by the timer when nobody answered before the deadline."""
    return _resolve(offer, OfferStatus.TIMED_OUT, at)
