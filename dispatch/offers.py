"""
Purpose: Offer handlers (how a selected partner says yes or no).
What it does:
An offer handler takes an OFFERED Offer and returns it resolved:
ACCEPTED, DECLINED or TIMED_OUT.

- auto_accept: every offer is accepted the moment it is made. This is the
  synchronous behaviour the cascade had before the handshake existed.
- OfferBoard: publishes the offer where the partner app can see it and
  blocks until an external accept/decline signal arrives or the offer
  deadline passes.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from .state_machines.offer_state import (
    Offer,
    OfferStateException,
    accept_offer,
    decline_offer,
    expire_offer,
)

logger = logging.getLogger(__name__)

OfferHandler = Callable[[Offer], Offer]


def auto_accept(offer: Offer) -> Offer:
    return accept_offer(offer, offer.offered_at)


class OfferBoard:
    """
    Thread-safe board of open offers, one per order.

    The dispatcher thread calls the board (via __call__) and waits; the API
    thread handling a partner's tap calls accept()/decline(). The condition
    lock guarantees two signals for the same offer cannot both win.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._condition = threading.Condition()
        self._offers: Dict[str, Offer] = {}

    def publish(self, offer: Offer) -> None:
        with self._condition:
            self._offers[offer.order_id] = offer
            self._condition.notify_all()
        logger.info(
            f"Offered order {offer.order_id} to partner {offer.partner_id} "
            f"({offer.stage.value}, {offer.timeout_seconds:.0f}s to respond)"
        )

    def current(self, order_id: str) -> Optional[Offer]:
        with self._condition:
            return self._offers.get(order_id)

    def wait_for_offer(self, order_id: str, timeout: float) -> Optional[Offer]:
        """Block until an open offer for this order is on the board."""
        deadline = time.monotonic() + timeout
        with self._condition:
            while True:
                offer = self._offers.get(order_id)
                if offer is not None and offer.is_open:
                    return offer
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return None
                self._condition.wait(remaining)

    def accept(self, order_id: str, partner_id: str) -> bool:
        return self._signal(order_id, partner_id, accept_offer)

    def decline(self, order_id: str, partner_id: str) -> bool:
        return self._signal(order_id, partner_id, decline_offer)

    def _signal(self, order_id: str, partner_id: str, transition) -> bool:
        with self._condition:
            offer = self._offers.get(order_id)
            if offer is None or offer.partner_id != partner_id:
                return False
            try:
                resolved = transition(offer, self._clock())
            except OfferStateException:
                # too late, the offer was already resolved or expired
                return False
            self._offers[order_id] = resolved
            self._condition.notify_all()
            return True

    def await_resolution(self, offer: Offer) -> Offer:
        deadline = time.monotonic() + offer.timeout_seconds
        with self._condition:
            while True:
                current = self._offers.get(offer.order_id)
                if current is None or current.offer_id != offer.offer_id:
                    raise OfferStateException(f"Offer {offer.offer_id} was replaced on the board")
                if not current.is_open:
                    del self._offers[offer.order_id]
                    return current
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    expired = expire_offer(current, self._clock())
                    del self._offers[offer.order_id]
                    self._condition.notify_all()
                    logger.info(f"Offer for order {offer.order_id} to partner {offer.partner_id} timed out")
                    return expired
                self._condition.wait(remaining)

    def __call__(self, offer: Offer) -> Offer:
        self.publish(offer)
        return self.await_resolution(offer)
