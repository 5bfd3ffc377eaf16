"""
Purpose: The partner directory the dispatch core reads from.
What it does:
- Holds the live partner snapshots (location pings, availability toggles).
- Serves the filtered reads the locator needs.
- Provides the atomic claim/release pair that gives an order exclusive
  use of a partner between selection and confirmation.

Rule: The directory owns partner state. Dispatch only reads it and claims.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from geo import Location
from storage import Store, RecordNotFoundError

from .models import Partner, PartnerStatus, PartnerType

logger = logging.getLogger(__name__)


class InMemoryPartnerDirectory(Store):
    """
    Thread-safe in-memory directory. Every mutation swaps in a new frozen
    Partner under the store lock, so readers always see whole snapshots.
    """

    def __init__(self, partners: Iterable[Partner] = (), clock: Callable[[], datetime] | None = None):
        super().__init__()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._partners: Dict[str, Partner] = {partner.id: partner for partner in partners}
        # partner_id -> order_id currently holding the claim
        self._claims: Dict[str, str] = {}

    def add(self, partner: Partner) -> None:
        self._ensure_open()
        with self._lock:
            self._partners[partner.id] = partner

    def get(self, partner_id: str) -> Partner:
        self._ensure_open()
        with self._lock:
            try:
                return self._partners[partner_id]
            except KeyError:
                raise RecordNotFoundError(f"Partner {partner_id} not found") from None

    def list_partners(self, types: Optional[Iterable[PartnerType]] = None) -> List[Partner]:
        self._ensure_open()
        wanted = set(types) if types is not None else None
        with self._lock:
            return [
                partner for partner in self._partners.values()
                if wanted is None or partner.partner_type in wanted
            ]

    def query_available(self, types: Iterable[PartnerType]) -> List[Partner]:
        """
        Available, ACTIVE partners of the given types that have a location.
        Distance filtering is the locator's job.
        """
        self._ensure_open()
        wanted = set(types)
        if not wanted:
            return []
        with self._lock:
            return [
                partner for partner in self._partners.values()
                if partner.partner_type in wanted and partner.is_dispatchable
            ]

    def update_location(self, partner_id: str, location: Location) -> Partner:
        self._ensure_open()
        with self._lock:
            partner = self.get(partner_id)
            updated = replace(partner, location=location, last_location_update=self._clock())
            self._partners[partner_id] = updated
            return updated

    def set_availability(self, partner_id: str, available: bool) -> Partner:
        self._ensure_open()
        with self._lock:
            partner = self.get(partner_id)
            if not available:
                self._claims.pop(partner_id, None)
            elif partner_id in self._claims:
                # still held by an order, stays unclaimable until release()
                logger.info(f"Partner {partner_id} is online but held by order {self._claims[partner_id]}")
                return partner
            updated = replace(partner, available=available)
            self._partners[partner_id] = updated
            logger.info(f"Partner {partner_id} is now {'online' if available else 'offline'}")
            return updated

    def claim(self, partner_id: str, order_id: str) -> bool:
        """
        Compare-and-set on availability. Succeeds only if the partner is still
        available, ACTIVE and unclaimed right now; flips them unavailable for
        everyone else until release() or the partner goes offline. Coming
        back online does not end a claim.
        """
        self._ensure_open()
        with self._lock:
            partner = self._partners.get(partner_id)
            if partner is None or not partner.available or partner.status != PartnerStatus.ACTIVE:
                return False
            if partner_id in self._claims:
                return False
            self._partners[partner_id] = replace(partner, available=False)
            self._claims[partner_id] = order_id
            logger.debug(f"Partner {partner_id} claimed for order {order_id}")
            return True

    def release(self, partner_id: str, order_id: str) -> bool:
        """Undo a claim, but only the one held by this order."""
        self._ensure_open()
        with self._lock:
            if self._claims.get(partner_id) != order_id:
                return False
            del self._claims[partner_id]
            partner = self._partners.get(partner_id)
            if partner is not None:
                self._partners[partner_id] = replace(partner, available=True)
            logger.debug(f"Partner {partner_id} released by order {order_id}")
            return True

    def claimed_by(self, partner_id: str) -> Optional[str]:
        self._ensure_open()
        with self._lock:
            return self._claims.get(partner_id)
