"""
Purpose: Orchestrator / decision pipeline (the "glue").
What it does:
Takes an order's pickup and drop points and walks the three escalation
stages strictly in order:

1. MESH: walkers near the vendor
2. GIG: bike / EV riders in a wider ring
3. COURIER: the national courier with the best success rate

Each partner stage locates, ranks, claims and offers. Every stage that does
not end in an assignment leaves a failed attempt in the ledger before the
next stage starts, so a stage is never escalated past without a record.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from couriers.registry import CourierRegistryError
from geo import Location, distance_km
from storage import KeyedLocks, StoreError

from .candidate_filter import Candidate, find_nearby
from .models import DispatchAttempt, DispatchOutcome, DispatchStage
from .offers import OfferHandler, auto_accept
from .policy import DispatchPolicy, default_dispatch_policy
from .scoring import rank_all
from .state_machines.offer_state import OfferStatus, expire_offer, make_offer

logger = logging.getLogger(__name__)

PARTNER_STAGES = (DispatchStage.MESH, DispatchStage.GIG)

ASSIGNED_MESSAGES = {
    DispatchStage.MESH: "Assigned to nearby walker: {name}",
    DispatchStage.GIG: "Assigned to gig worker: {name}",
    DispatchStage.COURIER: "Assigned to {name}",
}


class DispatchInProgressError(Exception):
    """Raised when the same order is already running through the cascade."""
    pass


class DispatchCascade:
    """
    Coordinates the assignment of one order to one delivery partner.

    Collaborators are injected and must already be open:
    - directory: partner directory (query_available / claim / release)
    - courier_registry: list_active() best-first
    - ledger: append / list_by_order
    """

    def __init__(
        self,
        directory,
        courier_registry,
        ledger,
        policy: Optional[DispatchPolicy] = None,
        offer_handler: Optional[OfferHandler] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.directory = directory
        self.courier_registry = courier_registry
        self.ledger = ledger
        self.policy = policy or default_dispatch_policy()
        self.offer_handler = offer_handler or auto_accept
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._order_locks = KeyedLocks(reentrant=False)

    def dispatch(self, order_id: str, vendor_location: Location, customer_location: Location) -> DispatchOutcome:
        """
        Run the cascade for one order. Never raises for "nobody available";
        a failed outcome is returned instead.
        """
        if not self._order_locks.try_hold(order_id):
            raise DispatchInProgressError(f"Order {order_id} is already being dispatched")

        try:
            logger.info(
                f"Dispatch started for order {order_id}: vendor "
                f"[{vendor_location.latitude}, {vendor_location.longitude}] customer "
                f"[{customer_location.latitude}, {customer_location.longitude}]"
            )

            for stage in PARTNER_STAGES:
                outcome = self._run_partner_stage(stage, order_id, vendor_location, customer_location)
                if outcome is not None:
                    logger.info(f"Dispatch successful for order {order_id} at stage {stage.value}")
                    return outcome
                logger.info(f"Stage {stage.value} found no partner for order {order_id}. Escalating...")

            return self._run_courier_stage(order_id, vendor_location, customer_location)
        finally:
            self._order_locks.release(order_id)

    # ------------------------------------------------------------------
    # stages
    # ------------------------------------------------------------------

    def locate(self, stage: DispatchStage, vendor_location: Location) -> List[Candidate]:
        """
        Partners eligible for a partner stage. A directory failure is treated
        like an empty neighbourhood: the stage fails and the cascade escalates.
        """
        radius_km = self.policy.radius_for(stage)
        types = self.policy.partner_types_for(stage)
        try:
            return find_nearby(self.directory, vendor_location, radius_km, types)
        except StoreError as exc:
            logger.warning(f"Partner directory query failed during {stage.value}: {exc}")
            return []

    def _run_partner_stage(
        self,
        stage: DispatchStage,
        order_id: str,
        vendor_location: Location,
        customer_location: Location,
    ) -> Optional[DispatchOutcome]:
        candidates = self.locate(stage, vendor_location)
        logger.info(f"[{stage.value}] {len(candidates)} candidate(s) for order {order_id}")

        ranked = rank_all(candidates, customer_location, self.policy)
        timeout_seconds = self.policy.offer_timeout_for(stage)
        offers_made = 0

        for candidate in ranked:
            if offers_made >= self.policy.max_offers_per_stage:
                break

            partner = candidate.partner
            if not self._claim(partner.id, order_id):
                # picked by a concurrent run between our read and now
                logger.debug(f"[{stage.value}] partner {partner.id} already claimed, trying next")
                continue

            offers_made += 1
            offer = make_offer(order_id, partner.id, stage, self._clock(), timeout_seconds)
            try:
                resolved = self.offer_handler(offer)
            except Exception:
                self._release(partner.id, order_id)
                raise

            if resolved.is_open:
                resolved = expire_offer(resolved, self._clock())

            if resolved.status == OfferStatus.ACCEPTED:
                self._record(order_id, stage, partner.id, vendor_location, customer_location, accepted=True)
                name = partner.name or partner.id
                return DispatchOutcome(
                    success=True,
                    final_stage=stage,
                    partner_id=partner.id,
                    partner_name=name,
                    estimated_delivery_at=self._clock() + self.policy.eta_for(stage),
                    message=ASSIGNED_MESSAGES[stage].format(name=name),
                )

            self._release(partner.id, order_id)
            self._record(order_id, stage, partner.id, vendor_location, customer_location, accepted=False)
            logger.info(f"[{stage.value}] partner {partner.id} {resolved.status.value} order {order_id}")

        if offers_made == 0:
            self._record(order_id, stage, None, vendor_location, customer_location, accepted=False)
        return None

    def _run_courier_stage(
        self,
        order_id: str,
        vendor_location: Location,
        customer_location: Location,
    ) -> DispatchOutcome:
        stage = DispatchStage.COURIER
        try:
            couriers = self.courier_registry.list_active()
        except (CourierRegistryError, StoreError) as exc:
            logger.error(f"[{stage.value}] courier registry unavailable for order {order_id}: {exc}")
            couriers = []

        if not couriers:
            self._record(order_id, stage, None, vendor_location, customer_location, accepted=False)
            logger.error(f"[{stage.value}] No courier partners configured! Order {order_id} could not be assigned")
            return DispatchOutcome(
                success=False,
                final_stage=stage,
                message="Unable to assign delivery partner: no courier partners available",
            )

        best_courier = couriers[0]
        # couriers take the parcel in bulk, there is no individual partner
        self._record(order_id, stage, None, vendor_location, customer_location, accepted=True)
        logger.info(f"[{stage.value}] order {order_id} assigned to {best_courier.display_name}")

        return DispatchOutcome(
            success=True,
            final_stage=stage,
            partner_id=best_courier.id,
            partner_name=best_courier.display_name,
            estimated_delivery_at=self._clock() + self.policy.eta_for(stage),
            message=ASSIGNED_MESSAGES[stage].format(name=best_courier.display_name),
        )

    # ------------------------------------------------------------------
    # collaborators
    # ------------------------------------------------------------------

    def _claim(self, partner_id: str, order_id: str) -> bool:
        try:
            return self.directory.claim(partner_id, order_id)
        except StoreError as exc:
            logger.warning(f"Could not claim partner {partner_id} for order {order_id}: {exc}")
            return False

    def _release(self, partner_id: str, order_id: str) -> None:
        try:
            self.directory.release(partner_id, order_id)
        except StoreError as exc:
            logger.error(f"Could not release partner {partner_id} held by order {order_id}: {exc}")

    def _record(
        self,
        order_id: str,
        stage: DispatchStage,
        partner_id: Optional[str],
        vendor_location: Location,
        customer_location: Location,
        accepted: bool,
    ) -> DispatchAttempt:
        attempt = DispatchAttempt(
            order_id=order_id,
            stage=stage,
            partner_id=partner_id,
            vendor_location=vendor_location,
            customer_location=customer_location,
            distance_km=distance_km(vendor_location, customer_location),
            accepted=accepted,
            timestamp=self._clock(),
        )
        try:
            self.ledger.append(attempt)
        except StoreError as exc:
            logger.error(f"Could not record {stage.value} attempt for order {order_id}: {exc}")
        return attempt
