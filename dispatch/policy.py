"""
Purpose: Central configuration for the three-stage dispatch cascade.
What it does:

Stores all tunable thresholds for finding, ranking and offering partners:

MESH: WALKER within 1.5 km, 180 s to accept, ETA now + 45 min
GIG: BIKE / EV within 10 km, 15 min to accept, ETA now + 90 min
COURIER: national courier registry, ETA now + 48 h

Rule: No dispatch logic here, just parameters and lookups so you can tune
without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import FrozenSet, Optional

from partners.models import PartnerType

from .models import DispatchStage


@dataclass(frozen=True)
class DispatchPolicy:
    """
    Central configuration for partner search, ranking and offers.
    """

    # --- Stage 1: Neighborhood mesh ---
    mesh_partner_types: FrozenSet[PartnerType] = field(
        default_factory=lambda: frozenset({PartnerType.WALKER})
    )
    mesh_radius_km: float = 1.5
    mesh_offer_timeout_seconds: float = 180
    mesh_eta: timedelta = timedelta(minutes=45)

    # --- Stage 2: Gig pool ---
    gig_partner_types: FrozenSet[PartnerType] = field(
        default_factory=lambda: frozenset({PartnerType.BIKE, PartnerType.EV})
    )
    gig_radius_km: float = 10.0
    gig_offer_timeout_seconds: float = 15 * 60
    gig_eta: timedelta = timedelta(minutes=90)

    # --- Stage 3: Courier bridge (not geofenced, never offered) ---
    courier_eta: timedelta = timedelta(hours=48)

    # --- Offers ---
    # How many partners in one stage may decline / time out before escalating.
    max_offers_per_stage: int = 3

    # --- Composite rank weights ---
    distance_weight: float = 0.5
    rating_weight: float = 0.3
    success_weight: float = 0.2

    def partner_types_for(self, stage: DispatchStage) -> FrozenSet[PartnerType]:
        return {
            DispatchStage.MESH: self.mesh_partner_types,
            DispatchStage.GIG: self.gig_partner_types,
            DispatchStage.COURIER: frozenset(),
        }[stage]

    def radius_for(self, stage: DispatchStage) -> Optional[float]:
        return {
            DispatchStage.MESH: self.mesh_radius_km,
            DispatchStage.GIG: self.gig_radius_km,
            DispatchStage.COURIER: None,
        }[stage]

    def offer_timeout_for(self, stage: DispatchStage) -> Optional[float]:
        return {
            DispatchStage.MESH: self.mesh_offer_timeout_seconds,
            DispatchStage.GIG: self.gig_offer_timeout_seconds,
            DispatchStage.COURIER: None,
        }[stage]

    def eta_for(self, stage: DispatchStage) -> timedelta:
        return {
            DispatchStage.MESH: self.mesh_eta,
            DispatchStage.GIG: self.gig_eta,
            DispatchStage.COURIER: self.courier_eta,
        }[stage]

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.mesh_radius_km <= 0 or self.gig_radius_km <= 0:
            raise ValueError("stage radii must be > 0")

        if self.mesh_offer_timeout_seconds <= 0 or self.gig_offer_timeout_seconds <= 0:
            raise ValueError("offer timeouts must be > 0")

        if not self.mesh_partner_types or not self.gig_partner_types:
            raise ValueError("MESH and GIG stages need at least one partner type")

        if self.max_offers_per_stage < 1:
            raise ValueError("max_offers_per_stage must be >= 1")

        weights = (self.distance_weight, self.rating_weight, self.success_weight)
        if any(weight < 0 for weight in weights):
            raise ValueError("rank weights must be >= 0")
        if abs(sum(weights) - 1.0) > 1e-9:
            raise ValueError("rank weights must sum to 1.0")


def default_dispatch_policy() -> DispatchPolicy:
    """
    Convenience factory for the default policy.
    """
    p = DispatchPolicy()
    p.validate()
    return p
