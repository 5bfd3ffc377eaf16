#Purpose: Ranking/selection model (the "who is best" layer).
#Takes located candidates + the delivery point and produces one score each:
#distance_score = 1 / (pickup_km + delivery_km + 1)
#rating_score = rating / 5
#success_score = successful / max(total, 1)
#score = 0.5 * distance + 0.3 * rating + 0.2 * success (weights from policy)
#Ties are broken deterministically by lowest partner id.
#Output: ranked partners for the offer sequence.

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from geo import Location, distance_km
from partners.models import Partner

from .policy import DispatchPolicy, default_dispatch_policy


@dataclass(frozen=True)
class RankedCandidate:
    partner: Partner
    pickup_distance_km: float
    delivery_distance_km: float
    total_distance_km: float
    score: float


def score_candidate(
    partner: Partner,
    pickup_distance_km: float,
    destination: Location,
    policy: DispatchPolicy,
) -> RankedCandidate:
    delivery_distance_km = distance_km(partner.location, destination)
    total_distance_km = pickup_distance_km + delivery_distance_km

    distance_score = 1 / (total_distance_km + 1)
    rating_score = partner.rating / 5
    success_score = partner.successful_deliveries / max(partner.total_deliveries, 1)

    score = (
        policy.distance_weight * distance_score
        + policy.rating_weight * rating_score
        + policy.success_weight * success_score
    )
    return RankedCandidate(
        partner=partner,
        pickup_distance_km=pickup_distance_km,
        delivery_distance_km=delivery_distance_km,
        total_distance_km=total_distance_km,
        score=score,
    )


def rank_all(
    candidates: Sequence[Tuple[Partner, float]],
    destination: Location,
    policy: Optional[DispatchPolicy] = None,
) -> List[RankedCandidate]:
    """
    Best first. Candidates without a location cannot be scored and are skipped.
    """
    policy = policy or default_dispatch_policy()

    ranked = [
        score_candidate(partner, pickup_distance, destination, policy)
        for partner, pickup_distance in candidates
        if partner.location is not None
    ]
    ranked.sort(key=lambda candidate: (-candidate.score, candidate.partner.id))
    return ranked


def rank(
    candidates: Sequence[Tuple[Partner, float]],
    destination: Location,
    policy: Optional[DispatchPolicy] = None,
) -> Optional[Partner]:
    ranked = rank_all(candidates, destination, policy)
    return ranked[0].partner if ranked else None
