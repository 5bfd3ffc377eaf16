#Purpose: Partner locator (the "who is close enough" layer).
#Hard eligibility gates applied before ranking:
#available
#ACTIVE account status
#partner type allowed in this stage
#has a location
#within the stage radius of the pickup point (great-circle km)

#Output: (partner, pickup distance km) pairs, closest first. Still not ranked.

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from geo import Location, distance_km
from partners.models import Partner, PartnerStatus, PartnerType

logger = logging.getLogger(__name__)

Candidate = Tuple[Partner, float]


def is_eligible(partner: Partner, types: Iterable[PartnerType]) -> bool:
    return (
        partner.available
        and partner.status == PartnerStatus.ACTIVE
        and partner.partner_type in types
        and partner.location is not None
    )


def find_nearby(directory, origin: Location, radius_km: float, types: Iterable[PartnerType]) -> List[Candidate]:
    """
    Read-only query against the partner directory.

    Empty `types` or nobody in range yields an empty list. Directory errors
    are left to the caller, which treats them as "nobody found".
    """
    wanted = frozenset(types)
    if not wanted:
        return []

    candidates: List[Candidate] = []
    for partner in directory.query_available(wanted):
        # the directory already filters, but a snapshot may have changed
        # between its read and ours
        if not is_eligible(partner, wanted):
            continue

        pickup_distance = distance_km(origin, partner.location)
        if pickup_distance > radius_km:
            continue

        candidates.append((partner, pickup_distance))

    candidates.sort(key=lambda candidate: (candidate[1], candidate[0].id))
    logger.debug(f"{len(candidates)} partner(s) of {sorted(t.value for t in wanted)} within {radius_km} km")
    return candidates
