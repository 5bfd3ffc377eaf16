"""
Purpose: Domain models for the dispatch capability.
What it does:
- DispatchStage = MESH | GIG | COURIER (the three escalation tiers)
- DispatchAttempt: one immutable ledger row per stage try / offer
- DispatchOutcome: terminal result of a cascade run

Rule: Models only. No directory reads, no ranking.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from geo import Location


class DispatchStage(str, Enum):
    MESH = "MESH"
    GIG = "GIG"
    COURIER = "COURIER"


@dataclass(frozen=True)
class DispatchAttempt:
    """
    Append-only record of one attempt. partner_id is None when a stage found
    nobody, and for courier bulk assignment.
    """
    order_id: str
    stage: DispatchStage
    partner_id: str | None
    vendor_location: Location
    customer_location: Location
    distance_km: float
    accepted: bool
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    attempt_id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass(frozen=True)
class DispatchOutcome:
    success: bool
    final_stage: DispatchStage
    message: str
    partner_id: str | None = None
    partner_name: str | None = None
    estimated_delivery_at: datetime | None = None
