"""Read-side summary of an order's dispatch history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .models import DispatchAttempt, DispatchStage


@dataclass(frozen=True)
class DispatchSummary:
    order_id: str
    total_attempts: int
    stages: List[DispatchStage]
    accepted: bool
    final_stage: Optional[DispatchStage]
    attempts: List[DispatchAttempt]


def summarize_dispatch(ledger, order_id: str) -> DispatchSummary:
    attempts = ledger.list_by_order(order_id)
    return DispatchSummary(
        order_id=order_id,
        total_attempts=len(attempts),
        stages=[attempt.stage for attempt in attempts],
        accepted=any(attempt.accepted for attempt in attempts),
        final_stage=attempts[-1].stage if attempts else None,
        attempts=attempts,
    )
