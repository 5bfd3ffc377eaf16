"""
Purpose: The dispatch ledger (append-only attempt log per order).
What it does:
- append(attempt): idempotent per attempt_id
- list_by_order(order_id): attempts in creation order

An attempt is visible to list_by_order as soon as append returns.
"""

from __future__ import annotations

from typing import Dict, List, Set

from storage import Store

from .models import DispatchAttempt


class InMemoryDispatchLedger(Store):

    def __init__(self):
        super().__init__()
        self._by_order: Dict[str, List[DispatchAttempt]] = {}
        self._seen: Set[str] = set()

    def append(self, attempt: DispatchAttempt) -> None:
        self._ensure_open()
        with self._lock:
            if attempt.attempt_id in self._seen:
                return
            self._seen.add(attempt.attempt_id)
            self._by_order.setdefault(attempt.order_id, []).append(attempt)

    def list_by_order(self, order_id: str) -> List[DispatchAttempt]:
        self._ensure_open()
        with self._lock:
            return list(self._by_order.get(order_id, []))
