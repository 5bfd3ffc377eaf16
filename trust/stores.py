"""
Purpose: Buyer profile and pincode risk stores.
What it does:
In-memory implementations of the two read/write contracts the risk engine
needs. Both follow the storage.Store lifecycle: open at service start,
close at shutdown.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from storage import Store

from .models import BuyerRecord, PincodeRisk


class InMemoryBuyerProfileStore(Store):

    def __init__(self, records: Iterable[BuyerRecord] = ()):
        super().__init__()
        self._records: Dict[str, BuyerRecord] = {record.buyer_id: record for record in records}

    def get(self, buyer_id: str) -> Optional[BuyerRecord]:
        self._ensure_open()
        with self._lock:
            return self._records.get(buyer_id)

    def save(self, record: BuyerRecord) -> None:
        self._ensure_open()
        with self._lock:
            self._records[record.buyer_id] = record


class InMemoryPincodeRiskStore(Store):

    def __init__(self, records: Iterable[PincodeRisk] = ()):
        super().__init__()
        self._records: Dict[str, PincodeRisk] = {record.pincode: record for record in records}

    def get(self, pincode: str) -> Optional[PincodeRisk]:
        self._ensure_open()
        with self._lock:
            return self._records.get(pincode)

    def save(self, record: PincodeRisk) -> None:
        self._ensure_open()
        with self._lock:
            self._records[record.pincode] = record
