"""
Per-key serialization points.

Read-modify-write updates keyed by buyer id, pincode, partner id or order id
take the lock for their key so concurrent events on the same key never lose
an update, while different keys proceed in parallel.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator


class KeyedLocks:

    def __init__(self, reentrant: bool = True):
        # a non-reentrant set also rejects a nested try_hold from the holding thread
        self._reentrant = reentrant
        self._factory = threading.RLock if reentrant else threading.Lock
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, object] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def lock_for(self, key: Hashable):
        with self._guard:
            return self._get_or_create(key)

    def _get_or_create(self, key: Hashable):
        lock = self._locks.get(key)
        if lock is None:
            lock = self._factory()
            self._locks[key] = lock
        return lock

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        lock = self.lock_for(key)
        with lock:
            yield

    def try_hold(self, key: Hashable) -> bool:
        """Non-blocking acquire. Caller must release via release(key)."""
        with self._guard:
            return self._get_or_create(key).acquire(blocking=False)

    def release(self, key: Hashable) -> None:
        """
        Release a try_hold. Non-reentrant locks are forgotten on release, so
        one-shot keys such as order ids do not pile up.
        """
        with self._guard:
            if self._reentrant:
                lock = self._locks[key]
            else:
                lock = self._locks.pop(key)
            lock.release()
