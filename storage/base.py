"""
Purpose: Lifecycle contract shared by every store the core talks to.
What it does:
Stores are explicitly constructed, opened at service start and closed at
shutdown. Any read or write while closed raises StoreClosedError, so a
component can never silently fall back to process-wide state.
"""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when a store cannot serve a read or write."""
    pass


class StoreClosedError(StoreError):
    """Raised when a store is used before open() or after close()."""
    pass


class RecordNotFoundError(StoreError):
    """Raised when a keyed record does not exist."""
    pass


class Store:
    """
    Base class for in-memory and remote stores.

    Subclasses call self._ensure_open() at the top of every public method
    and guard their own state with self._lock.
    """

    def __init__(self, name: str | None = None):
        self.name = name or type(self).__name__
        self._lock = threading.RLock()
        self._is_open = False

    @property
    def is_open(self) -> bool:
        return self._is_open

    def open(self) -> "Store":
        with self._lock:
            if not self._is_open:
                self._is_open = True
                logger.debug(f"{self.name} opened")
        return self

    def close(self) -> None:
        with self._lock:
            if self._is_open:
                self._is_open = False
                logger.debug(f"{self.name} closed")

    def _ensure_open(self) -> None:
        if not self._is_open:
            raise StoreClosedError(f"{self.name} is not open")

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
