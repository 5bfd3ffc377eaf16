#Purpose: The courier registry "adapters".
#Sole responsibility: list ACTIVE courier partners, best success rate first.
#Two interchangeable implementations:
#InMemoryCourierRegistry - configured at service start (tests, simulation)
#HttpCourierRegistry - talks to the courier registry service over HTTP
#It should not contain dispatch rules.

from __future__ import annotations

import logging
import os
from typing import Iterable, List, Optional

import requests
from dotenv import load_dotenv

from storage import Store

from .models import CourierPartner, CourierStatus

# Read registry location from environment
# Example in .env:
# COURIER_REGISTRY_URL=http://couriers.internal:8080
# COURIER_REGISTRY_TIMEOUT=5
load_dotenv()

logger = logging.getLogger(__name__)


class CourierRegistryError(Exception):
    """Raised when the courier registry cannot be read."""
    pass


def _rank_active(couriers: Iterable[CourierPartner]) -> List[CourierPartner]:
    active = [courier for courier in couriers if courier.status == CourierStatus.ACTIVE]
    # highest success rate first, lowest id breaks ties
    active.sort(key=lambda courier: (-courier.success_rate, courier.id))
    return active


class InMemoryCourierRegistry(Store):

    def __init__(self, couriers: Iterable[CourierPartner] = ()):
        super().__init__()
        self._couriers = {courier.id: courier for courier in couriers}

    def add(self, courier: CourierPartner) -> None:
        self._ensure_open()
        with self._lock:
            self._couriers[courier.id] = courier

    def list_active(self) -> List[CourierPartner]:
        self._ensure_open()
        with self._lock:
            return _rank_active(self._couriers.values())


class HttpCourierRegistry(Store):
    """
    HTTP adapter for the courier registry service.

    GET {base_url}/couriers?status=ACTIVE returns a JSON list of
    {"id", "displayName", "status", "successRate"} objects.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        super().__init__()
        self.base_url = (base_url or os.getenv("COURIER_REGISTRY_URL") or "").rstrip("/")
        self.timeout = timeout if timeout is not None else float(os.getenv("COURIER_REGISTRY_TIMEOUT", "5"))

        if not self.base_url:
            raise ValueError("Courier registry URL not set. Please set COURIER_REGISTRY_URL in the .env file.")

    def list_active(self) -> List[CourierPartner]:
        self._ensure_open()
        url = f"{self.base_url}/couriers"

        try:
            response = requests.get(url, params={"status": "ACTIVE"}, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            logger.error(f"Courier registry request failed: {exc}")
            raise CourierRegistryError(f"Courier registry unavailable: {exc}") from exc
        except ValueError as exc:
            raise CourierRegistryError("Courier registry returned invalid JSON") from exc

        if isinstance(payload, dict):
            payload = payload.get("data", [])
        if not isinstance(payload, list):
            raise CourierRegistryError("Courier registry returned an unexpected payload")

        try:
            couriers = [CourierPartner.from_dict(item) for item in payload]
        except (KeyError, ValueError) as exc:
            raise CourierRegistryError(f"Malformed courier record: {exc}") from exc

        return _rank_active(couriers)
