"""
inventory_client.py

Client for the inventory API, for use by front-ends and scripts.

What it provides:
- InventoryApiClient: thin wrapper over every endpoint, turning error
  responses back into the exceptions defined in core.errors
- ItemSession: the state of one item as displayed to a user, with
  optimistic stock adjustments that roll back when the server rejects them
- navigate_to_scan: turns a scanned QR string into an item path (or None)

Environment variables expected:
- INVENTORY_API_URL: e.g. "https://your-domain.com/api"
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from core.errors import (
    AdjustmentInProgress,
    BackendUnavailable,
    error_from_code,
)
from core.ledger import EventType, apply_adjustment
from core.scan import item_path, resolve_scan

logger = logging.getLogger(__name__)


@dataclass
class InventoryApiClient:
    base_url: str
    timeout: float = 30

    @classmethod
    def from_env(cls) -> "InventoryApiClient":
        return cls(base_url=os.getenv("INVENTORY_API_URL", "http://localhost:8000"))

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Dict[str, Any] | None = None,
        data: Dict[str, Any] | None = None,
        files: Dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        try:
            resp = requests.request(
                method,
                url,
                json=json,
                params=params,
                data=data,
                files=files,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise BackendUnavailable() from e

        if resp.status_code >= 500:
            logger.error("%s %s failed (%s): %s", method, path, resp.status_code, resp.text)
            raise BackendUnavailable()

        if resp.status_code >= 400:
            try:
                body = resp.json()
            except ValueError:
                body = {}
            detail = body.get("detail") if isinstance(body, dict) else None
            code = body.get("code") if isinstance(body, dict) else None
            logger.warning("%s %s rejected (%s): %s", method, path, resp.status_code, detail)
            raise error_from_code(code, detail if isinstance(detail, str) else None)

        if resp.status_code == 204:
            return None
        try:
            return resp.json()
        except ValueError as e:
            logger.error("%s %s returned an unreadable body (%s)", method, path, resp.status_code)
            raise BackendUnavailable() from e

    # ----------------------------
    # Items
    # ----------------------------

    def list_items(self, q: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"q": q} if q else None
        return self._request("GET", "/items", params=params)

    def get_item(self, item_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/items/{item_id}")

    def create_item(
        self,
        *,
        name: str,
        description: Optional[str] = None,
        image_url: Optional[str] = None,
        restock_point: int = 10,
    ) -> Dict[str, Any]:
        payload = {
            "name": name,
            "description": description,
            "image_url": image_url,
            "restock_point": restock_point,
        }
        return self._request("POST", "/items", json=payload)

    def update_item(self, item_id: str, **fields: Any) -> Dict[str, Any]:
        return self._request("PATCH", f"/items/{item_id}", json=fields)

    def delete_item(self, item_id: str) -> None:
        self._request("DELETE", f"/items/{item_id}")

    def adjust_stock(self, item_id: str, *, units: int, type: EventType) -> Dict[str, Any]:
        """
        Calls: POST /items/{id}/adjustments
        Returns {"item": ..., "event": ...}.
        """
        return self._request(
            "POST",
            f"/items/{item_id}/adjustments",
            json={"units": units, "type": type},
        )

    def get_history(self, item_id: str, limit: Optional[int] = None) -> Dict[str, Any]:
        params = {"limit": limit} if limit else None
        return self._request("GET", f"/items/{item_id}/history", params=params)

    # ----------------------------
    # Stats + scan + images
    # ----------------------------

    def get_summary(self) -> Dict[str, Any]:
        return self._request("GET", "/stats/summary")

    def get_low_stock(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/stats/low-stock")

    def get_restocks(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/stats/restocks")

    def resolve_scan(self, payload: str) -> Dict[str, Any]:
        return self._request("POST", "/scan/resolve", json={"payload": payload})

    def upload_image(self, filename: str, content: bytes, content_type: str = "image/jpeg") -> str:
        data = self._request(
            "POST",
            "/images/upload",
            files={"file": (filename, content, content_type)},
        )
        return data["url"]


@dataclass
class ItemSession:
    """
    One item as currently shown to the user.

    Adjustments are applied locally first and then confirmed with the
    server's answer, or undone if the request fails. The local value is what
    the user sees until the next reload().
    """

    client: InventoryApiClient
    item_id: str
    item: Optional[Dict[str, Any]] = None
    cancelled: bool = False
    _in_flight: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def load(self) -> Dict[str, Any]:
        self.item = self.client.get_item(self.item_id)
        return self.item

    def reload(self) -> Dict[str, Any]:
        return self.load()

    def cancel(self) -> None:
        """Leaving the item: anything still in flight is no longer applied."""
        self.cancelled = True

    @property
    def current_units(self) -> int:
        return int(self.item["current_units"]) if self.item else 0

    @property
    def adjusting(self) -> bool:
        return self._in_flight.locked()

    def adjust(self, units: int, type: EventType) -> Optional[Dict[str, Any]]:
        """
        Add or remove units, returning the recorded event.

        Raises InsufficientStock before any request when removing more than is
        shown, AdjustmentInProgress while another adjustment on this item has
        not finished, and re-raises request failures after restoring the
        previous stock level.
        """
        if not self._in_flight.acquire(blocking=False):
            raise AdjustmentInProgress()
        try:
            if self.item is None:
                self.load()

            previous = self.current_units
            tentative = apply_adjustment(previous, units, type)
            self.item = {**self.item, "current_units": tentative}

            try:
                result = self.client.adjust_stock(self.item_id, units=units, type=type)
                confirmed, event = result["item"], result["event"]
            except Exception:
                if not self.cancelled:
                    self.item = {**self.item, "current_units": previous}
                raise

            if self.cancelled:
                return None
            self.item = confirmed
            return event
        finally:
            self._in_flight.release()


def navigate_to_scan(payload: str) -> Optional[str]:
    """Item path for a scanned string, or None when it is not an item link."""
    item_id = resolve_scan(payload)
    if item_id is None:
        logger.debug("Ignoring scanned payload %r", payload)
        return None
    return item_path(item_id)
