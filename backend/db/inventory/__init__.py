"""
Inventory tracking.

Models:
- Item (current stock cache + restock point, soft-deleted via status)
- InventoryEvent (append-only add/remove history, source of truth for stock)
"""

from .item import Item, ItemStatus, ACTIVE, DELETED
from .history import InventoryEvent

__all__ = ["Item", "ItemStatus", "ACTIVE", "DELETED", "InventoryEvent"]
