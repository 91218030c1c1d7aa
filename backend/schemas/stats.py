from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class InventorySummaryOut(BaseModel):
    total_stock: int
    total_items: int
    items_needing_restock: int

    class Config:
        from_attributes = True


class LowStockItemOut(BaseModel):
    id: UUID
    name: str
    current_units: int
    restock_point: int
    path: str


class RestockStatsOut(BaseModel):
    item_id: UUID
    item_name: str
    last_restock: datetime
    restock_count: int
    days_between_restocks: Optional[float] = None
    rounded_days: Optional[int] = None
