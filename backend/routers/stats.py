from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.restock import low_stock_items, restock_intervals, summarize_inventory
from core.scan import item_path
from db.database import get_async_session
from db.inventory import repository
from schemas.stats import InventorySummaryOut, LowStockItemOut, RestockStatsOut

router = APIRouter()


@router.get("/summary", response_model=InventorySummaryOut)
async def get_summary(db: AsyncSession = Depends(get_async_session)):
    """Total units in stock, number of items and how many of them need a restock."""
    items = await repository.list_items(db)
    return InventorySummaryOut.model_validate(summarize_inventory(items))


@router.get("/low-stock", response_model=List[LowStockItemOut])
async def get_low_stock(db: AsyncSession = Depends(get_async_session)):
    items = await repository.list_items(db)
    return [
        LowStockItemOut(
            id=it.id,
            name=it.name,
            current_units=int(it.current_units),
            restock_point=int(it.restock_point),
            path=item_path(it.id),
        )
        for it in low_stock_items(items)
    ]


@router.get("/restocks", response_model=List[RestockStatsOut])
async def get_restocks(db: AsyncSession = Depends(get_async_session)):
    """Last restock and average days between restocks, per item."""
    add_events = await repository.list_all_add_events(db)
    return [
        RestockStatsOut(
            item_id=s.item_id,
            item_name=s.item_name,
            last_restock=s.last_restock,
            restock_count=s.restock_count,
            days_between_restocks=s.days_between_restocks,
            rounded_days=s.rounded_days,
        )
        for s in restock_intervals(add_events)
    ]
