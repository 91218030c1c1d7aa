from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.ledger import reconstruct_stock
from core.restock import needs_restock
from core.scan import item_path, item_url
from db.database import get_async_session
from db.inventory import Item as ItemModel
from db.inventory import repository
from schemas.inventory import (
    InventoryEventOut,
    ItemCreate,
    ItemHistoryOut,
    ItemOut,
    ItemUpdate,
    StockAdjustmentCreate,
    StockAdjustmentOut,
    StockPointOut,
)

router = APIRouter()


def _serialize_item(it: ItemModel) -> ItemOut:
    return ItemOut(
        id=it.id,
        name=it.name,
        description=it.description,
        image_url=it.image_url,
        current_units=int(it.current_units),
        restock_point=int(it.restock_point),
        deleted=it.deleted,
        needs_restock=needs_restock(it),
        path=item_path(it.id),
        url=item_url(it.id),
    )


@router.get("", response_model=List[ItemOut])
async def list_items(
    q: Optional[str] = None,
    db: AsyncSession = Depends(get_async_session),
):
    """List active items ordered by name. `q` filters on name or description."""
    items = await repository.list_items(db, q=q)
    return [_serialize_item(it) for it in items]


@router.post("", response_model=ItemOut, status_code=status.HTTP_201_CREATED)
async def create_item(
    payload: ItemCreate,
    db: AsyncSession = Depends(get_async_session),
):
    item = await repository.create_item(
        db,
        name=payload.name,
        description=payload.description,
        image_url=payload.image_url,
        restock_point=payload.restock_point,
    )
    return _serialize_item(item)


@router.get("/{item_id}", response_model=ItemOut)
async def get_item(item_id: UUID, db: AsyncSession = Depends(get_async_session)):
    return _serialize_item(await repository.get_item(db, item_id))


@router.patch("/{item_id}", response_model=ItemOut)
async def update_item(
    item_id: UUID,
    payload: ItemUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    item = await repository.update_item(db, item_id, payload.model_dump(exclude_unset=True))
    return _serialize_item(item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def soft_delete_item(item_id: UUID, db: AsyncSession = Depends(get_async_session)):
    await repository.soft_delete_item(db, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{item_id}/adjustments", response_model=StockAdjustmentOut, status_code=status.HTTP_201_CREATED)
async def adjust_stock(
    item_id: UUID,
    payload: StockAdjustmentCreate,
    db: AsyncSession = Depends(get_async_session),
):
    """Add or remove units. Removing more than the current stock is rejected with 409."""
    item, event = await repository.adjust_stock(db, item_id, units=payload.units, type=payload.type)
    return StockAdjustmentOut(
        item=_serialize_item(item),
        event=InventoryEventOut.model_validate(event),
    )


@router.get("/{item_id}/history", response_model=ItemHistoryOut)
async def get_item_history(
    item_id: UUID,
    limit: int = Query(settings.history_limit, ge=1, le=1000),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Stock history for the item chart.

    `events` are the raw add/remove records oldest first; `points` is the
    running stock level after each of them.
    """
    item = await repository.get_item(db, item_id)
    events = await repository.list_history(db, item_id, limit=limit)
    return ItemHistoryOut(
        item_id=item.id,
        name=item.name,
        restock_point=int(item.restock_point),
        current_units=int(item.current_units),
        events=[InventoryEventOut.model_validate(ev) for ev in events],
        points=[StockPointOut(date=p.timestamp, units=p.units) for p in reconstruct_stock(events)],
    )
