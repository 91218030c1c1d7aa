"""
Item registry and stock ledger operations.

All reads and writes go through here so the two tables stay consistent:
a stock adjustment updates `items.current_units` and appends to
`inventory_history` in the same transaction.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import BackendUnavailable, DuplicateName, InventoryError, NotFound
from core.ledger import ADD, EventType, apply_adjustment
from core.restock import RestockEvent

from .history import InventoryEvent
from .item import ACTIVE, DELETED, Item

logger = logging.getLogger(__name__)

NAME_INDEX = "ux_items_name_lower"
EDITABLE_FIELDS = ("name", "description", "image_url", "restock_point")


async def _execute(db: AsyncSession, stmt):
    try:
        return await db.execute(stmt)
    except SQLAlchemyError as e:
        logger.exception("Database read failed")
        raise BackendUnavailable() from e


async def _commit(db: AsyncSession) -> None:
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if NAME_INDEX in str(e.orig):
            raise DuplicateName() from e
        logger.exception("Database write rejected")
        raise BackendUnavailable() from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception("Database write failed")
        raise BackendUnavailable() from e


async def _ensure_unique_name(db: AsyncSession, name: str, exclude_id: Optional[UUID] = None) -> None:
    # Soft-deleted items keep their row, so their names stay taken.
    stmt = select(Item.id).where(func.lower(Item.name) == name.lower())
    if exclude_id is not None:
        stmt = stmt.where(Item.id != exclude_id)
    res = await _execute(db, stmt.limit(1))
    if res.first() is not None:
        raise DuplicateName()


async def list_items(db: AsyncSession, q: Optional[str] = None) -> List[Item]:
    """Active items ordered by name, optionally filtered by a name/description search."""
    stmt = Item.active()
    if q and q.strip():
        qq = f"%{q.strip().lower()}%"
        stmt = stmt.where(
            or_(
                func.lower(Item.name).like(qq),
                func.lower(func.coalesce(Item.description, "")).like(qq),
            )
        )
    res = await _execute(db, stmt.order_by(func.lower(Item.name).asc(), Item.id.asc()))
    return list(res.scalars().all())


async def get_item(db: AsyncSession, item_id: UUID, *, for_update: bool = False) -> Item:
    stmt = Item.active().where(Item.id == item_id)
    if for_update:
        # Refresh an already-loaded instance from the locked row.
        stmt = stmt.with_for_update().execution_options(populate_existing=True)
    res = await _execute(db, stmt)
    item = res.scalar_one_or_none()
    if item is None:
        raise NotFound()
    return item


async def create_item(
    db: AsyncSession,
    *,
    name: str,
    description: Optional[str] = None,
    image_url: Optional[str] = None,
    restock_point: int = 10,
) -> Item:
    name = name.strip()
    await _ensure_unique_name(db, name)

    item = Item(
        name=name,
        description=description,
        image_url=image_url,
        restock_point=restock_point,
        current_units=0,
        status=ACTIVE,
    )
    db.add(item)
    await _commit(db)
    await db.refresh(item)
    logger.info("Created item %s (%s)", item.id, item.name)
    return item


async def update_item(db: AsyncSession, item_id: UUID, fields: Dict[str, Any]) -> Item:
    """
    Apply an edit to an item.

    Only name, description, image_url and restock_point are editable; the
    stock level changes exclusively through adjust_stock.
    """
    item = await get_item(db, item_id)

    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValueError(f"fields not editable: {', '.join(sorted(unknown))}")

    name = fields.get("name")
    if name is not None:
        name = name.strip()
        if name.lower() != item.name.lower():
            await _ensure_unique_name(db, name, exclude_id=item.id)
        item.name = name
    if "description" in fields:
        item.description = fields["description"]
    if "image_url" in fields:
        item.image_url = fields["image_url"]
    if fields.get("restock_point") is not None:
        item.restock_point = int(fields["restock_point"])

    await _commit(db)
    await db.refresh(item)
    return item


async def soft_delete_item(db: AsyncSession, item_id: UUID) -> None:
    item = await get_item(db, item_id)
    item.status = DELETED
    await _commit(db)
    logger.info("Soft-deleted item %s (%s)", item.id, item.name)


async def adjust_stock(
    db: AsyncSession,
    item_id: UUID,
    *,
    units: int,
    type: EventType,
) -> Tuple[Item, InventoryEvent]:
    """
    Add or remove stock as a single transaction.

    The item row is locked, the new level checked against the cached
    `current_units`, then the cache update and the history append are
    committed together. On any failure neither write survives.
    """
    try:
        item = await get_item(db, item_id, for_update=True)
        new_units = apply_adjustment(int(item.current_units), units, type)

        item.current_units = new_units
        event = InventoryEvent(item_id=item.id, units=units, type=type)
        db.add(event)
        await _commit(db)
    except InventoryError as e:
        await db.rollback()
        logger.warning("Stock adjustment rejected for item %s: %s", item_id, e.code)
        raise

    logger.info(
        "Item %s %s %d units -> %d",
        item.id, "added" if type == ADD else "removed", units, new_units,
    )
    return item, event


async def list_history(db: AsyncSession, item_id: UUID, limit: int = 100) -> List[InventoryEvent]:
    """Oldest-first history of an item, capped at `limit` events."""
    await get_item(db, item_id)
    stmt = (
        select(InventoryEvent)
        .where(InventoryEvent.item_id == item_id)
        .order_by(InventoryEvent.created_at.asc(), InventoryEvent.id.asc())
        .limit(limit)
    )
    res = await _execute(db, stmt)
    return list(res.scalars().all())


async def list_all_add_events(db: AsyncSession) -> List[RestockEvent]:
    stmt = (
        select(InventoryEvent.item_id, Item.name, InventoryEvent.created_at)
        .join(Item, InventoryEvent.item_id == Item.id)
        .where(InventoryEvent.type == ADD)
        .where(Item.status == ACTIVE)
        .order_by(InventoryEvent.created_at.desc(), InventoryEvent.id.desc())
    )
    res = await _execute(db, stmt)
    return [RestockEvent(item_id, name, created_at) for (item_id, name, created_at) in res.all()]
