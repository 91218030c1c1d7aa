import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import NotFound
from core.scan import item_path, resolve_scan
from db.database import get_async_session
from db.inventory import repository
from schemas.inventory import ScanRequest, ScanResult

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/resolve", response_model=ScanResult)
async def resolve_scanned_code(payload: ScanRequest, db: AsyncSession = Depends(get_async_session)):
    """
    Map a scanned QR string to an item.

    Strings that are not item links, or that point to an unknown item,
    come back as `matched: false` so the caller simply stays where it is.
    """
    raw_id = resolve_scan(payload.payload)
    if raw_id is None:
        logger.info("Ignoring scan payload that is not an item link")
        return ScanResult(matched=False)

    try:
        item_id = UUID(raw_id)
        await repository.get_item(db, item_id)
    except (ValueError, NotFound):
        logger.info("Scanned item %s does not exist", raw_id)
        return ScanResult(matched=False)

    return ScanResult(matched=True, item_id=item_id, path=item_path(item_id))
