"""
Item links encoded in QR labels.

Labels carry `/item/<id>`, either as an absolute URL
(`https://host/item/<id>`) or as the bare path.
"""

from typing import Optional
from urllib.parse import urlsplit

from core.config import settings
from core.errors import InvalidScanPayload

ITEM_PATH_PREFIX = "/item/"


def item_path(item_id) -> str:
    return f"{ITEM_PATH_PREFIX}{item_id}"


def item_url(item_id, base_url: Optional[str] = None) -> str:
    base = (base_url if base_url is not None else settings.public_base_url).rstrip("/")
    return f"{base}{item_path(item_id)}"


def parse_scan_payload(payload: str) -> str:
    """Return the item id encoded in a scanned string, or raise InvalidScanPayload."""
    text = (payload or "").strip()
    if ITEM_PATH_PREFIX not in text:
        raise InvalidScanPayload()

    try:
        parts = urlsplit(text)
    except ValueError:
        raise InvalidScanPayload()

    # Absolute URLs need a host, bare paths must start with the prefix.
    if parts.scheme and not parts.netloc:
        raise InvalidScanPayload()
    path = parts.path
    if not path.startswith(ITEM_PATH_PREFIX):
        raise InvalidScanPayload()

    item_id = path[len(ITEM_PATH_PREFIX):].rstrip("/")
    if not item_id or "/" in item_id or " " in item_id:
        raise InvalidScanPayload()
    return item_id


def resolve_scan(payload: str) -> Optional[str]:
    try:
        return parse_scan_payload(payload)
    except InvalidScanPayload:
        return None
