"""
Low-stock detection and restock statistics.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, NamedTuple, Optional

SECONDS_PER_DAY = 86400


class RestockEvent(NamedTuple):
    item_id: Any
    item_name: str
    created_at: datetime


@dataclass(frozen=True)
class RestockStats:
    item_id: Any
    item_name: str
    last_restock: datetime
    restock_count: int
    days_between_restocks: Optional[float] = None

    @property
    def rounded_days(self) -> Optional[int]:
        # Half up, 7.5 days reads as 8.
        if self.days_between_restocks is None:
            return None
        return int(math.floor(self.days_between_restocks + 0.5))


@dataclass(frozen=True)
class InventorySummary:
    total_stock: int
    total_items: int
    items_needing_restock: int


def _is_deleted(item) -> bool:
    return bool(getattr(item, "deleted", False))


def needs_restock(item) -> bool:
    # Inclusive: sitting exactly on the restock point already needs a restock.
    return item.current_units <= item.restock_point


def low_stock_items(items: Iterable) -> List:
    return [it for it in items if not _is_deleted(it) and needs_restock(it)]


def summarize_inventory(items: Iterable) -> InventorySummary:
    active = [it for it in items if not _is_deleted(it)]
    return InventorySummary(
        total_stock=sum(int(it.current_units) for it in active),
        total_items=len(active),
        items_needing_restock=sum(1 for it in active if needs_restock(it)),
    )


def mean_gap_days(dates: Iterable[datetime]) -> Optional[float]:
    """
    Average gap in days between consecutive dates.

    Dates are sorted newest first and the gaps (date[i] - date[i+1]) averaged.
    Fewer than two dates have no gap.
    """
    ordered = sorted(dates, reverse=True)
    if len(ordered) < 2:
        return None
    gaps = [
        (ordered[i] - ordered[i + 1]).total_seconds() / SECONDS_PER_DAY
        for i in range(len(ordered) - 1)
    ]
    return sum(gaps) / len(gaps)


def restock_intervals(add_events: Iterable[RestockEvent]) -> List[RestockStats]:
    """Last restock and mean restock interval per item, ordered by item name."""
    names: Dict[Any, str] = {}
    dates: Dict[Any, List[datetime]] = {}
    for ev in add_events:
        names.setdefault(ev.item_id, ev.item_name)
        dates.setdefault(ev.item_id, []).append(ev.created_at)

    out: List[RestockStats] = []
    for item_id, item_dates in dates.items():
        out.append(
            RestockStats(
                item_id=item_id,
                item_name=names[item_id],
                last_restock=max(item_dates),
                restock_count=len(item_dates),
                days_between_restocks=mean_gap_days(item_dates),
            )
        )
    out.sort(key=lambda s: (s.item_name or "").lower())
    return out
