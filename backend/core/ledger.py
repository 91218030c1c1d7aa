"""
Stock ledger.

Inventory history is an append-only list of add/remove events. The stock
level at any point in time is the left-fold of the signed deltas, which is
what the history chart plots and what `items.current_units` caches.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Literal

from core.errors import InsufficientStock

EventType = Literal["add", "remove"]

ADD: EventType = "add"
REMOVE: EventType = "remove"


@dataclass(frozen=True)
class StockPoint:
    timestamp: datetime
    units: int


def signed_delta(event) -> int:
    """+units for an add event, -units for a remove event."""
    if event.type == ADD:
        return int(event.units)
    if event.type == REMOVE:
        return -int(event.units)
    raise ValueError(f"unknown event type: {event.type!r}")


def reconstruct_stock(events: Iterable) -> List[StockPoint]:
    """
    Running total after each event, in timestamp order.

    One point per event, starting from 0. Events sharing a timestamp keep
    their input (insertion) order.
    """
    ordered = sorted(events, key=lambda e: e.created_at)

    points: List[StockPoint] = []
    running_total = 0
    for event in ordered:
        running_total += signed_delta(event)
        points.append(StockPoint(timestamp=event.created_at, units=running_total))
    return points


def ledger_total(events: Iterable) -> int:
    return sum(signed_delta(e) for e in events)


def apply_adjustment(current_units: int, units: int, type: EventType) -> int:
    """Return the stock level after the adjustment, or raise before anything is written."""
    if units <= 0:
        raise ValueError("units must be > 0")
    if type == ADD:
        return current_units + units
    if type == REMOVE:
        new_units = current_units - units
        if new_units < 0:
            raise InsufficientStock()
        return new_units
    raise ValueError(f"unknown event type: {type!r}")
