"""Tests for low-stock detection and restock intervals."""

import itertools
from datetime import datetime, timedelta

from core.restock import (
    RestockEvent,
    low_stock_items,
    mean_gap_days,
    needs_restock,
    restock_intervals,
    summarize_inventory,
)

DAY0 = datetime(2024, 1, 1, 12, 0, 0)


def _day(n):
    return DAY0 + timedelta(days=n)


class TestLowStock:

    def test_threshold_is_inclusive(self, make_item):
        assert needs_restock(make_item("a", 5, 5))
        assert needs_restock(make_item("b", 4, 5))
        assert not needs_restock(make_item("c", 6, 5))

    def test_membership_matches_predicate(self, make_item):
        items = [
            make_item(f"item-{u}-{r}", u, r)
            for u, r in itertools.product(range(0, 6), range(0, 6))
        ]
        result = low_stock_items(items)
        assert result == [it for it in items if it.current_units <= it.restock_point]

    def test_preserves_input_order(self, make_item):
        items = [make_item("Zeta", 0, 1), make_item("Alfa", 10, 1), make_item("Beta", 1, 1)]
        assert [it.name for it in low_stock_items(items)] == ["Zeta", "Beta"]

    def test_deleted_items_excluded(self, make_item):
        items = [make_item("gone", 0, 5, deleted=True), make_item("here", 0, 5)]
        assert [it.name for it in low_stock_items(items)] == ["here"]

    def test_summary(self, make_item):
        items = [
            make_item("a", 10, 5),
            make_item("b", 3, 5),
            make_item("c", 5, 5),
            make_item("d", 100, 5, deleted=True),
        ]
        summary = summarize_inventory(items)
        assert summary.total_stock == 18
        assert summary.total_items == 3
        assert summary.items_needing_restock == 2


class TestRestockIntervals:

    def test_mean_gap_of_three_restocks(self):
        events = [RestockEvent("i1", "Tornillo", _day(d)) for d in (0, 5, 15)]
        [stats] = restock_intervals(events)
        assert stats.last_restock == _day(15)
        assert stats.restock_count == 3
        assert stats.days_between_restocks == 7.5
        assert stats.rounded_days == 8

    def test_single_restock_has_no_interval(self):
        [stats] = restock_intervals([RestockEvent("i1", "Tuerca", _day(3))])
        assert stats.last_restock == _day(3)
        assert stats.days_between_restocks is None
        assert stats.rounded_days is None

    def test_grouped_per_item_and_sorted_by_name(self):
        events = [
            RestockEvent("b", "tuerca", _day(10)),
            RestockEvent("a", "Arandela", _day(1)),
            RestockEvent("b", "tuerca", _day(4)),
            RestockEvent("a", "Arandela", _day(2)),
            RestockEvent("a", "Arandela", _day(9)),
        ]
        stats = restock_intervals(events)
        assert [s.item_name for s in stats] == ["Arandela", "tuerca"]
        assert stats[0].days_between_restocks == 4.0
        assert stats[1].days_between_restocks == 6.0
        assert stats[1].last_restock == _day(10)

    def test_no_events(self):
        assert restock_intervals([]) == []

    def test_mean_gap_ignores_input_order(self):
        assert mean_gap_days([_day(15), _day(0), _day(5)]) == 7.5
        assert mean_gap_days([_day(1)]) is None

    def test_fractional_days(self):
        dates = [DAY0, DAY0 + timedelta(hours=36)]
        assert mean_gap_days(dates) == 1.5
        [stats] = restock_intervals([RestockEvent("x", "x", d) for d in dates])
        assert stats.rounded_days == 2
