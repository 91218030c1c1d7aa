"""Tests for the stock ledger fold."""

import random
from datetime import datetime, timedelta

import pytest

from core.errors import InsufficientStock
from core.ledger import (
    StockPoint,
    apply_adjustment,
    ledger_total,
    reconstruct_stock,
    signed_delta,
)

T0 = datetime(2024, 3, 1, 9, 0, 0)


class TestReconstructStock:

    def test_empty_history_has_no_points(self):
        assert reconstruct_stock([]) == []

    def test_running_total_one_point_per_event(self, make_event):
        events = [
            make_event("add", 10, T0),
            make_event("remove", 7, T0 + timedelta(hours=1)),
            make_event("add", 4, T0 + timedelta(days=1)),
        ]
        assert reconstruct_stock(events) == [
            StockPoint(T0, 10),
            StockPoint(T0 + timedelta(hours=1), 3),
            StockPoint(T0 + timedelta(days=1), 7),
        ]

    def test_events_folded_in_timestamp_order(self, make_event):
        events = [
            make_event("remove", 2, T0 + timedelta(days=2)),
            make_event("add", 5, T0),
        ]
        points = reconstruct_stock(events)
        assert [p.units for p in points] == [5, 3]
        assert points[0].timestamp == T0

    def test_equal_timestamps_keep_insertion_order(self, make_event):
        events = [
            make_event("add", 5, T0),
            make_event("remove", 5, T0),
            make_event("add", 1, T0),
        ]
        assert [p.units for p in reconstruct_stock(events)] == [5, 0, 1]

    def test_final_total_matches_sum_of_deltas(self, make_event):
        rng = random.Random(1234)
        for _ in range(50):
            stock = 0
            events = []
            for i in range(rng.randint(1, 30)):
                units = rng.randint(1, 20)
                if stock >= units and rng.random() < 0.5:
                    events.append(make_event("remove", units, T0 + timedelta(minutes=i)))
                    stock -= units
                else:
                    events.append(make_event("add", units, T0 + timedelta(minutes=i)))
                    stock += units

            points = reconstruct_stock(events)
            assert len(points) == len(events)
            assert points[-1].units == ledger_total(events) == stock
            assert all(p.units >= 0 for p in points)


class TestSignedDelta:

    def test_add_and_remove(self, make_event):
        assert signed_delta(make_event("add", 3, T0)) == 3
        assert signed_delta(make_event("remove", 3, T0)) == -3

    def test_unknown_type_rejected(self, make_event):
        with pytest.raises(ValueError):
            signed_delta(make_event("transfer", 3, T0))


class TestApplyAdjustment:

    def test_add(self):
        assert apply_adjustment(3, 4, "add") == 7

    def test_remove_down_to_zero(self):
        assert apply_adjustment(3, 3, "remove") == 0

    def test_remove_more_than_stock(self):
        with pytest.raises(InsufficientStock) as exc:
            apply_adjustment(3, 10, "remove")
        assert exc.value.message == "No hay suficientes unidades para retirar"

    @pytest.mark.parametrize("units", [0, -1])
    def test_units_must_be_positive(self, units):
        with pytest.raises(ValueError):
            apply_adjustment(3, units, "add")
