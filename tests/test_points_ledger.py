"""
Reputation Points Tests

Tests validate:
- Gain and loss caps are independent
- Partial application at the cap
- Events keep the requested amount
- Totals are per calendar day
- Concurrent registrations never exceed the cap
"""

import threading
import time
from datetime import date

import pytest

from codematch.points.ledger import (
    apply_daily_cap,
    get_daily_points,
    register_points,
    update_daily_points,
)
from codematch.points.models import DailyPoints, PointsReason
from codematch.storage.memory import InMemoryMatchStore

DAY = date(2025, 11, 3)


@pytest.fixture
def store():
    return InMemoryMatchStore()


# ============================================================================
# Pure Cap Arithmetic
# ============================================================================

class TestApplyDailyCap:

    def test_gain_under_cap(self):
        daily = DailyPoints(username="u", day=DAY)

        result, updated = apply_daily_cap(daily, 10, cap=30)

        assert (result.applied, result.blocked) == (10, 0)
        assert updated.total_gained == 10
        assert updated.net_change == 10
        assert daily.total_gained == 0

    def test_gain_partially_blocked(self):
        daily = DailyPoints(username="u", day=DAY, total_gained=25, net_change=25)

        result, updated = apply_daily_cap(daily, 10, cap=30)

        assert (result.applied, result.blocked) == (5, 5)
        assert updated.total_gained == 30

    def test_gain_fully_blocked(self):
        daily = DailyPoints(username="u", day=DAY, total_gained=30, net_change=30)

        result, _ = apply_daily_cap(daily, 5, cap=30)

        assert (result.applied, result.blocked) == (0, 5)

    def test_loss_capped_independently(self):
        daily = DailyPoints(username="u", day=DAY, total_gained=30, total_lost=20, net_change=10)

        result, updated = apply_daily_cap(daily, -15, cap=30)

        assert (result.applied, result.blocked) == (10, 5)
        assert updated.total_lost == 30
        assert updated.net_change == 0

    def test_zero_change(self):
        daily = DailyPoints(username="u", day=DAY)

        result, updated = apply_daily_cap(daily, 0)

        assert (result.applied, result.blocked) == (0, 0)
        assert updated == daily


# ============================================================================
# Stored Totals
# ============================================================================

class TestUpdateDailyPoints:

    def test_accumulates_across_calls(self, store):
        update_daily_points(store, "u", 20, today=DAY)
        result, daily = update_daily_points(store, "u", 20, today=DAY)

        assert (result.applied, result.blocked) == (10, 10)
        assert store.get_daily_points("u", DAY).total_gained == 30

    def test_new_day_resets(self, store):
        update_daily_points(store, "u", 30, today=DAY)

        result, _ = update_daily_points(store, "u", 5, today=date(2025, 11, 4))

        assert result.applied == 5

    def test_fully_blocked_change_not_saved(self, store):
        update_daily_points(store, "u", 30, today=DAY)
        before = store.get_daily_points("u", DAY)

        update_daily_points(store, "u", 1, today=DAY)

        assert store.get_daily_points("u", DAY) == before

    def test_unknown_user_zeroed(self, store):
        daily = get_daily_points(store, "nobody", today=DAY)

        assert daily.total_gained == 0
        assert daily.total_lost == 0


class TestRegisterPoints:

    def test_event_recorded_with_requested_amount(self, store):
        update_daily_points(store, "u", 28, today=DAY)

        event, result, daily = register_points(
            store, "u", 5, PointsReason.ACCEPT_ANSWER, today=DAY
        )

        assert event.change_amount == 5
        assert event.reason == PointsReason.ACCEPT_ANSWER
        assert result.applied == 2
        assert daily.total_gained == 30
        assert [e.event_id for e in store.list_points_events("u")] == [event.event_id]

    def test_loss_event(self, store):
        event, result, daily = register_points(
            store, "u", -10, "HATEFUL_LANGUAGE", today=DAY
        )

        assert event.reason == PointsReason.HATEFUL_LANGUAGE
        assert result.applied == 10
        assert daily.net_change == -10


# ============================================================================
# Concurrent Changes
# ============================================================================

class SlowReadStore(InMemoryMatchStore):
    """Widens the gap between reading and saving the daily totals."""

    def _read_daily(self, username, day):
        daily = super()._read_daily(username, day)
        time.sleep(0.05)
        return daily


class TestConcurrentRegistration:

    def test_parallel_gains_respect_cap(self):
        store = SlowReadStore()
        results = []

        def register():
            _, result, _ = register_points(
                store, "u", 20, PointsReason.ACCEPT_ANSWER, today=DAY
            )
            results.append(result)

        threads = [threading.Thread(target=register) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        applied = sorted(r.applied for r in results)
        stored = store.get_daily_points("u", DAY)

        assert applied == [0, 10, 20]
        assert stored.total_gained == sum(applied) == 30
        assert stored.net_change == 30
        assert len(store.list_points_events("u")) == 3

    def test_parallel_gains_and_losses(self):
        store = SlowReadStore()

        def register(change):
            register_points(store, "u", change, PointsReason.ACCEPT_ANSWER, today=DAY)

        threads = [
            threading.Thread(target=register, args=(change,))
            for change in (20, -20, 20, -20)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        stored = store.get_daily_points("u", DAY)

        assert (stored.total_gained, stored.total_lost) == (30, 30)
        assert stored.net_change == 0
