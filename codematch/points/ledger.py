"""
Reputation Points Ledger

Every change is recorded as a PointsEvent. The daily totals cap gains and
losses separately: a user can gain at most DAILY_POINTS_CAP and lose at most
DAILY_POINTS_CAP points per calendar day. A change that crosses the cap is
applied partially and the rest is reported as blocked.
"""

import logging
from datetime import date
from typing import Optional, Tuple

from codematch.config import DAILY_POINTS_CAP

from .models import DailyPoints, PointsApplication, PointsEvent, PointsReason

logger = logging.getLogger(__name__)


def apply_daily_cap(
    daily: DailyPoints,
    change: int,
    cap: int = DAILY_POINTS_CAP,
) -> Tuple[PointsApplication, DailyPoints]:
    """
    Apply a point change against the day's totals.

    Returns the application result and the updated totals. The input
    record is not modified.
    """
    updated = daily.model_copy()

    if change > 0:
        remaining = cap - daily.total_gained
        applied = max(0, min(change, remaining))
        blocked = change - applied
        updated.total_gained += applied
        updated.net_change += applied
        return PointsApplication(applied=applied, blocked=blocked), updated

    if change < 0:
        loss = abs(change)
        remaining = cap - daily.total_lost
        applied = max(0, min(loss, remaining))
        blocked = loss - applied
        updated.total_lost += applied
        updated.net_change -= applied
        return PointsApplication(applied=applied, blocked=blocked), updated

    return PointsApplication(applied=0, blocked=0), updated


def get_daily_points(store, username: str, today: Optional[date] = None) -> DailyPoints:
    """Today's totals for username, zeroed if nothing was recorded yet."""
    today = today or date.today()
    daily = store.get_daily_points(username, today)
    if daily is None:
        daily = DailyPoints(username=username, day=today)
    return daily


def update_daily_points(
    store,
    username: str,
    change: int,
    today: Optional[date] = None,
    cap: int = DAILY_POINTS_CAP,
) -> Tuple[PointsApplication, DailyPoints]:
    """
    Apply a change to today's totals and persist them when anything was applied.

    The read, the cap and the write run inside the store's
    apply_daily_change, so concurrent changes for the same user and day
    never exceed the cap between them.
    """
    today = today or date.today()
    result, updated = store.apply_daily_change(
        username,
        today,
        lambda daily: apply_daily_cap(daily, change, cap),
    )

    if result.blocked > 0:
        logger.warning(
            f"Daily points cap reached for {username}: "
            f"applied={result.applied} blocked={result.blocked}"
        )

    return result, updated


def register_points(
    store,
    username: str,
    change: int,
    reason: PointsReason,
    today: Optional[date] = None,
) -> Tuple[PointsEvent, PointsApplication, DailyPoints]:
    """
    Record a point change and apply it to the daily totals.

    The event keeps the requested amount even when the cap blocks part
    of it.
    """
    event = store.add_points_event(PointsEvent(
        username=username,
        change_amount=change,
        reason=PointsReason(reason),
    ))
    result, daily = update_daily_points(store, username, change, today)

    logger.info(
        f"Registered {change:+d} points for {username} ({event.reason.value}), "
        f"applied {result.applied}"
    )
    return event, result, daily
