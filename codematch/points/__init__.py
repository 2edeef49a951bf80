"""
Reputation Points

Point events with a per-day gain/loss cap.
"""

from .models import (
    DailyPoints,
    PointsApplication,
    PointsEvent,
    PointsReason,
)
from .ledger import (
    apply_daily_cap,
    get_daily_points,
    register_points,
    update_daily_points,
)

__all__ = [
    "DailyPoints",
    "PointsApplication",
    "PointsEvent",
    "PointsReason",
    "apply_daily_cap",
    "get_daily_points",
    "register_points",
    "update_daily_points",
]
