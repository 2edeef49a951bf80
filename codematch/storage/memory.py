"""
In-memory store.

Default backend when DATABASE_URL is unset, and the one tests run against.
Records are copied on the way in and out so callers never share state with
the store.
"""

from datetime import date
from threading import Lock
from typing import Any, Callable, Dict, List, Optional, Tuple

from codematch.matching.models import Match, MatchProfile
from codematch.points.models import DailyPoints, PointsEvent

from .base import MatchStore


class InMemoryMatchStore(MatchStore):

    backend = "memory"

    def __init__(self):
        self._lock = Lock()
        self._profiles: Dict[str, MatchProfile] = {}
        self._matches: Dict[str, Match] = {}
        self._events: List[PointsEvent] = []
        self._daily: Dict[Tuple[str, date], DailyPoints] = {}

    def get_profile(self, user_id: str) -> Optional[MatchProfile]:
        with self._lock:
            profile = self._profiles.get(user_id)
            return profile.model_copy(deep=True) if profile else None

    def list_profiles(self) -> List[MatchProfile]:
        with self._lock:
            return [p.model_copy(deep=True) for p in self._profiles.values()]

    def save_profile(self, profile: MatchProfile) -> MatchProfile:
        with self._lock:
            self._profiles[profile.user_id] = profile.model_copy(deep=True)
        return profile

    def get_match(self, match_id: str) -> Optional[Match]:
        with self._lock:
            match = self._matches.get(match_id)
            return match.model_copy(deep=True) if match else None

    def list_matches_for_user(self, user_id: str) -> List[Match]:
        with self._lock:
            found = [
                m.model_copy(deep=True)
                for m in self._matches.values()
                if m.involves(user_id)
            ]
        return sorted(found, key=lambda m: m.created_at)

    def save_match(self, match: Match) -> Match:
        with self._lock:
            self._matches[match.match_id] = match.model_copy(deep=True)
        return match

    def delete_match(self, match_id: str) -> Optional[Match]:
        with self._lock:
            return self._matches.pop(match_id, None)

    def add_points_event(self, event: PointsEvent) -> PointsEvent:
        with self._lock:
            self._events.append(event.model_copy(deep=True))
        return event

    def list_points_events(self, username: str) -> List[PointsEvent]:
        with self._lock:
            return [e.model_copy(deep=True) for e in self._events if e.username == username]

    def _read_daily(self, username: str, day: date) -> Optional[DailyPoints]:
        # Caller holds self._lock
        daily = self._daily.get((username, day))
        return daily.model_copy(deep=True) if daily else None

    def get_daily_points(self, username: str, day: date) -> Optional[DailyPoints]:
        with self._lock:
            return self._read_daily(username, day)

    def apply_daily_change(
        self,
        username: str,
        day: date,
        change_fn: Callable[[DailyPoints], Tuple[Any, DailyPoints]],
    ) -> Tuple[Any, DailyPoints]:
        with self._lock:
            current = self._read_daily(username, day)
            if current is None:
                current = DailyPoints(username=username, day=day)

            result, updated = change_fn(current.model_copy(deep=True))

            if updated != current:
                self._daily[(username, day)] = updated.model_copy(deep=True)
        return result, updated
