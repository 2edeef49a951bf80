"""
Store interface shared by the in-memory and PostgreSQL backends.

Stores hold profiles, matches, point events and daily point totals. They
do no validation beyond what the models enforce; business rules live in
the service modules.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Callable, List, Optional, Tuple

from codematch.matching.models import Match, MatchProfile
from codematch.points.models import DailyPoints, PointsEvent


class StoreUnavailableError(RuntimeError):
    """The backing database could not be reached."""


class MatchStore(ABC):

    backend: str = "abstract"

    # Profiles

    @abstractmethod
    def get_profile(self, user_id: str) -> Optional[MatchProfile]:
        ...

    @abstractmethod
    def list_profiles(self) -> List[MatchProfile]:
        ...

    @abstractmethod
    def save_profile(self, profile: MatchProfile) -> MatchProfile:
        """Insert or replace the profile keyed by user_id."""

    # Matches

    @abstractmethod
    def get_match(self, match_id: str) -> Optional[Match]:
        ...

    @abstractmethod
    def list_matches_for_user(self, user_id: str) -> List[Match]:
        """Matches where user_id is user_a or user_b, oldest first."""

    @abstractmethod
    def save_match(self, match: Match) -> Match:
        """Insert or replace the match keyed by match_id."""

    @abstractmethod
    def delete_match(self, match_id: str) -> Optional[Match]:
        """Remove and return the match, or None if it did not exist."""

    # Points

    @abstractmethod
    def add_points_event(self, event: PointsEvent) -> PointsEvent:
        ...

    @abstractmethod
    def list_points_events(self, username: str) -> List[PointsEvent]:
        ...

    @abstractmethod
    def get_daily_points(self, username: str, day: date) -> Optional[DailyPoints]:
        ...

    @abstractmethod
    def apply_daily_change(
        self,
        username: str,
        day: date,
        change_fn: Callable[[DailyPoints], Tuple[Any, DailyPoints]],
    ) -> Tuple[Any, DailyPoints]:
        """
        Read-modify-write of one (username, day) record as a single step.

        change_fn receives the current totals (zeroed when none are stored)
        and returns (result, updated). updated is saved when it differs from
        the current totals. No other change to the same record can interleave.
        """

    def ping(self) -> bool:
        return True
