"""
Match Lifecycle

create -> pending
pending -> accepted | rejected   (participants only)
any -> deleted                   (participants only)
"""

import logging
from datetime import datetime
from typing import List, Optional

from codematch.storage.base import MatchStore

from .models import Match, MatchStatus, MatchWithProfile
from .score import compute_score

logger = logging.getLogger(__name__)


class MatchNotFoundError(LookupError):
    pass


class UnauthorizedMatchError(PermissionError):
    pass


class InvalidMatchError(ValueError):
    pass


def _snapshot_score(store: MatchStore, user_a: str, user_b: str) -> int:
    """Score of user_b for user_a at creation time, 0 if either profile is missing."""
    profile_a = store.get_profile(user_a)
    profile_b = store.get_profile(user_b)
    if profile_a is None or profile_b is None:
        return 0
    return compute_score(profile_a, profile_b)


def create_match(
    store: MatchStore,
    user_a: str,
    user_b: str,
    initiated_by: str,
    score: Optional[int] = None,
    status: MatchStatus = MatchStatus.PENDING,
) -> Match:
    if user_a == user_b:
        raise InvalidMatchError("A user cannot match with themselves")
    if initiated_by not in (user_a, user_b):
        raise InvalidMatchError("initiated_by must be one of the matched users")

    if score is None:
        score = _snapshot_score(store, user_a, user_b)

    match = Match(
        user_a=user_a,
        user_b=user_b,
        status=MatchStatus(status),
        score=score,
        initiated_by=initiated_by,
    )
    store.save_match(match)

    logger.info(f"Match {match.match_id} created: {user_a} -> {user_b} (score={score})")
    return match


def get_match(store: MatchStore, match_id: str) -> Match:
    match = store.get_match(match_id)
    if match is None:
        raise MatchNotFoundError(f"Match {match_id} not found")
    return match


def get_user_matches(store: MatchStore, user_id: str) -> List[MatchWithProfile]:
    """All matches involving user_id, each with the other participant's profile."""
    enriched = []
    for match in store.list_matches_for_user(user_id):
        enriched.append(MatchWithProfile(
            **match.model_dump(),
            other_user_profile=store.get_profile(match.other_user(user_id)),
        ))
    return enriched


def _require_participant(match: Match, user_id: str, action: str) -> None:
    if not match.involves(user_id):
        logger.warning(f"User {user_id} tried to {action} match {match.match_id}")
        raise UnauthorizedMatchError(
            f"Unauthorized: Only participants can {action} this match"
        )


def update_match_status(
    store: MatchStore,
    match_id: str,
    user_id: str,
    status: MatchStatus,
) -> Match:
    status = MatchStatus(status)
    if status == MatchStatus.PENDING:
        raise InvalidMatchError("Status can only be changed to accepted or rejected")

    match = get_match(store, match_id)
    _require_participant(match, user_id, "update")

    match.status = status
    match.updated_at = datetime.utcnow()
    store.save_match(match)

    logger.info(f"Match {match_id} {status.value} by {user_id}")
    return match


def delete_match(store: MatchStore, match_id: str, user_id: str) -> Match:
    match = get_match(store, match_id)
    _require_participant(match, user_id, "delete")

    deleted = store.delete_match(match_id)
    if deleted is None:
        raise MatchNotFoundError(f"Match {match_id} not found or already deleted")

    logger.info(f"Match {match_id} deleted by {user_id}")
    return deleted
