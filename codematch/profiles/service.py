"""
Match Profile service: create, read, update and opt-in toggling.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List

from pydantic import ValidationError

from codematch.matching.models import MatchProfile
from codematch.storage.base import MatchStore

from .models import OnboardingStatus

logger = logging.getLogger(__name__)


class ProfileNotFoundError(LookupError):
    pass


class ProfileExistsError(ValueError):
    pass


class InvalidProfileUpdateError(ValueError):
    pass


def create_match_profile(store: MatchStore, profile: MatchProfile) -> MatchProfile:
    if store.get_profile(profile.user_id) is not None:
        raise ProfileExistsError(f"Match profile for {profile.user_id} already exists")

    if profile.created_at is None:
        profile = profile.model_copy(update={"created_at": datetime.utcnow()})

    store.save_profile(profile)
    logger.info(f"Match profile created for {profile.user_id} (active={profile.is_active})")
    return profile


def get_match_profile(store: MatchStore, user_id: str) -> MatchProfile:
    profile = store.get_profile(user_id)
    if profile is None:
        raise ProfileNotFoundError(f"Match profile for {user_id} not found")
    return profile


def list_match_profiles(store: MatchStore) -> List[MatchProfile]:
    return store.list_profiles()


def update_match_profile(
    store: MatchStore,
    user_id: str,
    updates: Dict[str, Any],
) -> MatchProfile:
    """
    Apply a partial update and re-validate the result.

    user_id and created_at cannot be changed through updates. An update
    that leaves the profile invalid (e.g. null for a required field) raises
    InvalidProfileUpdateError and nothing is saved.
    """
    current = get_match_profile(store, user_id)

    data = current.model_dump()
    for key, value in updates.items():
        if key in ("user_id", "created_at"):
            continue
        data[key] = value

    try:
        updated = MatchProfile(**data)
    except ValidationError as e:
        logger.warning(f"Rejected match profile update for {user_id}: {sorted(updates)}")
        raise InvalidProfileUpdateError(f"Invalid update for {user_id}: {e}") from e

    store.save_profile(updated)

    logger.info(f"Match profile updated for {user_id}: {sorted(updates)}")
    return updated


def toggle_match_profile_active(store: MatchStore, user_id: str, is_active: bool) -> MatchProfile:
    return update_match_profile(store, user_id, {"is_active": is_active})


def check_onboarding_status(store: MatchStore, user_id: str) -> OnboardingStatus:
    profile = store.get_profile(user_id)
    if profile is None:
        return OnboardingStatus(exists=False, is_active=False)
    return OnboardingStatus(exists=True, is_active=profile.is_active)
