"""
Match Profile Service Tests
"""

import pytest

from codematch.matching.models import MatchProfile, SkillLevel
from codematch.profiles.service import (
    InvalidProfileUpdateError,
    ProfileExistsError,
    ProfileNotFoundError,
    check_onboarding_status,
    create_match_profile,
    get_match_profile,
    list_match_profiles,
    toggle_match_profile_active,
    update_match_profile,
)
from codematch.storage.memory import InMemoryMatchStore


@pytest.fixture
def store():
    return InMemoryMatchStore()


def make_profile(user_id="alice", **overrides):
    data = {
        "user_id": user_id,
        "programming_language": ["JS"],
        "level": "INTERMEDIATE",
        "location": "EUROPE",
    }
    data.update(overrides)
    return MatchProfile(**data)


class TestCreateProfile:

    def test_create_defaults_inactive(self, store):
        profile = create_match_profile(store, make_profile())

        assert profile.is_active is False
        assert profile.created_at is not None
        assert get_match_profile(store, "alice").level == SkillLevel.INTERMEDIATE

    def test_duplicate_rejected(self, store):
        create_match_profile(store, make_profile())

        with pytest.raises(ProfileExistsError):
            create_match_profile(store, make_profile())

    def test_list(self, store):
        create_match_profile(store, make_profile("alice"))
        create_match_profile(store, make_profile("bob"))

        assert sorted(p.user_id for p in list_match_profiles(store)) == ["alice", "bob"]


class TestUpdateProfile:

    def test_partial_update(self, store):
        create_match_profile(store, make_profile(biography="hi"))

        updated = update_match_profile(store, "alice", {"programming_language": ["Go", "Rust"]})

        assert updated.programming_language == ["Go", "Rust"]
        assert updated.biography == "hi"
        assert updated.location == "EUROPE"

    def test_nested_preferences_update(self, store):
        create_match_profile(store, make_profile())

        updated = update_match_profile(
            store, "alice", {"preferences": {"preferred_languages": ["Go"], "preferred_level": "ADVANCED"}}
        )

        assert updated.preferences.preferred_languages == ["Go"]
        assert updated.preferences.preferred_level == SkillLevel.ADVANCED

    def test_user_id_cannot_change(self, store):
        create_match_profile(store, make_profile())

        updated = update_match_profile(store, "alice", {"user_id": "eve"})

        assert updated.user_id == "alice"
        assert store.get_profile("eve") is None

    def test_null_required_field_rejected(self, store):
        create_match_profile(store, make_profile(is_active=True))

        with pytest.raises(InvalidProfileUpdateError):
            update_match_profile(store, "alice", {"is_active": None})

        stored = get_match_profile(store, "alice")
        assert stored.is_active is True

    def test_null_optional_field_clears_it(self, store):
        create_match_profile(store, make_profile())

        updated = update_match_profile(store, "alice", {"location": None, "biography": None})

        assert updated.location is None
        assert updated.biography == ""

    def test_unknown_user(self, store):
        with pytest.raises(ProfileNotFoundError):
            update_match_profile(store, "ghost", {"biography": "x"})

    def test_toggle_active(self, store):
        create_match_profile(store, make_profile())

        assert toggle_match_profile_active(store, "alice", True).is_active is True
        assert toggle_match_profile_active(store, "alice", False).is_active is False


class TestOnboardingStatus:

    def test_no_profile(self, store):
        status = check_onboarding_status(store, "alice")

        assert status.exists is False
        assert status.is_active is False

    def test_active_profile(self, store):
        create_match_profile(store, make_profile(is_active=True))

        status = check_onboarding_status(store, "alice")

        assert status.exists is True
        assert status.is_active is True

    def test_get_unknown(self, store):
        with pytest.raises(ProfileNotFoundError):
            get_match_profile(store, "ghost")
