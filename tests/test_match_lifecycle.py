"""
Match Lifecycle Tests

Tests validate:
- Creation with score snapshot
- Participant-only status updates and deletion
- Enriched user match listing
"""

import pytest

from codematch.matching.lifecycle import (
    InvalidMatchError,
    MatchNotFoundError,
    UnauthorizedMatchError,
    create_match,
    delete_match,
    get_match,
    get_user_matches,
    update_match_status,
)
from codematch.matching.models import MatchProfile, MatchStatus
from codematch.storage.memory import InMemoryMatchStore


@pytest.fixture
def store():
    store = InMemoryMatchStore()
    store.save_profile(MatchProfile(
        user_id="alice",
        is_active=True,
        programming_language=["JS", "Python"],
        preferences={"preferred_languages": ["Go"]},
    ))
    store.save_profile(MatchProfile(
        user_id="bob",
        is_active=True,
        programming_language=["JS", "Go"],
    ))
    return store


# ============================================================================
# Create
# ============================================================================

class TestCreateMatch:

    def test_creates_pending_with_score_snapshot(self, store):
        match = create_match(store, "alice", "bob", initiated_by="alice")

        assert match.status == MatchStatus.PENDING
        assert match.score == 35
        assert store.get_match(match.match_id) is not None

    def test_explicit_score_kept(self, store):
        match = create_match(store, "alice", "bob", initiated_by="alice", score=90)

        assert match.score == 90

    def test_missing_profile_scores_zero(self, store):
        match = create_match(store, "alice", "carol", initiated_by="alice")

        assert match.score == 0

    def test_self_match_rejected(self, store):
        with pytest.raises(InvalidMatchError):
            create_match(store, "alice", "alice", initiated_by="alice")

    def test_initiator_must_participate(self, store):
        with pytest.raises(InvalidMatchError):
            create_match(store, "alice", "bob", initiated_by="mallory")


# ============================================================================
# Read
# ============================================================================

class TestGetMatches:

    def test_get_unknown_match(self, store):
        with pytest.raises(MatchNotFoundError):
            get_match(store, "nope")

    def test_user_matches_include_other_profile(self, store):
        create_match(store, "alice", "bob", initiated_by="alice")
        create_match(store, "carol", "alice", initiated_by="carol")

        matches = get_user_matches(store, "alice")

        assert len(matches) == 2
        by_other = {m.other_user("alice"): m for m in matches}
        assert by_other["bob"].other_user_profile.user_id == "bob"
        assert by_other["carol"].other_user_profile is None

    def test_user_matches_excludes_unrelated(self, store):
        create_match(store, "bob", "carol", initiated_by="bob")

        assert get_user_matches(store, "alice") == []


# ============================================================================
# Status Updates
# ============================================================================

class TestUpdateStatus:

    def test_recipient_accepts(self, store):
        match = create_match(store, "alice", "bob", initiated_by="alice")

        updated = update_match_status(store, match.match_id, "bob", MatchStatus.ACCEPTED)

        assert updated.status == MatchStatus.ACCEPTED
        assert updated.updated_at >= match.updated_at
        assert store.get_match(match.match_id).status == MatchStatus.ACCEPTED

    def test_reject_with_plain_string(self, store):
        match = create_match(store, "alice", "bob", initiated_by="alice")

        updated = update_match_status(store, match.match_id, "bob", "rejected")

        assert updated.status == MatchStatus.REJECTED

    def test_outsider_cannot_update(self, store):
        match = create_match(store, "alice", "bob", initiated_by="alice")

        with pytest.raises(UnauthorizedMatchError):
            update_match_status(store, match.match_id, "mallory", MatchStatus.ACCEPTED)

    def test_cannot_reset_to_pending(self, store):
        match = create_match(store, "alice", "bob", initiated_by="alice")

        with pytest.raises(InvalidMatchError):
            update_match_status(store, match.match_id, "bob", MatchStatus.PENDING)

    def test_unknown_match(self, store):
        with pytest.raises(MatchNotFoundError):
            update_match_status(store, "nope", "bob", MatchStatus.ACCEPTED)


# ============================================================================
# Delete
# ============================================================================

class TestDeleteMatch:

    def test_either_participant_deletes(self, store):
        first = create_match(store, "alice", "bob", initiated_by="alice")
        second = create_match(store, "alice", "carol", initiated_by="alice")

        delete_match(store, first.match_id, "bob")
        delete_match(store, second.match_id, "alice")

        assert store.get_match(first.match_id) is None
        assert store.get_match(second.match_id) is None

    def test_outsider_cannot_delete(self, store):
        match = create_match(store, "alice", "bob", initiated_by="alice")

        with pytest.raises(UnauthorizedMatchError):
            delete_match(store, match.match_id, "mallory")
        assert store.get_match(match.match_id) is not None

    def test_delete_twice(self, store):
        match = create_match(store, "alice", "bob", initiated_by="alice")
        delete_match(store, match.match_id, "alice")

        with pytest.raises(MatchNotFoundError):
            delete_match(store, match.match_id, "alice")
