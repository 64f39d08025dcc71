"""
Tests for services/follows.py
"""
from uuid import uuid4

import pytest

from cordigram.models.follow import Follow
from cordigram.services.errors import NotFoundError, ValidationError
from cordigram.services.follows import follow_user, is_following, unfollow_user
from cordigram.services.profiles import find_profile_by_user_id

from tests.fixtures.directory_fixtures import make_profile


def _counts(db, user_id):
    profile = find_profile_by_user_id(db, user_id)
    db.refresh(profile)
    return profile.followers_count, profile.following_count


class TestFollowGraph:

    def test_follow_updates_both_counters(self, db):
        ann = make_profile(db, "ann")
        bob = make_profile(db, "bob")

        assert follow_user(db, bob.user_id, ann.user_id) is True

        assert is_following(db, bob.user_id, ann.user_id)
        assert _counts(db, ann.user_id) == (1, 0)
        assert _counts(db, bob.user_id) == (0, 1)

    def test_follow_is_idempotent(self, db):
        ann = make_profile(db, "ann")
        bob = make_profile(db, "bob")

        follow_user(db, bob.user_id, ann.user_id)
        assert follow_user(db, bob.user_id, ann.user_id) is False

        assert db.query(Follow).count() == 1
        assert _counts(db, ann.user_id) == (1, 0)

    def test_unfollow_reverts_counters_once(self, db):
        ann = make_profile(db, "ann")
        bob = make_profile(db, "bob")
        follow_user(db, bob.user_id, ann.user_id)

        assert unfollow_user(db, bob.user_id, ann.user_id) is True
        assert unfollow_user(db, bob.user_id, ann.user_id) is False

        assert not is_following(db, bob.user_id, ann.user_id)
        assert _counts(db, ann.user_id) == (0, 0)
        assert _counts(db, bob.user_id) == (0, 0)

    def test_cannot_follow_self(self, db):
        ann = make_profile(db, "ann")
        with pytest.raises(ValidationError):
            follow_user(db, ann.user_id, ann.user_id)

    def test_followee_must_have_profile(self, db):
        ann = make_profile(db, "ann")
        with pytest.raises(NotFoundError):
            follow_user(db, ann.user_id, uuid4())

    def test_is_following_with_invalid_ids(self, db):
        assert is_following(db, "bad", None) is False
