"""
tests/test_relationship_service.py — Friendship & Join Helper Tests
====================================================================
"""

from __future__ import annotations

import pytest

from vibesync.database.models import FriendshipStatus
from vibesync.services import post_service, reaction_service, relationship_service

from conftest import make_user


@pytest.fixture
def pair(db_session):
    return make_user(db_session, "Iris"), make_user(db_session, "Jude")


class TestCreateFriendship:
    def test_defaults_to_pending(self, db_session, pair):
        a, b = pair
        f = relationship_service.create_friendship(db_session, user_id=a.id, friend_id=b.id)
        assert f.status == "pending"
        assert f.vibe_count == 0

    def test_rejects_self(self, db_session, pair):
        a, _ = pair
        with pytest.raises(ValueError, match="yourself"):
            relationship_service.create_friendship(db_session, user_id=a.id, friend_id=a.id)

    def test_rejects_duplicate_in_either_direction(self, db_session, pair):
        a, b = pair
        relationship_service.create_friendship(db_session, user_id=a.id, friend_id=b.id)
        with pytest.raises(ValueError, match="already exists"):
            relationship_service.create_friendship(db_session, user_id=b.id, friend_id=a.id)


class TestLookups:
    def test_friendship_between_either_order(self, db_session, pair):
        a, b = pair
        f = relationship_service.create_friendship(db_session, user_id=a.id, friend_id=b.id)
        assert relationship_service.friendship_between(db_session, a.id, b.id).id == f.id
        assert relationship_service.friendship_between(db_session, b.id, a.id).id == f.id

    def test_friendship_between_any_status(self, db_session, pair):
        a, b = pair
        relationship_service.create_friendship(
            db_session, user_id=a.id, friend_id=b.id, status=FriendshipStatus.BLOCKED
        )
        assert relationship_service.friendship_between(db_session, a.id, b.id).status == "blocked"

    def test_friends_of_resolves_other_side(self, db_session, pair):
        a, b = pair
        f = relationship_service.create_friendship(db_session, user_id=a.id, friend_id=b.id)
        assert relationship_service.friends_of(db_session, a.id) == []

        relationship_service.update_friendship_status(db_session, f.id, FriendshipStatus.ACCEPTED)
        (fa, friend_of_a), = relationship_service.friends_of(db_session, a.id)
        (fb, friend_of_b), = relationship_service.friends_of(db_session, b.id)
        assert fa.id == fb.id == f.id
        assert friend_of_a.id == b.id
        assert friend_of_b.id == a.id
        assert relationship_service.accepted_friend_ids(db_session, a.id) == {b.id}

    def test_friends_of_skips_missing_user(self, db_session, pair):
        a, _ = pair
        relationship_service.create_friendship(
            db_session, user_id=a.id, friend_id="ghost", status=FriendshipStatus.ACCEPTED
        )
        assert relationship_service.friends_of(db_session, a.id) == []

    def test_update_missing_friendship(self, db_session):
        assert relationship_service.update_friendship_status(
            db_session, "nope", FriendshipStatus.ACCEPTED
        ) is None

    def test_reactions_of_joins_users(self, db_session, pair):
        a, b = pair
        post = post_service.create_post(db_session, user_id=a.id, content="hi")
        reaction_service.create_reaction(db_session, user_id=b.id, post_id=post.id)

        (reaction, user), = relationship_service.reactions_of(db_session, post.id)
        assert reaction.type == "like"
        assert user.id == b.id
