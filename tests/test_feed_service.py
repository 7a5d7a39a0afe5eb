"""
tests/test_feed_service.py — Feed Assembly Tests
=================================================

Covers friend scoping, private-post exclusion, ordering and limits.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from vibesync.database.models import FriendshipStatus, Post
from vibesync.services import feed_service, post_service, relationship_service

from conftest import make_user

BASE = datetime(2026, 2, 1, 8, 0, tzinfo=UTC)


def _post(session, user, content, *, minutes=0, private=False) -> Post:
    post = post_service.create_post(
        session, user_id=user.id, content=content, is_private=private
    )
    post.created_at = BASE + timedelta(minutes=minutes)
    session.flush()
    return post


def _befriend(session, a, b, status=FriendshipStatus.ACCEPTED):
    return relationship_service.create_friendship(
        session, user_id=a.id, friend_id=b.id, status=status
    )


@pytest.fixture
def trio(db_session):
    a = make_user(db_session, "Alice")
    b = make_user(db_session, "Bob")
    c = make_user(db_session, "Carol")
    return a, b, c


class TestFeedScope:
    def test_friend_sees_post_stranger_does_not(self, db_session, trio):
        a, b, c = trio
        _befriend(db_session, a, b)
        post = _post(db_session, a, "hello from A")

        b_feed = [p.id for p, _ in feed_service.get_feed(db_session, b.id)]
        c_feed = [p.id for p, _ in feed_service.get_feed(db_session, c.id)]
        assert post.id in b_feed
        assert post.id not in c_feed

    def test_friendship_is_symmetric(self, db_session, trio):
        a, b, _ = trio
        _befriend(db_session, b, a)
        post = _post(db_session, a, "A writes")
        assert post.id in [p.id for p, _ in feed_service.get_feed(db_session, b.id)]

    @pytest.mark.parametrize("status", [FriendshipStatus.PENDING, FriendshipStatus.BLOCKED])
    def test_non_accepted_friendship_hides_posts(self, db_session, trio, status):
        a, b, _ = trio
        _befriend(db_session, a, b, status)
        _post(db_session, a, "not for B yet")
        assert feed_service.get_feed(db_session, b.id) == []

    def test_no_friends_sees_own_public_posts(self, db_session, trio):
        a, _, _ = trio
        mine = _post(db_session, a, "mine")
        _post(db_session, a, "secret", private=True)

        feed = feed_service.get_feed(db_session, a.id)
        assert [p.id for p, _ in feed] == [mine.id]

    def test_private_posts_never_in_any_feed(self, db_session, trio):
        a, b, _ = trio
        _befriend(db_session, a, b)
        secret = _post(db_session, a, "diary", private=True)

        for viewer in (a, b):
            assert secret.id not in [p.id for p, _ in feed_service.get_feed(db_session, viewer.id)]
        assert secret.id in [p.id for p in post_service.posts_by_user(db_session, a.id)]

    def test_items_carry_author(self, db_session, trio):
        a, b, _ = trio
        _befriend(db_session, a, b)
        _post(db_session, a, "with author")

        (_, author), = feed_service.get_feed(db_session, b.id)
        assert author.id == a.id
        assert author.username == "alice"


class TestFeedOrdering:
    def test_newest_first(self, db_session, trio):
        a, b, _ = trio
        _befriend(db_session, a, b)
        old = _post(db_session, a, "old", minutes=0)
        new = _post(db_session, b, "new", minutes=30)
        mid = _post(db_session, a, "mid", minutes=15)

        feed = feed_service.get_feed(db_session, b.id)
        assert [p.id for p, _ in feed] == [new.id, mid.id, old.id]

    def test_limit_truncates(self, db_session, trio):
        a, _, _ = trio
        posts = [_post(db_session, a, f"post {i}", minutes=i) for i in range(5)]

        feed = feed_service.get_feed(db_session, a.id, limit=2)
        assert [p.id for p, _ in feed] == [posts[4].id, posts[3].id]

    def test_default_limit_is_twenty(self, db_session, trio):
        a, _, _ = trio
        for i in range(25):
            _post(db_session, a, f"post {i}", minutes=i)
        assert len(feed_service.get_feed(db_session, a.id)) == 20


def test_post_with_missing_author_is_dropped(db_session, trio):
    a, _, _ = trio
    _post(db_session, a, "real")
    relationship_service.create_friendship(
        db_session, user_id=a.id, friend_id="ghost", status=FriendshipStatus.ACCEPTED
    )
    db_session.add(Post(user_id="ghost", content="orphan", created_at=BASE))
    db_session.flush()

    contents = [p.content for p, _ in feed_service.get_feed(db_session, a.id)]
    assert contents == ["real"]
