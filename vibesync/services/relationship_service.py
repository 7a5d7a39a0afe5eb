"""
vibesync.services.relationship_service — Friendships & Join Helpers
====================================================================

A friendship is stored once, requester → addressee, but behaves as an
unordered pair.  :func:`_involving` and :func:`_between` are the only
places that spell out the two orderings; every other query goes
through them.

Joins with the ``users`` table are inner joins: a row whose user has
gone missing is dropped from results instead of failing the request.
"""

from __future__ import annotations

import logging

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Session

from vibesync.database.models import Friendship, FriendshipStatus, Reaction, User
from vibesync.services.user_service import users_by_ids

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pair predicates
# ---------------------------------------------------------------------------
def _involving(user_id: str):
    return or_(Friendship.user_id == user_id, Friendship.friend_id == user_id)


def _between(user_id: str, other_id: str):
    return or_(
        and_(Friendship.user_id == user_id, Friendship.friend_id == other_id),
        and_(Friendship.user_id == other_id, Friendship.friend_id == user_id),
    )


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
def get_friendship(session: Session, friendship_id: str) -> Friendship | None:
    return session.get(Friendship, friendship_id)


def friendship_between(
    session: Session, user_id: str, other_id: str
) -> Friendship | None:
    """First friendship between the two users in either direction, any status."""
    return session.scalars(
        select(Friendship).where(_between(user_id, other_id)).order_by(Friendship.created_at)
    ).first()


def accepted_friendships(session: Session, user_id: str) -> list[Friendship]:
    return list(
        session.scalars(
            select(Friendship).where(
                _involving(user_id),
                Friendship.status == FriendshipStatus.ACCEPTED.value,
            )
        ).all()
    )


def accepted_friend_ids(session: Session, user_id: str) -> set[str]:
    """Ids on the opposite side of every accepted friendship of *user_id*."""
    return {f.other_party(user_id) for f in accepted_friendships(session, user_id)}


def count_accepted_friends(session: Session, user_id: str) -> int:
    return session.scalar(
        select(func.count()).select_from(Friendship).where(
            _involving(user_id),
            Friendship.status == FriendshipStatus.ACCEPTED.value,
        )
    ) or 0


def friends_of(session: Session, user_id: str) -> list[tuple[Friendship, User]]:
    """Accepted friendships of *user_id*, each paired with the other user."""
    friendships = accepted_friendships(session, user_id)
    users = users_by_ids(session, {f.other_party(user_id) for f in friendships})

    result: list[tuple[Friendship, User]] = []
    for friendship in friendships:
        friend = users.get(friendship.other_party(user_id))
        if friend is None:
            logger.warning(
                "Friendship %s references missing user %s",
                friendship.id, friendship.other_party(user_id),
            )
            continue
        result.append((friendship, friend))
    return result


def reactions_of(session: Session, post_id: str) -> list[tuple[Reaction, User]]:
    """All reactions on a post joined with the reacting user."""
    rows = session.execute(
        select(Reaction, User)
        .join(User, User.id == Reaction.user_id)
        .where(Reaction.post_id == post_id)
        .order_by(Reaction.created_at)
    ).all()
    return [(row.Reaction, row.User) for row in rows]


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------
def create_friendship(
    session: Session,
    *,
    user_id: str,
    friend_id: str,
    status: FriendshipStatus = FriendshipStatus.PENDING,
) -> Friendship:
    """Record a friend request from *user_id* to *friend_id*.

    Raises
    ------
    ValueError
        On a self-friendship or when the pair already has a row.
    """
    if user_id == friend_id:
        raise ValueError("Cannot befriend yourself")
    if friendship_between(session, user_id, friend_id) is not None:
        raise ValueError("Friendship already exists")

    friendship = Friendship(
        user_id=user_id,
        friend_id=friend_id,
        status=FriendshipStatus(status).value,
        vibe_count=0,
    )
    session.add(friendship)
    session.flush()
    logger.info("Friendship %s created: %s → %s (%s)", friendship.id, user_id, friend_id, friendship.status)
    return friendship


def update_friendship_status(
    session: Session,
    friendship_id: str,
    status: FriendshipStatus,
) -> Friendship | None:
    friendship = get_friendship(session, friendship_id)
    if friendship is None:
        return None

    friendship.status = FriendshipStatus(status).value
    session.flush()
    logger.info("Friendship %s is now %s", friendship.id, friendship.status)
    return friendship
