"""
vibesync.services.vibe_service — Vibes & Sender Rewards
========================================================

A vibe is a one-way appreciation signal.  Sending one, rewarding the
sender and bumping the pair's ``vibe_count`` happen in the caller's
transaction, so either all of them land or none do.
"""

from __future__ import annotations

import logging

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session

from vibesync.database.models import FriendshipStatus, User, Vibe
from vibesync.services import badge_service, user_service
from vibesync.services.relationship_service import friendship_between

logger = logging.getLogger(__name__)

DEFAULT_VIBE_REWARD = 10


def create_vibe(
    session: Session,
    *,
    sender_id: str,
    receiver_id: str,
    post_id: str | None = None,
    message: str | None = None,
    reward: int = DEFAULT_VIBE_REWARD,
) -> Vibe:
    """Record a vibe and award *reward* points to the sender."""
    vibe = Vibe(
        sender_id=sender_id,
        receiver_id=receiver_id,
        post_id=post_id,
        message=message,
    )
    session.add(vibe)
    session.flush()

    friendship = friendship_between(session, sender_id, receiver_id)
    if friendship is not None and friendship.status == FriendshipStatus.ACCEPTED.value:
        friendship.vibe_count = (friendship.vibe_count or 0) + 1

    user_service.award_points(session, sender_id, reward, reason="vibe")
    badge_service.award_badges(session, sender_id)

    logger.info("Vibe %s sent %s → %s", vibe.id, sender_id, receiver_id)
    return vibe


def vibes_between(session: Session, user_id: str, other_id: str) -> list[Vibe]:
    """Vibes exchanged in either direction, newest first."""
    return list(
        session.scalars(
            select(Vibe)
            .where(
                or_(
                    and_(Vibe.sender_id == user_id, Vibe.receiver_id == other_id),
                    and_(Vibe.sender_id == other_id, Vibe.receiver_id == user_id),
                )
            )
            .order_by(Vibe.created_at.desc())
        ).all()
    )


def vibes_for_user(session: Session, user_id: str) -> list[tuple[Vibe, User, User]]:
    """Vibes received by *user_id*, newest first, with sender and receiver.

    Vibes whose sender or receiver row is missing are skipped.
    """
    vibes = session.scalars(
        select(Vibe)
        .where(Vibe.receiver_id == user_id)
        .order_by(Vibe.created_at.desc())
    ).all()
    users = user_service.users_by_ids(
        session, {v.sender_id for v in vibes} | {v.receiver_id for v in vibes}
    )

    result: list[tuple[Vibe, User, User]] = []
    for vibe in vibes:
        sender = users.get(vibe.sender_id)
        receiver = users.get(vibe.receiver_id)
        if sender is None or receiver is None:
            logger.warning("Vibe %s references a missing user", vibe.id)
            continue
        result.append((vibe, sender, receiver))
    return result
