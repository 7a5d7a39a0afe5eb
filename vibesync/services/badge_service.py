"""
vibesync.services.badge_service — Badge Persistence & Awarding
===============================================================

Badges are append-only.  :func:`award_badges` builds a
:class:`~vibesync.engine.badges.BadgeContext` from the user's current
counters, asks the rule engine which badges are newly earned and
inserts them.  A badge type is earned at most once per user.
"""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from vibesync.constants import utcnow
from vibesync.database.models import Badge, User, Vibe
from vibesync.engine.badges import BadgeContext, check_badges
from vibesync.services.post_service import count_posts
from vibesync.services.relationship_service import count_accepted_friends

logger = logging.getLogger(__name__)


def list_badges(session: Session, user_id: str) -> list[Badge]:
    """A user's badges, most recently earned first."""
    return list(
        session.scalars(
            select(Badge)
            .where(Badge.user_id == user_id)
            .order_by(Badge.earned_at.desc())
        ).all()
    )


def earned_badge_types(session: Session, user_id: str) -> set[str]:
    return set(session.scalars(select(Badge.type).where(Badge.user_id == user_id)).all())


def create_badge(
    session: Session,
    *,
    user_id: str,
    type: str,
    title: str,
    description: str | None = None,
    earned_at: datetime | None = None,
) -> Badge:
    badge = Badge(
        user_id=user_id,
        type=type,
        title=title,
        description=description,
        earned_at=earned_at or utcnow(),
    )
    session.add(badge)
    session.flush()
    logger.info("Badge %s (%s) earned by %s", badge.type, badge.id, user_id)
    return badge


def build_context(session: Session, user: User) -> BadgeContext:
    vibes_sent = session.scalar(
        select(func.count()).select_from(Vibe).where(Vibe.sender_id == user.id)
    ) or 0
    return BadgeContext(
        streak_count=user.streak_count or 0,
        vibes_sent=vibes_sent,
        accepted_friends=count_accepted_friends(session, user.id),
        posts_created=count_posts(session, user.id),
    )


def award_badges(session: Session, user_id: str) -> list[Badge]:
    """Insert every badge the user has newly qualified for."""
    user = session.get(User, user_id)
    if user is None:
        return []

    ctx = build_context(session, user)
    new_rules = check_badges(ctx, earned_badge_types(session, user_id))
    return [
        create_badge(
            session,
            user_id=user_id,
            type=rule.type,
            title=rule.title,
            description=rule.description,
        )
        for rule in new_rules
    ]
