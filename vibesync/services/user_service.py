"""
vibesync.services.user_service — Users, Streaks & Points
=========================================================

Registration, lookups, allow-listed patches, streak maintenance and
point accounting.  Functions take an open session and only flush; the
caller commits, so a triggering write and its point award land in the
same transaction.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from vibesync.constants import ALLOWED_USER_FIELDS, utcnow
from vibesync.database.models import User
from vibesync.engine.streaks import compute_streak

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
def get_user(session: Session, user_id: str) -> User | None:
    return session.get(User, user_id)


def get_user_by_email(session: Session, email: str) -> User | None:
    return session.scalar(select(User).where(User.email == email))


def get_user_by_username(session: Session, username: str) -> User | None:
    return session.scalar(select(User).where(User.username == username))


def users_by_ids(session: Session, user_ids: set[str]) -> dict[str, User]:
    """Bulk lookup; ids with no row are simply absent from the result."""
    if not user_ids:
        return {}
    rows = session.scalars(select(User).where(User.id.in_(user_ids))).all()
    return {u.id: u for u in rows}


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------
def create_user(
    session: Session,
    *,
    username: str,
    email: str,
    display_name: str,
    avatar: str | None = None,
    bio: str | None = None,
) -> User:
    """Insert a new user.

    Raises
    ------
    ValueError
        If the username or email is already taken.
    """
    existing = session.scalar(
        select(User).where(or_(User.email == email, User.username == username))
    )
    if existing is not None:
        raise ValueError("User already exists")

    user = User(
        username=username,
        email=email,
        display_name=display_name,
        avatar=avatar,
        bio=bio,
        streak_count=0,
        points=0,
    )
    session.add(user)
    session.flush()
    logger.info("Registered user %s (%s)", user.username, user.id)
    return user


def update_user(
    session: Session,
    user_id: str,
    *,
    updates: dict[str, Any],
) -> User | None:
    """Shallow-merge allow-listed *updates* into the user.

    Keys outside :data:`ALLOWED_USER_FIELDS` are ignored.
    """
    user = session.get(User, user_id)
    if user is None:
        return None

    for key, value in updates.items():
        if key in ALLOWED_USER_FIELDS:
            setattr(user, key, value)

    session.flush()
    return user


def update_streak(
    session: Session,
    user_id: str,
    *,
    now: datetime | None = None,
) -> User | None:
    """Advance, keep or reset the user's daily streak for activity at *now*."""
    user = session.get(User, user_id)
    if user is None:
        return None

    now = now or utcnow()
    result = compute_streak(user.streak_count or 0, user.last_active_date, now)

    if result.streak_count != user.streak_count:
        logger.info(
            "Streak for %s: %d → %d", user.id, user.streak_count or 0, result.streak_count
        )
    user.streak_count = result.streak_count
    user.last_active_date = result.last_active_date
    session.flush()
    return user


def award_points(session: Session, user_id: str, amount: int, *, reason: str) -> User | None:
    """Add *amount* to the user's point balance."""
    user = session.get(User, user_id)
    if user is None:
        logger.warning("Point award of %d for missing user %s (%s)", amount, user_id, reason)
        return None

    user.points = (user.points or 0) + amount
    session.flush()
    logger.info("Awarded %d points to %s for %s (total %d)", amount, user.id, reason, user.points)
    return user
