"""
vibesync.database.seed — Demo Data Seeder
==========================================

Fills an empty store with a couple of friends, a few posts and today's
quests so the client has something to render.  Enabled on startup with
``VIBESYNC_SEED_DEMO=1``.

Idempotent: does nothing once any user exists.
"""

from __future__ import annotations

import logging

from sqlalchemy import Engine, func, select

from vibesync.constants import utcnow
from vibesync.database.engine import get_session
from vibesync.database.models import FriendshipStatus, Mood, User
from vibesync.services import post_service, quest_service, relationship_service, user_service

logger = logging.getLogger(__name__)

DEMO_USERS: list[dict[str, str]] = [
    {"username": "luna", "email": "luna@example.com", "display_name": "Luna"},
    {"username": "milo", "email": "milo@example.com", "display_name": "Milo"},
    {"username": "sage", "email": "sage@example.com", "display_name": "Sage"},
]

DEMO_POSTS: list[tuple[int, str, Mood]] = [
    (0, "Sunrise run done, feeling unstoppable", Mood.ENERGETIC),
    (1, "Lo-fi and tea kind of afternoon", Mood.CHILL),
    (2, "Sketching new ideas for the mural", Mood.CREATIVE),
]


def seed_demo_data(engine: Engine) -> bool:
    """Insert demo rows.  Returns ``False`` when the store is not empty."""
    with get_session(engine) as session:
        if session.scalar(select(func.count()).select_from(User)):
            logger.info("Store already has users; skipping demo seed")
            return False

        users = [user_service.create_user(session, **fields) for fields in DEMO_USERS]
        relationship_service.create_friendship(
            session,
            user_id=users[0].id,
            friend_id=users[1].id,
            status=FriendshipStatus.ACCEPTED,
        )
        relationship_service.create_friendship(
            session, user_id=users[2].id, friend_id=users[0].id
        )
        for index, content, mood in DEMO_POSTS:
            post_service.create_post(
                session, user_id=users[index].id, content=content, mood=mood.value
            )
        for user in users:
            quest_service.create_daily_quests(session, user.id, utcnow())

    logger.info("Seeded %d demo users", len(DEMO_USERS))
    return True
