"""
vibesync.services.reaction_service — One Reaction per (User, Post)
===================================================================

There is no unique constraint; creating a reaction first removes any
earlier one from the same user on the same post.  Every change
recomputes the post's ``like_count`` from the surviving rows.
"""

from __future__ import annotations

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from vibesync.constants import DEFAULT_REACTION_TYPE
from vibesync.database.models import Reaction
from vibesync.services.post_service import update_post_counts

logger = logging.getLogger(__name__)


def reactions_for_pair(session: Session, user_id: str, post_id: str) -> list[Reaction]:
    return list(
        session.scalars(
            select(Reaction).where(
                Reaction.user_id == user_id, Reaction.post_id == post_id
            )
        ).all()
    )


def _recount_likes(session: Session, post_id: str) -> int:
    count = session.scalar(
        select(func.count()).select_from(Reaction).where(Reaction.post_id == post_id)
    ) or 0
    update_post_counts(session, post_id, likes=count)
    return count


def remove_reaction(session: Session, user_id: str, post_id: str) -> bool:
    """Delete the user's reaction on the post.  Returns whether one existed."""
    result = session.execute(
        delete(Reaction).where(
            Reaction.user_id == user_id, Reaction.post_id == post_id
        )
    )
    session.flush()
    removed = (result.rowcount or 0) > 0
    likes = _recount_likes(session, post_id)
    if removed:
        logger.info("Reaction by %s on %s removed (likes=%d)", user_id, post_id, likes)
    return removed


def create_reaction(
    session: Session,
    *,
    user_id: str,
    post_id: str,
    type: str = DEFAULT_REACTION_TYPE,
) -> Reaction:
    """Replace the user's reaction on the post with a new one."""
    session.execute(
        delete(Reaction).where(
            Reaction.user_id == user_id, Reaction.post_id == post_id
        )
    )
    reaction = Reaction(user_id=user_id, post_id=post_id, type=type)
    session.add(reaction)
    session.flush()

    likes = _recount_likes(session, post_id)
    logger.info("Reaction %r by %s on %s (likes=%d)", type, user_id, post_id, likes)
    return reaction
