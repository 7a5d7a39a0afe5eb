"""
vibesync.services.post_service — Posts & Derived Counters
==========================================================
"""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from vibesync.database.models import Post

logger = logging.getLogger(__name__)


def get_post(session: Session, post_id: str) -> Post | None:
    return session.get(Post, post_id)


def posts_by_user(session: Session, user_id: str) -> list[Post]:
    """All of a user's posts, private ones included, newest first."""
    return list(
        session.scalars(
            select(Post)
            .where(Post.user_id == user_id)
            .order_by(Post.created_at.desc())
        ).all()
    )


def count_posts(session: Session, user_id: str) -> int:
    return session.scalar(
        select(func.count()).select_from(Post).where(Post.user_id == user_id)
    ) or 0


def create_post(
    session: Session,
    *,
    user_id: str,
    content: str,
    image_url: str | None = None,
    mood: str | None = None,
    is_private: bool = False,
) -> Post:
    """Insert a post with zeroed counters.

    Raises
    ------
    ValueError
        If *content* is blank.
    """
    if not content or not content.strip():
        raise ValueError("Post content must not be empty")

    post = Post(
        user_id=user_id,
        content=content,
        image_url=image_url,
        mood=mood,
        is_private=is_private,
        like_count=0,
        comment_count=0,
    )
    session.add(post)
    session.flush()
    logger.info("Post %s created by %s (private=%s)", post.id, user_id, is_private)
    return post


def update_post_counts(
    session: Session,
    post_id: str,
    *,
    likes: int | None = None,
    comments: int | None = None,
) -> Post | None:
    """Overwrite the derived counters that are given; leave the rest."""
    post = session.get(Post, post_id)
    if post is None:
        return None

    if likes is not None:
        post.like_count = likes
    if comments is not None:
        post.comment_count = comments
    session.flush()
    return post
