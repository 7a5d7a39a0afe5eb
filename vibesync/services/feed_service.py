"""
vibesync.services.feed_service — Friend-Scoped Feed Assembly
=============================================================

The feed of a viewer is every public post written by the viewer or by
someone holding an accepted friendship with the viewer, newest first.
Private posts never appear here, not even the viewer's own; those are
only listed by :func:`vibesync.services.post_service.posts_by_user`.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from vibesync.database.models import Post, User
from vibesync.services.relationship_service import accepted_friend_ids

logger = logging.getLogger(__name__)

DEFAULT_FEED_LIMIT = 20


def visible_author_ids(session: Session, viewer_id: str) -> set[str]:
    """Accepted friends of the viewer plus the viewer."""
    ids = accepted_friend_ids(session, viewer_id)
    ids.add(viewer_id)
    return ids


def get_feed(
    session: Session,
    viewer_id: str,
    limit: int = DEFAULT_FEED_LIMIT,
) -> list[tuple[Post, User]]:
    """Return up to *limit* ``(post, author)`` pairs visible to *viewer_id*.

    Posts whose author row is missing are dropped by the inner join.
    """
    author_ids = visible_author_ids(session, viewer_id)

    rows = session.execute(
        select(Post, User)
        .join(User, User.id == Post.user_id)
        .where(Post.user_id.in_(author_ids), Post.is_private.is_(False))
        .order_by(Post.created_at.desc())
        .limit(limit)
    ).all()

    logger.debug(
        "Feed for %s: %d posts from %d authors", viewer_id, len(rows), len(author_ids)
    )
    return [(row.Post, row.User) for row in rows]
