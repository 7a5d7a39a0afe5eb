"""
vibesync.api.routes.users — User profile and per-user listings
===============================================================

    GET   /users/{id}                   — Profile
    PATCH /users/{id}                   — Allow-listed partial update
    GET   /users/{id}/badges            — Badges, newest first
    GET   /users/{id}/posts             — Own posts incl. private
    GET   /users/{id}/feed              — Friend-scoped public feed
    GET   /users/{id}/friends           — Accepted friendships
    GET   /users/{id}/vibes             — Received vibes
    GET   /users/{id}/vibes/{other_id}  — Vibes exchanged with another user
    GET   /users/{id}/daily-quests      — Today's (or ?date=) quests
    PATCH /users/{id}/spotify           — Store a "currently playing" snapshot
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from vibesync.api.deps import get_config, get_session
from vibesync.api.serializers import (
    badge_dict,
    friendship_dict,
    post_dict,
    quest_dict,
    user_dict,
    vibe_dict,
)
from vibesync.config import VibeConfig
from vibesync.database.models import User
from vibesync.services import (
    badge_service,
    feed_service,
    post_service,
    quest_service,
    relationship_service,
    user_service,
    vibe_service,
)

router = APIRouter(prefix="/users", tags=["users"])


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------
class SpotifySnapshot(BaseModel):
    current_track: str | None = None
    current_artist: str | None = None
    top_tracks: list[str] | None = None


class UserUpdate(BaseModel):
    display_name: str | None = Field(default=None, min_length=1, max_length=100)
    avatar: str | None = None
    bio: str | None = None
    spotify_data: SpotifySnapshot | None = None


class SpotifyUpdate(BaseModel):
    spotify_data: SpotifySnapshot | None = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _require_user(session: Session, user_id: str) -> User:
    user = user_service.get_user(session, user_id)
    if user is None:
        raise HTTPException(404, "User not found")
    return user


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------
@router.get("/{user_id}")
def get_user(user_id: str, session: Session = Depends(get_session)):
    return user_dict(_require_user(session, user_id))


@router.patch("/{user_id}")
def update_user(
    user_id: str,
    body: UserUpdate,
    session: Session = Depends(get_session),
):
    updates = body.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(400, "No fields to update")
    if "display_name" in updates and updates["display_name"] is None:
        raise HTTPException(400, "display_name cannot be empty")
    user = user_service.update_user(session, user_id, updates=updates)
    if user is None:
        raise HTTPException(404, "User not found")
    session.commit()
    return user_dict(user)


@router.patch("/{user_id}/spotify")
def update_spotify(
    user_id: str,
    body: SpotifyUpdate,
    session: Session = Depends(get_session),
):
    snapshot = body.spotify_data.model_dump() if body.spotify_data else None
    user = user_service.update_user(
        session, user_id, updates={"spotify_data": snapshot}
    )
    if user is None:
        raise HTTPException(404, "User not found")
    session.commit()
    return user_dict(user)


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------
@router.get("/{user_id}/badges")
def get_badges(user_id: str, session: Session = Depends(get_session)):
    _require_user(session, user_id)
    return [badge_dict(b) for b in badge_service.list_badges(session, user_id)]


@router.get("/{user_id}/posts")
def get_posts(user_id: str, session: Session = Depends(get_session)):
    _require_user(session, user_id)
    return [post_dict(p) for p in post_service.posts_by_user(session, user_id)]


@router.get("/{user_id}/feed")
def get_feed(
    user_id: str,
    limit: int | None = Query(None, ge=1),
    cfg: VibeConfig = Depends(get_config),
    session: Session = Depends(get_session),
):
    _require_user(session, user_id)
    limit = min(limit or cfg.feed_default_limit, cfg.feed_max_limit)
    return [
        post_dict(post, author)
        for post, author in feed_service.get_feed(session, user_id, limit)
    ]


@router.get("/{user_id}/friends")
def get_friends(user_id: str, session: Session = Depends(get_session)):
    _require_user(session, user_id)
    return [
        friendship_dict(f, friend)
        for f, friend in relationship_service.friends_of(session, user_id)
    ]


@router.get("/{user_id}/vibes")
def get_vibes(user_id: str, session: Session = Depends(get_session)):
    _require_user(session, user_id)
    return [
        vibe_dict(v, sender, receiver)
        for v, sender, receiver in vibe_service.vibes_for_user(session, user_id)
    ]


@router.get("/{user_id}/vibes/{other_id}")
def get_vibes_between(
    user_id: str, other_id: str, session: Session = Depends(get_session)
):
    _require_user(session, user_id)
    _require_user(session, other_id)
    return [vibe_dict(v) for v in vibe_service.vibes_between(session, user_id, other_id)]


@router.get("/{user_id}/daily-quests")
def get_daily_quests(
    user_id: str,
    day: date | None = Query(None, alias="date"),
    session: Session = Depends(get_session),
):
    """Quests for the day, created on first request."""
    _require_user(session, user_id)
    quests = quest_service.get_daily_quests(session, user_id, day)
    session.commit()
    return [quest_dict(q) for q in quests]
