"""
vibesync.api.routes.social — Friendships, vibes and reactions
==============================================================

    POST   /friendships                   — Send a friend request
    PATCH  /friendships/{id}              — Accept / block
    POST   /vibes                         — Send a vibe (sender earns points)
    POST   /reactions                     — React to a post (replaces earlier)
    DELETE /reactions/{user_id}/{post_id} — Remove a reaction
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from vibesync.api.deps import get_config, get_session
from vibesync.api.serializers import friendship_dict, reaction_dict, vibe_dict
from vibesync.config import VibeConfig
from vibesync.constants import DEFAULT_REACTION_TYPE
from vibesync.database.models import FriendshipStatus
from vibesync.services import (
    badge_service,
    post_service,
    reaction_service,
    relationship_service,
    user_service,
    vibe_service,
)

router = APIRouter(tags=["social"])


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------
class FriendshipCreate(BaseModel):
    user_id: str
    friend_id: str
    status: FriendshipStatus = FriendshipStatus.PENDING


class FriendshipUpdate(BaseModel):
    status: FriendshipStatus


class VibeCreate(BaseModel):
    sender_id: str
    receiver_id: str
    post_id: str | None = None
    message: str | None = Field(default=None, max_length=500)


class ReactionCreate(BaseModel):
    user_id: str
    post_id: str
    type: str = Field(default=DEFAULT_REACTION_TYPE, min_length=1, max_length=30)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _require_users(session: Session, *user_ids: str) -> None:
    for user_id in user_ids:
        if user_service.get_user(session, user_id) is None:
            raise HTTPException(404, "User not found")


def _require_post(session: Session, post_id: str) -> None:
    if post_service.get_post(session, post_id) is None:
        raise HTTPException(404, "Post not found")


# ---------------------------------------------------------------------------
# Friendships
# ---------------------------------------------------------------------------
@router.post("/friendships")
def create_friendship(body: FriendshipCreate, session: Session = Depends(get_session)):
    _require_users(session, body.user_id, body.friend_id)
    try:
        friendship = relationship_service.create_friendship(
            session,
            user_id=body.user_id,
            friend_id=body.friend_id,
            status=body.status,
        )
    except ValueError as exc:
        raise HTTPException(400, str(exc))
    session.commit()
    return friendship_dict(friendship)


@router.patch("/friendships/{friendship_id}")
def update_friendship(
    friendship_id: str,
    body: FriendshipUpdate,
    session: Session = Depends(get_session),
):
    friendship = relationship_service.update_friendship_status(
        session, friendship_id, body.status
    )
    if friendship is None:
        raise HTTPException(404, "Friendship not found")

    if friendship.status == FriendshipStatus.ACCEPTED.value:
        badge_service.award_badges(session, friendship.user_id)
        badge_service.award_badges(session, friendship.friend_id)
    session.commit()
    return friendship_dict(friendship)


# ---------------------------------------------------------------------------
# Vibes
# ---------------------------------------------------------------------------
@router.post("/vibes")
def create_vibe(
    body: VibeCreate,
    cfg: VibeConfig = Depends(get_config),
    session: Session = Depends(get_session),
):
    _require_users(session, body.sender_id, body.receiver_id)
    if body.post_id is not None:
        _require_post(session, body.post_id)

    vibe = vibe_service.create_vibe(
        session,
        sender_id=body.sender_id,
        receiver_id=body.receiver_id,
        post_id=body.post_id,
        message=body.message,
        reward=cfg.vibe_point_reward,
    )
    session.commit()
    return vibe_dict(vibe)


# ---------------------------------------------------------------------------
# Reactions
# ---------------------------------------------------------------------------
@router.post("/reactions")
def create_reaction(body: ReactionCreate, session: Session = Depends(get_session)):
    _require_users(session, body.user_id)
    _require_post(session, body.post_id)

    reaction = reaction_service.create_reaction(
        session, user_id=body.user_id, post_id=body.post_id, type=body.type
    )
    session.commit()
    return reaction_dict(reaction)


@router.delete("/reactions/{user_id}/{post_id}")
def delete_reaction(
    user_id: str, post_id: str, session: Session = Depends(get_session)
):
    _require_post(session, post_id)
    removed = reaction_service.remove_reaction(session, user_id, post_id)
    session.commit()
    return {"success": True, "removed": removed}
