"""
vibesync.api.routes.posts — Post endpoints
===========================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from vibesync.api.deps import get_session
from vibesync.api.serializers import post_dict, reaction_dict
from vibesync.database.models import Mood
from vibesync.services import badge_service, post_service, relationship_service, user_service

router = APIRouter(prefix="/posts", tags=["posts"])


class PostCreate(BaseModel):
    user_id: str
    content: str = Field(min_length=1)
    image_url: str | None = None
    mood: Mood | None = None
    is_private: bool = False


@router.post("")
def create_post(body: PostCreate, session: Session = Depends(get_session)):
    if user_service.get_user(session, body.user_id) is None:
        raise HTTPException(404, "User not found")
    try:
        post = post_service.create_post(
            session,
            user_id=body.user_id,
            content=body.content,
            image_url=body.image_url,
            mood=body.mood.value if body.mood else None,
            is_private=body.is_private,
        )
    except ValueError as exc:
        raise HTTPException(400, str(exc))

    badge_service.award_badges(session, body.user_id)
    session.commit()
    return post_dict(post)


@router.get("/{post_id}")
def get_post(post_id: str, session: Session = Depends(get_session)):
    post = post_service.get_post(session, post_id)
    if post is None:
        raise HTTPException(404, "Post not found")
    return post_dict(post)


@router.get("/{post_id}/reactions")
def get_reactions(post_id: str, session: Session = Depends(get_session)):
    if post_service.get_post(session, post_id) is None:
        raise HTTPException(404, "Post not found")
    return [
        reaction_dict(r, user)
        for r, user in relationship_service.reactions_of(session, post_id)
    ]
