"""
vibesync.api.routes.auth — Registration & login
================================================

Login is identification only: it resolves a user by email or username
and counts the visit toward the daily streak.  No credentials are
checked.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from vibesync.api.deps import get_session
from vibesync.api.serializers import user_dict
from vibesync.constants import utcnow
from vibesync.services import badge_service, quest_service, user_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------
class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    display_name: str = Field(min_length=1, max_length=100)
    avatar: str | None = None
    bio: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    username: str | None = None


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------
@router.post("/register")
def register(body: RegisterRequest, session: Session = Depends(get_session)):
    """Create a user and seed today's daily quests."""
    try:
        user = user_service.create_user(
            session,
            username=body.username,
            email=body.email,
            display_name=body.display_name,
            avatar=body.avatar,
            bio=body.bio,
        )
    except ValueError as exc:
        raise HTTPException(400, str(exc))

    quest_service.create_daily_quests(session, user.id, utcnow())
    session.commit()
    return {"user": user_dict(user)}


@router.post("/login")
def login(body: LoginRequest, session: Session = Depends(get_session)):
    """Resolve the user and update their streak."""
    if not body.email and not body.username:
        raise HTTPException(400, "Email or username is required")

    if body.email:
        user = user_service.get_user_by_email(session, body.email)
    else:
        user = user_service.get_user_by_username(session, body.username)
    if user is None:
        raise HTTPException(401, "User not found")

    user_service.update_streak(session, user.id)
    badge_service.award_badges(session, user.id)
    session.commit()
    logger.info("Login by %s (streak %d)", user.username, user.streak_count)
    return {"user": user_dict(user)}
