"""
vibesync.database.models — SQLAlchemy 2.0 Data Models
======================================================

Tables:
- users         — Profiles, streak/points counters, music snapshot
- posts         — Mood-tagged updates with derived like/comment counts
- friendships   — One row per pair (requester → addressee) with status
- vibes         — Immutable one-way appreciation signals
- reactions     — At most one per (user, post), replaced on re-react
- badges        — Append-only earned recognition
- daily_quests  — Per-user, per-day tasks with progress and reward

Foreign keys are plain string columns; joins are resolved by the
services, which never assume the referenced row exists.
"""

from __future__ import annotations

import enum
from datetime import datetime
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from vibesync.constants import utcnow


def _new_id() -> str:
    return str(uuid4())


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """Shared base for all VibeSync ORM models."""


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class FriendshipStatus(enum.StrEnum):
    """Lifecycle of a friendship row."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    BLOCKED = "blocked"


class QuestType(enum.StrEnum):
    """Kinds of daily quest templates."""
    SHARE_VIBES = "share_vibes"
    REACT_POSTS = "react_posts"
    CREATE_POST = "create_post"


class Mood(enum.StrEnum):
    """Mood tags offered for posts."""
    ENERGETIC = "energetic"
    CHILL = "chill"
    HAPPY = "happy"
    CREATIVE = "creative"
    FOCUSED = "focused"
    RELAXED = "relaxed"


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    avatar: Mapped[str | None] = mapped_column(Text, default=None)
    bio: Mapped[str | None] = mapped_column(Text, default=None)
    streak_count: Mapped[int] = mapped_column(Integer, default=0)
    points: Mapped[int] = mapped_column(Integer, default=0)
    last_active_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )
    # {"current_track": str, "current_artist": str, "top_tracks": [str]}
    spotify_data: Mapped[dict | None] = mapped_column(JSON, default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r} streak={self.streak_count}>"


# ---------------------------------------------------------------------------
# Posts
# ---------------------------------------------------------------------------
class Post(Base):
    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text, default=None)
    mood: Mapped[str | None] = mapped_column(String(20), default=None)
    is_private: Mapped[bool] = mapped_column(Boolean, default=False)
    like_count: Mapped[int] = mapped_column(Integer, default=0)
    comment_count: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    __table_args__ = (
        Index("ix_posts_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Post id={self.id} user={self.user_id} private={self.is_private}>"


# ---------------------------------------------------------------------------
# Friendships: unordered pair stored as requester → addressee
# ---------------------------------------------------------------------------
class Friendship(Base):
    """A friendship between two users.

    ``user_id`` is the requester and ``friend_id`` the addressee; for
    friend lists and feed visibility the pair is symmetric, so lookups
    must match either ordering.
    """
    __tablename__ = "friendships"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False
    )
    friend_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=FriendshipStatus.PENDING.value
    )
    vibe_count: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    __table_args__ = (
        Index("ix_friendships_user", "user_id"),
        Index("ix_friendships_friend", "friend_id"),
    )

    def other_party(self, user_id: str) -> str:
        """Return the id on the opposite side of *user_id*."""
        return self.friend_id if self.user_id == user_id else self.user_id

    def __repr__(self) -> str:
        return (
            f"<Friendship id={self.id} {self.user_id}→{self.friend_id} "
            f"status={self.status!r}>"
        )


# ---------------------------------------------------------------------------
# Vibes, immutable once written
# ---------------------------------------------------------------------------
class Vibe(Base):
    __tablename__ = "vibes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    sender_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False
    )
    receiver_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False
    )
    post_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("posts.id"), default=None
    )
    message: Mapped[str | None] = mapped_column(Text, default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    __table_args__ = (
        Index("ix_vibes_receiver", "receiver_id"),
    )

    def __repr__(self) -> str:
        return f"<Vibe id={self.id} {self.sender_id}→{self.receiver_id}>"


# ---------------------------------------------------------------------------
# Reactions
# ---------------------------------------------------------------------------
class Reaction(Base):
    __tablename__ = "reactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False
    )
    post_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("posts.id"), nullable=False
    )
    type: Mapped[str] = mapped_column(String(30), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    __table_args__ = (
        Index("ix_reactions_post_user", "post_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Reaction id={self.id} user={self.user_id} post={self.post_id} type={self.type!r}>"


# ---------------------------------------------------------------------------
# Badges, append-only
# ---------------------------------------------------------------------------
class Badge(Base):
    __tablename__ = "badges"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False
    )
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    earned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    __table_args__ = (
        Index("ix_badges_user", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Badge id={self.id} user={self.user_id} type={self.type!r}>"


# ---------------------------------------------------------------------------
# Daily quests
# ---------------------------------------------------------------------------
class DailyQuest(Base):
    __tablename__ = "daily_quests"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False
    )
    type: Mapped[str] = mapped_column(String(30), nullable=False)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    point_reward: Mapped[int] = mapped_column(Integer, default=0)
    target_count: Mapped[int] = mapped_column(Integer, default=1)
    current_count: Mapped[int] = mapped_column(Integer, default=0)
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False)
    quest_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    __table_args__ = (
        Index("ix_daily_quests_user_date", "user_id", "quest_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<DailyQuest id={self.id} user={self.user_id} type={self.type!r} "
            f"{self.current_count}/{self.target_count}>"
        )
