"""
vibesync.api.serializers — ORM rows → JSON-ready dicts
=======================================================
"""

from __future__ import annotations

from datetime import datetime

from vibesync.constants import as_utc
from vibesync.database.models import (
    Badge,
    DailyQuest,
    Friendship,
    Post,
    Reaction,
    User,
    Vibe,
)


def _iso(value: datetime | None) -> str | None:
    return as_utc(value).isoformat() if value else None


def user_dict(u: User) -> dict:
    return {
        "id": u.id,
        "username": u.username,
        "email": u.email,
        "display_name": u.display_name,
        "avatar": u.avatar,
        "bio": u.bio,
        "streak_count": u.streak_count or 0,
        "points": u.points or 0,
        "last_active_date": _iso(u.last_active_date),
        "spotify_data": u.spotify_data,
        "created_at": _iso(u.created_at),
    }


def post_dict(p: Post, author: User | None = None) -> dict:
    data = {
        "id": p.id,
        "user_id": p.user_id,
        "content": p.content,
        "image_url": p.image_url,
        "mood": p.mood,
        "is_private": bool(p.is_private),
        "like_count": p.like_count or 0,
        "comment_count": p.comment_count or 0,
        "created_at": _iso(p.created_at),
    }
    if author is not None:
        data["author"] = user_dict(author)
    return data


def friendship_dict(f: Friendship, friend: User | None = None) -> dict:
    data = {
        "id": f.id,
        "user_id": f.user_id,
        "friend_id": f.friend_id,
        "status": f.status,
        "vibe_count": f.vibe_count or 0,
        "created_at": _iso(f.created_at),
    }
    if friend is not None:
        data["friend"] = user_dict(friend)
    return data


def vibe_dict(v: Vibe, sender: User | None = None, receiver: User | None = None) -> dict:
    data = {
        "id": v.id,
        "sender_id": v.sender_id,
        "receiver_id": v.receiver_id,
        "post_id": v.post_id,
        "message": v.message,
        "created_at": _iso(v.created_at),
    }
    if sender is not None:
        data["sender"] = user_dict(sender)
    if receiver is not None:
        data["receiver"] = user_dict(receiver)
    return data


def reaction_dict(r: Reaction, user: User | None = None) -> dict:
    data = {
        "id": r.id,
        "user_id": r.user_id,
        "post_id": r.post_id,
        "type": r.type,
        "created_at": _iso(r.created_at),
    }
    if user is not None:
        data["user"] = user_dict(user)
    return data


def badge_dict(b: Badge) -> dict:
    return {
        "id": b.id,
        "user_id": b.user_id,
        "type": b.type,
        "title": b.title,
        "description": b.description,
        "earned_at": _iso(b.earned_at),
    }


def quest_dict(q: DailyQuest) -> dict:
    return {
        "id": q.id,
        "user_id": q.user_id,
        "type": q.type,
        "title": q.title,
        "description": q.description,
        "point_reward": q.point_reward or 0,
        "target_count": q.target_count,
        "current_count": q.current_count or 0,
        "is_completed": bool(q.is_completed),
        "quest_date": _iso(q.quest_date),
    }
