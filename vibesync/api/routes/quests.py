"""
vibesync.api.routes.quests — Daily quest progress
==================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from vibesync.api.deps import get_session
from vibesync.api.serializers import quest_dict
from vibesync.services import quest_service

router = APIRouter(prefix="/daily-quests", tags=["quests"])


class ProgressUpdate(BaseModel):
    progress: int


@router.patch("/{quest_id}/progress")
def update_progress(
    quest_id: str,
    body: ProgressUpdate,
    session: Session = Depends(get_session),
):
    """Set the running total; points are paid when the quest completes."""
    quest = quest_service.update_progress(session, quest_id, body.progress)
    if quest is None:
        raise HTTPException(404, "Quest not found")
    session.commit()
    return quest_dict(quest)


@router.get("/{quest_id}")
def get_quest(quest_id: str, session: Session = Depends(get_session)):
    quest = quest_service.get_quest(session, quest_id)
    if quest is None:
        raise HTTPException(404, "Quest not found")
    return quest_dict(quest)
