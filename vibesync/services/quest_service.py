"""
vibesync.services.quest_service — Daily Quest Lifecycle
========================================================

Quests are instantiated lazily: the first request for a user's quests
on a given UTC day finds none in that day's window and creates the
three templates.  Progress is *set* to the value the caller submits;
callers that want cumulative progress submit the running total.

The quest reward is paid once, on the pending → completed transition.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from vibesync.constants import as_utc, utcnow
from vibesync.database.models import DailyQuest
from vibesync.engine.quests import QUEST_TEMPLATES, apply_progress, day_bounds
from vibesync.services import user_service

logger = logging.getLogger(__name__)

_TEMPLATE_ORDER: dict[str, int] = {t.type.value: i for i, t in enumerate(QUEST_TEMPLATES)}


def get_quest(session: Session, quest_id: str) -> DailyQuest | None:
    return session.get(DailyQuest, quest_id)


def find_daily_quests(
    session: Session, user_id: str, day: date | datetime
) -> list[DailyQuest]:
    """Quests whose ``quest_date`` falls inside *day*'s UTC window."""
    start, end = day_bounds(day)
    quests = session.scalars(
        select(DailyQuest).where(
            DailyQuest.user_id == user_id,
            DailyQuest.quest_date >= start,
            DailyQuest.quest_date <= end,
        )
    ).all()
    return sorted(quests, key=lambda q: _TEMPLATE_ORDER.get(q.type, len(_TEMPLATE_ORDER)))


def create_daily_quests(
    session: Session, user_id: str, day: date | datetime
) -> list[DailyQuest]:
    """Instantiate every template for *user_id* on *day*."""
    if isinstance(day, datetime):
        quest_date = as_utc(day)
    else:
        quest_date, _ = day_bounds(day)

    quests = [
        DailyQuest(
            user_id=user_id,
            type=tmpl.type.value,
            title=tmpl.title,
            description=tmpl.description,
            point_reward=tmpl.point_reward,
            target_count=tmpl.target_count,
            current_count=0,
            is_completed=False,
            quest_date=quest_date,
        )
        for tmpl in QUEST_TEMPLATES
    ]
    session.add_all(quests)
    session.flush()
    logger.info("Created %d daily quests for %s on %s", len(quests), user_id, quest_date.date())
    return quests


def get_daily_quests(
    session: Session, user_id: str, day: date | datetime | None = None
) -> list[DailyQuest]:
    """Return *day*'s quests, creating them first if there are none."""
    day = day or utcnow()
    quests = find_daily_quests(session, user_id, day)
    if not quests:
        quests = create_daily_quests(session, user_id, day)
    return quests


def update_progress(
    session: Session, quest_id: str, progress: int
) -> DailyQuest | None:
    """Set the quest's progress and pay the reward on completion."""
    quest = session.get(DailyQuest, quest_id)
    if quest is None:
        return None

    result = apply_progress(
        quest.current_count or 0,
        quest.target_count,
        progress,
        already_completed=bool(quest.is_completed),
    )
    quest.current_count = result.current_count
    quest.is_completed = result.is_completed
    session.flush()

    if result.newly_completed:
        logger.info("Quest %s (%s) completed by %s", quest.id, quest.type, quest.user_id)
        user_service.award_points(
            session, quest.user_id, quest.point_reward or 0, reason=f"quest:{quest.type}"
        )
    return quest
