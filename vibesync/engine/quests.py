"""
vibesync.engine.quests — Daily Quest Templates & Progress Transition
=====================================================================

Pure calculation, no database I/O.

Each user receives the same three quests once per UTC calendar day.
A quest is *pending* until ``current_count`` reaches ``target_count``,
after which it is *completed* for good.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta

from vibesync.database.models import QuestType

__all__ = [
    "QUEST_TEMPLATES",
    "ProgressResult",
    "QuestTemplate",
    "apply_progress",
    "day_bounds",
]


@dataclass(frozen=True, slots=True)
class QuestTemplate:
    type: QuestType
    title: str
    description: str
    point_reward: int
    target_count: int


QUEST_TEMPLATES: tuple[QuestTemplate, ...] = (
    QuestTemplate(
        type=QuestType.SHARE_VIBES,
        title="Share vibes with friends",
        description='Send "I have a vibe with you" to 3 friends',
        point_reward=50,
        target_count=3,
    ),
    QuestTemplate(
        type=QuestType.REACT_POSTS,
        title="React to posts",
        description="React to 5 posts from friends",
        point_reward=30,
        target_count=5,
    ),
    QuestTemplate(
        type=QuestType.CREATE_POST,
        title="Share your vibe",
        description="Post your morning vibe",
        point_reward=40,
        target_count=1,
    ),
)


@dataclass(frozen=True, slots=True)
class ProgressResult:
    current_count: int
    is_completed: bool
    newly_completed: bool


def apply_progress(
    current: int,
    target: int,
    progress: int,
    *,
    already_completed: bool = False,
) -> ProgressResult:
    """Set (not add) quest progress.

    The stored count is clamped to ``[0, target]``.  Completion is
    terminal: once completed, the quest keeps its count and is never
    reported as newly completed again.
    """
    if already_completed:
        return ProgressResult(current, True, False)

    count = max(0, min(progress, target))
    completed = count >= target
    return ProgressResult(count, completed, completed)


def day_bounds(day: date | datetime) -> tuple[datetime, datetime]:
    """Return the inclusive ``[start, end]`` UTC window for *day*."""
    if isinstance(day, datetime):
        if day.tzinfo is not None:
            day = day.astimezone(UTC)
        day = day.date()
    start = datetime.combine(day, time.min, tzinfo=UTC)
    end = start + timedelta(days=1) - timedelta(microseconds=1)
    return start, end
