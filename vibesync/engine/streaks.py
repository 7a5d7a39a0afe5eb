"""
vibesync.engine.streaks — Daily Streak Calculation
===================================================

Pure calculation, no database I/O.  A streak counts consecutive UTC
calendar days on which the user was active.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from vibesync.constants import as_utc

__all__ = ["StreakResult", "compute_streak", "days_between"]


@dataclass(frozen=True, slots=True)
class StreakResult:
    """Outcome of a streak update."""

    streak_count: int
    last_active_date: datetime
    days_since_active: int | None = None

    @property
    def reset(self) -> bool:
        return self.days_since_active is not None and self.days_since_active > 1


def days_between(earlier: datetime, later: datetime) -> int:
    """Whole calendar days from *earlier* to *later*, both taken in UTC."""
    return (as_utc(later).date() - as_utc(earlier).date()).days


def compute_streak(
    current: int,
    last_active: datetime | None,
    now: datetime,
) -> StreakResult:
    """Return the streak after activity at *now*.

    * never active before → 1
    * active yesterday    → current + 1
    * gap of 2+ days      → 1
    * already active today → unchanged
    """
    if last_active is None:
        return StreakResult(streak_count=1, last_active_date=now)

    diff = days_between(last_active, now)
    if diff == 1:
        streak = current + 1
    elif diff > 1:
        streak = 1
    else:
        streak = current

    return StreakResult(
        streak_count=streak,
        last_active_date=now,
        days_since_active=diff,
    )
