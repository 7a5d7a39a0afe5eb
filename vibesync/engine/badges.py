"""
vibesync.engine.badges — Badge Rule Evaluation
===============================================

Handler-registry evaluation of badge rules.  Each rule is a pure
function of a :class:`BadgeContext`; the service layer builds the
context from the database and persists whatever this module returns.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

__all__ = ["BADGE_RULES", "BadgeContext", "BadgeRule", "check_badges"]


@dataclass(frozen=True, slots=True)
class BadgeContext:
    """Snapshot of the counters badge rules look at."""

    streak_count: int = 0
    vibes_sent: int = 0
    accepted_friends: int = 0
    posts_created: int = 0


@dataclass(frozen=True, slots=True)
class BadgeRule:
    type: str
    title: str
    description: str
    check: Callable[[BadgeContext], bool]


BADGE_RULES: tuple[BadgeRule, ...] = (
    BadgeRule(
        type="first_post",
        title="First Vibe",
        description="Shared your first post",
        check=lambda ctx: ctx.posts_created >= 1,
    ),
    BadgeRule(
        type="streak_master",
        title="Streak Master",
        description="Active seven days in a row",
        check=lambda ctx: ctx.streak_count >= 7,
    ),
    BadgeRule(
        type="vibe_sender",
        title="Vibe Sender",
        description="Sent 10 vibes",
        check=lambda ctx: ctx.vibes_sent >= 10,
    ),
    BadgeRule(
        type="social_butterfly",
        title="Social Butterfly",
        description="Made 5 friends",
        check=lambda ctx: ctx.accepted_friends >= 5,
    ),
)


def check_badges(ctx: BadgeContext, earned_types: set[str]) -> list[BadgeRule]:
    """Return the rules newly satisfied by *ctx*, skipping earned ones."""
    new: list[BadgeRule] = []
    for rule in BADGE_RULES:
        if rule.type in earned_types:
            continue
        if rule.check(ctx):
            logger.debug("Badge rule %s satisfied", rule.type)
            new.append(rule)
    return new
