"""
tests/test_quests.py — Daily Quest Engine & Service Tests
==========================================================
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

from vibesync.database.models import QuestType
from vibesync.engine.quests import QUEST_TEMPLATES, apply_progress, day_bounds
from vibesync.services import quest_service

from conftest import make_user

NOW = datetime(2026, 5, 2, 14, 0, tzinfo=UTC)


# ---------------------------------------------------------------------------
# Pure engine
# ---------------------------------------------------------------------------
class TestApplyProgress:
    def test_partial_progress(self):
        result = apply_progress(0, 5, 3)
        assert result.current_count == 3
        assert not result.is_completed
        assert not result.newly_completed

    def test_progress_is_set_not_added(self):
        assert apply_progress(2, 5, 1).current_count == 1

    def test_clamped_to_target(self):
        result = apply_progress(0, 3, 10)
        assert result.current_count == 3
        assert result.is_completed
        assert result.newly_completed

    def test_exact_target_completes(self):
        assert apply_progress(0, 1, 1).is_completed

    def test_negative_clamped_to_zero(self):
        assert apply_progress(2, 5, -4).current_count == 0

    def test_completed_is_terminal(self):
        result = apply_progress(3, 3, 0, already_completed=True)
        assert result.current_count == 3
        assert result.is_completed
        assert not result.newly_completed


class TestDayBounds:
    def test_date_window(self):
        start, end = day_bounds(date(2026, 5, 2))
        assert start == datetime(2026, 5, 2, tzinfo=UTC)
        assert end == datetime(2026, 5, 3, tzinfo=UTC) - timedelta(microseconds=1)

    def test_datetime_uses_utc_date(self):
        start, _ = day_bounds(NOW)
        assert start.date() == date(2026, 5, 2)


def test_templates():
    by_type = {t.type: t for t in QUEST_TEMPLATES}
    assert len(QUEST_TEMPLATES) == 3
    assert (by_type[QuestType.SHARE_VIBES].target_count, by_type[QuestType.SHARE_VIBES].point_reward) == (3, 50)
    assert (by_type[QuestType.REACT_POSTS].target_count, by_type[QuestType.REACT_POSTS].point_reward) == (5, 30)
    assert (by_type[QuestType.CREATE_POST].target_count, by_type[QuestType.CREATE_POST].point_reward) == (1, 40)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------
class TestDailyQuestService:
    def test_lazily_creates_three_fresh_quests(self, db_session):
        user = make_user(db_session, "Quinn")
        quests = quest_service.get_daily_quests(db_session, user.id, NOW)

        assert [q.type for q in quests] == ["share_vibes", "react_posts", "create_post"]
        assert all(q.current_count == 0 and not q.is_completed for q in quests)

    def test_second_read_same_day_reuses(self, db_session):
        user = make_user(db_session, "Rae")
        first = quest_service.get_daily_quests(db_session, user.id, NOW)
        db_session.commit()
        second = quest_service.get_daily_quests(db_session, user.id, NOW + timedelta(hours=6))
        assert {q.id for q in first} == {q.id for q in second}

    def test_next_day_gets_new_set(self, db_session):
        user = make_user(db_session, "Sol")
        first = quest_service.get_daily_quests(db_session, user.id, NOW)
        db_session.commit()
        second = quest_service.get_daily_quests(db_session, user.id, NOW + timedelta(days=1))
        assert len(second) == 3
        assert not {q.id for q in first} & {q.id for q in second}

    def test_date_argument(self, db_session):
        user = make_user(db_session, "Tai")
        quests = quest_service.get_daily_quests(db_session, user.id, date(2026, 1, 1))
        db_session.commit()
        assert quest_service.find_daily_quests(db_session, user.id, date(2026, 1, 1))
        assert len(quests) == 3

    def test_completion_awards_points_once(self, db_session):
        user = make_user(db_session, "Uma")
        quests = quest_service.get_daily_quests(db_session, user.id, NOW)
        create_post = next(q for q in quests if q.type == "create_post")

        quest = quest_service.update_progress(db_session, create_post.id, 1)
        assert quest.is_completed
        assert quest.current_count == 1
        assert user.points == 40

        quest_service.update_progress(db_session, create_post.id, 1)
        assert user.points == 40

    def test_over_target_is_clamped(self, db_session):
        user = make_user(db_session, "Vic")
        quests = quest_service.get_daily_quests(db_session, user.id, NOW)
        share = next(q for q in quests if q.type == "share_vibes")

        quest = quest_service.update_progress(db_session, share.id, 9)
        assert quest.current_count == 3
        assert quest.is_completed
        assert user.points == 50

    def test_partial_progress_no_points(self, db_session):
        user = make_user(db_session, "Wren")
        quests = quest_service.get_daily_quests(db_session, user.id, NOW)
        react = next(q for q in quests if q.type == "react_posts")

        quest = quest_service.update_progress(db_session, react.id, 4)
        assert quest.current_count == 4
        assert not quest.is_completed
        assert user.points == 0

    def test_missing_quest(self, db_session):
        assert quest_service.update_progress(db_session, "missing", 1) is None
