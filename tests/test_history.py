from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from study_tracker.core import (
    day_summary,
    goal_progress,
    local_day,
    streak,
    total_for_day,
    totals_by_day,
    totals_by_subject,
    week_total,
)
from study_tracker.domain import DateRange, StudySession

UTC = timezone.utc
DAY = date(2024, 3, 11)


def session(subject_id: str, started_at: datetime, seconds: int, *, ident: str = "") -> StudySession:
    return StudySession(
        id=ident or f"{subject_id}-{started_at.isoformat()}",
        subject_id=subject_id,
        started_at=started_at,
        duration_seconds=seconds,
    )


def at(day: date, hour: int = 10, minute: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=UTC)


class TestTotalForDay:
    def test_empty_log_is_zero(self):
        assert total_for_day([], DAY, tz=UTC) == 0
        assert total_for_day((), date(1999, 1, 1), subject_id="math", tz=UTC) == 0

    def test_sums_only_sessions_of_that_day(self):
        sessions = [
            session("math", at(DAY, 0, 0), 600),
            session("math", at(DAY, 23, 59), 300),
            session("math", at(DAY + timedelta(days=1), 0, 0), 999),
            session("math", at(DAY - timedelta(days=1), 23, 59), 999),
        ]
        assert total_for_day(sessions, DAY, tz=UTC) == 900

    def test_subject_filter(self):
        sessions = [session("math", at(DAY), 600), session("history", at(DAY, 11), 400)]
        assert total_for_day(sessions, DAY, subject_id="history", tz=UTC) == 400
        assert total_for_day(sessions, DAY, subject_id="art", tz=UTC) == 0

    def test_day_boundary_follows_zone(self):
        # 23:30 UTC on the 11th is already the 12th in Tokyo.
        late = session("math", at(DAY, 23, 30), 1200)
        tokyo = ZoneInfo("Asia/Tokyo")
        assert total_for_day([late], DAY, tz=UTC) == 1200
        assert total_for_day([late], DAY, tz=tokyo) == 0
        assert total_for_day([late], DAY + timedelta(days=1), tz=tokyo) == 1200

    def test_naive_timestamps_are_local_wall_time(self):
        naive = session("math", datetime(2024, 3, 11, 23, 30), 60)
        assert local_day(naive.started_at, ZoneInfo("Asia/Tokyo")) == DAY
        assert total_for_day([naive], DAY) == 60

    def test_input_is_not_mutated(self):
        sessions = [session("math", at(DAY), 600), session("history", at(DAY), 300)]
        snapshot = list(sessions)
        total_for_day(sessions, DAY, tz=UTC)
        totals_by_subject(sessions, DateRange(DAY, DAY), tz=UTC)
        streak(sessions, 600, today=DAY, tz=UTC)
        assert sessions == snapshot


class TestGoalProgress:
    def test_two_sessions_reach_goal_exactly(self):
        sessions = [session("math", at(DAY, 9), 1800), session("history", at(DAY, 14), 3600)]
        assert goal_progress(sessions, 5400, DAY, tz=UTC) == 1.0

    def test_partial(self):
        sessions = [session("math", at(DAY), 1800)]
        assert goal_progress(sessions, 7200, DAY, tz=UTC) == pytest.approx(0.25)

    @pytest.mark.parametrize("total", [0, 1, 3599, 3600, 3601, 100_000])
    def test_clamped(self, total):
        sessions = [session("math", at(DAY), total)]
        assert 0.0 <= goal_progress(sessions, 3600, DAY, tz=UTC) <= 1.0

    @pytest.mark.parametrize("goal", [0, -60])
    def test_non_positive_goal(self, goal):
        assert goal_progress([], goal, DAY, tz=UTC) == 0.0
        assert goal_progress([session("math", at(DAY), 1)], goal, DAY, tz=UTC) == 1.0


class TestTotalsBySubject:
    def test_sparse(self):
        sessions = [
            session("math", at(DAY), 600),
            session("math", at(DAY + timedelta(days=2)), 300),
            session("history", at(DAY + timedelta(days=10)), 900),
        ]
        totals = totals_by_subject(sessions, DateRange(DAY, DAY + timedelta(days=6)), tz=UTC)
        assert totals == {"math": 900}
        assert "history" not in totals

    def test_range_is_inclusive(self):
        sessions = [session("math", at(DAY), 60), session("math", at(DAY + timedelta(days=1)), 60)]
        assert totals_by_subject(sessions, DateRange(DAY, DAY + timedelta(days=1)), tz=UTC) == {"math": 120}

    def test_orphaned_subjects_are_kept(self):
        sessions = [session("deleted-subject", at(DAY), 60)]
        assert totals_by_subject(sessions, DateRange(DAY, DAY), tz=UTC) == {"deleted-subject": 60}

    def test_range_rejects_reversed_bounds(self):
        with pytest.raises(ValueError):
            DateRange(DAY, DAY - timedelta(days=1))


class TestCalendarTotals:
    def test_totals_by_day(self):
        sessions = [
            session("math", at(DAY, 8), 60),
            session("history", at(DAY, 20), 120),
            session("math", at(DAY + timedelta(days=3)), 30),
        ]
        totals = totals_by_day(sessions, DateRange(DAY, DAY + timedelta(days=6)), tz=UTC)
        assert totals == {DAY: 180, DAY + timedelta(days=3): 30}

    def test_week_total_monday_start(self):
        monday = DAY  # 2024-03-11 is a Monday
        sessions = [
            session("math", at(monday - timedelta(days=1)), 1000),
            session("math", at(monday), 100),
            session("math", at(monday + timedelta(days=6)), 10),
            session("math", at(monday + timedelta(days=7)), 1000),
        ]
        assert week_total(sessions, monday + timedelta(days=3), tz=UTC) == 110

    def test_week_total_sunday_start(self):
        sunday = DAY - timedelta(days=1)
        sessions = [session("math", at(sunday), 1000), session("math", at(DAY), 100)]
        assert week_total(sessions, DAY, tz=UTC, week_start=6) == 1100

    def test_day_summary(self):
        sessions = [session("math", at(DAY), 1800), session("history", at(DAY), 1800)]
        summary = day_summary(sessions, 7200, DAY, tz=UTC)
        assert summary.total_seconds == 3600
        assert summary.progress == pytest.approx(0.5)
        assert summary.by_subject == {"math": 1800, "history": 1800}


class TestStreak:
    GOAL = 3600

    def history_for(self, days_back):
        return [session("math", at(DAY - timedelta(days=offset)), self.GOAL) for offset in days_back]

    def test_empty(self):
        assert streak([], self.GOAL, today=DAY, tz=UTC) == 0

    def test_counts_today_when_met(self):
        assert streak(self.history_for([0, 1, 2]), self.GOAL, today=DAY, tz=UTC) == 3

    def test_unmet_today_is_neutral(self):
        sessions = self.history_for([1, 2, 3]) + [session("math", at(DAY), 60)]
        assert streak(sessions, self.GOAL, today=DAY, tz=UTC) == 3

    def test_stops_at_first_gap(self):
        assert streak(self.history_for([0, 1, 3, 4, 5]), self.GOAL, today=DAY, tz=UTC) == 2

    def test_yesterday_unmet_breaks(self):
        assert streak(self.history_for([2, 3]), self.GOAL, today=DAY, tz=UTC) == 0

    def test_sessions_on_one_day_add_up(self):
        sessions = [
            session("math", at(DAY - timedelta(days=1), 9), 1800),
            session("history", at(DAY - timedelta(days=1), 15), 1800),
        ]
        assert streak(sessions, self.GOAL, today=DAY, tz=UTC) == 1

    def test_zero_goal_needs_some_study(self):
        sessions = [session("math", at(DAY - timedelta(days=offset)), 60) for offset in (1, 2)]
        assert streak(sessions, 0, today=DAY, tz=UTC) == 2
