"""Pure aggregations over the append-only session log.

Sessions are placed on the local calendar day on which they started: aware
timestamps are converted to ``tz`` (the host's local zone when ``tz`` is
``None``), naive timestamps are taken as already local. None of these
functions mutate their input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from typing import Dict, Iterable, Optional

from ..domain import DateRange, StudySession


@dataclass(frozen=True)
class DaySummary:
    day: date
    total_seconds: int
    daily_goal: int
    progress: float
    by_subject: Dict[str, int] = field(default_factory=dict)


def local_day(timestamp: datetime, tz: Optional[tzinfo] = None) -> date:
    if timestamp.tzinfo is None:
        return timestamp.date()
    return timestamp.astimezone(tz).date()


def _progress(total: int, daily_goal: int) -> float:
    if daily_goal <= 0:
        return 1.0 if total > 0 else 0.0
    return min(1.0, total / daily_goal)


def total_for_day(
    sessions: Iterable[StudySession],
    day: date,
    subject_id: Optional[str] = None,
    tz: Optional[tzinfo] = None,
) -> int:
    return sum(
        session.duration_seconds
        for session in sessions
        if (subject_id is None or session.subject_id == subject_id) and local_day(session.started_at, tz) == day
    )


def goal_progress(
    sessions: Iterable[StudySession],
    daily_goal: int,
    day: date,
    tz: Optional[tzinfo] = None,
) -> float:
    """Share of ``daily_goal`` reached on ``day``, clamped to ``[0, 1]``."""

    return _progress(total_for_day(sessions, day, tz=tz), daily_goal)


def totals_by_subject(
    sessions: Iterable[StudySession],
    date_range: DateRange,
    tz: Optional[tzinfo] = None,
) -> Dict[str, int]:
    totals: Dict[str, int] = {}
    for session in sessions:
        if local_day(session.started_at, tz) in date_range:
            totals[session.subject_id] = totals.get(session.subject_id, 0) + session.duration_seconds
    return totals


def totals_by_day(
    sessions: Iterable[StudySession],
    date_range: DateRange,
    tz: Optional[tzinfo] = None,
) -> Dict[date, int]:
    totals: Dict[date, int] = {}
    for session in sessions:
        day = local_day(session.started_at, tz)
        if day in date_range:
            totals[day] = totals.get(day, 0) + session.duration_seconds
    return totals


def week_total(
    sessions: Iterable[StudySession],
    day: date,
    tz: Optional[tzinfo] = None,
    week_start: int = 0,
) -> int:
    """Total for the seven-day week containing ``day``; ``week_start`` 0 is Monday."""

    offset = (day.weekday() - week_start) % 7
    first = day - timedelta(days=offset)
    week = DateRange(first, first + timedelta(days=6))
    return sum(totals_by_day(sessions, week, tz).values())


def streak(
    sessions: Iterable[StudySession],
    daily_goal: int,
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> int:
    """Count consecutive goal-meeting days ending today or yesterday.

    Today is still in progress: when its goal is not met yet it is skipped
    rather than counted as a break.
    """

    totals: Dict[date, int] = {}
    for session in sessions:
        day = local_day(session.started_at, tz)
        totals[day] = totals.get(day, 0) + session.duration_seconds

    def _met(day: date) -> bool:
        return _progress(totals.get(day, 0), daily_goal) >= 1.0

    cursor = today or datetime.now(tz).date()
    if not _met(cursor):
        cursor -= timedelta(days=1)

    count = 0
    while _met(cursor):
        count += 1
        cursor -= timedelta(days=1)
    return count


def day_summary(
    sessions: Iterable[StudySession],
    daily_goal: int,
    day: date,
    tz: Optional[tzinfo] = None,
) -> DaySummary:
    by_subject = totals_by_subject(sessions, DateRange(day, day), tz)
    total = sum(by_subject.values())
    return DaySummary(
        day=day,
        total_seconds=total,
        daily_goal=daily_goal,
        progress=_progress(total, daily_goal),
        by_subject=by_subject,
    )
