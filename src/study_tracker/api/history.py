from __future__ import annotations

import calendar
from datetime import date
from typing import Any, Dict, Optional

from ..domain import DateRange
from .models import CalendarPayload
from .registry import register_api
from .serializers import serialize_day_summary, serialize_session
from .state import api_state


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:  # noqa: TRY003
        raise ValueError(f"Invalid ISO date: {value}") from exc


def _parse_range(start: str, end: str) -> DateRange:
    return DateRange(_parse_date(start), _parse_date(end))


@register_api(
    "day_summary",
    description="Total study time, goal progress, and per-subject totals for one day (defaults to today).",
    category="history",
    tags=("read", "goal"),
)
def day_summary(day: Optional[str] = None) -> Dict[str, Any]:
    target = _parse_date(day) if day else None
    return {"summary": serialize_day_summary(api_state.study.day_summary(target))}


@register_api(
    "subject_totals",
    description="Seconds studied per subject between the inclusive start and end dates.",
    category="history",
    tags=("read", "analysis"),
)
def subject_totals(start: str, end: str) -> Dict[str, Any]:
    date_range = _parse_range(start, end)
    totals = api_state.study.subject_totals(date_range)
    names = {subject.id: subject.name for subject in api_state.study.state.subjects}
    rows = [
        {"subject_id": subject_id, "name": names.get(subject_id), "seconds": seconds}
        for subject_id, seconds in sorted(totals.items(), key=lambda item: item[1], reverse=True)
    ]
    return {"start": date_range.start.isoformat(), "end": date_range.end.isoformat(), "subjects": rows}


@register_api(
    "calendar_month",
    description="Per-day study totals for a calendar month given as YYYY-MM.",
    category="history",
    tags=("read", "calendar"),
)
def calendar_month(month: str) -> Dict[str, Any]:
    try:
        year_text, month_text = month.split("-")
        year, month_number = int(year_text), int(month_text)
        last_day = calendar.monthrange(year, month_number)[1]
    except ValueError as exc:  # noqa: TRY003
        raise ValueError(f"Invalid month, expected YYYY-MM: {month}") from exc
    date_range = DateRange(date(year, month_number, 1), date(year, month_number, last_day))
    totals = api_state.study.calendar(date_range)
    return {"calendar": CalendarPayload.from_totals(date_range.start, date_range.end, totals).model_dump()}


@register_api(
    "week_total",
    description="Seconds studied in the week containing the given day (defaults to today).",
    category="history",
    tags=("read",),
)
def week_total(day: Optional[str] = None) -> Dict[str, Any]:
    target = _parse_date(day) if day else None
    return {"seconds": api_state.study.week_total(target)}


@register_api(
    "goal_streak",
    description="Consecutive days on which the daily goal was met.",
    category="history",
    tags=("read", "goal"),
)
def goal_streak() -> Dict[str, Any]:
    study = api_state.study
    return {"streak": study.streak(), "daily_goal": study.state.daily_goal}


@register_api(
    "recent_sessions",
    description="The most recently recorded study sessions, newest first.",
    category="history",
    tags=("read", "list"),
)
def recent_sessions(limit: int = 10) -> Dict[str, Any]:
    sessions = list(reversed(api_state.study.state.sessions))[: max(limit, 0)]
    return {"sessions": [serialize_session(session) for session in sessions]}
