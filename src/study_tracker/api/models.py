from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..config import Theme
from ..core import DaySummary
from ..domain import StudySession, Subject, Task


class SubjectPayload(BaseModel):
    id: str
    name: str
    color: str

    @classmethod
    def from_domain(cls, subject: Subject) -> "SubjectPayload":
        return cls(id=subject.id, name=subject.name, color=subject.color)


class SessionPayload(BaseModel):
    id: str
    subject_id: str
    started_at: str
    duration_seconds: int = Field(ge=0)

    @classmethod
    def from_domain(cls, session: StudySession) -> "SessionPayload":
        return cls(
            id=session.id,
            subject_id=session.subject_id,
            started_at=session.started_at.isoformat(),
            duration_seconds=session.duration_seconds,
        )


class TaskPayload(BaseModel):
    id: str
    title: str
    done: bool = False
    subject_id: Optional[str] = Field(default=None)

    @classmethod
    def from_domain(cls, task: Task) -> "TaskPayload":
        return cls(id=task.id, title=task.title, done=task.done, subject_id=task.subject_id)


class TimerPayload(BaseModel):
    status: str
    subject_id: Optional[str] = Field(default=None)
    elapsed_seconds: int = Field(default=0, ge=0)


class DaySummaryPayload(BaseModel):
    day: str
    total_seconds: int
    daily_goal: int
    progress: float = Field(ge=0.0, le=1.0)
    by_subject: Dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, summary: DaySummary) -> "DaySummaryPayload":
        return cls(
            day=summary.day.isoformat(),
            total_seconds=summary.total_seconds,
            daily_goal=summary.daily_goal,
            progress=summary.progress,
            by_subject=dict(summary.by_subject),
        )


class CalendarPayload(BaseModel):
    start: str
    end: str
    days: Dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_totals(cls, start: date, end: date, totals: Dict[date, int]) -> "CalendarPayload":
        return cls(
            start=start.isoformat(),
            end=end.isoformat(),
            days={day.isoformat(): seconds for day, seconds in sorted(totals.items())},
        )


class ThemePayload(BaseModel):
    id: str
    name: str
    accent: str

    @classmethod
    def from_domain(cls, theme: Theme) -> "ThemePayload":
        return cls(id=theme.id, name=theme.name, accent=theme.accent)


class ThemeListPayload(BaseModel):
    current: ThemePayload
    available: List[ThemePayload]
