from __future__ import annotations

from typing import Any, Dict

from ..core import DaySummary
from ..domain import StudySession, Subject, Task
from .models import DaySummaryPayload, SessionPayload, SubjectPayload, TaskPayload


def serialize_subject(subject: Subject) -> Dict[str, Any]:
    return SubjectPayload.from_domain(subject).model_dump()


def serialize_session(session: StudySession) -> Dict[str, Any]:
    return SessionPayload.from_domain(session).model_dump()


def serialize_task(task: Task) -> Dict[str, Any]:
    return TaskPayload.from_domain(task).model_dump()


def serialize_day_summary(summary: DaySummary) -> Dict[str, Any]:
    return DaySummaryPayload.from_domain(summary).model_dump()
