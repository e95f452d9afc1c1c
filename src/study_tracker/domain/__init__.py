"""Domain models for study tracking."""

from __future__ import annotations

from .enums import TimerStatus
from .models import DateRange, StudySession, Subject, Task

__all__ = ["DateRange", "StudySession", "Subject", "Task", "TimerStatus"]
