from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from typing import Callable, Dict, Iterable, List, Optional
from uuid import uuid4

from ..config import THEMES, Theme, resolve_theme
from ..core import SessionTimer, TimerError, history
from ..core.history import DaySummary
from ..domain import DateRange, StudySession, Subject, Task, TimerStatus
from .context import ServiceContext
from .state import AppState

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.strip().lower()).strip("-")
    return slug or uuid4().hex[:8]


class SessionNotSavedError(TimerError):
    """Raised when a finished run could not be written to the store.

    The run is kept on ``StudyService.unsaved`` until ``save_unsaved`` succeeds.
    """

    def __init__(self, session: StudySession) -> None:
        super().__init__(f"Could not save session {session.id} ({session.duration_seconds}s of {session.subject_id}).")
        self.session = session


@dataclass(slots=True)
class StudyService:
    """Owns the canonical state snapshot and the running timer.

    Every change is written through the store first and only then swapped
    into the in-memory snapshot.
    """

    context: ServiceContext = field(default_factory=ServiceContext)
    clock: Callable[[], datetime] = _utc_now
    monotonic: Callable[[], float] = time.monotonic
    timer: SessionTimer = field(init=False)
    _state: Optional[AppState] = field(init=False, default=None)
    unsaved: List[StudySession] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        self.timer = SessionTimer(
            lambda subject_id: self.state.has_subject(subject_id),
            clock=self.clock,
            monotonic=self.monotonic,
        )

    # State -------------------------------------------------------------------

    @property
    def state(self) -> AppState:
        if self._state is None:
            self.load()
        assert self._state is not None
        return self._state

    def load(self) -> AppState:
        self._state = AppState.load(self.context.store)
        logger.info(
            "Loaded %d sessions, %d subjects, %d tasks from %s",
            len(self._state.sessions),
            len(self._state.subjects),
            len(self._state.tasks),
            self.context.store.path,
        )
        return self._state

    @property
    def tz(self) -> Optional[tzinfo]:
        return self.context.settings.calendar.tzinfo

    def today(self) -> date:
        return self.clock().astimezone(self.tz).date()

    # Timer -------------------------------------------------------------------

    @property
    def timer_status(self) -> TimerStatus:
        return self.timer.status

    def start_timer(self, subject_id: str) -> None:
        self.timer.start(subject_id)

    def pause_timer(self) -> None:
        self.timer.pause()

    def resume_timer(self) -> None:
        self.timer.resume()

    def discard_timer(self) -> None:
        self.timer.discard()

    def elapsed_seconds(self) -> int:
        return self.timer.elapsed_seconds()

    def complete_timer(self) -> Optional[StudySession]:
        """Finish the current run; returns ``None`` when it was too short to keep."""

        session = self.timer.complete()
        minimum = self.context.settings.timer.min_session_seconds
        if session.duration_seconds < minimum:
            logger.warning(
                "Dropping %ss session for %s (minimum is %ss)",
                session.duration_seconds,
                session.subject_id,
                minimum,
            )
            return None
        self._save_session(session)
        return session

    def save_unsaved(self) -> List[StudySession]:
        """Retry runs whose first write failed; returns the ones now saved."""

        saved: List[StudySession] = []
        while self.unsaved:
            session = self.unsaved[0]
            self._save_session(session)
            saved.append(session)
        return saved

    def _save_session(self, session: StudySession) -> None:
        try:
            self.context.store.save_session(session)
        except OSError as exc:
            if session not in self.unsaved:
                self.unsaved.append(session)
            logger.error("Keeping session %s in memory, write failed: %s", session.id, exc)
            raise SessionNotSavedError(session) from exc
        if session in self.unsaved:
            self.unsaved.remove(session)
        self._state = self.state.with_session(session)

    # Collections -------------------------------------------------------------

    def replace_subjects(self, subjects: Iterable[Subject]) -> List[Subject]:
        items = list(subjects)
        ids = [subject.id for subject in items]
        if len(ids) != len(set(ids)):
            raise ValueError("Subject ids must be unique.")
        self.context.store.save_subjects(items)
        self._state = self.state.with_subjects(items)
        return items

    def add_subject(self, name: str, color: str = "slate", subject_id: Optional[str] = None) -> Subject:
        if not name.strip():
            raise ValueError("Subject name must not be empty.")
        identifier = subject_id or _slugify(name)
        if self.state.has_subject(identifier):
            raise ValueError(f"Subject {identifier!r} already exists.")
        subject = Subject(id=identifier, name=name.strip(), color=color)
        self.replace_subjects([*self.state.subjects, subject])
        logger.info("Added subject %s", identifier)
        return subject

    def remove_subject(self, subject_id: str) -> bool:
        # Sessions keep their subject_id; history may reference removed subjects.
        remaining = [subject for subject in self.state.subjects if subject.id != subject_id]
        if len(remaining) == len(self.state.subjects):
            return False
        self.replace_subjects(remaining)
        logger.info("Removed subject %s", subject_id)
        return True

    def replace_tasks(self, tasks: Iterable[Task]) -> List[Task]:
        items = list(tasks)
        self.context.store.save_tasks(items)
        self._state = self.state.with_tasks(items)
        return items

    # Preferences -------------------------------------------------------------

    def set_daily_goal(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError("Daily goal must not be negative.")
        self.context.store.save_daily_goal(seconds)
        self._state = self.state.with_daily_goal(seconds)
        logger.info("Daily goal set to %ss", seconds)
        return seconds

    def set_theme(self, theme_id: str) -> Theme:
        if theme_id not in {theme.id for theme in THEMES}:
            raise ValueError(f"Unknown theme: {theme_id!r}")
        self.context.store.save_theme_id(theme_id)
        self._state = self.state.with_theme_id(theme_id)
        return resolve_theme(theme_id)

    def set_wallpaper(self, value: str) -> str:
        self.context.store.save_wallpaper(value)
        self._state = self.state.with_wallpaper(value)
        return value

    @property
    def current_theme(self) -> Theme:
        return resolve_theme(self.state.theme_id)

    # Reports -----------------------------------------------------------------

    def day_summary(self, day: Optional[date] = None) -> DaySummary:
        state = self.state
        return history.day_summary(state.sessions, state.daily_goal, day or self.today(), self.tz)

    def subject_totals(self, date_range: DateRange) -> Dict[str, int]:
        return history.totals_by_subject(self.state.sessions, date_range, self.tz)

    def calendar(self, date_range: DateRange) -> Dict[date, int]:
        return history.totals_by_day(self.state.sessions, date_range, self.tz)

    def week_total(self, day: Optional[date] = None) -> int:
        return history.week_total(
            self.state.sessions,
            day or self.today(),
            self.tz,
            week_start=self.context.settings.calendar.week_start,
        )

    def streak(self) -> int:
        state = self.state
        return history.streak(state.sessions, state.daily_goal, today=self.today(), tz=self.tz)
