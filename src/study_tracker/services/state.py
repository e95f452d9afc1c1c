from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple

from ..config import DEFAULT_THEME_ID
from ..core import DEFAULT_DAILY_GOAL_SECONDS, DEFAULT_WALLPAPER, PersistenceGateway
from ..domain import StudySession, Subject, Task


@dataclass(frozen=True)
class AppState:
    """Immutable snapshot of every collection the application holds.

    Updates return a new snapshot with a bumped ``version``; anyone still
    holding the previous snapshot keeps a consistent view.
    """

    sessions: Tuple[StudySession, ...] = ()
    subjects: Tuple[Subject, ...] = ()
    tasks: Tuple[Task, ...] = ()
    daily_goal: int = DEFAULT_DAILY_GOAL_SECONDS
    theme_id: str = DEFAULT_THEME_ID
    wallpaper: str = DEFAULT_WALLPAPER
    version: int = 0

    @classmethod
    def load(cls, gateway: PersistenceGateway) -> "AppState":
        return cls(
            sessions=tuple(gateway.get_sessions()),
            subjects=tuple(gateway.get_subjects()),
            tasks=tuple(gateway.get_tasks()),
            daily_goal=gateway.get_daily_goal(),
            theme_id=gateway.get_theme_id(),
            wallpaper=gateway.get_wallpaper(),
        )

    def _next(self, **changes) -> "AppState":
        return replace(self, version=self.version + 1, **changes)

    def with_session(self, session: StudySession) -> "AppState":
        return self._next(sessions=self.sessions + (session,))

    def with_subjects(self, subjects: Iterable[Subject]) -> "AppState":
        return self._next(subjects=tuple(subjects))

    def with_tasks(self, tasks: Iterable[Task]) -> "AppState":
        return self._next(tasks=tuple(tasks))

    def with_daily_goal(self, seconds: int) -> "AppState":
        return self._next(daily_goal=seconds)

    def with_theme_id(self, theme_id: str) -> "AppState":
        return self._next(theme_id=theme_id)

    def with_wallpaper(self, wallpaper: str) -> "AppState":
        return self._next(wallpaper=wallpaper)

    def subject(self, subject_id: str) -> Optional[Subject]:
        for subject in self.subjects:
            if subject.id == subject_id:
                return subject
        return None

    def has_subject(self, subject_id: str) -> bool:
        return self.subject(subject_id) is not None
