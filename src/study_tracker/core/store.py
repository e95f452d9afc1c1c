from __future__ import annotations

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, TypeVar

import orjson

from ..config import DEFAULT_THEME_ID
from ..domain import StudySession, Subject, Task

logger = logging.getLogger(__name__)

DEFAULT_DAILY_GOAL_SECONDS = 4 * 60 * 60
DEFAULT_WALLPAPER = "none"

DEFAULT_STORE_CONTENT: Dict[str, Any] = {
    "sessions": [],
    "subjects": [],
    "tasks": [],
    "daily_goal": DEFAULT_DAILY_GOAL_SECONDS,
    "theme_id": DEFAULT_THEME_ID,
    "wallpaper": DEFAULT_WALLPAPER,
    "metadata": {"schema_version": 1},
}

T = TypeVar("T")


class StoreCorruptedError(RuntimeError):
    """Raised when the store document exists but is not a JSON object."""


class PersistenceGateway(Protocol):
    def get_sessions(self) -> List[StudySession]: ...

    def save_session(self, session: StudySession) -> None: ...

    def get_subjects(self) -> List[Subject]: ...

    def save_subjects(self, subjects: Iterable[Subject]) -> None: ...

    def get_tasks(self) -> List[Task]: ...

    def save_tasks(self, tasks: Iterable[Task]) -> None: ...

    def get_daily_goal(self) -> int: ...

    def save_daily_goal(self, seconds: int) -> None: ...

    def get_theme_id(self) -> str: ...

    def save_theme_id(self, theme_id: str) -> None: ...

    def get_wallpaper(self) -> str: ...

    def save_wallpaper(self, value: str) -> None: ...


class JsonStore:
    """Single-document JSON persistence for every collection the app keeps."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._state: Optional[Dict[str, Any]] = None

    @property
    def path(self) -> Path:
        return self._path

    def _ensure_materialized(self) -> Dict[str, Any]:
        if self._state is not None:
            return self._state
        if not self._path.exists():
            self._state = deepcopy(DEFAULT_STORE_CONTENT)
            return self._state
        raw = self._path.read_bytes()
        if not raw.strip():
            self._state = deepcopy(DEFAULT_STORE_CONTENT)
            return self._state
        try:
            data = orjson.loads(raw)
        except orjson.JSONDecodeError as exc:
            raise StoreCorruptedError(f"Store file {self._path} is not valid JSON.") from exc
        if not isinstance(data, dict):
            raise StoreCorruptedError(f"Store file {self._path} does not hold a JSON object.")
        # Backfill missing keys when upgrading.
        for key, value in DEFAULT_STORE_CONTENT.items():
            if key not in data:
                data[key] = deepcopy(value)
        self._state = data
        return self._state

    def _persist(self, document: Dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = orjson.dumps(document, option=orjson.OPT_INDENT_2)
        self._path.write_bytes(payload + b"\n")

    def _mutate(self, callback: Callable[[Dict[str, Any]], None]) -> None:
        # The cache only takes a change once it is on disk.
        draft = deepcopy(self._ensure_materialized())
        callback(draft)
        self._persist(draft)
        self._state = draft

    def _replace(self, key: str, value: Any) -> None:
        def _assign(state: Dict[str, Any]) -> None:
            state[key] = value

        self._mutate(_assign)

    def _load_records(self, key: str, factory: Callable[[Dict[str, Any]], T]) -> List[T]:
        items: List[T] = []
        for record in self._ensure_materialized().get(key) or []:
            try:
                items.append(factory(record))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed %s record %r: %s", key, record, exc)
        return items

    # Sessions ----------------------------------------------------------------

    def get_sessions(self) -> List[StudySession]:
        return self._load_records("sessions", StudySession.from_record)

    def save_session(self, session: StudySession) -> None:
        def _append(state: Dict[str, Any]) -> None:
            state["sessions"] = list(state.get("sessions") or []) + [session.to_record()]

        self._mutate(_append)
        logger.info(
            "Saved session %s (%s, %ss)",
            session.id,
            session.subject_id,
            session.duration_seconds,
        )

    # Subjects / tasks --------------------------------------------------------

    def get_subjects(self) -> List[Subject]:
        return self._load_records("subjects", Subject.from_record)

    def save_subjects(self, subjects: Iterable[Subject]) -> None:
        self._replace("subjects", [subject.to_record() for subject in subjects])

    def get_tasks(self) -> List[Task]:
        return self._load_records("tasks", Task.from_record)

    def save_tasks(self, tasks: Iterable[Task]) -> None:
        self._replace("tasks", [task.to_record() for task in tasks])

    # Scalars -----------------------------------------------------------------

    def get_daily_goal(self) -> int:
        raw = self._ensure_materialized().get("daily_goal")
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed daily goal %r", raw)
            return DEFAULT_DAILY_GOAL_SECONDS

    def save_daily_goal(self, seconds: int) -> None:
        self._replace("daily_goal", int(seconds))

    def get_theme_id(self) -> str:
        return str(self._ensure_materialized().get("theme_id") or DEFAULT_THEME_ID)

    def save_theme_id(self, theme_id: str) -> None:
        self._replace("theme_id", theme_id)

    def get_wallpaper(self) -> str:
        return str(self._ensure_materialized().get("wallpaper") or DEFAULT_WALLPAPER)

    def save_wallpaper(self, value: str) -> None:
        self._replace("wallpaper", value)
