from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import tzinfo
from functools import lru_cache
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv
from platformdirs import user_data_dir

load_dotenv()

APP_NAME = "Study Tracker"
APP_AUTHOR = "StudyTracker"


@dataclass(frozen=True)
class StorageSettings:
    data_dir: Path
    store_file: str

    @property
    def store_path(self) -> Path:
        return self.data_dir / self.store_file

    @property
    def log_path(self) -> Path:
        return self.data_dir / "study_tracker.log"


@dataclass(frozen=True)
class TimerSettings:
    min_session_seconds: int
    tick_interval_ms: int


@dataclass(frozen=True)
class CalendarSettings:
    timezone: Optional[str]
    week_start: int

    @property
    def tzinfo(self) -> Optional[tzinfo]:
        """Zone used for day boundaries; ``None`` means the host's local time."""

        if not self.timezone:
            return None
        return ZoneInfo(self.timezone)


@dataclass(frozen=True)
class AppSettings:
    storage: StorageSettings
    timer: TimerSettings
    calendar: CalendarSettings
    log_level: str


def _int_from_env(name: str, default: int, *, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return max(value, minimum)


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    storage = StorageSettings(
        data_dir=Path(os.getenv("STUDY_TRACKER_DATA_DIR") or user_data_dir(APP_NAME, APP_AUTHOR)),
        store_file=os.getenv("STUDY_TRACKER_STORE_FILE", "study_tracker.json"),
    )

    timer = TimerSettings(
        min_session_seconds=_int_from_env("STUDY_TRACKER_MIN_SESSION_SECONDS", 0),
        tick_interval_ms=_int_from_env("STUDY_TRACKER_TICK_MS", 1000, minimum=50),
    )

    calendar = CalendarSettings(
        timezone=os.getenv("STUDY_TRACKER_TIMEZONE") or None,
        week_start=_int_from_env("STUDY_TRACKER_WEEK_START", 0) % 7,
    )

    return AppSettings(
        storage=storage,
        timer=timer,
        calendar=calendar,
        log_level=os.getenv("STUDY_TRACKER_LOG_LEVEL", "INFO").upper(),
    )
