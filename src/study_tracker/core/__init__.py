"""Timer engine, history aggregation, and persistence."""

from .history import (
    DaySummary,
    day_summary,
    goal_progress,
    local_day,
    streak,
    total_for_day,
    totals_by_day,
    totals_by_subject,
    week_total,
)
from .store import (
    DEFAULT_DAILY_GOAL_SECONDS,
    DEFAULT_STORE_CONTENT,
    DEFAULT_WALLPAPER,
    JsonStore,
    PersistenceGateway,
    StoreCorruptedError,
)
from .timer import (
    Idle,
    InvalidSubjectError,
    InvalidTransitionError,
    Paused,
    Running,
    SessionTimer,
    TimerError,
    TimerState,
)

__all__ = [
    "DEFAULT_DAILY_GOAL_SECONDS",
    "DEFAULT_STORE_CONTENT",
    "DEFAULT_WALLPAPER",
    "DaySummary",
    "Idle",
    "InvalidSubjectError",
    "InvalidTransitionError",
    "JsonStore",
    "Paused",
    "PersistenceGateway",
    "Running",
    "SessionTimer",
    "StoreCorruptedError",
    "TimerError",
    "TimerState",
    "day_summary",
    "goal_progress",
    "local_day",
    "streak",
    "total_for_day",
    "totals_by_day",
    "totals_by_subject",
    "week_total",
]
