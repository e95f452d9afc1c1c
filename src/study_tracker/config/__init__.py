"""Configuration models and helpers."""

from __future__ import annotations

from .settings import (
    APP_NAME,
    AppSettings,
    CalendarSettings,
    StorageSettings,
    TimerSettings,
    get_settings,
)
from .theme import DEFAULT_THEME_ID, THEMES, Theme, resolve_theme

__all__ = [
    "APP_NAME",
    "AppSettings",
    "CalendarSettings",
    "DEFAULT_THEME_ID",
    "StorageSettings",
    "THEMES",
    "Theme",
    "TimerSettings",
    "get_settings",
    "resolve_theme",
]
