from __future__ import annotations

from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from study_tracker.config import THEMES, get_settings, resolve_theme


@pytest.fixture()
def fresh_settings():
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


def test_env_overrides(monkeypatch, tmp_path, fresh_settings):
    monkeypatch.setenv("STUDY_TRACKER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("STUDY_TRACKER_TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("STUDY_TRACKER_MIN_SESSION_SECONDS", "30")
    monkeypatch.setenv("STUDY_TRACKER_WEEK_START", "6")
    monkeypatch.setenv("STUDY_TRACKER_LOG_LEVEL", "debug")

    settings = fresh_settings()
    assert settings.storage.store_path == Path(tmp_path) / "study_tracker.json"
    assert settings.calendar.tzinfo == ZoneInfo("Europe/Berlin")
    assert settings.calendar.week_start == 6
    assert settings.timer.min_session_seconds == 30
    assert settings.log_level == "DEBUG"


def test_defaults_and_bad_values(monkeypatch, fresh_settings):
    monkeypatch.delenv("STUDY_TRACKER_TIMEZONE", raising=False)
    monkeypatch.setenv("STUDY_TRACKER_MIN_SESSION_SECONDS", "soon")
    monkeypatch.setenv("STUDY_TRACKER_TICK_MS", "5")

    settings = fresh_settings()
    assert settings.calendar.tzinfo is None
    assert settings.timer.min_session_seconds == 0
    assert settings.timer.tick_interval_ms == 50


def test_resolve_theme_falls_back_to_first():
    assert resolve_theme("ocean").id == "ocean"
    assert resolve_theme("missing") is THEMES[0]
    assert resolve_theme(None).id == "ypt"
