from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterator

import pytest

from study_tracker.api import api_state
from study_tracker.config import AppSettings, CalendarSettings, StorageSettings, TimerSettings
from study_tracker.services import ServiceContext, StudyService

T0 = datetime(2024, 3, 11, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Wall clock and monotonic clock that only move when told to."""

    def __init__(self, start: datetime = T0) -> None:
        self.current = start
        self.ticks = 1000.0

    def now(self) -> datetime:
        return self.current

    def monotonic(self) -> float:
        return self.ticks

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)
        self.ticks += seconds


def make_settings(data_dir: Path, *, min_session_seconds: int = 0) -> AppSettings:
    return AppSettings(
        storage=StorageSettings(data_dir=data_dir, store_file="study_tracker.json"),
        timer=TimerSettings(min_session_seconds=min_session_seconds, tick_interval_ms=1000),
        calendar=CalendarSettings(timezone="UTC", week_start=0),
        log_level="DEBUG",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def settings(tmp_path: Path) -> AppSettings:
    return make_settings(tmp_path)


@pytest.fixture()
def study(settings: AppSettings, clock: FakeClock) -> StudyService:
    service = StudyService(ServiceContext(settings=settings), clock=clock.now, monotonic=clock.monotonic)
    service.add_subject("Math", color="orange", subject_id="math")
    service.add_subject("History", color="blue", subject_id="history")
    return service


@pytest.fixture()
def bound_api(study: StudyService) -> Iterator[StudyService]:
    previous = api_state.study
    api_state.reset(study=study)
    yield study
    api_state.reset(study=previous)
