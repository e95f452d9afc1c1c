from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Union
from uuid import uuid4

from ..domain import StudySession, TimerStatus

logger = logging.getLogger(__name__)


class TimerError(RuntimeError):
    """Base class for misuse of the session timer."""


class InvalidTransitionError(TimerError):
    """Raised when an operation is not allowed from the timer's current state."""

    def __init__(self, operation: str, status: TimerStatus) -> None:
        super().__init__(f"Cannot {operation} while the timer is {status.value}.")
        self.operation = operation
        self.status = status


class InvalidSubjectError(TimerError):
    """Raised when a run is started for a subject that does not exist."""

    def __init__(self, subject_id: str) -> None:
        super().__init__(f"Unknown subject: {subject_id!r}")
        self.subject_id = subject_id


@dataclass(frozen=True)
class Idle:
    status = TimerStatus.IDLE


@dataclass(frozen=True)
class Running:
    subject_id: str
    started_at: datetime
    accumulated_seconds: float
    segment_start: float

    status = TimerStatus.RUNNING


@dataclass(frozen=True)
class Paused:
    subject_id: str
    started_at: datetime
    accumulated_seconds: float

    status = TimerStatus.PAUSED


TimerState = Union[Idle, Running, Paused]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_session_id() -> str:
    return str(uuid4())


class SessionTimer:
    """Tracks active study time for one subject at a time.

    Wall-clock time (``clock``) only stamps when a run started. Durations are
    measured with ``monotonic`` so that clock adjustments cannot shrink or
    inflate a run. Each running segment is folded into the accumulated total
    exactly once, when it ends on ``pause`` or ``complete``.
    """

    def __init__(
        self,
        subject_exists: Callable[[str], bool],
        *,
        clock: Callable[[], datetime] = _utc_now,
        monotonic: Callable[[], float] = time.monotonic,
        id_factory: Callable[[], str] = _new_session_id,
    ) -> None:
        self._subject_exists = subject_exists
        self._clock = clock
        self._monotonic = monotonic
        self._id_factory = id_factory
        self._state: TimerState = Idle()

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def status(self) -> TimerStatus:
        return self._state.status

    @property
    def subject_id(self) -> Optional[str]:
        if isinstance(self._state, (Running, Paused)):
            return self._state.subject_id
        return None

    def _segment_seconds(self, state: Running) -> float:
        return max(self._monotonic() - state.segment_start, 0.0)

    def start(self, subject_id: str) -> None:
        if not isinstance(self._state, Idle):
            raise InvalidTransitionError("start", self.status)
        if not self._subject_exists(subject_id):
            raise InvalidSubjectError(subject_id)
        self._state = Running(
            subject_id=subject_id,
            started_at=self._clock(),
            accumulated_seconds=0.0,
            segment_start=self._monotonic(),
        )
        logger.debug("Timer started for subject %s", subject_id)

    def pause(self) -> None:
        state = self._state
        if not isinstance(state, Running):
            raise InvalidTransitionError("pause", self.status)
        self._state = Paused(
            subject_id=state.subject_id,
            started_at=state.started_at,
            accumulated_seconds=state.accumulated_seconds + self._segment_seconds(state),
        )
        logger.debug("Timer paused at %.1fs", self._state.accumulated_seconds)

    def resume(self) -> None:
        state = self._state
        if not isinstance(state, Paused):
            raise InvalidTransitionError("resume", self.status)
        self._state = Running(
            subject_id=state.subject_id,
            started_at=state.started_at,
            accumulated_seconds=state.accumulated_seconds,
            segment_start=self._monotonic(),
        )
        logger.debug("Timer resumed for subject %s", state.subject_id)

    def complete(self) -> StudySession:
        state = self._state
        if isinstance(state, Running):
            total = state.accumulated_seconds + self._segment_seconds(state)
        elif isinstance(state, Paused):
            total = state.accumulated_seconds
        else:
            raise InvalidTransitionError("complete", self.status)

        session = StudySession(
            id=self._id_factory(),
            subject_id=state.subject_id,
            started_at=state.started_at,
            duration_seconds=int(math.floor(total)),
        )
        self._state = Idle()
        logger.debug("Timer completed: %s", session)
        return session

    def discard(self) -> None:
        if isinstance(self._state, Idle):
            raise InvalidTransitionError("discard", self.status)
        logger.debug("Timer discarded for subject %s", self._state.subject_id)
        self._state = Idle()

    def elapsed_seconds(self) -> int:
        state = self._state
        if isinstance(state, Running):
            return int(math.floor(state.accumulated_seconds + self._segment_seconds(state)))
        if isinstance(state, Paused):
            return int(math.floor(state.accumulated_seconds))
        return 0
