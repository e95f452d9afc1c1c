from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..domain import TimerStatus
from ..services import StudyService


def format_elapsed(seconds: int) -> str:
    hours, remainder = divmod(max(seconds, 0), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


class TimerTicker(QObject):
    """Polls the study timer on a fixed interval and re-emits what it sees.

    The timer itself never schedules anything; this object is the display
    refresh driver that front ends connect to.
    """

    ticked = pyqtSignal(int)
    status_changed = pyqtSignal(str)

    def __init__(
        self,
        study: StudyService,
        *,
        interval_ms: Optional[int] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.study = study
        self._last_status: TimerStatus = study.timer_status
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms or study.context.settings.timer.tick_interval_ms)
        self._timer.timeout.connect(self.poll)

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def is_active(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        self._timer.start()
        self.poll()

    def stop(self) -> None:
        self._timer.stop()

    def poll(self) -> int:
        status = self.study.timer_status
        if status != self._last_status:
            self._last_status = status
            self.status_changed.emit(status.value)
        elapsed = self.study.elapsed_seconds()
        self.ticked.emit(elapsed)
        return elapsed
