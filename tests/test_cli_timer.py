from __future__ import annotations

import pytest

pytest.importorskip("PyQt6")

from PyQt6.QtCore import QCoreApplication, QTimer  # noqa: E402

from study_tracker import cli  # noqa: E402
from study_tracker.core import JsonStore  # noqa: E402


@pytest.fixture(scope="module")
def qt_app():
    return QCoreApplication.instance() or QCoreApplication([])


@pytest.fixture()
def interrupt(monkeypatch, clock):
    """Capture the Ctrl+C handler and fire it once the event loop is running."""

    handlers = []
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(cli.signal, "signal", lambda signum, handler: handlers.append(handler))

    def _schedule(seconds: float) -> None:
        def _fire() -> None:
            clock.advance(seconds)
            handlers[-1]()

        QTimer.singleShot(0, _fire)

    return _schedule


def test_timer_command_saves_the_run(qt_app, bound_api, interrupt, settings, capsys):
    interrupt(5400)
    assert cli.main(["timer", "math"]) == 0

    assert [session.duration_seconds for session in bound_api.state.sessions] == [5400]
    assert JsonStore(settings.storage.store_path).get_sessions()[0].subject_id == "math"
    out = capsys.readouterr().out
    assert "math  00:00:00" in out
    assert "Saved 1h 30m of math." in out


def test_timer_command_can_discard(qt_app, bound_api, interrupt, settings, capsys):
    interrupt(600)
    assert cli.main(["timer", "history", "--discard-on-exit"]) == 0

    assert bound_api.state.sessions == ()
    assert bound_api.timer_status.value == "idle"
    assert JsonStore(settings.storage.store_path).get_sessions() == []
    assert "Run discarded." in capsys.readouterr().out


def test_timer_command_rejects_unknown_subject(qt_app, bound_api, interrupt, capsys):
    assert cli.main(["timer", "chemistry"]) == 1
    assert "Unknown subject" in capsys.readouterr().err
