from __future__ import annotations

import pytest

from study_tracker import cli


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)


def test_format_duration():
    assert cli.format_duration(0) == "0h 00m"
    assert cli.format_duration(5400) == "1h 30m"


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_subjects_and_goal(bound_api, capsys):
    assert cli.main(["subjects", "add", "Geography", "--color", "teal"]) == 0
    assert cli.main(["subjects", "list"]) == 0
    assert cli.main(["goal", "--minutes", "120"]) == 0
    out = capsys.readouterr().out
    assert "Added geography" in out
    assert "Geography (teal)" in out
    assert "Daily goal: 2h 00m" in out


def test_today_and_report(bound_api, clock, capsys):
    bound_api.start_timer("math")
    clock.advance(2700)
    bound_api.complete_timer()

    assert cli.main(["today", "--date", "2024-03-11"]) == 0
    assert cli.main(["report", "--start", "2024-03-01", "--end", "2024-03-31"]) == 0
    assert cli.main(["streak"]) == 0
    out = capsys.readouterr().out
    assert "2024-03-11: 0h 45m / 4h 00m" in out
    assert "Math" in out
    assert "0 day streak" in out


def test_errors_exit_with_status_one(bound_api, capsys):
    assert cli.main(["report", "--start", "2024-03-31", "--end", "2024-03-01"]) == 1
    assert cli.main(["subjects", "add", "Math", "--id", "math"]) == 1
    err = capsys.readouterr().err
    assert err.count("error:") == 2


def test_theme_switch(bound_api, capsys):
    assert cli.main(["theme", "ocean"]) == 0
    out = capsys.readouterr().out
    assert "* ocean" in out


def test_calendar_defaults_to_the_tracker_month(bound_api, clock, capsys):
    bound_api.start_timer("history")
    clock.advance(2700)
    bound_api.complete_timer()

    assert cli.main(["calendar"]) == 0
    assert "2024-03-11  0h 45m" in capsys.readouterr().out
