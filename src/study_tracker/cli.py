from __future__ import annotations

import argparse
import logging
import signal
import sys
from typing import Any, Dict, List, Optional

from .api import api_state, call_api
from .bootstrap import configure_logging
from .core import TimerError

logger = logging.getLogger(__name__)


def format_duration(seconds: int) -> str:
    hours, remainder = divmod(max(seconds, 0), 3600)
    return f"{hours}h {remainder // 60:02d}m"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Study Tracker command line interface.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    timer_parser = subparsers.add_parser("timer", help="Time a study run; Ctrl+C finishes it.")
    timer_parser.add_argument("subject_id")
    timer_parser.add_argument(
        "--discard-on-exit",
        action="store_true",
        help="Throw the run away on Ctrl+C instead of saving it.",
    )

    today_parser = subparsers.add_parser("today", help="Show study time and goal progress for a day.")
    today_parser.add_argument("--date", dest="day", default=None, help="YYYY-MM-DD, defaults to today.")

    subparsers.add_parser("streak", help="Show how many days in a row the goal was met.")

    report_parser = subparsers.add_parser("report", help="Per-subject totals for a date range.")
    report_parser.add_argument("--start", required=True)
    report_parser.add_argument("--end", required=True)

    calendar_parser = subparsers.add_parser("calendar", help="Per-day totals for a month.")
    calendar_parser.add_argument("--month", default=None, help="YYYY-MM, defaults to this month.")

    subjects_parser = subparsers.add_parser("subjects", help="Manage subjects.")
    subjects_sub = subjects_parser.add_subparsers(dest="action", required=True)
    subjects_sub.add_parser("list")
    add_parser = subjects_sub.add_parser("add")
    add_parser.add_argument("name")
    add_parser.add_argument("--color", default="slate")
    add_parser.add_argument("--id", dest="subject_id", default=None)
    remove_parser = subjects_sub.add_parser("remove")
    remove_parser.add_argument("subject_id")

    goal_parser = subparsers.add_parser("goal", help="Show or set the daily goal.")
    goal_parser.add_argument("--minutes", type=int, default=None)

    theme_parser = subparsers.add_parser("theme", help="Show or switch the color theme.")
    theme_parser.add_argument("theme_id", nargs="?", default=None)

    subparsers.add_parser("tools", help="List registered API functions.")

    return parser


def _run_timer(subject_id: str, *, discard_on_exit: bool) -> int:
    from PyQt6.QtCore import QCoreApplication

    from .ui.ticker import TimerTicker, format_elapsed

    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    study = api_state.study
    study.start_timer(subject_id)

    ticker = TimerTicker(study)
    ticker.ticked.connect(lambda seconds: print(f"\r{subject_id}  {format_elapsed(seconds)}", end="", flush=True))

    def _finish(*_: Any) -> None:
        ticker.stop()
        app.quit()

    # The ticker's timeout hands control back to Python, so SIGINT is seen within one tick.
    signal.signal(signal.SIGINT, _finish)
    ticker.start()
    app.exec()
    print()

    if discard_on_exit:
        study.discard_timer()
        print("Run discarded.")
        return 0
    session = study.complete_timer()
    if session is None:
        print("Run too short, not saved.")
    else:
        print(f"Saved {format_duration(session.duration_seconds)} of {session.subject_id}.")
    return 0


def _print_today(day: Optional[str]) -> None:
    summary = call_api("day_summary", day=day)["summary"]
    print(f"{summary['day']}: {format_duration(summary['total_seconds'])} / {format_duration(summary['daily_goal'])}")
    print(f"Goal progress: {summary['progress']:.0%}")
    for subject_id, seconds in sorted(summary["by_subject"].items(), key=lambda item: item[1], reverse=True):
        print(f"  {subject_id:<20} {format_duration(seconds)}")


def _print_rows(rows: List[Dict[str, Any]]) -> None:
    if not rows:
        print("Nothing recorded.")
    for row in rows:
        label = row.get("name") or f"{row['subject_id']} (removed)"
        print(f"  {label:<24} {format_duration(row['seconds'])}")


def _dispatch(args: argparse.Namespace) -> int:
    if args.command == "timer":
        return _run_timer(args.subject_id, discard_on_exit=args.discard_on_exit)
    if args.command == "today":
        _print_today(args.day)
    elif args.command == "streak":
        result = call_api("goal_streak")
        print(f"{result['streak']} day streak (goal {format_duration(result['daily_goal'])})")
    elif args.command == "report":
        _print_rows(call_api("subject_totals", start=args.start, end=args.end)["subjects"])
    elif args.command == "calendar":
        month = args.month or api_state.study.today().strftime("%Y-%m")
        days = call_api("calendar_month", month=month)["calendar"]["days"]
        if not days:
            print("Nothing recorded.")
        for day, seconds in days.items():
            print(f"  {day}  {format_duration(seconds)}")
    elif args.command == "subjects":
        if args.action == "list":
            for subject in call_api("list_all_subjects")["subjects"]:
                print(f"  {subject['id']:<20} {subject['name']} ({subject['color']})")
        elif args.action == "add":
            subject = call_api("create_subject", name=args.name, color=args.color, subject_id=args.subject_id)
            print(f"Added {subject['subject']['id']}")
        else:
            removed = call_api("delete_subject", subject_id=args.subject_id)["deleted"]
            print("Removed." if removed else f"No subject {args.subject_id!r}.")
    elif args.command == "goal":
        if args.minutes is not None:
            call_api("set_daily_goal", minutes=args.minutes)
        print(f"Daily goal: {format_duration(call_api('get_daily_goal')['daily_goal'])}")
    elif args.command == "theme":
        if args.theme_id:
            call_api("set_theme", theme_id=args.theme_id)
        themes = call_api("list_themes")
        for theme in themes["available"]:
            marker = "*" if theme["id"] == themes["current"]["id"] else " "
            print(f"{marker} {theme['id']:<10} {theme['name']}")
    elif args.command == "tools":
        for tool in call_api("list_available_tools")["tools"]:
            print(f"  [{tool['category']}] {tool['name']}: {tool['description']}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging()
    logger.debug("Study Tracker CLI running %s", args.command)
    try:
        return _dispatch(args)
    except (TimerError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
