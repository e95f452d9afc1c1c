from __future__ import annotations

from typing import Any, Dict

from .models import TimerPayload
from .registry import register_api
from .serializers import serialize_session
from .state import api_state


def _timer_payload() -> Dict[str, Any]:
    study = api_state.study
    return TimerPayload(
        status=study.timer_status.value,
        subject_id=study.timer.subject_id,
        elapsed_seconds=study.elapsed_seconds(),
    ).model_dump()


@register_api(
    "timer_status",
    description="Return the timer state, its subject, and the active seconds so far.",
    category="timer",
    tags=("read",),
)
def timer_status() -> Dict[str, Any]:
    return {"timer": _timer_payload()}


@register_api(
    "start_timer",
    description="Start timing a study run for an existing subject.",
    category="timer",
    tags=("start",),
)
def start_timer(subject_id: str) -> Dict[str, Any]:
    api_state.study.start_timer(subject_id)
    return {"timer": _timer_payload()}


@register_api(
    "pause_timer",
    description="Pause the running timer.",
    category="timer",
    tags=("pause",),
)
def pause_timer() -> Dict[str, Any]:
    api_state.study.pause_timer()
    return {"timer": _timer_payload()}


@register_api(
    "resume_timer",
    description="Resume a paused timer.",
    category="timer",
    tags=("resume",),
)
def resume_timer() -> Dict[str, Any]:
    api_state.study.resume_timer()
    return {"timer": _timer_payload()}


@register_api(
    "complete_timer",
    description="Finish the current run and record it as a study session.",
    category="timer",
    tags=("complete", "write"),
)
def complete_timer() -> Dict[str, Any]:
    session = api_state.study.complete_timer()
    return {
        "session": serialize_session(session) if session else None,
        "timer": _timer_payload(),
    }


@register_api(
    "discard_timer",
    description="Abandon the current run without recording anything.",
    category="timer",
    tags=("discard",),
)
def discard_timer() -> Dict[str, Any]:
    api_state.study.discard_timer()
    return {"timer": _timer_payload()}
