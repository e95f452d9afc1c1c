from __future__ import annotations

from typing import Any, Dict, Optional

from ..config import THEMES
from .models import ThemeListPayload, ThemePayload
from .registry import register_api
from .state import api_state


@register_api(
    "get_daily_goal",
    description="Return the daily study goal in seconds.",
    category="preferences",
    tags=("read", "goal"),
)
def get_daily_goal() -> Dict[str, Any]:
    return {"daily_goal": api_state.study.state.daily_goal}


@register_api(
    "set_daily_goal",
    description="Set the daily study goal in minutes.",
    category="preferences",
    tags=("update", "goal"),
)
def set_daily_goal(minutes: int) -> Dict[str, Any]:
    seconds = api_state.study.set_daily_goal(int(minutes) * 60)
    return {"daily_goal": seconds}


@register_api(
    "list_themes",
    description="List the available color themes and the one in use.",
    category="preferences",
    tags=("read", "theme"),
)
def list_themes() -> Dict[str, Any]:
    payload = ThemeListPayload(
        current=ThemePayload.from_domain(api_state.study.current_theme),
        available=[ThemePayload.from_domain(theme) for theme in THEMES],
    )
    return payload.model_dump()


@register_api(
    "set_theme",
    description="Switch to another color theme by id.",
    category="preferences",
    tags=("update", "theme"),
)
def set_theme(theme_id: str) -> Dict[str, Any]:
    theme = api_state.study.set_theme(theme_id)
    return {"theme": ThemePayload.from_domain(theme).model_dump()}


@register_api(
    "set_wallpaper",
    description="Store the wallpaper value ('none', a CSS gradient, or an image URL).",
    category="preferences",
    tags=("update", "wallpaper"),
)
def set_wallpaper(value: Optional[str] = None) -> Dict[str, Any]:
    return {"wallpaper": api_state.study.set_wallpaper(value or "none")}
