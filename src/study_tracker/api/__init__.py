"""Public API surface for the CLI and other front ends."""

from __future__ import annotations

from .registry import ApiFunction, call_api, get_api_functions, register_api
from .state import api_state

# Import endpoint modules so decorators run at module import time.
from . import history, meta, preferences, subjects, tasks, timer  # noqa: F401

__all__ = ["ApiFunction", "api_state", "call_api", "get_api_functions", "register_api"]
