"""Application services orchestrating the timer, history, and storage."""

from __future__ import annotations

from .context import ServiceContext
from .state import AppState
from .study import SessionNotSavedError, StudyService

__all__ = ["AppState", "ServiceContext", "SessionNotSavedError", "StudyService"]
