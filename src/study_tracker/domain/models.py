from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Unsupported datetime value: {value!r}")
    if isinstance(value, (int, float)):
        # Epoch milliseconds, as written by the browser build.
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    raise ValueError(f"Unsupported datetime value: {value!r}")


@dataclass(frozen=True, slots=True)
class Subject:
    id: str
    name: str
    color: str = "slate"

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Subject":
        return cls(
            id=str(record["id"]),
            name=str(record["name"]),
            color=record.get("color") or "slate",
        )

    def to_record(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "color": self.color}


@dataclass(frozen=True, slots=True)
class StudySession:
    """A finished stretch of study. Never edited after it is created."""

    id: str
    subject_id: str
    started_at: datetime
    duration_seconds: int

    def __post_init__(self) -> None:
        if self.duration_seconds < 0:
            raise ValueError(f"duration_seconds must be >= 0, got {self.duration_seconds}")

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "StudySession":
        return cls(
            id=str(record["id"]),
            subject_id=str(record["subject_id"]),
            started_at=_parse_datetime(record["started_at"]),
            duration_seconds=int(record["duration_seconds"]),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "subject_id": self.subject_id,
            "started_at": self.started_at.isoformat(),
            "duration_seconds": self.duration_seconds,
        }


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    done: bool = False
    subject_id: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Task":
        return cls(
            id=str(record["id"]),
            title=str(record["title"]),
            done=bool(record.get("done", False)),
            subject_id=record.get("subject_id"),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "done": self.done,
            "subject_id": self.subject_id,
        }


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive range of calendar days."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Range start {self.start} is after end {self.end}")

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1
