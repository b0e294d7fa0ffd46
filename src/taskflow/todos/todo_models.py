# src/taskflow/todos/todo_models.py

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, raw: str | None) -> Priority:
        if not raw:
            return cls.MEDIUM
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.MEDIUM


def encode_due_date(dt: datetime) -> str:
    """
    ISO-8601 UTC with milliseconds and a Z suffix, e.g. 2026-10-17T09:30:00.000Z.

    Naive datetimes are taken as local time.
    """
    utc = dt.astimezone(UTC)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def decode_due_date(raw: Any) -> datetime | None:
    if not raw or not isinstance(raw, str):
        return None
    try:
        dt = datetime.fromisoformat(raw.strip())
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.astimezone(UTC)


@dataclass(frozen=True, slots=True)
class Todo:
    id: str
    title: str
    description: str
    due_date: datetime
    priority: Priority
    completed: bool
    user_id: str

    @classmethod
    def from_record(cls, rec: dict[str, Any]) -> Todo:
        due = decode_due_date(rec.get("dueDate")) or datetime.fromtimestamp(0, UTC)
        return cls(
            id=str(rec.get("id") or ""),
            title=str(rec.get("title") or ""),
            description=str(rec.get("description") or ""),
            due_date=due,
            priority=Priority.parse(rec.get("priority")),
            completed=bool(rec.get("completed", False)),
            user_id=str(rec.get("userId") or ""),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "dueDate": encode_due_date(self.due_date),
            "priority": self.priority.value,
            "completed": self.completed,
            "userId": self.user_id,
        }

    def toggled(self) -> Todo:
        return replace(self, completed=not self.completed)
