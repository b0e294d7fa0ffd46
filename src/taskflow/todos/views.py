# src/taskflow/todos/views.py

"""
Read-time views over a user's todos. Nothing here is stored.

All comparisons happen in local time. The week window runs from the start of
`week_starts_on` (0 = Sunday, the default, ... 6 = Saturday) to the last
microsecond of the sixth day after it, inclusive on both ends.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from .todo_models import Todo

COMPLETED_DOT = "#4CAF50"
PENDING_DOT = "#FF9800"


def _local(dt: datetime) -> datetime:
    return dt.astimezone()


def _now(now: datetime | None) -> datetime:
    return _local(now) if now is not None else datetime.now().astimezone()


def week_window(now: datetime | None = None, *, week_starts_on: int = 0) -> tuple[datetime, datetime]:
    current = _now(now)
    # Python weekday(): Monday=0..Sunday=6; convert to Sunday=0..Saturday=6.
    sunday_based = (current.weekday() + 1) % 7
    offset = (sunday_based - week_starts_on) % 7
    start_day = current.date() - timedelta(days=offset)
    # Each bound takes the local offset of its own day, which differs across a DST change.
    start = datetime.combine(start_day, time.min).astimezone()
    end = datetime.combine(start_day + timedelta(days=6), time.max).astimezone()
    return start, end


def today_todos(todos: Iterable[Todo], now: datetime | None = None) -> list[Todo]:
    today = _now(now).date()
    return [t for t in todos if _local(t.due_date).date() == today]


def week_todos(
    todos: Iterable[Todo],
    now: datetime | None = None,
    *,
    week_starts_on: int = 0,
) -> list[Todo]:
    start, end = week_window(now, week_starts_on=week_starts_on)
    first, last = start.date(), end.date()
    return [t for t in todos if first <= _local(t.due_date).date() <= last]


@dataclass(frozen=True, slots=True)
class MarkedDate:
    marked: bool
    dot_color: str


def marked_dates(todos: Iterable[Todo]) -> dict[str, MarkedDate]:
    """Calendar markers keyed by YYYY-MM-DD. When a day has several todos, the last one wins."""
    out: dict[str, MarkedDate] = {}
    for t in todos:
        key = _local(t.due_date).date().isoformat()
        out[key] = MarkedDate(marked=True, dot_color=COMPLETED_DOT if t.completed else PENDING_DOT)
    return out


def todos_on(todos: Iterable[Todo], day: date) -> list[Todo]:
    return [t for t in todos if _local(t.due_date).date() == day]
