# src/taskflow/todos/todo_store.py

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from datetime import datetime
from typing import Any

from ..core.errors import SessionRequired, StorageUnavailable, TodoNotFound, ValidationFailed
from ..core.ports import KeyValueStore
from ..core.session import Session
from .todo_models import Priority, Todo

logger = logging.getLogger(__name__)

TODOS_STORAGE_KEY = "todos"


class TodoRepository:
    """
    Flat todo collection stored as one JSON array under the `todos` key.

    Ownership is only a `userId` tag; partitioning by owner happens at read time.

    Reads for listing are lenient (unreadable storage => no todos). Reads that
    precede a write are strict, so a storage hiccup never causes the whole
    collection to be overwritten with a partial one.
    """

    def __init__(
        self,
        kv_store: KeyValueStore,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._kv = kv_store
        self._clock = clock

    # ---- low-level helpers ----

    async def _read_records(self, *, strict: bool) -> list[dict[str, Any]]:
        try:
            raw = await self._kv.get_item(TODOS_STORAGE_KEY)
        except StorageUnavailable:
            if strict:
                raise
            logger.exception("Error loading todos; showing none")
            return []
        if not raw:
            return []
        try:
            val = json.loads(raw)
        except ValueError as e:
            if strict:
                raise StorageUnavailable(f"todos JSON is malformed: {e}") from e
            logger.warning("Ignoring malformed todos JSON")
            return []
        if not isinstance(val, list):
            if strict:
                raise StorageUnavailable("todos JSON is not a list")
            return []
        return [r for r in val if isinstance(r, dict)]

    async def _write_records(self, records: list[dict[str, Any]]) -> None:
        await self._kv.set_item(TODOS_STORAGE_KEY, json.dumps(records, ensure_ascii=False))

    def _new_id(self, taken: set[str]) -> str:
        n = int(self._clock() * 1000)
        while str(n) in taken:
            n += 1
        return str(n)

    # ---- public API ----

    async def add_todo(
        self,
        session: Session | None,
        *,
        title: str,
        due_date: datetime,
        description: str = "",
        priority: Priority | str = Priority.MEDIUM,
    ) -> Todo:
        if session is None or not session.email:
            raise SessionRequired("add_todo without an active session")
        title = (title or "").strip()
        if not title:
            raise ValidationFailed(["Please enter a title for your todo."])

        records = await self._read_records(strict=True)
        todo = Todo(
            id=self._new_id({str(r.get("id")) for r in records}),
            title=title,
            description=(description or "").strip(),
            due_date=due_date,
            priority=priority if isinstance(priority, Priority) else Priority.parse(priority),
            completed=False,
            user_id=session.email,
        )
        records.append(todo.to_record())
        await self._write_records(records)

        logger.debug("Todo added id=%s owner=%s due=%s", todo.id, todo.user_id, todo.due_date)
        # Round-trip so the caller sees exactly what a later list_todos returns.
        return Todo.from_record(records[-1])

    async def list_todos(self, owner: str) -> list[Todo]:
        records = await self._read_records(strict=False)
        return [Todo.from_record(r) for r in records if r.get("userId") == owner]

    async def toggle_completion(self, todo_id: str, *, view: list[Todo] | None = None) -> Todo:
        """
        Flip `completed` on the stored todo and return the updated item.

        The stored pre-toggle value decides the result. If `view` (a list the
        caller is displaying) is given, its matching entry is replaced with the
        same updated item after the write succeeds.
        """
        records = await self._read_records(strict=True)
        for i, rec in enumerate(records):
            if str(rec.get("id")) == todo_id:
                break
        else:
            raise TodoNotFound(f"todo not found id={todo_id}")

        new_records = list(records)
        new_records[i] = {**rec, "completed": not bool(rec.get("completed", False))}
        await self._write_records(new_records)

        updated = Todo.from_record(new_records[i])
        if view is not None:
            for j, item in enumerate(view):
                if item.id == todo_id:
                    view[j] = updated
        logger.debug("Todo toggled id=%s completed=%s", todo_id, updated.completed)
        return updated
