# src/taskflow/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..accounts.account_store import AccountRepository
from ..todos.todo_store import TodoRepository
from .ports import ExportSink, NotificationSink
from .session import Session, SessionStore


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    accounts: AccountRepository
    todos: TodoRepository
    sessions: SessionStore
    notifier: NotificationSink
    exporter: ExportSink

    # Current identity as seen by the running UI; None routes to login.
    session: Session | None = None
