# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskflow.accounts.account_store import AccountRepository
from taskflow.core.session import SessionStore
from taskflow.core.state import AppState
from taskflow.storage.tiered import TieredAccountStorage
from taskflow.todos.todo_store import TodoRepository

from .fakes import FakeFileStore, FakeKeyValueStore, MemoryExportSink, RecordingNotificationSink

TODAY = date(2026, 10, 17)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI commands.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="TaskFlow",
        data_dir=tmp_path / "documents",
        kv_db_path=tmp_path / "kv.sqlite3",
        export_dir=tmp_path / "exports",
        week_starts_on=0,
        notify_backend="log",
        notify_timeout_seconds=1.0,
    )


@pytest.fixture()
def kv() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture()
def files() -> FakeFileStore:
    return FakeFileStore()


@pytest.fixture()
def storage(files: FakeFileStore, kv: FakeKeyValueStore) -> TieredAccountStorage:
    return TieredAccountStorage(files, kv)


@pytest.fixture()
def accounts(storage: TieredAccountStorage) -> AccountRepository:
    return AccountRepository(storage, today=lambda: TODAY)


@pytest.fixture()
def sessions(kv: FakeKeyValueStore, accounts: AccountRepository) -> SessionStore:
    return SessionStore(kv, accounts)


@pytest.fixture()
def todos(kv: FakeKeyValueStore) -> TodoRepository:
    return TodoRepository(kv)


@pytest.fixture()
def sink() -> RecordingNotificationSink:
    return RecordingNotificationSink()


@pytest.fixture()
def exporter() -> MemoryExportSink:
    return MemoryExportSink()


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    accounts: AccountRepository,
    todos: TodoRepository,
    sessions: SessionStore,
    sink: RecordingNotificationSink,
    exporter: MemoryExportSink,
) -> AppState:
    """AppState wired with in-memory storage fakes and a recording notification sink."""
    return AppState(
        settings=settings,
        accounts=accounts,
        todos=todos,
        sessions=sessions,
        notifier=sink,
        exporter=exporter,
    )
