# src/taskflow/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete storage / notification implementations into AppState,
- restores the persisted session.
"""

from __future__ import annotations

import logging

from ..accounts.account_export import FileExportSink
from ..accounts.account_store import AccountRepository
from ..config import get_settings
from ..core.ports import NotificationSink
from ..core.session import SessionStore
from ..core.state import AppState
from ..notify.sinks import EmailJsNotificationSink, LoggingNotificationSink
from ..storage.file_store import LocalFileStore
from ..storage.kv_store import SqliteKeyValueStore
from ..storage.tiered import TieredAccountStorage
from ..todos.todo_store import TodoRepository

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.kv_db_path.parent.mkdir(parents=True, exist_ok=True)


def build_notifier(settings) -> NotificationSink:
    if getattr(settings, "notify_backend", "log") == "emailjs":
        try:
            return EmailJsNotificationSink(
                service_id=settings.emailjs_service_id,
                template_id=settings.emailjs_template_id,
                public_key=settings.emailjs_public_key,
                url=settings.emailjs_url,
                timeout_seconds=settings.notify_timeout_seconds,
            )
        except ValueError:
            logger.warning("EmailJS is not fully configured; logging notices instead.")
    return LoggingNotificationSink()


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    kv = SqliteKeyValueStore(settings.kv_db_path)
    files = LocalFileStore(settings.data_dir)
    accounts = AccountRepository(TieredAccountStorage(files, kv))

    return AppState(
        settings=settings,
        accounts=accounts,
        todos=TodoRepository(kv),
        sessions=SessionStore(kv, accounts),
        notifier=build_notifier(settings),
        exporter=FileExportSink(settings.export_dir),
    )


async def restore_session(state: AppState) -> None:
    state.session = await state.sessions.restore()
    if state.session is not None:
        logger.info("Restored session for %s", state.session.email)
