# src/taskflow/accounts/account_export.py

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from ..core.ports import ExportSink
from ..storage.tiered import dump_records
from .account_models import Account
from .account_store import AccountRepository

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "accounts.json"


def accounts_to_json(accounts: Iterable[Account]) -> str:
    """Same pretty-printed array schema as added-accounts/accounts.json."""
    return dump_records([a.to_record() for a in accounts])


class FileExportSink:
    """Writes the export into a user-visible directory and returns the file path."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory).expanduser()

    def _write(self, payload: str, filename: str) -> Path:
        self._directory.mkdir(parents=True, exist_ok=True)
        target = self._directory / filename
        tmp = target.with_suffix(target.suffix + ".tmp")
        tmp.write_text(payload, "utf-8")
        os.replace(tmp, target)
        return target

    async def export(self, payload: str, *, filename: str) -> str:
        target = await asyncio.to_thread(self._write, payload, filename)
        return str(target)


async def export_accounts(repo: AccountRepository, sink: ExportSink) -> str | None:
    """
    Hand every stored account to `sink` as one JSON blob.

    Returns where the sink put it, or None when there is nothing to export.
    """
    accounts = await repo.list_accounts()
    if not accounts:
        logger.info("No accounts to export")
        return None

    location = await sink.export(accounts_to_json(accounts), filename=EXPORT_FILENAME)
    logger.info("Exported %d accounts to %s", len(accounts), location)
    return location
