# src/taskflow/storage/tiered.py

"""
Two-tier persistence for the account collection.

- primary: the file store (`added-accounts/accounts.json`), authoritative
- secondary: the key-value store (`user_accounts`), a best-effort mirror

Reads prefer the file; the key-value copy is used (and copied back to the file)
only when the file has no records. Writes always replace the whole collection.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ..core.errors import StorageUnavailable
from ..core.ports import FileStore, KeyValueStore

logger = logging.getLogger(__name__)

ACCOUNTS_DIRECTORY = "added-accounts"
ACCOUNTS_FILE_PATH = f"{ACCOUNTS_DIRECTORY}/accounts.json"
ACCOUNTS_STORAGE_KEY = "user_accounts"


def dump_records(records: list[dict[str, Any]]) -> str:
    return json.dumps(records, ensure_ascii=False, indent=2)


def parse_records(raw: str | None, *, source: str) -> list[dict[str, Any]]:
    """Parse a JSON array of objects; anything else counts as no data."""
    if not raw:
        return []
    try:
        val = json.loads(raw)
    except ValueError:
        logger.warning("Ignoring malformed account JSON from %s", source)
        return []
    if not isinstance(val, list):
        logger.warning("Ignoring non-list account JSON from %s", source)
        return []
    return [r for r in val if isinstance(r, dict)]


class TieredAccountStorage:
    def __init__(
        self,
        file_store: FileStore,
        kv_store: KeyValueStore,
        *,
        file_path: str = ACCOUNTS_FILE_PATH,
        kv_key: str = ACCOUNTS_STORAGE_KEY,
    ) -> None:
        self._files = file_store
        self._kv = kv_store
        self._file_path = file_path
        self._kv_key = kv_key
        self._directory = file_path.rpartition("/")[0]

    # ---- primary ----

    async def _read_primary(self) -> list[dict[str, Any]]:
        try:
            if not await self._files.exists(self._file_path):
                return []
            raw = await self._files.read_text(self._file_path)
        except Exception:
            logger.exception("Error reading accounts from file %s", self._file_path)
            return []
        return parse_records(raw, source="file")

    async def _write_primary(self, payload: str) -> None:
        try:
            if self._directory:
                await self._files.make_dirs(self._directory)
            await self._files.write_text(self._file_path, payload)
        except StorageUnavailable:
            raise
        except Exception as e:
            raise StorageUnavailable(f"accounts file write failed: {e}") from e

    # ---- secondary ----

    async def _read_secondary(self) -> list[dict[str, Any]]:
        try:
            raw = await self._kv.get_item(self._kv_key)
        except Exception:
            logger.exception("Error reading accounts from key-value store key=%s", self._kv_key)
            return []
        return parse_records(raw, source="kv")

    async def _mirror_secondary(self, payload: str) -> None:
        try:
            await self._kv.set_item(self._kv_key, payload)
        except Exception:
            # The file is authoritative; a stale mirror only matters if the file is lost.
            logger.exception("Error mirroring accounts to key-value store key=%s", self._kv_key)

    # ---- public API ----

    async def load(self) -> list[dict[str, Any]]:
        """Return the reconciled account records. Never raises."""
        records = await self._read_primary()
        if records:
            logger.debug("Retrieved %d accounts from file", len(records))
            return records

        records = await self._read_secondary()
        if not records:
            return []

        logger.info("Retrieved %d accounts from key-value store; restoring file", len(records))
        try:
            await self._write_primary(dump_records(records))
        except StorageUnavailable:
            logger.exception("Failed to restore accounts file from key-value store")
        return records

    async def commit(self, records: list[dict[str, Any]]) -> None:
        """
        Persist the whole collection: file first (must succeed), then the mirror.

        Raises StorageUnavailable if the file write fails; the mirror is not
        touched in that case.
        """
        payload = dump_records(records)
        await self._write_primary(payload)
        await self._mirror_secondary(payload)
        logger.debug("Committed %d accounts", len(records))
