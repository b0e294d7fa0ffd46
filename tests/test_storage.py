# tests/test_storage.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskflow.accounts.account_models import AccountInput
from taskflow.accounts.account_store import AccountRepository
from taskflow.storage.file_store import LocalFileStore
from taskflow.storage.kv_store import SqliteKeyValueStore
from taskflow.storage.tiered import ACCOUNTS_FILE_PATH, TieredAccountStorage


@pytest.mark.asyncio
async def test_sqlite_kv_set_get_remove(tmp_path: Path) -> None:
    store = SqliteKeyValueStore(tmp_path / "kv.sqlite3")

    assert await store.get_item("userEmail") is None
    await store.set_item("userEmail", "u@x.com")
    await store.set_item("userEmail", "v@x.com")
    assert await store.get_item("userEmail") == "v@x.com"

    # A second instance on the same file sees the persisted value.
    again = SqliteKeyValueStore(tmp_path / "kv.sqlite3")
    assert await again.get_item("userEmail") == "v@x.com"

    await store.remove_item("userEmail")
    assert await again.get_item("userEmail") is None


@pytest.mark.asyncio
async def test_local_file_store_roundtrip(tmp_path: Path) -> None:
    store = LocalFileStore(tmp_path / "docs")

    assert not await store.exists("added-accounts/accounts.json")
    await store.make_dirs("added-accounts")
    await store.write_text("added-accounts/accounts.json", "[]")

    assert await store.exists("added-accounts/accounts.json")
    assert await store.read_text("added-accounts/accounts.json") == "[]"
    assert not list((tmp_path / "docs" / "added-accounts").glob("*.tmp"))


@pytest.mark.asyncio
async def test_local_file_store_rejects_escaping_paths(tmp_path: Path) -> None:
    store = LocalFileStore(tmp_path / "docs")
    with pytest.raises(ValueError):
        await store.write_text("../outside.json", "[]")


@pytest.mark.asyncio
async def test_accounts_survive_restart_on_real_storage(tmp_path: Path) -> None:
    def make_repo() -> AccountRepository:
        kv = SqliteKeyValueStore(tmp_path / "kv.sqlite3")
        files = LocalFileStore(tmp_path / "docs")
        return AccountRepository(TieredAccountStorage(files, kv))

    repo = make_repo()
    await repo.create_account(
        AccountInput(
            email="u@x.com",
            password="Abc123!",
            username="u",
            firstname="Jo",
            lastname="Do",
            birthdate="01.01.2000",
        )
    )
    assert (tmp_path / "docs" / ACCOUNTS_FILE_PATH).exists()

    # Losing the file falls back to the key-value mirror and restores it.
    (tmp_path / "docs" / ACCOUNTS_FILE_PATH).unlink()
    listed = await make_repo().list_accounts()

    assert [a.email for a in listed] == ["u@x.com"]
    assert (tmp_path / "docs" / ACCOUNTS_FILE_PATH).exists()
