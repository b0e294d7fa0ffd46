# tests/test_tiered_storage.py

from __future__ import annotations

import json

import pytest

from taskflow.accounts.account_store import AccountRepository
from taskflow.storage.tiered import (
    ACCOUNTS_DIRECTORY,
    ACCOUNTS_FILE_PATH,
    ACCOUNTS_STORAGE_KEY,
    TieredAccountStorage,
)

from .fakes import FakeFileStore, FakeKeyValueStore


def _rec(email: str, member_id: int) -> dict:
    return {
        "email": email,
        "password": "Abc123!",
        "username": email.split("@")[0],
        "firstname": "Jo",
        "lastname": "Do",
        "birthdate": "01.01.2000",
        "memberSince": "01.01.2025",
        "memberID": member_id,
    }


@pytest.mark.asyncio
async def test_file_wins_over_key_value_store() -> None:
    file_recs = [_rec("a@x.com", 1), _rec("b@x.com", 2)]
    kv_recs = [_rec("z@x.com", 1)]
    files = FakeFileStore({ACCOUNTS_FILE_PATH: json.dumps(file_recs)})
    kv = FakeKeyValueStore({ACCOUNTS_STORAGE_KEY: json.dumps(kv_recs)})

    repo = AccountRepository(TieredAccountStorage(files, kv))
    listed = await repo.list_accounts()

    assert [a.email for a in listed] == ["a@x.com", "b@x.com"]


@pytest.mark.asyncio
async def test_key_value_store_backfills_missing_file() -> None:
    kv_recs = [_rec("z@x.com", 1)]
    files = FakeFileStore()
    kv = FakeKeyValueStore({ACCOUNTS_STORAGE_KEY: json.dumps(kv_recs)})

    records = await TieredAccountStorage(files, kv).load()

    assert records == kv_recs
    assert json.loads(files.files[ACCOUNTS_FILE_PATH]) == kv_recs
    assert ACCOUNTS_DIRECTORY in files.dirs


@pytest.mark.asyncio
async def test_empty_file_array_falls_back_to_key_value_store() -> None:
    kv_recs = [_rec("z@x.com", 1)]
    files = FakeFileStore({ACCOUNTS_FILE_PATH: "[]"})
    kv = FakeKeyValueStore({ACCOUNTS_STORAGE_KEY: json.dumps(kv_recs)})

    assert await TieredAccountStorage(files, kv).load() == kv_recs


@pytest.mark.asyncio
async def test_unreadable_sources_count_as_no_data() -> None:
    files = FakeFileStore({ACCOUNTS_FILE_PATH: "{not json"})
    kv = FakeKeyValueStore()
    kv.fail_reads = True

    assert await TieredAccountStorage(files, kv).load() == []


@pytest.mark.asyncio
async def test_backfill_failure_still_returns_records() -> None:
    kv_recs = [_rec("z@x.com", 1)]
    files = FakeFileStore()
    files.fail_writes = True
    kv = FakeKeyValueStore({ACCOUNTS_STORAGE_KEY: json.dumps(kv_recs)})

    assert await TieredAccountStorage(files, kv).load() == kv_recs
    assert ACCOUNTS_FILE_PATH not in files.files


@pytest.mark.asyncio
async def test_commit_writes_pretty_json_to_file_then_mirror() -> None:
    files = FakeFileStore()
    kv = FakeKeyValueStore()
    recs = [_rec("a@x.com", 1)]

    await TieredAccountStorage(files, kv).commit(recs)

    text = files.files[ACCOUNTS_FILE_PATH]
    assert text == json.dumps(recs, indent=2)
    assert kv.data[ACCOUNTS_STORAGE_KEY] == text
