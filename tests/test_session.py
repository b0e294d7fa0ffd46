# tests/test_session.py

from __future__ import annotations

import pytest

from taskflow.accounts.account_models import AccountInput
from taskflow.accounts.account_store import AccountRepository
from taskflow.core.errors import InvalidCredentials
from taskflow.core.session import SESSION_EMAIL_KEY, SESSION_PASSWORD_KEY, Session, SessionStore

from .fakes import FakeKeyValueStore


async def _seed(accounts: AccountRepository) -> None:
    await accounts.create_account(
        AccountInput(
            email="u@x.com",
            password="Abc123!",
            username="user",
            firstname="Jo",
            lastname="Do",
            birthdate="01.01.2000",
        )
    )


@pytest.mark.asyncio
async def test_login_stores_both_session_keys(
    sessions: SessionStore, accounts: AccountRepository, kv: FakeKeyValueStore
) -> None:
    await _seed(accounts)

    session = await sessions.login("u@x.com", "Abc123!")

    assert session == Session(email="u@x.com")
    assert kv.data[SESSION_EMAIL_KEY] == "u@x.com"
    assert kv.data[SESSION_PASSWORD_KEY] == "Abc123!"


@pytest.mark.asyncio
async def test_login_requires_exact_match(
    sessions: SessionStore, accounts: AccountRepository, kv: FakeKeyValueStore
) -> None:
    await _seed(accounts)

    with pytest.raises(InvalidCredentials):
        await sessions.login("u@x.com", "wrong")
    with pytest.raises(InvalidCredentials):
        await sessions.login("U@x.com", "Abc123!")

    assert SESSION_EMAIL_KEY not in kv.data


@pytest.mark.asyncio
async def test_restore_and_logout(
    sessions: SessionStore, accounts: AccountRepository, kv: FakeKeyValueStore
) -> None:
    await _seed(accounts)
    assert await sessions.restore() is None

    await sessions.login("u@x.com", "Abc123!")
    assert await sessions.restore() == Session(email="u@x.com")

    await sessions.logout()
    assert await sessions.restore() is None
    assert SESSION_PASSWORD_KEY not in kv.data


@pytest.mark.asyncio
async def test_unreadable_session_counts_as_logged_out(
    sessions: SessionStore, kv: FakeKeyValueStore
) -> None:
    kv.data[SESSION_EMAIL_KEY] = "u@x.com"
    kv.fail_reads = True

    assert await sessions.current_email() is None


@pytest.mark.asyncio
async def test_switch_email_keeps_password(sessions: SessionStore, kv: FakeKeyValueStore) -> None:
    kv.data[SESSION_EMAIL_KEY] = "old@x.com"
    kv.data[SESSION_PASSWORD_KEY] = "Abc123!"

    session = await sessions.switch_email("new@x.com")

    assert session.email == "new@x.com"
    assert kv.data == {SESSION_EMAIL_KEY: "new@x.com", SESSION_PASSWORD_KEY: "Abc123!"}
