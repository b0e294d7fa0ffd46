# src/taskflow/core/session.py

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..accounts.account_store import AccountRepository
from .errors import InvalidCredentials, StorageUnavailable
from .ports import KeyValueStore

logger = logging.getLogger(__name__)

SESSION_EMAIL_KEY = "userEmail"
SESSION_PASSWORD_KEY = "userPassword"


@dataclass(frozen=True, slots=True)
class Session:
    """The active identity. Flows receive it explicitly instead of reading storage."""

    email: str


class SessionStore:
    """
    Persists the device-wide "current account" in the key-value store.

    Passwords are compared and stored verbatim (no hashing).
    """

    def __init__(self, kv_store: KeyValueStore, accounts: AccountRepository) -> None:
        self._kv = kv_store
        self._accounts = accounts

    async def login(self, email: str, password: str) -> Session:
        accounts = await self._accounts.list_accounts()
        match = next(
            (a for a in accounts if a.email == email and a.password == password),
            None,
        )
        if match is None:
            logger.info("Login rejected email=%s", email)
            raise InvalidCredentials(f"no account matches email={email}")

        await self._kv.set_item(SESSION_EMAIL_KEY, email)
        await self._kv.set_item(SESSION_PASSWORD_KEY, password)
        logger.info("Login ok email=%s", email)
        return Session(email=email)

    async def current_email(self) -> str | None:
        try:
            email = await self._kv.get_item(SESSION_EMAIL_KEY)
        except StorageUnavailable:
            logger.exception("Reading session failed; treating as logged out")
            return None
        return email or None

    async def restore(self) -> Session | None:
        email = await self.current_email()
        return Session(email=email) if email else None

    async def switch_email(self, email: str) -> Session:
        """Re-point the persisted session after the active account changed its email."""
        await self._kv.set_item(SESSION_EMAIL_KEY, email)
        return Session(email=email)

    async def logout(self) -> None:
        await self._kv.remove_item(SESSION_EMAIL_KEY)
        await self._kv.remove_item(SESSION_PASSWORD_KEY)
        logger.info("Session cleared")
