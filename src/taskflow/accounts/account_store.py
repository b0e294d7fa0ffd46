# src/taskflow/accounts/account_store.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import date
from typing import Any

from ..core.errors import AccountNotFound, DuplicateEmail, DuplicateUsername
from ..storage.tiered import TieredAccountStorage
from .account_models import Account, AccountInput, format_date
from .validation import validate_names

logger = logging.getLogger(__name__)


def next_member_id(existing: Iterable[int | None]) -> int:
    """
    Smallest positive integer not currently in use.

    Records without a member ID count as 0, so they never block an allocation.
    """
    used = {i or 0 for i in existing}
    candidate = 1
    while candidate in used:
        candidate += 1
    return candidate


def _same(a: str, b: str) -> bool:
    return a.lower() == b.lower()


class AccountRepository:
    """
    Canonical account list keyed by email.

    Every mutation is a read-modify-write of the whole collection followed by a
    commit through TieredAccountStorage. Records that an operation does not
    touch are written back exactly as they were read.

    Lookup rules:
    - creation checks email/username collisions case-insensitively
    - update/delete/get match the email exactly (case-sensitive)
    """

    def __init__(
        self,
        storage: TieredAccountStorage,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._storage = storage
        self._today = today

    async def _load_records(self) -> list[dict[str, Any]]:
        return await self._storage.load()

    @staticmethod
    def _index_of(records: list[dict[str, Any]], email: str) -> int:
        for i, rec in enumerate(records):
            if rec.get("email") == email:
                return i
        return -1

    @staticmethod
    def _check_unique(
        records: list[dict[str, Any]],
        *,
        email: str,
        username: str,
        skip_index: int = -1,
    ) -> None:
        for i, rec in enumerate(records):
            if i == skip_index:
                continue
            if _same(str(rec.get("email") or ""), email):
                raise DuplicateEmail(f"email already registered: {email}")
        for i, rec in enumerate(records):
            if i == skip_index:
                continue
            if _same(str(rec.get("username") or ""), username):
                raise DuplicateUsername(f"username already taken: {username}")

    # ---- public API ----

    async def list_accounts(self) -> list[Account]:
        return [Account.from_record(r) for r in await self._load_records()]

    async def get_account(self, email: str) -> Account | None:
        records = await self._load_records()
        idx = self._index_of(records, email)
        return Account.from_record(records[idx]) if idx >= 0 else None

    async def create_account(self, candidate: AccountInput) -> Account:
        validate_names(candidate)

        records = await self._load_records()
        self._check_unique(records, email=candidate.email, username=candidate.username)

        member_id = next_member_id(Account.from_record(r).member_id for r in records)
        member_since = candidate.member_since or format_date(self._today())
        account = Account.from_input(candidate, member_since=member_since, member_id=member_id)

        await self._storage.commit([*records, account.to_record()])
        logger.info("Account created email=%s member_id=%s", account.email, member_id)
        return account

    async def update_account(self, updated: Account, *, identity_email: str | None = None) -> Account:
        """
        Replace the stored account found by `identity_email` (or, when omitted,
        by `updated.email`) with `updated`.

        member_id and member_since always keep their stored values. Changing the
        email or username to one held by another account is rejected.
        """
        key = updated.email if identity_email is None else identity_email

        records = await self._load_records()
        idx = self._index_of(records, key)
        if idx < 0:
            raise AccountNotFound(f"account not found for update: {key}")

        self._check_unique(records, email=updated.email, username=updated.username, skip_index=idx)

        existing = Account.from_record(records[idx])
        account = updated.with_changes(
            member_id=existing.member_id,
            member_since=existing.member_since,
            extra={**existing.extra, **updated.extra},
        )
        new_records = list(records)
        new_records[idx] = account.to_record()

        await self._storage.commit(new_records)
        logger.info("Account updated email=%s (lookup=%s)", account.email, key)
        return account

    async def delete_account(self, email: str) -> None:
        records = await self._load_records()
        remaining = [r for r in records if r.get("email") != email]
        if len(remaining) == len(records):
            raise AccountNotFound(f"account not found for deletion: {email}")

        await self._storage.commit(remaining)
        logger.info("Account deleted email=%s", email)
