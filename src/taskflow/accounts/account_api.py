# src/taskflow/accounts/account_api.py

"""
High-level account flows used by connectors.

These combine the repositories with the session and the notification sink; the
repositories themselves know nothing about who is logged in.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from ..core.errors import (
    AccountNotFound,
    ConfirmationRequired,
    InvalidConfirmation,
    SessionRequired,
    StorageUnavailable,
)
from ..core.session import Session
from ..core.state import AppState
from ..notify.profile_changes import ProfileChanges, build_notice
from ..notify.sinks import dispatch_in_background
from .account_models import Account, AccountInput
from .validation import validate_registration

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProfileUpdateResult:
    account: Account
    changes: ProfileChanges
    # Background send of the confirmation; callers may ignore it.
    notification: asyncio.Task[None]


def require_session(state: AppState) -> Session:
    if state.session is None:
        raise SessionRequired()
    return state.session


async def register_account(state: AppState, candidate: AccountInput) -> Account:
    validate_registration(candidate)
    return await state.accounts.create_account(candidate)


async def login(state: AppState, email: str, password: str) -> Session:
    state.session = await state.sessions.login(email, password)
    return state.session


async def logout(state: AppState) -> None:
    await state.sessions.logout()
    state.session = None


async def load_profile(state: AppState) -> Account:
    session = require_session(state)
    account = await state.accounts.get_account(session.email)
    if account is None:
        raise AccountNotFound(f"no account for session email={session.email}")
    return account


async def update_profile(
    state: AppState,
    edited: Account,
    *,
    birthdate_confirmation: str | None = None,
) -> ProfileUpdateResult:
    """
    Save an edited profile for the logged-in account.

    A password change must be confirmed with the stored birthdate. The
    confirmation notice is dispatched only after the account is committed, and
    its outcome never affects the result.
    """
    session = require_session(state)
    before = await load_profile(state)

    if edited.password != before.password:
        if birthdate_confirmation is None:
            raise ConfirmationRequired()
        if birthdate_confirmation != before.birthdate:
            raise InvalidConfirmation()

    after = await state.accounts.update_account(edited, identity_email=session.email)

    if after.email != session.email:
        try:
            state.session = await state.sessions.switch_email(after.email)
        except StorageUnavailable:
            logger.exception("Persisting the new session email failed email=%s", after.email)
            state.session = Session(email=after.email)

    notice = build_notice(before, after)
    task = dispatch_in_background(state.notifier, notice)
    return ProfileUpdateResult(account=after, changes=notice.changes, notification=task)


async def delete_current_account(state: AppState) -> None:
    """Delete the logged-in account and end the session. Its todos are left in place."""
    session = require_session(state)
    await state.accounts.delete_account(session.email)
    try:
        await state.sessions.logout()
    except StorageUnavailable:
        logger.exception("Clearing session after account deletion failed email=%s", session.email)
    state.session = None
