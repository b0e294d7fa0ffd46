# src/taskflow/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The repositories depend on Protocols instead of concrete implementations.
This keeps storage / notification backends swappable and makes testing easier.

All methods are coroutines: storage may involve device I/O and the caller
awaits each step of a read-modify-write sequence in order.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..notify.profile_changes import ProfileUpdateNotice


class KeyValueStore(Protocol):
    """Process-wide, persisted, string-keyed store of opaque string values."""

    async def get_item(self, key: str) -> str | None: ...
    async def set_item(self, key: str, value: str) -> None: ...
    async def remove_item(self, key: str) -> None: ...


class FileStore(Protocol):
    """Path-addressed whole-file text storage. Paths are relative to the store root."""

    async def exists(self, path: str) -> bool: ...
    async def read_text(self, path: str) -> str: ...
    async def write_text(self, path: str, text: str) -> None: ...
    async def make_dirs(self, path: str) -> None: ...


class NotificationSink(Protocol):
    """
    Delivers a profile-change confirmation to the account owner.

    The core invokes it once per committed update and never waits on the outcome.
    """

    async def send_profile_update(self, notice: ProfileUpdateNotice) -> None: ...


class ExportSink(Protocol):
    """Receives a serialized account export (JSON array text)."""

    async def export(self, payload: str, *, filename: str) -> str: ...
