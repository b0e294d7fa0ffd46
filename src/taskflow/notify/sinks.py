# src/taskflow/notify/sinks.py

from __future__ import annotations

import asyncio
import logging

import httpx

from ..core.errors import NotificationFailed
from ..core.ports import NotificationSink
from .profile_changes import ProfileUpdateNotice

logger = logging.getLogger(__name__)

# Strong references so background sends are not garbage-collected mid-flight.
_PENDING: set[asyncio.Task[None]] = set()


class LoggingNotificationSink:
    """Default sink: records the notice in the log instead of mailing it."""

    async def send_profile_update(self, notice: ProfileUpdateNotice) -> None:
        params = notice.template_params()
        logger.info(
            "Profile update notice to=%s <%s> changes=%s",
            params["to_name"],
            params["to_email"],
            params["changes_html"] or "(none)",
        )


class EmailJsNotificationSink:
    """
    Sends the notice through the EmailJS REST API.

    The template is expected to use the params to_name, to_email, changes and
    changes_html.
    """

    def __init__(
        self,
        *,
        service_id: str,
        template_id: str,
        public_key: str,
        url: str = "https://api.emailjs.com/api/v1.0/email/send",
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not (service_id and template_id and public_key):
            raise ValueError("EmailJS service_id, template_id and public_key are required")
        self._service_id = service_id
        self._template_id = template_id
        self._public_key = public_key
        self._url = url
        self._timeout = timeout_seconds
        self._client = client

    def build_payload(self, notice: ProfileUpdateNotice) -> dict[str, object]:
        return {
            "service_id": self._service_id,
            "template_id": self._template_id,
            "user_id": self._public_key,
            "template_params": notice.template_params(),
        }

    async def send_profile_update(self, notice: ProfileUpdateNotice) -> None:
        payload = self.build_payload(notice)
        if self._client is not None:
            resp = await self._client.post(self._url, json=payload, timeout=self._timeout)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(self._url, json=payload)

        if resp.status_code >= 300:
            raise NotificationFailed(f"EmailJS returned {resp.status_code}: {resp.text[:200]}")
        logger.info("Profile update email sent to=%s", notice.to_email)


def _log_outcome(task: asyncio.Task[None]) -> None:
    _PENDING.discard(task)
    if task.cancelled():
        logger.warning("Profile update notification cancelled")
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Profile update notification failed", exc_info=exc)


async def _send(sink: NotificationSink, notice: ProfileUpdateNotice) -> None:
    await sink.send_profile_update(notice)


def pending_notifications() -> list[asyncio.Task[None]]:
    return list(_PENDING)


def dispatch_in_background(sink: NotificationSink, notice: ProfileUpdateNotice) -> asyncio.Task[None]:
    """
    Fire-and-forget: schedule the send and return immediately.

    Failures are logged by a done-callback and never reach the caller. Must be
    called from a running event loop.
    """
    task = asyncio.get_running_loop().create_task(_send(sink, notice))
    _PENDING.add(task)
    task.add_done_callback(_log_outcome)
    return task
