# src/taskflow/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, restores the saved session, then runs
the console REPL until /exit, EOF or Ctrl+C.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state, restore_session
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging
from ..notify.sinks import pending_notifications

logger = logging.getLogger(__name__)


async def _drain_notifications(timeout: float) -> None:
    """Give in-flight confirmation emails a moment to finish before exit."""
    pending = pending_notifications()
    if not pending:
        return
    logger.info("Waiting for %d pending notification(s)...", len(pending))
    _, still_running = await asyncio.wait(pending, timeout=timeout)
    for task in still_running:
        task.cancel()


async def _run(state: AppState) -> None:
    await restore_session(state)
    try:
        await run_console_loop(state)
    finally:
        timeout = float(getattr(state.settings, "notify_timeout_seconds", 10.0))
        await _drain_notifications(timeout)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/taskflow")
    setup_logging(log_dir=log_dir, console_level=console_level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.info("Starting %s...", getattr(settings, "app_name", "TaskFlow"))

    state = create_initial_state(settings=settings)

    try:
        asyncio.run(_run(state))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
