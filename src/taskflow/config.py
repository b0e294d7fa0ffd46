# src/taskflow/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (EmailJS keys are only needed for that backend).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKFLOW"

NOTIFY_BACKENDS = ("log", "emailjs")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# Real environment variables win over .env entries.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths ----
    data_dir: Path  # app-documents-root: holds added-accounts/accounts.json
    kv_db_path: Path
    export_dir: Path

    # ---- Views ----
    week_starts_on: int  # 0 = Sunday ... 6 = Saturday

    # ---- Notifications ----
    notify_backend: str
    emailjs_url: str
    emailjs_service_id: str
    emailjs_template_id: str
    emailjs_public_key: str
    notify_timeout_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "TaskFlow")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskflow"))
        kv_db_path = _env_path(_k("KV_DB_PATH"), data_dir / "kv.sqlite3")
        export_dir = _env_path(_k("EXPORT_DIR"), data_dir / "exports")

        week_starts_on = _env_int(_k("WEEK_STARTS_ON"), 0) % 7

        notify_backend = _env(_k("NOTIFY_BACKEND"), "log").strip().lower()
        if notify_backend not in NOTIFY_BACKENDS:
            notify_backend = "log"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            kv_db_path=kv_db_path,
            export_dir=export_dir,
            week_starts_on=week_starts_on,
            notify_backend=notify_backend,
            emailjs_url=_env(_k("EMAILJS_URL"), "https://api.emailjs.com/api/v1.0/email/send"),
            emailjs_service_id=_env(_k("EMAILJS_SERVICE_ID")).strip(),
            emailjs_template_id=_env(_k("EMAILJS_TEMPLATE_ID")).strip(),
            emailjs_public_key=_env(_k("EMAILJS_PUBLIC_KEY")).strip(),
            notify_timeout_seconds=_env_float(_k("NOTIFY_TIMEOUT_SECONDS"), 10.0),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
