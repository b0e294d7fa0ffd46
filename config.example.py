# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets; keep EmailJS keys in .env (gitignored).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKFLOW_APP_NAME": "App display name (default: TaskFlow).",
    "TASKFLOW_LOG_LEVEL": "Console logging level (default: INFO).",
    # Paths (gitignored)
    "TASKFLOW_DATA_DIR": (
        "App documents root; accounts live in <data_dir>/added-accounts/accounts.json "
        "(default: .local/taskflow)."
    ),
    "TASKFLOW_KV_DB_PATH": "Key-value store SQLite path (default: <data_dir>/kv.sqlite3).",
    "TASKFLOW_EXPORT_DIR": "Where /export writes accounts.json (default: <data_dir>/exports).",
    # Views
    "TASKFLOW_WEEK_STARTS_ON": "First day of the 'this week' view, 0=Sunday..6=Saturday (default: 0).",
    # Notifications
    "TASKFLOW_NOTIFY_BACKEND": "'log' (default) or 'emailjs'.",
    "TASKFLOW_EMAILJS_SERVICE_ID": "EmailJS service id (emailjs backend only).",
    "TASKFLOW_EMAILJS_TEMPLATE_ID": "EmailJS template id (emailjs backend only).",
    "TASKFLOW_EMAILJS_PUBLIC_KEY": "EmailJS public key (emailjs backend only).",
    "TASKFLOW_EMAILJS_URL": "EmailJS send endpoint (default: https://api.emailjs.com/api/v1.0/email/send).",
    "TASKFLOW_NOTIFY_TIMEOUT_SECONDS": "HTTP timeout for sending notices (default: 10).",
}
