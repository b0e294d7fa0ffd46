# src/taskflow/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
import shlex
from collections.abc import Awaitable, Callable
from datetime import date, datetime
from typing import cast

from ..accounts import account_api
from ..accounts.account_export import export_accounts
from ..accounts.account_models import AccountInput
from ..core.errors import TaskflowError, TodoNotFound, ValidationFailed
from ..core.state import AppState
from ..todos.todo_models import Priority, Todo
from ..todos.views import marked_dates, today_todos, todos_on, week_todos

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], Awaitable[str]]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], Awaitable[str]]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("email", "username", "firstname", "lastname", "birthdate", "password")


class CommandRegistry:
    """Slash-command registry used by connectors (/help, /login, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Arguments are shell-quoted: /add title="Buy milk" due=2026-10-17.
        Domain errors become their user-facing message.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError:
            return "Could not parse the command (unbalanced quotes?)."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return await h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return await h2(state, args)
        except ValidationFailed as e:
            return "\n".join([e.user_message, *(f"  - {p}" for p in e.problems)])
        except TaskflowError as e:
            logger.debug("/%s failed: %s", name, e)
            return e.user_message

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _kv_args(args: list[str]) -> dict[str, str]:
    out: dict[str, str] = {}
    for a in args:
        key, sep, value = a.partition("=")
        if sep:
            out[key.strip().lower()] = value
    return out


def _parse_due(raw: str | None) -> datetime:
    if not raw:
        return datetime.now().astimezone()
    try:
        dt = datetime.fromisoformat(raw)
    except ValueError as e:
        raise ValidationFailed(["Due date must look like 2026-10-17 or 2026-10-17T18:30."]) from e
    return dt if dt.tzinfo is not None else dt.astimezone()


def format_todo(t: Todo) -> str:
    box = "[x]" if t.completed else "[ ]"
    due = t.due_date.astimezone().strftime("%b %d, %I:%M %p")
    desc = f" - {t.description}" if t.description else ""
    return f"{box} {t.title} ({t.priority.value}) due {due}{desc}  id={t.id}"


def _todo_list(title: str, todos: list[Todo], empty: str) -> str:
    if not todos:
        return empty
    return "\n".join([title, *(f"  {format_todo(t)}" for t in todos)])


async def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_register(state: AppState, args: list[str]) -> str:
    """/register email=.. username=.. firstname=.. lastname=.. birthdate=DD.MM.YYYY password=.."""
    kv = _kv_args(args)
    candidate = AccountInput(
        email=kv.get("email", "").strip(),
        password=kv.get("password", ""),
        username=kv.get("username", "").strip(),
        firstname=kv.get("firstname", "").strip(),
        lastname=kv.get("lastname", "").strip(),
        birthdate=kv.get("birthdate", "").strip(),
    )
    account = await account_api.register_account(state, candidate)
    return f"Account created successfully! Member #{account.member_id} since {account.member_since}."


async def cmd_login(state: AppState, args: list[str]) -> str:
    if len(args) != 2:
        return "Usage: /login <email> <password>"
    session = await account_api.login(state, args[0], args[1])
    return f"Logged in as {session.email}."


async def cmd_logout(state: AppState, args: list[str]) -> str:
    await account_api.logout(state)
    return "Logged out."


async def cmd_whoami(state: AppState, args: list[str]) -> str:
    if state.session is None:
        return "Not logged in. Use /login <email> <password> or /register."
    return f"Logged in as {state.session.email}."


async def cmd_profile(state: AppState, args: list[str]) -> str:
    a = await account_api.load_profile(state)
    return (
        "Profile:\n"
        f"  Member ID: {a.member_id}\n"
        f"  Member since: {a.member_since}\n"
        f"  Username: {a.username}\n"
        f"  Email: {a.email}\n"
        f"  Name: {a.firstname} {a.lastname}\n"
        f"  Birthdate: {a.birthdate}"
    )


async def cmd_edit(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    """
    /edit lastname=Doe                         -> change fields
    /edit password=New123! confirm=01.01.2000  -> password change needs the birthdate
    """
    kv = _kv_args(args)
    changes = {k: v for k, v in kv.items() if k in PROFILE_FIELDS}
    if not changes:
        return f"Usage: /edit field=value ... (fields: {', '.join(PROFILE_FIELDS)})"

    current = await account_api.load_profile(state)
    result = await account_api.update_profile(
        state,
        current.with_changes(**changes),
        birthdate_confirmation=kv.get("confirm"),
    )
    if emit:
        with contextlib.suppress(Exception):
            emit("Sending confirmation email...")
    lines = result.changes.lines() or ["(nothing changed)"]
    return "Profile updated successfully:\n" + "\n".join(f"  {ln}" for ln in lines)


async def cmd_delete_account(state: AppState, args: list[str]) -> str:
    if not args or args[0].lower() != "yes":
        return "This cannot be undone. Run /delete-account yes to confirm."
    await account_api.delete_current_account(state)
    return "Your account has been deleted successfully."


async def cmd_add(state: AppState, args: list[str]) -> str:
    """/add title=".." [due=YYYY-MM-DD[THH:MM]] [priority=low|medium|high] [description=".."]"""
    kv = _kv_args(args)
    todo = await state.todos.add_todo(
        state.session,
        title=kv.get("title", ""),
        description=kv.get("description", ""),
        due_date=_parse_due(kv.get("due")),
        priority=Priority.parse(kv.get("priority")),
    )
    return f"Todo added successfully: {format_todo(todo)}"


async def _my_todos(state: AppState) -> list[Todo]:
    session = account_api.require_session(state)
    return await state.todos.list_todos(session.email)


async def cmd_todos(state: AppState, args: list[str]) -> str:
    todos = await _my_todos(state)
    return _todo_list("All todos:", todos, "No todos yet. Add one with /add.")


async def cmd_today(state: AppState, args: list[str]) -> str:
    todos = today_todos(await _my_todos(state))
    return _todo_list("Today:", todos, "No tasks for today.")


async def cmd_week(state: AppState, args: list[str]) -> str:
    starts_on = int(getattr(state.settings, "week_starts_on", 0))
    todos = week_todos(await _my_todos(state), week_starts_on=starts_on)
    return _todo_list("This week:", todos, "No tasks for this week.")


async def cmd_calendar(state: AppState, args: list[str]) -> str:
    """/calendar -> days with todos; /calendar YYYY-MM-DD -> todos on that day."""
    todos = await _my_todos(state)
    if args:
        try:
            day = date.fromisoformat(args[0])
        except ValueError:
            return "Usage: /calendar [YYYY-MM-DD]"
        label = day.isoformat()
        return _todo_list(f"{label}:", todos_on(todos, day), f"No tasks for {label}.")

    marks = marked_dates(todos)
    if not marks:
        return "Nothing on the calendar."
    lines = ["Calendar:"]
    for key in sorted(marks):
        lines.append(f"  {key} {marks[key].dot_color}")
    return "\n".join(lines)


async def cmd_toggle(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /toggle <todo id>"
    view = await _my_todos(state)
    if not any(t.id == args[0] for t in view):
        raise TodoNotFound(f"todo {args[0]} is not in the current user's list")
    todo = await state.todos.toggle_completion(args[0], view=view)
    return format_todo(todo)


async def cmd_export(state: AppState, args: list[str]) -> str:
    location = await export_accounts(state.accounts, state.exporter)
    if location is None:
        return "There are no accounts to export."
    return f"Accounts exported to: {location}"


async def cmd_accounts(state: AppState, args: list[str]) -> str:
    accounts = await state.accounts.list_accounts()
    if not accounts:
        return "No accounts stored."
    lines = ["Current accounts:"]
    for a in accounts:
        lines.append(f"  #{a.member_id} {a.username} <{a.email}> since {a.member_since}")
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "register",
    cmd_register,
    help_text="Create an account: /register email=.. username=.. firstname=.. lastname=.. "
    "birthdate=DD.MM.YYYY password=..",
)
registry.register("login", cmd_login, help_text="Sign in: /login <email> <password>.")
registry.register("logout", cmd_logout, help_text="Sign out.")
registry.register("whoami", cmd_whoami, help_text="Show the signed-in email.")
registry.register("profile", cmd_profile, help_text="Show your profile.")
registry.register(
    "edit",
    cmd_edit,
    help_text="Edit your profile: /edit field=value ... [confirm=<birthdate> for password].",
)
registry.register("delete-account", cmd_delete_account, help_text="Delete your account.")
registry.register(
    "add",
    cmd_add,
    help_text='Add a todo: /add title=".." [due=..] [priority=..] [description=".."].',
)
registry.register("todos", cmd_todos, help_text="List all your todos.", aliases=["list"])
registry.register("today", cmd_today, help_text="Todos due today.")
registry.register("week", cmd_week, help_text="Todos due this week.")
registry.register(
    "calendar",
    cmd_calendar,
    help_text="Days with todos, or one day's todos: /calendar [YYYY-MM-DD].",
)
registry.register("toggle", cmd_toggle, help_text="Mark a todo done/undone: /toggle <id>.")
registry.register("export", cmd_export, help_text="Export all accounts as JSON.")
registry.register("accounts", cmd_accounts, help_text="List stored accounts.")
