# tests/test_commands.py

from __future__ import annotations

import pytest

from taskflow.cli.commands import CommandRegistry, registry
from taskflow.core.state import AppState

from .fakes import MemoryExportSink, RecordingNotificationSink

REGISTER = (
    "/register email=u@x.com username=user firstname=Jo lastname=Do "
    "birthdate=01.01.2000 password=Abc123!"
)


@pytest.mark.asyncio
async def test_non_command_returns_none(state: AppState) -> None:
    assert await registry.handle(state, "hello") is None


@pytest.mark.asyncio
async def test_unknown_command(state: AppState) -> None:
    reply = await registry.handle(state, "/frobnicate")
    assert reply is not None
    assert reply.startswith("Unknown command: /frobnicate")


@pytest.mark.asyncio
async def test_unbalanced_quotes(state: AppState) -> None:
    reply = await registry.handle(state, '/add title="Buy milk')
    assert reply is not None
    assert "unbalanced quotes" in reply


@pytest.mark.asyncio
async def test_help_lists_commands_and_aliases_route(state: AppState) -> None:
    reply = await registry.handle(state, "/?")
    assert reply is not None
    assert "/register" in reply
    assert "/toggle" in reply


@pytest.mark.asyncio
async def test_handlers_with_and_without_emit() -> None:
    reg = CommandRegistry()
    emitted: list[str] = []

    async def two(state, args):
        return f"two:{args}"

    async def three(state, args, emit=None):
        if emit:
            emit("progress")
        return "three"

    reg.register("two", two, help_text="")
    reg.register("three", three, help_text="")

    assert await reg.handle(None, "/two a b", emit=emitted.append) == "two:['a', 'b']"  # type: ignore[arg-type]
    assert await reg.handle(None, "/three", emit=emitted.append) == "three"  # type: ignore[arg-type]
    assert emitted == ["progress"]


@pytest.mark.asyncio
async def test_register_login_add_today(state: AppState) -> None:
    reply = await registry.handle(state, REGISTER)
    assert reply == "Account created successfully! Member #1 since 17.10.2026."

    assert await registry.handle(state, REGISTER) == "An account with this email already exists."

    assert await registry.handle(state, "/login u@x.com wrong") == "Invalid email or password."
    assert await registry.handle(state, "/login u@x.com Abc123!") == "Logged in as u@x.com."

    reply = await registry.handle(state, '/add title="Buy milk" priority=high')
    assert reply is not None
    assert reply.startswith("Todo added successfully: [ ] Buy milk (high)")

    today = await registry.handle(state, "/today")
    assert today is not None
    assert today.startswith("Today:")
    assert "Buy milk" in today


@pytest.mark.asyncio
async def test_validation_problems_are_listed(state: AppState) -> None:
    reply = await registry.handle(state, "/register email=bad")
    assert reply is not None
    lines = reply.splitlines()
    assert lines[0] == "Please fill all fields correctly."
    assert all(ln.startswith("  - ") for ln in lines[1:])
    assert len(lines) > 1


@pytest.mark.asyncio
async def test_todo_commands_need_login(state: AppState) -> None:
    assert await registry.handle(state, '/add title="x"') == "You must be logged in to do that."
    assert await registry.handle(state, "/todos") == "You must be logged in to do that."


@pytest.mark.asyncio
async def test_edit_reports_changes_and_password_confirmation(
    state: AppState, sink: RecordingNotificationSink
) -> None:
    await registry.handle(state, REGISTER)
    await registry.handle(state, "/login u@x.com Abc123!")

    reply = await registry.handle(state, "/edit lastname=Doe")
    assert reply == "Profile updated successfully:\n  Last Name: Do → Doe"

    reply = await registry.handle(state, "/edit password=Xyz789!")
    assert reply == "Please confirm your birthdate to change the password."

    reply = await registry.handle(state, "/edit password=Xyz789! confirm=01.01.2000")
    assert reply == "Profile updated successfully:\n  Password was changed"


@pytest.mark.asyncio
async def test_export_and_delete_account(state: AppState, exporter: MemoryExportSink) -> None:
    assert await registry.handle(state, "/export") == "There are no accounts to export."

    await registry.handle(state, REGISTER)
    await registry.handle(state, "/login u@x.com Abc123!")
    assert await registry.handle(state, "/export") == "Accounts exported to: memory://accounts.json"

    assert "cannot be undone" in (await registry.handle(state, "/delete-account") or "")
    assert await registry.handle(state, "/delete-account yes") == (
        "Your account has been deleted successfully."
    )
    assert state.session is None
    assert await registry.handle(state, "/accounts") == "No accounts stored."


@pytest.mark.asyncio
async def test_toggle_only_reaches_own_todos(state: AppState) -> None:
    await registry.handle(state, REGISTER)
    await registry.handle(
        state,
        "/register email=b@x.com username=bobby firstname=Bo lastname=By "
        "birthdate=02.02.2000 password=Abc123!",
    )
    await registry.handle(state, "/login u@x.com Abc123!")
    await registry.handle(state, '/add title="Buy milk"')
    [mine] = await state.todos.list_todos("u@x.com")

    await registry.handle(state, "/login b@x.com Abc123!")
    assert await registry.handle(state, f"/toggle {mine.id}") == "This todo no longer exists."
    assert (await state.todos.list_todos("u@x.com"))[0].completed is False

    await registry.handle(state, "/login u@x.com Abc123!")
    reply = await registry.handle(state, f"/toggle {mine.id}")
    assert reply is not None
    assert reply.startswith("[x] Buy milk")


@pytest.mark.asyncio
async def test_calendar_lists_one_day(state: AppState) -> None:
    await registry.handle(state, REGISTER)
    await registry.handle(state, "/login u@x.com Abc123!")
    await registry.handle(state, '/add title="Dentist" due=2026-10-20T09:00')
    await registry.handle(state, '/add title="Gym" due=2026-10-21T18:00')

    reply = await registry.handle(state, "/calendar 2026-10-21")
    assert reply is not None
    assert reply.startswith("2026-10-21:")
    assert "Gym" in reply
    assert "Dentist" not in reply

    assert await registry.handle(state, "/calendar 2026-10-22") == "No tasks for 2026-10-22."
    assert await registry.handle(state, "/calendar tomorrow") == "Usage: /calendar [YYYY-MM-DD]"
