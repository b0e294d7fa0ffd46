# src/taskflow/core/errors.py

"""
Caller-facing error taxonomy.

Every error carries a distinct, human-readable `user_message` that connectors can
show as-is. The exception's str() may include technical detail for logs.
"""

from __future__ import annotations


class TaskflowError(Exception):
    user_message = "Something went wrong. Please try again."

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.user_message)
        self.detail = detail


class DuplicateEmail(TaskflowError):
    user_message = "An account with this email already exists."


class DuplicateUsername(TaskflowError):
    user_message = "This username is already taken."


class AccountNotFound(TaskflowError):
    user_message = "No account was found for this email."


class TodoNotFound(TaskflowError):
    user_message = "This todo no longer exists."


class InvalidCredentials(TaskflowError):
    user_message = "Invalid email or password."


class StorageUnavailable(TaskflowError):
    user_message = "Your data could not be saved or loaded. Please try again."


class SessionRequired(TaskflowError):
    user_message = "You must be logged in to do that."


class ConfirmationRequired(TaskflowError):
    user_message = "Please confirm your birthdate to change the password."


class InvalidConfirmation(TaskflowError):
    user_message = "Incorrect birthdate."


class NotificationFailed(TaskflowError):
    user_message = "The confirmation email could not be sent."


class ValidationFailed(TaskflowError):
    user_message = "Please fill all fields correctly."

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__("; ".join(self.problems) or self.user_message)
