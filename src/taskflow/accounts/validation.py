# src/taskflow/accounts/validation.py

"""Field rules applied when registering a new account."""

from __future__ import annotations

import re

from ..core.errors import ValidationFailed
from .account_models import AccountInput, parse_date

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# At least one upper-case letter, one digit, one of !@#$%^&*, length >= 6.
PASSWORD_RE = re.compile(r"^(?=.*[A-Z])(?=.*\d)(?=.*[!@#$%^&*])[A-Za-z\d!@#$%^&*]{6,}$")

MIN_USERNAME_LEN = 3
MIN_NAME_LEN = 2


def is_email_valid(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def is_password_valid(password: str) -> bool:
    return bool(PASSWORD_RE.match(password))


def is_username_valid(username: str) -> bool:
    return len(username) >= MIN_USERNAME_LEN


def is_name_valid(name: str) -> bool:
    return len(name) >= MIN_NAME_LEN


def is_birthdate_valid(birthdate: str) -> bool:
    return parse_date(birthdate) is not None


def name_problems(candidate: AccountInput) -> list[str]:
    problems: list[str] = []
    if not is_name_valid(candidate.firstname):
        problems.append(f"First name must be at least {MIN_NAME_LEN} characters.")
    if not is_name_valid(candidate.lastname):
        problems.append(f"Last name must be at least {MIN_NAME_LEN} characters.")
    return problems


def validate_names(candidate: AccountInput) -> None:
    """The only rule enforced on every account creation; updates skip it."""
    problems = name_problems(candidate)
    if problems:
        raise ValidationFailed(problems)


def registration_problems(candidate: AccountInput) -> list[str]:
    problems: list[str] = []
    if not is_email_valid(candidate.email):
        problems.append("Email address is not valid.")
    if not is_password_valid(candidate.password):
        problems.append(
            "Password needs 6+ characters with an upper-case letter, a digit and one of !@#$%^&*."
        )
    if not is_username_valid(candidate.username):
        problems.append(f"Username must be at least {MIN_USERNAME_LEN} characters.")
    problems.extend(name_problems(candidate))
    if not is_birthdate_valid(candidate.birthdate):
        problems.append("Birthdate must be a real date in DD.MM.YYYY format.")
    return problems


def validate_registration(candidate: AccountInput) -> None:
    problems = registration_problems(candidate)
    if problems:
        raise ValidationFailed(problems)
