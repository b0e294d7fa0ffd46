# src/taskflow/accounts/account_models.py

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any

DATE_FORMAT = "%d.%m.%Y"  # DD.MM.YYYY, zero-padded

# Persisted key order, matching the accounts.json written by earlier releases.
_RECORD_KEYS = (
    "email",
    "password",
    "username",
    "firstname",
    "lastname",
    "birthdate",
    "memberSince",
    "memberID",
)


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def parse_date(raw: str) -> date | None:
    """Parse DD.MM.YYYY; returns None for anything else (including 31.02.2000)."""
    if len(raw) != 10:
        return None
    try:
        return datetime.strptime(raw, DATE_FORMAT).date()
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class AccountInput:
    """Registration candidate. member_since may be supplied (e.g. imports)."""

    email: str
    password: str
    username: str
    firstname: str
    lastname: str
    birthdate: str
    member_since: str | None = None


@dataclass(frozen=True, slots=True)
class Account:
    email: str
    password: str
    username: str
    firstname: str
    lastname: str
    birthdate: str
    member_since: str | None = None
    member_id: int | None = None

    # Unknown keys found in a stored record; written back untouched.
    extra: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_input(cls, candidate: AccountInput, *, member_since: str, member_id: int) -> Account:
        return cls(
            email=candidate.email,
            password=candidate.password,
            username=candidate.username,
            firstname=candidate.firstname,
            lastname=candidate.lastname,
            birthdate=candidate.birthdate,
            member_since=member_since,
            member_id=member_id,
        )

    @classmethod
    def from_record(cls, rec: dict[str, Any]) -> Account:
        raw_id = rec.get("memberID")
        try:
            member_id = int(raw_id) if raw_id is not None else None
        except (TypeError, ValueError):
            member_id = None
        raw_since = rec.get("memberSince")

        return cls(
            email=str(rec.get("email") or ""),
            password=str(rec.get("password") or ""),
            username=str(rec.get("username") or ""),
            firstname=str(rec.get("firstname") or ""),
            lastname=str(rec.get("lastname") or ""),
            birthdate=str(rec.get("birthdate") or ""),
            member_since=str(raw_since) if raw_since else None,
            member_id=member_id,
            extra={k: v for k, v in rec.items() if k not in _RECORD_KEYS},
        )

    def to_record(self) -> dict[str, Any]:
        rec: dict[str, Any] = {
            "email": self.email,
            "password": self.password,
            "username": self.username,
            "firstname": self.firstname,
            "lastname": self.lastname,
            "birthdate": self.birthdate,
        }
        if self.member_since is not None:
            rec["memberSince"] = self.member_since
        if self.member_id is not None:
            rec["memberID"] = self.member_id
        rec.update(self.extra)
        return rec

    def with_changes(self, **changes: Any) -> Account:
        return replace(self, **changes)
