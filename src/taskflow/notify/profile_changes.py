# src/taskflow/notify/profile_changes.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..accounts.account_models import Account

# (attribute, label) in the order changes are reported.
_DIFF_FIELDS = (
    ("username", "Username"),
    ("email", "Email"),
    ("firstname", "First Name"),
    ("lastname", "Last Name"),
    ("birthdate", "Birth Date"),
)

PASSWORD_CHANGED_LINE = "Password was changed"


@dataclass(frozen=True, slots=True)
class FieldChange:
    field: str
    label: str
    old: str
    new: str

    def line(self) -> str:
        return f"{self.label}: {self.old} → {self.new}"


@dataclass(frozen=True, slots=True)
class ProfileChanges:
    fields: list[FieldChange] = field(default_factory=list)
    password_changed: bool = False

    def changed_fields(self) -> list[str]:
        return [c.field for c in self.fields]

    def lines(self) -> list[str]:
        out = [c.line() for c in self.fields]
        if self.password_changed:
            out.append(PASSWORD_CHANGED_LINE)
        return out

    def is_empty(self) -> bool:
        return not self.fields and not self.password_changed


def diff_accounts(before: Account, after: Account) -> ProfileChanges:
    """Field-level diff. The password itself never appears, only whether it changed."""
    changes = [
        FieldChange(field=attr, label=label, old=getattr(before, attr), new=getattr(after, attr))
        for attr, label in _DIFF_FIELDS
        if getattr(before, attr) != getattr(after, attr)
    ]
    return ProfileChanges(fields=changes, password_changed=before.password != after.password)


@dataclass(frozen=True, slots=True)
class ProfileUpdateNotice:
    """Template parameters for the "your profile changed" email."""

    to_name: str
    to_email: str
    changes: ProfileChanges

    def template_params(self) -> dict[str, str]:
        lines = self.changes.lines()
        return {
            "to_name": self.to_name,
            "to_email": self.to_email,
            "changes": "\n".join(lines),
            "changes_html": ", ".join(lines),
        }


def build_notice(before: Account, after: Account) -> ProfileUpdateNotice:
    # The new address receives the mail, so an email change is confirmed where it now points.
    return ProfileUpdateNotice(
        to_name=after.firstname,
        to_email=after.email,
        changes=diff_accounts(before, after),
    )
