"""
Record kinds and their status state machines.

Each kind has a flat machine: every legal status may move to every other
legal status and no state is terminal. The only illegal transition is to a
value outside the kind's enum.
"""

from __future__ import annotations

from enum import Enum

from core.errors import InvalidStatus


class RecordKind(str, Enum):
    PENSION = "pension"
    FAMILY_PENSION = "family_pension"
    CONTACT = "contact"

    @property
    def label(self) -> str:
        return _LABELS[self]


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ContactStatus(str, Enum):
    UNREAD = "unread"
    READ = "read"
    REPLIED = "replied"


_LABELS = {
    RecordKind.PENSION: "Pension",
    RecordKind.FAMILY_PENSION: "Family Pension",
    RecordKind.CONTACT: "Contact",
}

_STATUSES: dict[RecordKind, type[Enum]] = {
    RecordKind.PENSION: ApplicationStatus,
    RecordKind.FAMILY_PENSION: ApplicationStatus,
    RecordKind.CONTACT: ContactStatus,
}

_INITIAL: dict[RecordKind, Enum] = {
    RecordKind.PENSION: ApplicationStatus.PENDING,
    RecordKind.FAMILY_PENSION: ApplicationStatus.PENDING,
    RecordKind.CONTACT: ContactStatus.UNREAD,
}


def statuses_for(kind: RecordKind) -> type[Enum]:
    return _STATUSES[kind]


def status_values(kind: RecordKind) -> list[str]:
    return [s.value for s in statuses_for(kind)]


def initial_status(kind: RecordKind) -> Enum:
    return _INITIAL[kind]


def check_transition(kind: RecordKind, target: object) -> Enum:
    """Return the target as the kind's status enum, or raise InvalidStatus."""
    enum_cls = statuses_for(kind)
    try:
        return enum_cls(target)
    except ValueError as e:
        raise InvalidStatus(
            f"Invalid status; allowed values: {', '.join(status_values(kind))}"
        ) from e
