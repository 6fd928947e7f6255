"""
Storage contracts for records and administrators.

The reporting service only talks to ``count_by_status`` and ``count_by_month``,
so a backend is free to answer those from counters instead of scans.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Protocol

from domain.workflow import RecordKind

COLLECTIONS: dict[RecordKind, str] = {
    RecordKind.PENSION: "pension_applications",
    RecordKind.FAMILY_PENSION: "family_pension_applications",
    RecordKind.CONTACT: "contacts",
}
ADMINS_COLLECTION = "admins"

# unique business keys; a second insert with the same value is rejected
UNIQUE_FIELDS: dict[RecordKind, str] = {RecordKind.PENSION: "employee_id"}

SEARCH_FIELDS: dict[RecordKind, tuple[str, ...]] = {
    RecordKind.PENSION: ("applicant_name", "employee_id", "email"),
    RecordKind.FAMILY_PENSION: ("applicant_name", "deceased_employee_name", "email"),
    RecordKind.CONTACT: ("name", "email", "subject"),
}


def to_document(value: Any) -> Any:
    """Make a model dump storable: enums to values, plain dates to UTC midnight."""
    if isinstance(value, dict):
        return {k: to_document(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_document(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    return value


class RecordStore(Protocol):
    def create(self, kind: RecordKind, document: dict[str, Any]) -> str: ...

    def get(self, kind: RecordKind, record_id: str) -> dict[str, Any] | None: ...

    def list(
        self,
        kind: RecordKind,
        status: str | None = None,
        search: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]: ...

    def update_status(
        self, kind: RecordKind, record_id: str, status: str, notes: str | None = None
    ) -> dict[str, Any] | None: ...

    def count_by_status(self, kind: RecordKind) -> dict[str, int]: ...

    def count_by_month(
        self, kind: RecordKind, since: datetime, tz: str
    ) -> dict[tuple[int, int], int]: ...


class AdminStore(Protocol):
    def get_by_username(self, username: str) -> dict[str, Any] | None: ...

    def get_by_id(self, admin_id: str) -> dict[str, Any] | None: ...

    def create(self, document: dict[str, Any]) -> str: ...

    def update(self, admin_id: str, fields: dict[str, Any]) -> bool: ...
