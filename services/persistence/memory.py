"""
In-process stores with the same contract as the Mongo ones.

Used with ``STORE_BACKEND=memory`` for local runs without a database, and by
the test-suite. Records are kept in insertion order so sorting by
``submitted_at`` leaves ties in the order they were written.
"""

from __future__ import annotations

import copy
import threading
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId

from core.errors import DuplicateRecord
from domain.workflow import RecordKind
from services.persistence.store import SEARCH_FIELDS, UNIQUE_FIELDS
from services.persistence.timezones import zone


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class InMemoryRecordStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[RecordKind, list[dict[str, Any]]] = {k: [] for k in RecordKind}

    def create(self, kind: RecordKind, document: dict[str, Any]) -> str:
        with self._lock:
            unique = UNIQUE_FIELDS.get(kind)
            if unique and any(r.get(unique) == document.get(unique) for r in self._records[kind]):
                raise DuplicateRecord(f"{unique} already exists")
            record_id = str(ObjectId())
            self._records[kind].append({**copy.deepcopy(document), "id": record_id})
            return record_id

    def _find(self, kind: RecordKind, record_id: str) -> dict[str, Any] | None:
        return next((r for r in self._records[kind] if r["id"] == record_id), None)

    def get(self, kind: RecordKind, record_id: str) -> dict[str, Any] | None:
        with self._lock:
            found = self._find(kind, record_id)
            return copy.deepcopy(found) if found else None

    def list(
        self,
        kind: RecordKind,
        status: str | None = None,
        search: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        with self._lock:
            rows = list(self._records[kind])
        if status:
            rows = [r for r in rows if r.get("status") == status]
        if search:
            needle = search.lower()
            rows = [
                r
                for r in rows
                if any(needle in str(r.get(f) or "").lower() for f in SEARCH_FIELDS[kind])
            ]
        # stable sort keeps insertion order among equal timestamps
        rows = sorted(rows, key=lambda r: _as_utc(r["submitted_at"]), reverse=True)
        if limit is not None:
            rows = rows[:limit]
        return copy.deepcopy(rows)

    def update_status(
        self, kind: RecordKind, record_id: str, status: str, notes: str | None = None
    ) -> dict[str, Any] | None:
        with self._lock:
            found = self._find(kind, record_id)
            if found is None:
                return None
            found["status"] = status
            found["updated_at"] = datetime.now(timezone.utc)
            if notes:
                found["notes"] = notes
            return copy.deepcopy(found)

    def count_by_status(self, kind: RecordKind) -> dict[str, int]:
        counts: dict[str, int] = {}
        with self._lock:
            for r in self._records[kind]:
                counts[r["status"]] = counts.get(r["status"], 0) + 1
        return counts

    def count_by_month(
        self, kind: RecordKind, since: datetime, tz: str
    ) -> dict[tuple[int, int], int]:
        local = zone(tz)
        counts: dict[tuple[int, int], int] = {}
        with self._lock:
            for r in self._records[kind]:
                submitted = _as_utc(r["submitted_at"])
                if submitted < since:
                    continue
                at = submitted.astimezone(local)
                counts[(at.year, at.month)] = counts.get((at.year, at.month), 0) + 1
        return counts


class InMemoryAdminStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._admins: list[dict[str, Any]] = []

    def get_by_username(self, username: str) -> dict[str, Any] | None:
        with self._lock:
            found = next((a for a in self._admins if a["username"] == username), None)
            return copy.deepcopy(found) if found else None

    def get_by_id(self, admin_id: str) -> dict[str, Any] | None:
        with self._lock:
            found = next((a for a in self._admins if a["id"] == admin_id), None)
            return copy.deepcopy(found) if found else None

    def create(self, document: dict[str, Any]) -> str:
        with self._lock:
            if any(a["username"] == document.get("username") for a in self._admins):
                raise DuplicateRecord("Username already exists")
            admin_id = str(ObjectId())
            self._admins.append({**copy.deepcopy(document), "id": admin_id})
            return admin_id

    def update(self, admin_id: str, fields: dict[str, Any]) -> bool:
        with self._lock:
            found = next((a for a in self._admins if a["id"] == admin_id), None)
            if found is None:
                return False
            found.update(copy.deepcopy(fields))
            return True
