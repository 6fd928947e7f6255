"""
Counts, recent listings and month-bucketed series over record collections.

Everything here is read-only. Full scans go through the store's
``count_by_status`` / ``count_by_month`` so the store decides how they run.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from core.config import settings
from domain.value_objects import MonthBucket
from domain.workflow import RecordKind, status_values
from services.observability.metrics import timing_metric
from services.persistence.store import RecordStore
from services.persistence.timezones import zone

RECENT_LIMIT = 5


def summary_counts(store: RecordStore, kind: RecordKind) -> dict[str, int]:
    raw = store.count_by_status(kind)
    counts = {s: int(raw.get(s, 0)) for s in status_values(kind)}
    return {"total": sum(raw.values()), **counts}


def recent(store: RecordStore, kind: RecordKind, n: int = RECENT_LIMIT) -> list[dict[str, Any]]:
    if n <= 0:
        return []
    return store.list(kind, limit=n)[:n]


def status_distribution(store: RecordStore) -> dict[RecordKind, dict[str, int]]:
    out: dict[RecordKind, dict[str, int]] = {}
    for kind in RecordKind:
        raw = store.count_by_status(kind)
        out[kind] = {s: int(raw.get(s, 0)) for s in status_values(kind)}
    return out


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_window(now: datetime, months: int) -> list[tuple[int, int]]:
    """The ``months`` consecutive (year, month) pairs ending at ``now``'s month."""
    return [_shift_month(now.year, now.month, -offset) for offset in range(months - 1, -1, -1)]


def monthly_series(
    store: RecordStore,
    kind: RecordKind,
    months: int = 6,
    now: datetime | None = None,
    tz: str | None = None,
) -> list[MonthBucket]:
    if months < 1:
        raise ValueError("months must be >= 1")
    tz_name = tz or settings.REPORT_TIMEZONE
    local = zone(tz_name)
    current = (now or datetime.now(timezone.utc)).astimezone(local)
    window = month_window(current, months)
    first_year, first_month = window[0]
    since = datetime(first_year, first_month, 1, tzinfo=local).astimezone(timezone.utc)
    counts = store.count_by_month(kind, since, tz_name)
    return [MonthBucket(year=y, month=m, count=int(counts.get((y, m), 0))) for y, m in window]


def dashboard(store: RecordStore) -> dict[str, Any]:
    with timing_metric("admin.dashboard"):
        return {
            "statistics": {kind: summary_counts(store, kind) for kind in RecordKind},
            "recent": {kind: recent(store, kind) for kind in RecordKind},
        }
