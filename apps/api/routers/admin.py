from __future__ import annotations

from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, Response

from apps.api.deps import get_current_admin, get_record_store, get_settings
from apps.api.schemas.records import KIND_KEYS, serialize_bucket, serialize_records
from core.config import Settings
from domain.workflow import RecordKind, check_transition
from services.persistence.store import RecordStore
from services.reporting import aggregation, export

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(get_current_admin)])


@router.get("/dashboard")
def dashboard(store: RecordStore = Depends(get_record_store)):
    data = aggregation.dashboard(store)
    return {
        "statistics": {KIND_KEYS[k]: v for k, v in data["statistics"].items()},
        "recent": {KIND_KEYS[k]: serialize_records(k, v) for k, v in data["recent"].items()},
    }


@router.get("/charts/status-distribution")
def status_distribution(store: RecordStore = Depends(get_record_store)):
    return {KIND_KEYS[k]: v for k, v in aggregation.status_distribution(store).items()}


@router.get("/charts/applications-over-time")
def applications_over_time(
    months: int = Query(6, ge=1, le=36),
    store: RecordStore = Depends(get_record_store),
    cfg: Settings = Depends(get_settings),
):
    def series(kind: RecordKind):
        buckets = aggregation.monthly_series(store, kind, months=months, tz=cfg.REPORT_TIMEZONE)
        return [serialize_bucket(b) for b in buckets]

    return {
        "pensionApplications": series(RecordKind.PENSION),
        "familyPensionApplications": series(RecordKind.FAMILY_PENSION),
    }


def _list(kind: RecordKind, store: RecordStore, status: Optional[str], search: Optional[str]):
    if status:
        check_transition(kind, status)
    return serialize_records(kind, store.list(kind, status=status, search=search or None))


@router.get("/applications/pension")
def pension_applications(
    status: Optional[str] = None,
    search: Optional[str] = None,
    store: RecordStore = Depends(get_record_store),
):
    return _list(RecordKind.PENSION, store, status, search)


@router.get("/applications/family-pension")
def family_pension_applications(
    status: Optional[str] = None,
    search: Optional[str] = None,
    store: RecordStore = Depends(get_record_store),
):
    return _list(RecordKind.FAMILY_PENSION, store, status, search)


@router.get("/applications/contact")
def contact_messages(
    status: Optional[str] = None,
    search: Optional[str] = None,
    store: RecordStore = Depends(get_record_store),
):
    return _list(RecordKind.CONTACT, store, status, search)


_MEDIA_TYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


@router.get("/export")
def export_data(
    format: Literal["csv", "xlsx"] = "csv",
    store: RecordStore = Depends(get_record_store),
):
    rows = export.export_rows(store)
    body = export.to_xlsx_bytes(rows) if format == "xlsx" else export.to_csv_bytes(rows)
    filename = f"pension-data-{date.today().isoformat()}.{format}"
    return Response(
        content=body,
        media_type=_MEDIA_TYPES[format],
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
