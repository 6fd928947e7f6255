from __future__ import annotations

import io
import logging
from datetime import timezone

import pandas as pd

from domain.value_objects import ExportRow
from domain.workflow import RecordKind
from services.observability.metrics import timing_metric
from services.persistence.store import RecordStore

logger = logging.getLogger(__name__)

COLUMNS = ["Application Type", "Name", "Employee ID", "Status", "Submitted Date"]

_NAME_FIELD = {
    RecordKind.PENSION: "applicant_name",
    RecordKind.FAMILY_PENSION: "applicant_name",
    RecordKind.CONTACT: "name",
}
_ID_FIELD = {
    RecordKind.PENSION: "employee_id",
    RecordKind.FAMILY_PENSION: "deceased_employee_id",
}


def export_rows(store: RecordStore) -> list[ExportRow]:
    """Applications first, then contacts; each kind newest first."""
    rows: list[ExportRow] = []
    with timing_metric("admin.export"):
        for kind in (RecordKind.PENSION, RecordKind.FAMILY_PENSION, RecordKind.CONTACT):
            for rec in store.list(kind):
                id_field = _ID_FIELD.get(kind)
                submitted = rec["submitted_at"]
                if submitted.tzinfo is not None:
                    submitted = submitted.astimezone(timezone.utc)
                rows.append(
                    ExportRow(
                        kind=kind.label,
                        name=str(rec.get(_NAME_FIELD[kind]) or ""),
                        identifier=str(rec.get(id_field) or "") if id_field else "N/A",
                        status=str(rec.get("status") or ""),
                        submitted_date=submitted.date(),
                    )
                )
    logger.info("export built with %d rows", len(rows))
    return rows


def to_frame(rows: list[ExportRow]) -> pd.DataFrame:
    return pd.DataFrame(
        [(r.kind, r.name, r.identifier, r.status, r.submitted_date.isoformat()) for r in rows],
        columns=COLUMNS,
    )


def to_csv_bytes(rows: list[ExportRow]) -> bytes:
    return to_frame(rows).to_csv(index=False, lineterminator="\n").encode("utf-8")


def to_xlsx_bytes(rows: list[ExportRow]) -> bytes:
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        to_frame(rows).to_excel(writer, index=False, sheet_name="Records")
    return buf.getvalue()
