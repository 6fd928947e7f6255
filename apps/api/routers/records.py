from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from apps.api.deps import get_current_admin, get_record_store
from apps.api.schemas.records import StatusUpdate, serialize_record, serialize_records
from core.errors import NotFound
from domain.workflow import RecordKind
from services.intake.submissions import create_record
from services.persistence.store import RecordStore
from services.workflow.engine import transition

_SUBMITTED = {
    RecordKind.PENSION: "Pension application submitted successfully",
    RecordKind.FAMILY_PENSION: "Family pension application submitted successfully",
    RecordKind.CONTACT: "Contact message submitted successfully",
}


def build_router(kind: RecordKind, prefix: str) -> APIRouter:
    """Submit / fetch / list / status routes for one record kind."""
    router = APIRouter(prefix=prefix, tags=[kind.value])

    @router.post("/submit", status_code=status.HTTP_201_CREATED)
    def submit(
        payload: Any = Body(...),  # noqa: B008  (FastAPI pattern)
        store: RecordStore = Depends(get_record_store),
    ):
        record_id = create_record(store, kind, payload)
        return {"message": _SUBMITTED[kind], "id": record_id}

    @router.get("/all", dependencies=[Depends(get_current_admin)])
    def list_all(store: RecordStore = Depends(get_record_store)):
        return serialize_records(kind, store.list(kind))

    @router.get("/{record_id}")
    def get_one(record_id: str, store: RecordStore = Depends(get_record_store)):
        doc = store.get(kind, record_id)
        if doc is None:
            raise NotFound(f"{kind.label} record not found")
        return serialize_record(kind, doc)

    @router.patch("/{record_id}/status", dependencies=[Depends(get_current_admin)])
    def update_status(
        record_id: str,
        body: StatusUpdate,
        store: RecordStore = Depends(get_record_store),
    ):
        updated = transition(store, kind, record_id, body.status, notes=body.notes)
        return {"message": "Status updated successfully", "record": serialize_record(kind, updated)}

    return router


pension_router = build_router(RecordKind.PENSION, "/api/pension")
family_pension_router = build_router(RecordKind.FAMILY_PENSION, "/api/family-pension")
contact_router = build_router(RecordKind.CONTACT, "/api/contact")
