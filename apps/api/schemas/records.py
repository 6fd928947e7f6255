from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel

from domain.models import (
    CamelModel,
    ContactMessage,
    FamilyPensionApplication,
    PensionApplication,
)
from domain.value_objects import MonthBucket
from domain.workflow import RecordKind

RECORD_MODELS: dict[RecordKind, type[BaseModel]] = {
    RecordKind.PENSION: PensionApplication,
    RecordKind.FAMILY_PENSION: FamilyPensionApplication,
    RecordKind.CONTACT: ContactMessage,
}

# keys used in dashboard/chart payloads
KIND_KEYS: dict[RecordKind, str] = {
    RecordKind.PENSION: "pension",
    RecordKind.FAMILY_PENSION: "familyPension",
    RecordKind.CONTACT: "contact",
}


class StatusUpdate(CamelModel):
    status: str
    notes: Optional[str] = None


def serialize_record(kind: RecordKind, doc: dict[str, Any]) -> dict[str, Any]:
    return RECORD_MODELS[kind].model_validate(doc).model_dump(by_alias=True, mode="json")


def serialize_records(kind: RecordKind, docs: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [serialize_record(kind, d) for d in docs]


def serialize_bucket(bucket: MonthBucket) -> dict[str, Any]:
    return {"year": bucket.year, "month": bucket.month, "label": bucket.label, "count": bucket.count}
