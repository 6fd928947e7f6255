from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from domain.workflow import RecordKind, initial_status
from services.intake.validation import validate_submission
from services.persistence.store import RecordStore, to_document

logger = logging.getLogger(__name__)


def create_record(store: RecordStore, kind: RecordKind, payload: Any) -> str:
    """Validate a public submission and persist it with the kind's initial status."""
    model = validate_submission(kind, payload)
    document = to_document(model.model_dump())
    document["status"] = initial_status(kind).value
    document["submitted_at"] = datetime.now(timezone.utc)
    record_id = store.create(kind, document)
    logger.info("%s submission stored id=%s", kind.value, record_id)
    return record_id
