from __future__ import annotations

import logging
from typing import Any

from core.errors import NotFound
from domain.workflow import RecordKind, check_transition
from services.persistence.store import RecordStore

logger = logging.getLogger(__name__)


def transition(
    store: RecordStore,
    kind: RecordKind,
    record_id: str,
    status: Any,
    notes: str | None = None,
) -> dict[str, Any]:
    """
    Move a record to ``status``. The target is checked before the store is
    touched, so an illegal value never changes anything.
    """
    target = check_transition(kind, status)
    updated = store.update_status(kind, record_id, target.value, notes=notes)
    if updated is None:
        raise NotFound(f"{kind.label} record not found")
    logger.info("%s %s -> %s", kind.value, record_id, target.value)
    return updated
