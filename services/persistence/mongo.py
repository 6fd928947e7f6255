from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, MongoClient, ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from core.config import settings
from core.errors import DuplicateRecord
from domain.workflow import RecordKind
from services.persistence.store import (
    ADMINS_COLLECTION,
    COLLECTIONS,
    SEARCH_FIELDS,
    UNIQUE_FIELDS,
)

logger = logging.getLogger(__name__)

# newest first; ObjectIds grow with insertion so ties keep write order
NEWEST_FIRST = [("submitted_at", DESCENDING), ("_id", ASCENDING)]


@lru_cache
def get_mongo_client() -> MongoClient:
    return MongoClient(settings.MONGO_URL, serverSelectionTimeoutMS=2000, tz_aware=True)


def get_database() -> Database:
    return get_mongo_client()[settings.MONGO_DB]


def ensure_indexes(db: Database) -> None:
    for kind, name in COLLECTIONS.items():
        col = db[name]
        col.create_index([("submitted_at", DESCENDING)])
        col.create_index([("status", ASCENDING)])
        if kind in UNIQUE_FIELDS:
            col.create_index([(UNIQUE_FIELDS[kind], ASCENDING)], unique=True)
    db[ADMINS_COLLECTION].create_index([("username", ASCENDING)], unique=True)
    logger.info("mongo indexes ensured on %s", db.name)


def _object_id(value: str) -> ObjectId | None:
    return ObjectId(value) if ObjectId.is_valid(value) else None


def _from_mongo(doc: dict[str, Any] | None) -> dict[str, Any] | None:
    if doc is None:
        return None
    out = dict(doc)
    out["id"] = str(out.pop("_id"))
    return out


def month_pipeline(since: datetime, tz: str) -> list[dict[str, Any]]:
    """Group records submitted on or after ``since`` by calendar month in ``tz``."""
    return [
        {"$match": {"submitted_at": {"$gte": since}}},
        {
            "$group": {
                "_id": {
                    "year": {"$year": {"date": "$submitted_at", "timezone": tz}},
                    "month": {"$month": {"date": "$submitted_at", "timezone": tz}},
                },
                "count": {"$sum": 1},
            }
        },
    ]


class MongoRecordStore:
    def __init__(self, db: Database) -> None:
        self.db = db

    def _col(self, kind: RecordKind):
        return self.db[COLLECTIONS[kind]]

    def create(self, kind: RecordKind, document: dict[str, Any]) -> str:
        try:
            res = self._col(kind).insert_one(dict(document))
        except DuplicateKeyError as e:
            raise DuplicateRecord(f"{UNIQUE_FIELDS.get(kind, 'record')} already exists") from e
        return str(res.inserted_id)

    def get(self, kind: RecordKind, record_id: str) -> dict[str, Any] | None:
        oid = _object_id(record_id)
        if oid is None:
            return None
        return _from_mongo(self._col(kind).find_one({"_id": oid}))

    def list(
        self,
        kind: RecordKind,
        status: str | None = None,
        search: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        query: dict[str, Any] = {}
        if status:
            query["status"] = status
        if search:
            pattern = {"$regex": re.escape(search), "$options": "i"}
            query["$or"] = [{f: pattern} for f in SEARCH_FIELDS[kind]]
        cursor = self._col(kind).find(query).sort(NEWEST_FIRST)
        if limit is not None:
            cursor = cursor.limit(limit)
        return [_from_mongo(d) for d in cursor]

    def update_status(
        self, kind: RecordKind, record_id: str, status: str, notes: str | None = None
    ) -> dict[str, Any] | None:
        oid = _object_id(record_id)
        if oid is None:
            return None
        changes: dict[str, Any] = {"status": status, "updated_at": datetime.now(timezone.utc)}
        if notes:
            changes["notes"] = notes
        doc = self._col(kind).find_one_and_update(
            {"_id": oid}, {"$set": changes}, return_document=ReturnDocument.AFTER
        )
        return _from_mongo(doc)

    def count_by_status(self, kind: RecordKind) -> dict[str, int]:
        pipeline = [{"$group": {"_id": "$status", "count": {"$sum": 1}}}]
        return {r["_id"]: r["count"] for r in self._col(kind).aggregate(pipeline)}

    def count_by_month(
        self, kind: RecordKind, since: datetime, tz: str
    ) -> dict[tuple[int, int], int]:
        pipeline = month_pipeline(since, tz)
        return {
            (r["_id"]["year"], r["_id"]["month"]): r["count"]
            for r in self._col(kind).aggregate(pipeline)
        }


class MongoAdminStore:
    def __init__(self, db: Database) -> None:
        self.col = db[ADMINS_COLLECTION]

    def get_by_username(self, username: str) -> dict[str, Any] | None:
        return _from_mongo(self.col.find_one({"username": username}))

    def get_by_id(self, admin_id: str) -> dict[str, Any] | None:
        oid = _object_id(admin_id)
        if oid is None:
            return None
        return _from_mongo(self.col.find_one({"_id": oid}))

    def create(self, document: dict[str, Any]) -> str:
        try:
            res = self.col.insert_one(dict(document))
        except DuplicateKeyError as e:
            raise DuplicateRecord("Username already exists") from e
        return str(res.inserted_id)

    def update(self, admin_id: str, fields: dict[str, Any]) -> bool:
        oid = _object_id(admin_id)
        if oid is None:
            return False
        return self.col.update_one({"_id": oid}, {"$set": fields}).matched_count == 1
