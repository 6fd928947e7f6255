from functools import lru_cache

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from core.config import Settings, settings
from core.errors import Unauthorized
from core.security import AdminClaims, verify_token
from services.persistence.memory import InMemoryAdminStore, InMemoryRecordStore
from services.persistence.mongo import MongoAdminStore, MongoRecordStore, get_database
from services.persistence.store import AdminStore, RecordStore

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_settings() -> Settings:
    """Provides application settings/config globally."""
    return settings


@lru_cache
def _memory_stores() -> tuple[InMemoryRecordStore, InMemoryAdminStore]:
    return InMemoryRecordStore(), InMemoryAdminStore()


def get_record_store(cfg: Settings = Depends(get_settings)) -> RecordStore:
    """Dependency for the record collections."""
    if cfg.STORE_BACKEND == "memory":
        return _memory_stores()[0]
    return MongoRecordStore(get_database())


def get_admin_store(cfg: Settings = Depends(get_settings)) -> AdminStore:
    """Dependency for the administrator collection."""
    if cfg.STORE_BACKEND == "memory":
        return _memory_stores()[1]
    return MongoAdminStore(get_database())


def get_current_admin(request: Request, token: str | None = Depends(oauth2_scheme)) -> AdminClaims:
    """
    Verify the bearer token on every request; no server-side session.
    The decoded claims are also left on ``request.state.admin``.
    """
    if not token:
        raise Unauthorized("Access token required")
    claims = verify_token(token)
    request.state.admin = claims
    return claims
