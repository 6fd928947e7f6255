from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from core.errors import InvalidCredentials, NotFound, ValidationFailed
from core.security import AdminClaims, create_access_token, hash_password, verify_password
from domain.models import AdminRole
from services.persistence.store import AdminStore

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def public_profile(admin: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in admin.items() if k != "password_hash"}


def _check_password_length(password: str, field: str) -> None:
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationFailed(
            [{"field": field, "message": f"Password must be at least {MIN_PASSWORD_LENGTH} characters"}]
        )


def login(admins: AdminStore, username: str, password: str) -> tuple[str, dict[str, Any]]:
    """Return (token, profile). Unknown user and wrong password look the same to the caller."""
    admin = admins.get_by_username(username)
    if admin is None or not verify_password(password, admin.get("password_hash", "")):
        logger.warning("failed admin login for username=%r", username)
        raise InvalidCredentials()
    admins.update(admin["id"], {"last_login": datetime.now(timezone.utc)})
    claims = AdminClaims(id=admin["id"], username=admin["username"], role=admin["role"])
    logger.info("admin %s logged in", admin["username"])
    return create_access_token(claims), public_profile(admin)


def get_profile(admins: AdminStore, admin_id: str) -> dict[str, Any]:
    admin = admins.get_by_id(admin_id)
    if admin is None:
        raise NotFound("Admin not found")
    return public_profile(admin)


def update_password(admins: AdminStore, admin_id: str, new_password: str) -> None:
    _check_password_length(new_password, "newPassword")
    if not admins.update(admin_id, {"password_hash": hash_password(new_password)}):
        raise NotFound("Admin not found")
    logger.info("password updated for admin id=%s", admin_id)


def register_admin(
    admins: AdminStore,
    username: str,
    email: str,
    password: str,
    role: AdminRole = AdminRole.ADMIN,
) -> dict[str, Any]:
    _check_password_length(password, "password")
    document = {
        "username": username,
        "email": email,
        "password_hash": hash_password(password),
        "role": AdminRole(role).value,
        "created_at": datetime.now(timezone.utc),
        "last_login": None,
    }
    admin_id = admins.create(document)
    logger.info("admin %s registered", username)
    return public_profile({**document, "id": admin_id})
