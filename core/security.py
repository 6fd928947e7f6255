from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from core.config import settings
from core.errors import Unauthorized

ALGO = "HS256"
pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS
)


@dataclass(frozen=True)
class AdminClaims:
    id: str
    username: str
    role: str


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        # unknown or corrupt hash format
        return False


def create_access_token(claims: AdminClaims, minutes: int | None = None) -> str:
    now = int(time.time())
    ttl = minutes if minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MIN
    payload = {
        "sub": claims.id,
        "username": claims.username,
        "role": claims.role,
        "iat": now,
        "exp": now + ttl * 60,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGO)


def decode_token(tok: str) -> dict[str, Any]:
    return jwt.decode(
        tok, settings.SECRET_KEY, algorithms=[ALGO], options={"require_exp": True}
    )


def verify_token(tok: str) -> AdminClaims:
    """Fail closed: any decode problem or missing claim is Unauthorized."""
    try:
        payload = decode_token(tok)
    except JWTError as e:
        raise Unauthorized() from e
    sub, username, role = payload.get("sub"), payload.get("username"), payload.get("role")
    if not sub or not username or not role:
        raise Unauthorized()
    return AdminClaims(id=str(sub), username=str(username), role=str(role))
