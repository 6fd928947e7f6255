from __future__ import annotations

from typing import Any

from pydantic import EmailStr, Field

from domain.models import Admin, AdminRole, CamelModel, NonEmptyStr


class LoginIn(CamelModel):
    username: NonEmptyStr
    password: NonEmptyStr


class PasswordUpdateIn(CamelModel):
    new_password: str = Field(min_length=6)


class RegisterIn(CamelModel):
    username: NonEmptyStr
    email: EmailStr
    password: str = Field(min_length=6)
    role: AdminRole = AdminRole.ADMIN


def serialize_admin(profile: dict[str, Any]) -> dict[str, Any]:
    return Admin.model_validate(profile).model_dump(by_alias=True, mode="json")
