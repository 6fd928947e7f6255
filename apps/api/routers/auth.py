from __future__ import annotations

from fastapi import APIRouter, Depends, status

from apps.api.deps import get_admin_store, get_current_admin
from apps.api.schemas.auth import LoginIn, PasswordUpdateIn, RegisterIn, serialize_admin
from core.security import AdminClaims
from services.auth import admins as admin_service
from services.persistence.store import AdminStore

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login")
def login(payload: LoginIn, admins: AdminStore = Depends(get_admin_store)):
    token, profile = admin_service.login(admins, payload.username, payload.password)
    return {"message": "Login successful", "token": token, "admin": serialize_admin(profile)}


@router.get("/me")
def me(
    claims: AdminClaims = Depends(get_current_admin),
    admins: AdminStore = Depends(get_admin_store),
):
    return serialize_admin(admin_service.get_profile(admins, claims.id))


@router.post("/update-password")
def update_password(
    payload: PasswordUpdateIn,
    claims: AdminClaims = Depends(get_current_admin),
    admins: AdminStore = Depends(get_admin_store),
):
    admin_service.update_password(admins, claims.id, payload.new_password)
    return {"message": "Password updated successfully"}


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_admin)],
)
def register(payload: RegisterIn, admins: AdminStore = Depends(get_admin_store)):
    profile = admin_service.register_admin(
        admins, payload.username, payload.email, payload.password, role=payload.role
    )
    return {"message": "Admin registered successfully", "admin": serialize_admin(profile)}
