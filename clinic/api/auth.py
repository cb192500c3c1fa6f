from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from clinic.api.dependencies import bearer_scheme, require_user
from clinic.core.config import get_settings
from clinic.core.errors import ForbiddenError
from clinic.models import UserRole
from clinic.schemas.auth import (
    ChangePasswordPayload,
    LoginPayload,
    OkResponse,
    ResetAdminPayload,
    TokenResponse,
    UserDisplay,
)
from clinic.services.auth import AuthService, create_access_token
from clinic.services.db import get_db

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginPayload, session: Session = Depends(get_db)) -> TokenResponse:
    user = AuthService(session).authenticate(email=payload.email, password=payload.password)
    return TokenResponse(
        access_token=create_access_token(user),
        user=UserDisplay(id=user.id, email=user.email, role=user.role),
    )


@router.get("/me", response_model=UserDisplay)
def me(claims: dict[str, Any] = Depends(require_user)) -> UserDisplay:
    return UserDisplay(id=int(claims["sub"]), email=claims["email"], role=claims["role"])


@router.post("/change-password", response_model=OkResponse)
def change_password(payload: ChangePasswordPayload, session: Session = Depends(get_db)) -> OkResponse:
    AuthService(session).change_password(payload)
    return OkResponse(message="Password updated.")


@router.post("/reset-admin", response_model=UserDisplay)
def reset_admin(
    payload: ResetAdminPayload | None = None,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_db),
) -> UserDisplay:
    """Bootstrap the first admin; once one exists only an admin may reset it."""
    if get_settings().env == "production":
        raise ForbiddenError("Admin reset is disabled in production")
    service = AuthService(session)
    if service.admin_exists():
        claims = require_user(credentials)
        if claims.get("role") != UserRole.ADMIN.value:
            raise ForbiddenError("Only an admin may reset the admin account")
    user = service.reset_admin(payload or ResetAdminPayload())
    return UserDisplay(id=user.id, email=user.email, role=user.role)
