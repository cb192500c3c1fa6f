from __future__ import annotations

from .base import CamelModel


class LoginPayload(CamelModel):
    email: str
    password: str


class UserDisplay(CamelModel):
    id: int
    email: str
    role: str


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserDisplay


class ChangePasswordPayload(CamelModel):
    email: str | None = None
    old_password: str | None = None
    new_password: str | None = None


class ResetAdminPayload(CamelModel):
    email: str | None = None
    password: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class OkResponse(CamelModel):
    ok: bool = True
    message: str | None = None
