from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt
from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from clinic.core.config import get_settings
from clinic.core.errors import (
    InvalidCredentialsError,
    MissingFieldsError,
    OldPasswordIncorrectError,
    UnauthorizedError,
    UserNotFoundError,
)
from clinic.models import User, UserRole
from clinic.schemas.auth import ChangePasswordPayload, ResetAdminPayload


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


def create_access_token(user: User, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    claims = {"sub": str(user.id), "email": user.email, "role": user.role, "exp": expire}
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError as exc:
        logger.warning("Rejected bearer token: {error}", error=exc)
        raise UnauthorizedError() from exc


class AuthService:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_user(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email.strip()).limit(1)
        return self.session.scalars(stmt).first()

    def authenticate(self, *, email: str, password: str) -> User:
        user = self.find_user(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Failed login for {email}", email=email)
            raise InvalidCredentialsError("Invalid email or password")
        logger.info("User id={user_id} logged in", user_id=user.id)
        return user

    def change_password(self, payload: ChangePasswordPayload) -> None:
        missing = [
            field
            for field, value in (
                ("email", payload.email),
                ("oldPassword", payload.old_password),
                ("newPassword", payload.new_password),
            )
            if not value
        ]
        if missing:
            raise MissingFieldsError(missing)

        user = self.find_user(payload.email)
        if user is None:
            raise UserNotFoundError()
        if not verify_password(payload.old_password, user.password_hash):
            raise OldPasswordIncorrectError("Old password is incorrect.")

        user.password_hash = hash_password(payload.new_password)
        self.session.flush()
        logger.info("Password changed for user id={user_id}", user_id=user.id)

    def admin_exists(self) -> bool:
        stmt = select(User.id).where(User.role == UserRole.ADMIN.value).limit(1)
        return self.session.scalars(stmt).first() is not None

    def reset_admin(self, payload: ResetAdminPayload) -> User:
        """Create the admin account, or reset it to the given credentials."""
        settings = get_settings()
        email = payload.email or settings.seed_admin_email
        password = payload.password or settings.seed_admin_password

        user = self.find_user(email)
        if user is None:
            user = User(email=email, password_hash="")
            self.session.add(user)
        user.first_name = payload.first_name or "Admin"
        user.last_name = payload.last_name or "Clinic"
        user.password_hash = hash_password(password)
        user.role = UserRole.ADMIN.value
        self.session.flush()
        logger.info("Admin account {email} reset", email=email)
        return user
