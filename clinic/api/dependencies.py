from __future__ import annotations

from typing import Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from clinic.core.errors import UnauthorizedError
from clinic.services.appointments import AppointmentManager, Clock
from clinic.services.auth import decode_access_token
from clinic.services.db import get_db
from clinic.utils.time import utc_now

bearer_scheme = HTTPBearer(auto_error=False)


def get_clock() -> Clock:
    return utc_now


def get_appointment_manager(
    session: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> AppointmentManager:
    return AppointmentManager(session=session, clock=clock)


def require_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict[str, Any]:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError("Missing bearer token")
    return decode_access_token(credentials.credentials)
