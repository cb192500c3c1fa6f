from __future__ import annotations

from typing import Any

from fastapi import status


class ClinicError(ValueError):
    """Base for input and domain errors that map to a stable error code."""

    code: str = "BAD_REQUEST"
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str | None = None, **extra: Any) -> None:
        super().__init__(message or self.code)
        self.extra = extra

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.code, **self.extra}


class MissingFieldsError(ClinicError):
    code = "MISSING_FIELDS"

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Missing fields: {', '.join(missing)}", missing=missing)
        self.missing = missing


class MissingDateError(ClinicError):
    code = "MISSING_DATE"


class InvalidDateError(ClinicError):
    code = "INVALID_DATE"


class InvalidDateTimeError(ClinicError):
    code = "INVALID_DATETIME"


class OutsideBlocksError(ClinicError):
    code = "OUTSIDE_BLOCKS"


class PastDateTimeError(ClinicError):
    code = "PAST_DATETIME"


class InvalidStatusError(ClinicError):
    code = "INVALID_STATUS"


class TimeTakenError(ClinicError):
    code = "TIME_TAKEN"
    status_code = status.HTTP_409_CONFLICT


class DailyLimitReachedError(ClinicError):
    code = "DAILY_LIMIT_REACHED"
    status_code = status.HTTP_409_CONFLICT


class InvalidTransitionError(ClinicError):
    code = "INVALID_TRANSITION"
    status_code = status.HTTP_409_CONFLICT


class NotFoundError(ClinicError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND


class AppointmentNotFoundError(NotFoundError):
    code = "APPOINTMENT_NOT_FOUND"


class UserNotFoundError(NotFoundError):
    code = "USER_NOT_FOUND"


class AppointmentNotCompletedError(ClinicError):
    code = "APPOINTMENT_NOT_COMPLETED"


class AlreadyReviewedError(ClinicError):
    code = "ALREADY_REVIEWED"
    status_code = status.HTTP_409_CONFLICT


class RequiredFieldError(ClinicError):
    """A single required field is absent; the code names the field rule."""

    def __init__(self, code: str) -> None:
        super().__init__(code)
        self.code = code


class InvalidCredentialsError(ClinicError):
    code = "INVALID_CREDENTIALS"
    status_code = status.HTTP_401_UNAUTHORIZED


class OldPasswordIncorrectError(ClinicError):
    code = "OLD_PASSWORD_INCORRECT"


class UnauthorizedError(ClinicError):
    code = "UNAUTH"
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(ClinicError):
    code = "FORBIDDEN"
    status_code = status.HTTP_403_FORBIDDEN
