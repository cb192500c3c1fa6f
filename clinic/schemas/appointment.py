from __future__ import annotations

from datetime import date, datetime, time
from typing import Any

from pydantic import field_validator

from .base import CamelModel


class CreateAppointmentPayload(CamelModel):
    full_name: str | None = None
    email: str | None = None
    age: int | None = None
    gender: str | None = None
    phone: str | None = None
    address: str | None = None
    preferred_date: str | None = None
    preferred_time: str | None = None
    dentist_id: int | None = None
    procedure_id: int | None = None
    dentist: str | None = None
    procedure: str | None = None
    notes: str | None = None

    @field_validator(
        "full_name",
        "email",
        "gender",
        "phone",
        "address",
        "preferred_date",
        "preferred_time",
        "dentist",
        "procedure",
        mode="before",
    )
    @classmethod
    def _strip_blank(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("age", "dentist_id", "procedure_id", mode="before")
    @classmethod
    def _blank_number(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class CreateAppointmentResponse(CamelModel):
    id: int
    status: str


class SlotOut(CamelModel):
    time: str
    past: bool
    booked: bool
    available: bool


class SlotsResponse(CamelModel):
    date: str
    dentist_id: int | None = None
    slots: list[SlotOut]


class StatusUpdatePayload(CamelModel):
    status: str | None = None


class StatusUpdateResponse(CamelModel):
    id: int
    status: str


class AppointmentOut(CamelModel):
    id: int
    full_name: str
    email: str | None = None
    age: int | None = None
    gender: str | None = None
    phone: str | None = None
    address: str | None = None
    preferred_date: date
    preferred_time: time
    dentist_id: int
    procedure_id: int
    status: str
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
