from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .base import CamelModel


class DentistOut(BaseModel):
    """Dentist record as the doctors pages consume it (snake_case keys)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email: str | None = None
    age: int | None = None
    gender: str | None = None
    address: str | None = None
    phone: str | None = None
    position: str | None = None
    work_time: str
    status: str
    patients_today: int = 0
    created_at: datetime | None = None


class DentistListResponse(BaseModel):
    ok: bool = True
    doctors: list[DentistOut]


class DentistResponse(BaseModel):
    ok: bool = True
    doctor: DentistOut


class CreateDentistPayload(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    age: int | None = None
    gender: str | None = None
    address: str | None = None
    phone: str | None = None
    position: str | None = None
    work_time: str | None = Field(default=None, alias="work_time")
    status: str | None = None
    patients_today: int | None = Field(default=None, alias="patients_today")


class CreateDentistResponse(BaseModel):
    ok: bool = True
    id: int
    message: str = "Doctor created"


class DentistStatusPayload(BaseModel):
    status: str | None = None


class DentistAppointment(BaseModel):
    id: int
    patient_name: str
    service: str
    date: str
    time_start: str
    status: str
    review: str | None = None


class DentistAppointmentsResponse(BaseModel):
    ok: bool = True
    items: list[DentistAppointment]


class ReferenceItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
