from __future__ import annotations

from datetime import date

from .base import CamelModel


class PatientSummary(CamelModel):
    id: int
    name: str
    age: int | None = None
    gender: str | None = None
    email: str | None = None
    phone: str | None = None
    last_visit: date | None = None


class PatientListResponse(CamelModel):
    ok: bool = True
    page: int
    page_size: int
    total: int
    items: list[PatientSummary]


class PatientDetail(CamelModel):
    id: int
    name: str
    email: str | None = None
    phone: str | None = None
    gender: str | None = None
    age: int | None = None
    address: str = ""
    last_visit: date | None = None


class PatientDetailResponse(CamelModel):
    ok: bool = True
    patient: PatientDetail


class PatientAppointment(CamelModel):
    id: int
    procedure: str
    date: str
    time: str
    dentist: str
    status: str


class PatientAppointmentsResponse(CamelModel):
    ok: bool = True
    items: list[PatientAppointment]
