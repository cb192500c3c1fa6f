from __future__ import annotations

from .base import CamelModel


class DashboardStats(CamelModel):
    total_doctors: int
    total_appointments: int
    pending: int
    confirmed: int
    completed: int
    declined: int


class StatsResponse(CamelModel):
    ok: bool = True
    stats: DashboardStats


class AdminAppointment(CamelModel):
    id: int
    patient_name: str
    service: str
    date: str
    time_start: str
    status: str
    doctor: str


class AdminAppointmentsResponse(CamelModel):
    ok: bool = True
    page: int
    page_size: int
    total: int
    items: list[AdminAppointment]
