from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from clinic.api.dependencies import get_appointment_manager
from clinic.schemas.appointment import (
    AppointmentOut,
    CreateAppointmentPayload,
    CreateAppointmentResponse,
    SlotsResponse,
    StatusUpdatePayload,
    StatusUpdateResponse,
)
from clinic.schemas.dentist import ReferenceItem
from clinic.services.appointments import AppointmentManager
from clinic.services.catalog import CatalogService
from clinic.services.db import get_db
from clinic.services.dentists import DentistService

router = APIRouter(prefix="/api", tags=["appointments"])


@router.get("/dentists", response_model=list[ReferenceItem])
def list_dentist_names(session: Session = Depends(get_db)) -> list[ReferenceItem]:
    return [ReferenceItem(id=dentist_id, name=name) for dentist_id, name in DentistService(session).reference_list()]


@router.get("/procedures", response_model=list[ReferenceItem])
def list_procedures(session: Session = Depends(get_db)) -> list[ReferenceItem]:
    return [ReferenceItem.model_validate(procedure) for procedure in CatalogService(session).list_procedures()]


@router.get("/appointments/slots", response_model=SlotsResponse)
def get_slots(
    date: str | None = Query(default=None),
    dentist_id: int | None = Query(default=None, alias="dentistId"),
    manager: AppointmentManager = Depends(get_appointment_manager),
) -> SlotsResponse:
    return manager.get_slots(date_value=date, dentist_id=dentist_id)


@router.get("/appointments", response_model=list[AppointmentOut])
def list_appointments(
    status_filter: str | None = Query(default=None, alias="status"),
    manager: AppointmentManager = Depends(get_appointment_manager),
) -> list[AppointmentOut]:
    return [AppointmentOut.model_validate(row) for row in manager.list_appointments(status=status_filter)]


@router.post("/appointments", response_model=CreateAppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(
    payload: CreateAppointmentPayload,
    manager: AppointmentManager = Depends(get_appointment_manager),
) -> CreateAppointmentResponse:
    return manager.create(payload)


@router.patch("/appointments/{appointment_id}/status", response_model=StatusUpdateResponse)
def update_appointment_status(
    appointment_id: int,
    payload: StatusUpdatePayload,
    manager: AppointmentManager = Depends(get_appointment_manager),
) -> StatusUpdateResponse:
    return manager.update_status(appointment_id=appointment_id, status=payload.status)
