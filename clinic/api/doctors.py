from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from clinic.schemas.auth import OkResponse
from clinic.schemas.dentist import (
    CreateDentistPayload,
    CreateDentistResponse,
    DentistAppointmentsResponse,
    DentistListResponse,
    DentistOut,
    DentistResponse,
    DentistStatusPayload,
)
from clinic.services.db import get_db
from clinic.services.dentists import DentistService

router = APIRouter(prefix="/api/doctors", tags=["doctors"])


@router.get("", response_model=DentistListResponse)
def list_doctors(session: Session = Depends(get_db)) -> DentistListResponse:
    dentists = DentistService(session).list_active()
    return DentistListResponse(doctors=[DentistOut.model_validate(dentist) for dentist in dentists])


@router.get("/{dentist_id}", response_model=DentistResponse)
def get_doctor(dentist_id: int, session: Session = Depends(get_db)) -> DentistResponse:
    return DentistResponse(doctor=DentistOut.model_validate(DentistService(session).get_active(dentist_id)))


@router.get("/{dentist_id}/appointments", response_model=DentistAppointmentsResponse)
def doctor_appointments(
    dentist_id: int,
    scope: str = Query(default="active"),
    session: Session = Depends(get_db),
) -> DentistAppointmentsResponse:
    return DentistAppointmentsResponse(items=DentistService(session).appointments(dentist_id, scope))


@router.post("", response_model=CreateDentistResponse, status_code=status.HTTP_201_CREATED)
def create_doctor(payload: CreateDentistPayload, session: Session = Depends(get_db)) -> CreateDentistResponse:
    dentist = DentistService(session).create(payload)
    return CreateDentistResponse(id=dentist.id)


@router.patch("/{dentist_id}/status", response_model=OkResponse)
def update_doctor_status(
    dentist_id: int,
    payload: DentistStatusPayload,
    session: Session = Depends(get_db),
) -> OkResponse:
    DentistService(session).set_work_status(dentist_id, payload.status)
    return OkResponse()


@router.delete("/{dentist_id}", response_model=OkResponse)
def delete_doctor(dentist_id: int, session: Session = Depends(get_db)) -> OkResponse:
    DentistService(session).deactivate(dentist_id)
    return OkResponse()
