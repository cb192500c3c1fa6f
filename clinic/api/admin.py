from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from clinic.api.dependencies import require_user
from clinic.schemas.admin import AdminAppointmentsResponse, StatsResponse
from clinic.schemas.auth import OkResponse
from clinic.schemas.patient import PatientAppointmentsResponse, PatientDetailResponse, PatientListResponse
from clinic.services.admin import DEFAULT_PAGE_SIZE, AdminService
from clinic.services.db import get_db
from clinic.services.patients import PatientService

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_user)])


@router.get("/stats", response_model=StatsResponse)
def dashboard_stats(session: Session = Depends(get_db)) -> StatsResponse:
    return StatsResponse(stats=AdminService(session).stats())


@router.get("/appointments", response_model=AdminAppointmentsResponse)
def admin_appointments(
    scope: str = Query(default="all"),
    page: int = Query(default=1),
    page_size: int = Query(default=DEFAULT_PAGE_SIZE, alias="pageSize"),
    session: Session = Depends(get_db),
) -> AdminAppointmentsResponse:
    return AdminService(session).appointments(scope=scope, page=page, page_size=page_size)


@router.get("/patients", response_model=PatientListResponse)
def list_patients(
    page: int = Query(default=1),
    page_size: int = Query(default=50, alias="pageSize"),
    search: str | None = Query(default=None),
    session: Session = Depends(get_db),
) -> PatientListResponse:
    return PatientService(session).list_patients(page=page, page_size=page_size, search=search)


@router.get("/patients/{anchor_id}", response_model=PatientDetailResponse)
def get_patient(anchor_id: int, session: Session = Depends(get_db)) -> PatientDetailResponse:
    return PatientDetailResponse(patient=PatientService(session).get_patient(anchor_id))


@router.get("/patients/{anchor_id}/appointments", response_model=PatientAppointmentsResponse)
def patient_appointments(anchor_id: int, session: Session = Depends(get_db)) -> PatientAppointmentsResponse:
    return PatientAppointmentsResponse(items=PatientService(session).patient_appointments(anchor_id))


@router.delete("/patients/{anchor_id}", response_model=OkResponse)
def delete_patient(anchor_id: int, session: Session = Depends(get_db)) -> OkResponse:
    PatientService(session).delete_patient(anchor_id)
    return OkResponse()
