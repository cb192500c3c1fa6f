from __future__ import annotations

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from clinic.core.errors import NotFoundError, RequiredFieldError
from clinic.models import ACTIVE_STATUSES, TERMINAL_STATUSES, Appointment, Dentist, Procedure, Review
from clinic.models.dentist import DEFAULT_WORK_STATUS, DEFAULT_WORK_TIME
from clinic.schemas.dentist import CreateDentistPayload, DentistAppointment

APPOINTMENT_SCOPES: dict[str, tuple[str, ...]] = {
    "active": ACTIVE_STATUSES,
    "history": TERMINAL_STATUSES,
}


class DentistService:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_active(self) -> list[Dentist]:
        stmt = select(Dentist).where(Dentist.is_active.is_(True)).order_by(Dentist.created_at.desc(), Dentist.id.desc())
        return list(self.session.scalars(stmt))

    def reference_list(self) -> list[tuple[int, str]]:
        stmt = select(Dentist.id, Dentist.full_name).where(Dentist.is_active.is_(True)).order_by(Dentist.full_name)
        return [(row.id, row.full_name) for row in self.session.execute(stmt)]

    def get_active(self, dentist_id: int) -> Dentist:
        dentist = self.session.get(Dentist, dentist_id)
        if dentist is None or not dentist.is_active:
            raise NotFoundError(f"Dentist {dentist_id} not found")
        return dentist

    def create(self, payload: CreateDentistPayload) -> Dentist:
        first_name = (payload.first_name or "").strip()
        last_name = (payload.last_name or "").strip()
        if not first_name or not last_name:
            raise RequiredFieldError("FIRST_LAST_REQUIRED")

        dentist = Dentist(
            full_name=f"{first_name} {last_name}",
            first_name=first_name,
            last_name=last_name,
            email=payload.email or None,
            age=payload.age or None,
            gender=payload.gender or None,
            address=payload.address or None,
            phone=payload.phone or None,
            position=payload.position or None,
            work_time=payload.work_time or DEFAULT_WORK_TIME,
            status=payload.status or DEFAULT_WORK_STATUS,
            patients_today=payload.patients_today or 0,
            is_active=True,
        )
        self.session.add(dentist)
        self.session.flush()
        logger.info("Created dentist id={dentist_id} name={name}", dentist_id=dentist.id, name=dentist.full_name)
        return dentist

    def set_work_status(self, dentist_id: int, status: str | None) -> None:
        if not status or not status.strip():
            raise RequiredFieldError("STATUS_REQUIRED")
        dentist = self.get_active(dentist_id)
        dentist.status = status.strip()
        logger.info("Dentist id={dentist_id} status={status}", dentist_id=dentist_id, status=dentist.status)

    def deactivate(self, dentist_id: int) -> None:
        dentist = self.get_active(dentist_id)
        dentist.is_active = False
        logger.info("Deactivated dentist id={dentist_id}", dentist_id=dentist_id)

    def appointments(self, dentist_id: int, scope: str = "active") -> list[DentistAppointment]:
        statuses = APPOINTMENT_SCOPES.get(scope.lower(), ACTIVE_STATUSES)
        stmt = (
            select(Appointment, Procedure.name, Review.review_text)
            .outerjoin(Procedure, Procedure.id == Appointment.procedure_id)
            .outerjoin(Review, Review.appointment_id == Appointment.id)
            .where(Appointment.dentist_id == dentist_id, Appointment.status.in_(statuses))
            .order_by(
                Appointment.preferred_date.desc(),
                Appointment.preferred_time.desc(),
                Appointment.id.desc(),
            )
        )
        return [
            DentistAppointment(
                id=appointment.id,
                patient_name=appointment.full_name or "",
                service=procedure_name or "",
                date=appointment.preferred_date.isoformat(),
                time_start=appointment.preferred_time.strftime("%H:%M"),
                status=appointment.status,
                review=review_text,
            )
            for appointment, procedure_name, review_text in self.session.execute(stmt)
        ]
