from __future__ import annotations

from loguru import logger
from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from clinic.core.errors import NotFoundError
from clinic.models import Appointment, Dentist, Procedure, Review
from clinic.services.admin import MAX_PAGE_SIZE
from clinic.schemas.patient import (
    PatientAppointment,
    PatientDetail,
    PatientListResponse,
    PatientSummary,
)


def _patient_key():
    return func.coalesce(Appointment.email, Appointment.full_name, Appointment.phone)


class PatientService:
    """Read-side view of patients.

    There is no patient table. Bookings are grouped on the first present of
    email, full name and phone; the lowest booking id in a group is the anchor
    that stands in for the patient's id.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_patients(self, *, page: int = 1, page_size: int = 50, search: str | None = None) -> PatientListResponse:
        page = max(1, page)
        page_size = min(MAX_PAGE_SIZE, max(1, page_size))
        conditions = []
        if search:
            like = f"%{search.strip()}%"
            conditions.append(
                or_(
                    Appointment.full_name.like(like),
                    Appointment.email.like(like),
                    Appointment.phone.like(like),
                )
            )

        key = _patient_key().label("patient_key")
        grouped = select(key).where(*conditions).group_by(_patient_key()).subquery()
        total = self.session.scalar(select(func.count()).select_from(grouped)) or 0

        last_visit = func.max(Appointment.preferred_date).label("last_visit")
        name = func.max(Appointment.full_name).label("name")
        stmt = (
            select(
                func.min(Appointment.id).label("id"),
                name,
                func.max(Appointment.age).label("age"),
                func.max(Appointment.gender).label("gender"),
                func.max(Appointment.email).label("email"),
                func.max(Appointment.phone).label("phone"),
                last_visit,
            )
            .where(*conditions)
            .group_by(_patient_key())
            .order_by(last_visit.desc(), name.asc())
            .limit(page_size)
            .offset((page - 1) * page_size)
        )
        items = [
            PatientSummary(
                id=row.id,
                name=row.name or "Unknown",
                age=row.age,
                gender=row.gender or None,
                email=row.email or None,
                phone=row.phone or None,
                last_visit=row.last_visit,
            )
            for row in self.session.execute(stmt)
        ]
        return PatientListResponse(page=page, page_size=page_size, total=total, items=items)

    def get_patient(self, anchor_id: int) -> PatientDetail:
        anchor = self._anchor(anchor_id)
        return PatientDetail(
            id=anchor.id,
            name=anchor.full_name,
            email=anchor.email,
            phone=anchor.phone,
            gender=anchor.gender,
            age=anchor.age,
            address=anchor.address or "",
            last_visit=anchor.preferred_date,
        )

    def patient_appointments(self, anchor_id: int) -> list[PatientAppointment]:
        anchor = self._anchor(anchor_id)

        stmt = (
            select(Appointment, Procedure.name, Dentist.full_name)
            .outerjoin(Procedure, Procedure.id == Appointment.procedure_id)
            .outerjoin(Dentist, Dentist.id == Appointment.dentist_id)
        )
        if anchor.email:
            stmt = stmt.where(Appointment.email == anchor.email)
        elif anchor.phone is None:
            stmt = stmt.where(Appointment.full_name == anchor.full_name, Appointment.phone.is_(None))
        else:
            stmt = stmt.where(Appointment.full_name == anchor.full_name, Appointment.phone == anchor.phone)
        stmt = stmt.order_by(
            Appointment.preferred_date.desc(),
            Appointment.preferred_time.desc(),
            Appointment.id.desc(),
        )

        items: list[PatientAppointment] = []
        for appointment, procedure_name, dentist_name in self.session.execute(stmt):
            day = appointment.preferred_date
            items.append(
                PatientAppointment(
                    id=appointment.id,
                    procedure=procedure_name or f"Procedure #{appointment.procedure_id}",
                    date=f"{day:%B} {day.day}, {day.year}",
                    time=appointment.preferred_time.strftime("%H:%M:%S"),
                    dentist=dentist_name or "—",
                    status=appointment.status,
                )
            )
        return items

    def delete_patient(self, anchor_id: int) -> None:
        """Delete the anchor booking; the rest of the group is left in place."""
        anchor = self._anchor(anchor_id)
        self.session.execute(delete(Review).where(Review.appointment_id == anchor.id))
        self.session.delete(anchor)
        self.session.flush()
        logger.info("Deleted anchor appointment id={appointment_id}", appointment_id=anchor_id)

    def _anchor(self, anchor_id: int) -> Appointment:
        anchor = self.session.get(Appointment, anchor_id)
        if anchor is None:
            raise NotFoundError(f"Patient {anchor_id} not found")
        return anchor
