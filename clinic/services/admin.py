from __future__ import annotations

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from clinic.models import Appointment, AppointmentStatus, Dentist, Procedure
from clinic.schemas.admin import AdminAppointment, AdminAppointmentsResponse, DashboardStats

ADMIN_SCOPES: dict[str, tuple[str, ...]] = {
    "active": (AppointmentStatus.CONFIRMED.value,),
    "history": (AppointmentStatus.COMPLETED.value, AppointmentStatus.DECLINED.value),
}
MAX_PAGE_SIZE = 1000
DEFAULT_PAGE_SIZE = 500


def _count_status(status: AppointmentStatus):
    return func.coalesce(func.sum(case((Appointment.status == status.value, 1), else_=0)), 0)


class AdminService:
    def __init__(self, session: Session) -> None:
        self.session = session

    def stats(self) -> DashboardStats:
        total_doctors = self.session.scalar(
            select(func.count()).select_from(Dentist).where(Dentist.is_active.is_(True))
        )
        row = self.session.execute(
            select(
                func.count(Appointment.id),
                _count_status(AppointmentStatus.PENDING),
                _count_status(AppointmentStatus.CONFIRMED),
                _count_status(AppointmentStatus.COMPLETED),
                _count_status(AppointmentStatus.DECLINED),
            )
        ).one()
        total, pending, confirmed, completed, declined = row
        return DashboardStats(
            total_doctors=total_doctors or 0,
            total_appointments=total or 0,
            pending=pending,
            confirmed=confirmed,
            completed=completed,
            declined=declined,
        )

    def appointments(
        self, *, scope: str = "all", page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
    ) -> AdminAppointmentsResponse:
        page = max(1, page)
        page_size = min(MAX_PAGE_SIZE, max(1, page_size))
        statuses = ADMIN_SCOPES.get(scope.lower())
        conditions = [Appointment.status.in_(statuses)] if statuses else []

        total = self.session.scalar(select(func.count()).select_from(Appointment).where(*conditions)) or 0
        stmt = (
            select(Appointment, Procedure.name, Dentist.full_name)
            .outerjoin(Procedure, Procedure.id == Appointment.procedure_id)
            .outerjoin(Dentist, Dentist.id == Appointment.dentist_id)
            .where(*conditions)
            .order_by(Appointment.preferred_date.desc(), Appointment.id.desc())
            .limit(page_size)
            .offset((page - 1) * page_size)
        )
        items = [
            AdminAppointment(
                id=appointment.id,
                patient_name=appointment.full_name or "",
                service=procedure_name or "",
                date=appointment.preferred_date.isoformat(),
                time_start=appointment.preferred_time.strftime("%H:%M"),
                status=appointment.status.upper(),
                doctor=dentist_name or "",
            )
            for appointment, procedure_name, dentist_name in self.session.execute(stmt)
        ]
        return AdminAppointmentsResponse(page=page, page_size=page_size, total=total, items=items)
