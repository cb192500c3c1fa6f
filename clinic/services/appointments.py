from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Callable

from loguru import logger
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from clinic.core.config import get_settings
from clinic.core.errors import (
    DailyLimitReachedError,
    InvalidDateError,
    InvalidDateTimeError,
    InvalidStatusError,
    InvalidTransitionError,
    MissingDateError,
    MissingFieldsError,
    NotFoundError,
    OutsideBlocksError,
    PastDateTimeError,
    TimeTakenError,
)
from clinic.models import ACTIVE_STATUSES, Appointment, AppointmentStatus, Dentist, Procedure
from clinic.schemas.appointment import (
    CreateAppointmentPayload,
    CreateAppointmentResponse,
    SlotOut,
    SlotsResponse,
    StatusUpdateResponse,
)
from clinic.utils.time import (
    DEFAULT_TIME_BLOCKS,
    TimeBlock,
    block_end_instant,
    clinic_timezone,
    find_block,
    parse_date,
    parse_time,
    utc_now,
)

Clock = Callable[[], datetime]

ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    AppointmentStatus.PENDING.value: frozenset({AppointmentStatus.CONFIRMED.value, AppointmentStatus.DECLINED.value}),
    AppointmentStatus.CONFIRMED.value: frozenset({AppointmentStatus.COMPLETED.value, AppointmentStatus.DECLINED.value}),
    AppointmentStatus.DECLINED.value: frozenset(),
    AppointmentStatus.COMPLETED.value: frozenset(),
}

LIST_LIMIT = 200


class AppointmentManager:
    """Slot allocation and booking lifecycle for the clinic's fixed time blocks.

    Every block is identified by its start time. A booking is accepted only when
    its time is exactly a block start, the block has not ended yet in clinic
    time, the dentist has no live booking in that block and the dentist is below
    the daily capacity. The partial unique index on ``appointments`` backs the
    duplicate check when two requests race for the same block; the capacity
    count runs under the dentist row's write lock so racing requests for
    different blocks are counted one after the other.
    """

    def __init__(
        self,
        *,
        session: Session,
        blocks: tuple[TimeBlock, ...] = DEFAULT_TIME_BLOCKS,
        tzinfo: timezone | None = None,
        daily_capacity: int | None = None,
        clock: Clock = utc_now,
    ) -> None:
        settings = get_settings()
        self.session = session
        self.blocks = blocks
        self.tzinfo = tzinfo or clinic_timezone(settings.clinic_utc_offset_hours)
        self.daily_capacity = daily_capacity if daily_capacity is not None else settings.daily_capacity
        self.clock = clock

    def get_slots(self, *, date_value: str | None, dentist_id: int | None = None) -> SlotsResponse:
        if not date_value or not date_value.strip():
            raise MissingDateError()
        day = parse_date(date_value)
        if day is None:
            raise InvalidDateError(f"Unrecognized date {date_value!r}")

        booked: set[time] = set()
        if dentist_id:
            booked = self._booked_starts(day=day, dentist_id=dentist_id)

        now = self.clock()
        slots: list[SlotOut] = []
        for block in self.blocks:
            past = block_end_instant(day, block, self.tzinfo) < now
            is_booked = block.start in booked
            slots.append(SlotOut(time=block.label, past=past, booked=is_booked, available=not (past or is_booked)))

        logger.debug(
            "Computed slots for date={day} dentist={dentist_id}: {free} free",
            day=day,
            dentist_id=dentist_id,
            free=sum(slot.available for slot in slots),
        )
        return SlotsResponse(date=day.isoformat(), dentist_id=dentist_id, slots=slots)

    def create(self, payload: CreateAppointmentPayload) -> CreateAppointmentResponse:
        day = parse_date(payload.preferred_date)
        start = parse_time(payload.preferred_time)
        dentist_id = self._resolve_dentist(payload)
        procedure_id = self._resolve_procedure(payload)

        missing: list[str] = []
        if not payload.full_name:
            missing.append("fullName")
        if not payload.email:
            missing.append("email")
        if payload.age is None:
            missing.append("age")
        if not payload.gender:
            missing.append("gender")
        if not payload.phone:
            missing.append("phone")
        if not payload.address:
            missing.append("address")
        if not payload.preferred_date:
            missing.append("preferredDate")
        if not payload.preferred_time:
            missing.append("preferredTime")
        if dentist_id is None:
            missing.append("dentistId")
        if procedure_id is None:
            missing.append("procedureId")
        if missing:
            logger.info("Rejected appointment with missing fields {missing}", missing=missing)
            raise MissingFieldsError(missing)

        if day is None or start is None:
            raise InvalidDateTimeError(
                f"Unrecognized date/time {payload.preferred_date!r} {payload.preferred_time!r}"
            )

        block = find_block(self.blocks, start)
        if block is None:
            raise OutsideBlocksError(f"{start.isoformat()} is not the start of a booking block")

        if block_end_instant(day, block, self.tzinfo) <= self.clock():
            raise PastDateTimeError(f"Block {block.label} on {day.isoformat()} has already ended")

        if self._slot_taken(day=day, start=start, dentist_id=dentist_id):
            raise TimeTakenError()

        self._lock_dentist(dentist_id)
        if self._active_count(day=day, dentist_id=dentist_id) >= self.daily_capacity:
            raise DailyLimitReachedError()

        appointment = Appointment(
            full_name=payload.full_name,
            email=payload.email,
            age=payload.age,
            gender=payload.gender,
            phone=payload.phone,
            address=payload.address,
            preferred_date=day,
            preferred_time=start,
            dentist_id=dentist_id,
            procedure_id=procedure_id,
            status=AppointmentStatus.PENDING.value,
            notes=payload.notes,
        )
        self.session.add(appointment)
        try:
            self.session.flush()
        except IntegrityError as exc:
            # Lost the race to a concurrent booking of the same block.
            self.session.rollback()
            logger.warning(
                "Slot {day} {start} for dentist={dentist_id} taken concurrently",
                day=day,
                start=start,
                dentist_id=dentist_id,
            )
            raise TimeTakenError() from exc

        logger.info(
            "Created appointment id={appointment_id} dentist={dentist_id} at {day} {start}",
            appointment_id=appointment.id,
            dentist_id=dentist_id,
            day=day,
            start=start,
        )
        return CreateAppointmentResponse(id=appointment.id, status=appointment.status)

    def update_status(self, *, appointment_id: int, status: str | None) -> StatusUpdateResponse:
        if status not in ALLOWED_TRANSITIONS:
            raise InvalidStatusError(f"Unsupported status {status!r}")

        appointment = self.session.get(Appointment, appointment_id)
        if appointment is None:
            raise NotFoundError(f"Appointment {appointment_id} not found")

        current = appointment.status
        if status != current:
            if status not in ALLOWED_TRANSITIONS.get(current, frozenset()):
                raise InvalidTransitionError(f"Cannot move appointment from {current} to {status}")
            appointment.status = status
            self.session.flush()
            logger.info(
                "Appointment id={appointment_id} moved {current} -> {status}",
                appointment_id=appointment_id,
                current=current,
                status=status,
            )
        return StatusUpdateResponse(id=appointment.id, status=appointment.status)

    def list_appointments(self, *, status: str | None = None) -> list[Appointment]:
        stmt = select(Appointment)
        if status:
            stmt = stmt.where(Appointment.status == status)
        stmt = stmt.order_by(Appointment.created_at.desc(), Appointment.id.desc()).limit(LIST_LIMIT)
        return list(self.session.scalars(stmt))

    def _resolve_dentist(self, payload: CreateAppointmentPayload) -> int | None:
        if payload.dentist_id:
            dentist = self.session.get(Dentist, payload.dentist_id)
            return dentist.id if dentist and dentist.is_active else None
        if payload.dentist:
            stmt = select(Dentist.id).where(Dentist.full_name == payload.dentist, Dentist.is_active.is_(True)).limit(1)
            return self.session.scalars(stmt).first()
        return None

    def _resolve_procedure(self, payload: CreateAppointmentPayload) -> int | None:
        if payload.procedure_id:
            procedure = self.session.get(Procedure, payload.procedure_id)
            return procedure.id if procedure else None
        if payload.procedure:
            stmt = select(Procedure.id).where(Procedure.name == payload.procedure).limit(1)
            return self.session.scalars(stmt).first()
        return None

    def _booked_starts(self, *, day: date, dentist_id: int) -> set[time]:
        stmt = select(Appointment.preferred_time).where(
            Appointment.preferred_date == day,
            Appointment.dentist_id == dentist_id,
            Appointment.status.in_(ACTIVE_STATUSES),
        )
        return {value.replace(microsecond=0) for value in self.session.scalars(stmt)}

    def _slot_taken(self, *, day: date, start: time, dentist_id: int) -> bool:
        stmt = (
            select(Appointment.id)
            .where(
                Appointment.preferred_date == day,
                Appointment.preferred_time == start,
                Appointment.dentist_id == dentist_id,
                Appointment.status.in_(ACTIVE_STATUSES),
            )
            .limit(1)
        )
        return self.session.scalars(stmt).first() is not None

    def _lock_dentist(self, dentist_id: int) -> None:
        """Take the dentist row's write lock for the rest of the transaction.

        Concurrent bookings for the same dentist queue here, so the count that
        follows sees every booking committed before this one.
        """
        self.session.execute(
            update(Dentist)
            .where(Dentist.id == dentist_id)
            .values(booking_version=Dentist.booking_version + 1)
            .execution_options(synchronize_session=False)
        )

    def _active_count(self, *, day: date, dentist_id: int) -> int:
        # Locking read: MySQL's repeatable-read snapshot would otherwise miss rows committed after it was taken.
        stmt = (
            select(Appointment.id)
            .where(
                Appointment.preferred_date == day,
                Appointment.dentist_id == dentist_id,
                Appointment.status.in_(ACTIVE_STATUSES),
            )
            .with_for_update()
        )
        return len(self.session.scalars(stmt).all())
