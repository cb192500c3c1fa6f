"""Concurrent bookings against a file-backed database with separate connections."""

import threading
import time as clock_time

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import sessionmaker

from clinic.core.errors import DailyLimitReachedError
from clinic.models import Appointment, Dentist, Procedure
from clinic.schemas.appointment import CreateAppointmentPayload
from clinic.services.appointments import AppointmentManager
from clinic.services.db import create_db_engine, init_db
from tests.factories import FIXED_NOW, FUTURE_DAY, booking_payload


@pytest.fixture
def file_sessions(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'clinic.db'}")
    init_db(engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    with factory() as setup:
        setup.add_all([Dentist(id=7, full_name="Maria Santos"), Procedure(id=3, name="Cleaning")])
        setup.commit()
    yield factory
    engine.dispose()


def test_daily_cap_holds_for_racing_bookings_of_different_blocks(file_sessions):
    first = file_sessions()
    second = file_sessions()
    outcome = {}

    def book(session, preferred_time):
        manager = AppointmentManager(session=session, clock=lambda: FIXED_NOW, daily_capacity=1)
        return manager.create(CreateAppointmentPayload.model_validate(booking_payload(preferredTime=preferred_time)))

    def book_second():
        try:
            book(second, "10:00")
            second.commit()
            outcome["result"] = "booked"
        except DailyLimitReachedError:
            second.rollback()
            outcome["result"] = "rejected"

    # The first booking holds its transaction open while the second one runs.
    book(first, "08:00")
    worker = threading.Thread(target=book_second)
    worker.start()
    clock_time.sleep(0.3)
    first.commit()
    worker.join(timeout=10)

    assert outcome == {"result": "rejected"}
    with file_sessions() as check:
        stmt = select(func.count()).select_from(Appointment).where(Appointment.preferred_date == FUTURE_DAY)
        assert check.scalar(stmt) == 1
    first.close()
    second.close()
