"""Row builders and request payloads shared by the test modules."""

from datetime import date, datetime, timezone

from clinic.models import Appointment

# 10:30 in clinic time (UTC+8) on 2030-01-15.
FIXED_NOW = datetime(2030, 1, 15, 2, 30, tzinfo=timezone.utc)
TODAY = date(2030, 1, 15)
FUTURE_DAY = date(2030, 1, 20)


def add_appointment(session, *, dentist_id, procedure_id, day, start, status="PENDING", **fields):
    """Insert a booking row directly, bypassing the allocator's checks."""
    values = {
        "full_name": "Juan Dela Cruz",
        "email": "juan@example.com",
        "age": 34,
        "gender": "Male",
        "phone": "09171234567",
        "address": "Makati City",
    }
    values.update(fields)
    appointment = Appointment(
        dentist_id=dentist_id,
        procedure_id=procedure_id,
        preferred_date=day,
        preferred_time=start,
        status=status,
        **values,
    )
    session.add(appointment)
    session.commit()
    return appointment


def booking_payload(**overrides):
    payload = {
        "fullName": "Ana Reyes",
        "email": "ana@example.com",
        "age": 29,
        "gender": "Female",
        "phone": "09181112222",
        "address": "Quezon City",
        "preferredDate": FUTURE_DAY.isoformat(),
        "preferredTime": "10:00",
        "dentistId": 7,
        "procedureId": 3,
        "notes": "First visit",
    }
    payload.update(overrides)
    return payload
