from datetime import time

from clinic.models import Review
from tests.factories import FUTURE_DAY, add_appointment


def test_list_and_get_active_doctors(client, dentist):
    listed = client.get("/api/doctors").json()

    assert listed["ok"] is True
    assert [doctor["full_name"] for doctor in listed["doctors"]] == ["Maria Santos"]
    doctor = client.get("/api/doctors/7").json()["doctor"]
    assert doctor["work_time"] == "08:00 – 17:00"
    assert doctor["status"] == "At Work"


def test_create_doctor(client):
    response = client.post(
        "/api/doctors",
        json={"firstName": " Luis ", "lastName": "Cruz", "position": "Orthodontist", "work_time": "09:00 – 18:00"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Doctor created"
    doctor = client.get(f"/api/doctors/{body['id']}").json()["doctor"]
    assert doctor["full_name"] == "Luis Cruz"
    assert doctor["work_time"] == "09:00 – 18:00"
    assert doctor["patients_today"] == 0


def test_create_doctor_requires_both_names(client):
    response = client.post("/api/doctors", json={"firstName": "Luis"})

    assert response.status_code == 400
    assert response.json() == {"error": "FIRST_LAST_REQUIRED"}


def test_update_work_status(client, dentist):
    assert client.patch("/api/doctors/7/status", json={"status": "On Leave"}).json()["ok"] is True
    assert client.get("/api/doctors/7").json()["doctor"]["status"] == "On Leave"

    blank = client.patch("/api/doctors/7/status", json={"status": "  "})
    assert blank.status_code == 400
    assert blank.json() == {"error": "STATUS_REQUIRED"}

    unknown = client.patch("/api/doctors/99/status", json={"status": "On Leave"})
    assert unknown.status_code == 404


def test_delete_deactivates_doctor(client, dentist):
    assert client.delete("/api/doctors/7").status_code == 200

    assert client.get("/api/doctors/7").status_code == 404
    assert client.get("/api/doctors").json()["doctors"] == []
    assert client.get("/api/dentists").json() == []


def test_doctor_appointments_by_scope(client, session, dentist, procedure):
    live = add_appointment(session, dentist_id=7, procedure_id=3, day=FUTURE_DAY, start=time(8, 0), status="CONFIRMED")
    done = add_appointment(
        session, dentist_id=7, procedure_id=3, day=FUTURE_DAY, start=time(13, 0), status="COMPLETED", full_name="Lea"
    )
    session.add(Review(appointment_id=done.id, dentist_id=7, user_email="juan@example.com", review_text="Gentle."))
    session.commit()

    active = client.get("/api/doctors/7/appointments").json()["items"]
    history = client.get("/api/doctors/7/appointments", params={"scope": "history"}).json()["items"]

    assert [item["id"] for item in active] == [live.id]
    assert active[0]["time_start"] == "08:00"
    assert active[0]["service"] == "Cleaning"
    assert history == [
        {
            "id": done.id,
            "patient_name": "Lea",
            "service": "Cleaning",
            "date": "2030-01-20",
            "time_start": "13:00",
            "status": "COMPLETED",
            "review": "Gentle.",
        }
    ]


def test_soft_deleted_doctor_cannot_be_changed(client, dentist):
    client.delete("/api/doctors/7")

    status_change = client.patch("/api/doctors/7/status", json={"status": "On Leave"})
    second_delete = client.delete("/api/doctors/7")

    assert (status_change.status_code, status_change.json()) == (404, {"error": "NOT_FOUND"})
    assert second_delete.status_code == 404
