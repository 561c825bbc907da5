from datetime import datetime, timedelta

import pytest

from carelink.models import Appointment, Doctor


@pytest.fixture
def doctors(db):
    cardiologist = Doctor(name="Dr Tan", specialty="Cardiology", clinic="Heart Clinic", location="Novena")
    geriatrician = Doctor(name="Dr Lee", specialty="Geriatrics", clinic="Bishan Polyclinic", location="Bishan")
    db.add_all([cardiologist, geriatrician])
    db.commit()
    return {"tan": cardiologist.id, "lee": geriatrician.id}


def in_days(days):
    return (datetime.utcnow() + timedelta(days=days)).replace(microsecond=0).isoformat()


def book(client, headers, doctor_id, days=3, **extra):
    return client.post("/api/appointments", json={
        "doctorId": doctor_id,
        "appointmentDate": in_days(days),
        "reason": "Blood pressure review",
        **extra,
    }, headers=headers)


def test_doctor_search(client, user, auth_headers, doctors):
    headers = auth_headers(user)
    names = lambda r: [d["name"] for d in r.json()["data"]]

    assert names(client.get("/api/appointments/doctors", headers=headers)) == ["Dr Lee", "Dr Tan"]
    assert names(client.get("/api/appointments/doctors", params={"specialty": "cardio"}, headers=headers)) == ["Dr Tan"]
    assert names(client.get("/api/appointments/doctors", params={"location": "BISHAN"}, headers=headers)) == ["Dr Lee"]


def test_book_and_list(client, user, auth_headers, doctors):
    headers = auth_headers(user)
    later = book(client, headers, doctors["tan"], days=10)
    sooner = book(client, headers, doctors["lee"], days=2, durationMinutes=45)
    assert later.status_code == 201
    assert later.json()["data"]["status"] == "scheduled"
    assert later.json()["data"]["durationMinutes"] == 30
    assert sooner.json()["data"]["durationMinutes"] == 45

    listed = client.get("/api/appointments", headers=headers).json()["data"]
    assert [a["doctorId"] for a in listed] == [doctors["lee"], doctors["tan"]]

    detail = client.get(f"/api/appointments/{listed[0]['id']}", headers=headers).json()["data"]
    assert detail["doctor"]["name"] == "Dr Lee"


def test_booking_validation(client, user, auth_headers, doctors):
    headers = auth_headers(user)

    response = book(client, headers, doctors["tan"], days=-1)
    assert response.status_code == 400
    assert response.json()["errors"] == ["Appointment date must be in the future"]

    response = book(client, headers, doctors["tan"], durationMinutes=5)
    assert response.status_code == 400
    assert response.json()["errors"] == ["Duration must be at least 15"]

    response = book(client, headers, 999)
    assert response.status_code == 404
    assert response.json()["message"] == "Doctor not found"


def test_update_and_cancel(client, db, make_user, auth_headers, doctors):
    owner = make_user()
    other = make_user(email="bob@example.com", name="Bob")
    appointment_id = book(client, auth_headers(owner), doctors["tan"]).json()["data"]["id"]
    url = f"/api/appointments/{appointment_id}"

    response = client.get(url, headers=auth_headers(other))
    assert response.status_code == 403
    assert response.json()["message"] == "Access denied to this appointment"

    response = client.put(url, json={"status": "completed", "followUpNeeded": True}, headers=auth_headers(owner))
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "completed"
    assert response.json()["data"]["followUpNeeded"] is True

    assert client.put(url, json={}, headers=auth_headers(owner)).status_code == 400
    assert client.put(url, json={"status": "lost"}, headers=auth_headers(owner)).status_code == 400

    assert client.delete(url, headers=auth_headers(other)).status_code == 403
    response = client.delete(url, headers=auth_headers(owner))
    assert response.status_code == 200
    assert response.json()["message"] == "Appointment cancelled successfully"
    assert db.query(Appointment).count() == 0

    response = client.get(url, headers=auth_headers(owner))
    assert response.status_code == 404
    assert response.json()["message"] == "Appointment not found"
