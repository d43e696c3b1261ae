from datetime import datetime, timedelta

import pytest

from app.core.security import UserRole, create_access_token
from app.models.patient import Patient

from .conftest import auth_headers_for, tomorrow_at

def booking(doctor_id, when, name="Jane Doe", email="jane@example.com"):
    return {
        "doctor_id": doctor_id,
        "date_time": when.isoformat(),
        "patient_name": name,
        "patient_email": email,
    }

class TestCreateAppointment:

    def test_create_appointment(self, client, staff_headers, doctor, notifier):
        """Test staff booking endpoint."""
        response = client.post(
            "/api/v1/appointments", json=booking(doctor.id, tomorrow_at(9)), headers=staff_headers
        )
        assert response.status_code == 201

        data = response.json()
        assert data["status"] == "confirmed"
        assert data["doctor_name"] == "Gregory House"
        assert data["patient_email"] == "jane@example.com"
        assert datetime.fromisoformat(data["date_time"]) == tomorrow_at(9)
        assert len(notifier.sent) == 1

    def test_working_hours_example(self, client, staff_headers, doctor):
        """Doctor works 09:00-17:00."""
        url = "/api/v1/appointments"

        first = client.post(url, json=booking(doctor.id, tomorrow_at(9)), headers=staff_headers)
        assert first.status_code == 201

        again = client.post(
            url, json=booking(doctor.id, tomorrow_at(9), "Bob Roe", "bob@example.com"), headers=staff_headers
        )
        assert again.status_code == 409

        early = client.post(url, json=booking(doctor.id, tomorrow_at(8, 59)), headers=staff_headers)
        assert early.status_code == 400

        closing = client.post(url, json=booking(doctor.id, tomorrow_at(17)), headers=staff_headers)
        assert closing.status_code == 201

    def test_past_date_rejected(self, client, staff_headers, doctor):
        """Test booking in the past."""
        yesterday = tomorrow_at(10) - timedelta(days=2)
        response = client.post(
            "/api/v1/appointments", json=booking(doctor.id, yesterday), headers=staff_headers
        )
        assert response.status_code == 400
        assert "past" in response.json()["detail"]

    def test_unknown_doctor(self, client, staff_headers):
        """Test booking with an unknown doctor."""
        response = client.post(
            "/api/v1/appointments", json=booking(999, tomorrow_at(10)), headers=staff_headers
        )
        assert response.status_code == 404
        assert "Doctor not found" in response.json()["detail"]

    def test_invalid_email_rejected(self, client, staff_headers, doctor):
        """Test booking with a malformed patient email."""
        response = client.post(
            "/api/v1/appointments",
            json=booking(doctor.id, tomorrow_at(10), email="not-an-email"),
            headers=staff_headers,
        )
        assert response.status_code == 422

    def test_requires_staff_role(self, client, db_session, doctor):
        """Test patients cannot use the staff booking endpoint."""
        headers = auth_headers_for(db_session, "pat@example.com", UserRole.PATIENT)
        response = client.post(
            "/api/v1/appointments", json=booking(doctor.id, tomorrow_at(10)), headers=headers
        )
        assert response.status_code == 403

    def test_requires_authentication(self, client, doctor):
        """Test booking without a token."""
        response = client.post("/api/v1/appointments", json=booking(doctor.id, tomorrow_at(10)))
        assert response.status_code in (401, 403)

class TestSelfBooking:

    @pytest.fixture
    def patient_headers(self, client):
        client.post("/api/v1/auth/register", json={
            "first_name": "Pat",
            "last_name": "Ient",
            "email": "pat@example.com",
            "dni": "123",
            "password": "PatPassword1",
        })
        token = create_access_token("pat@example.com", UserRole.PATIENT)
        return {"Authorization": f"Bearer {token}"}

    def test_book_me_uses_callers_identity(self, client, patient_headers, doctor):
        """Test self-booking takes name and email from the account."""
        response = client.post(
            "/api/v1/appointments/book-me",
            json={"doctor_id": doctor.id, "date_time": tomorrow_at(11).isoformat()},
            headers=patient_headers,
        )
        assert response.status_code == 201
        assert response.json()["patient_email"] == "pat@example.com"
        assert response.json()["patient_name"] == "Pat Ient"

    def test_my_appointments(self, client, patient_headers, staff_headers, doctor):
        """Test own history excludes other patients."""
        client.post(
            "/api/v1/appointments/book-me",
            json={"doctor_id": doctor.id, "date_time": tomorrow_at(11).isoformat()},
            headers=patient_headers,
        )
        client.post(
            "/api/v1/appointments",
            json=booking(doctor.id, tomorrow_at(12), "Someone Else", "other@example.com"),
            headers=staff_headers,
        )

        response = client.get("/api/v1/appointments/my-appointments", headers=patient_headers)
        assert response.status_code == 200
        assert [a["patient_email"] for a in response.json()] == ["pat@example.com"]

    def test_my_appointments_for_patient_linked_by_dni(self, client, db_session, doctor):
        """Test history follows the linked patient's email, not the login name."""
        db_session.add(Patient(first_name="Ana", last_name="Diaz", email="front-desk@clinic.com", dni="777"))
        db_session.commit()
        client.post("/api/v1/auth/register", json={
            "first_name": "Ana",
            "last_name": "Diaz",
            "email": "ana@mail.com",
            "dni": "777",
            "password": "AnaPassword1",
        })
        headers = {"Authorization": f"Bearer {create_access_token('ana@mail.com', UserRole.PATIENT)}"}

        booked = client.post(
            "/api/v1/appointments/book-me",
            json={"doctor_id": doctor.id, "date_time": tomorrow_at(11).isoformat()},
            headers=headers,
        )
        assert booked.status_code == 201

        response = client.get("/api/v1/appointments/my-appointments", headers=headers)
        assert [a["id"] for a in response.json()] == [booked.json()["id"]]
        assert response.json()[0]["patient_email"] == "front-desk@clinic.com"

    def test_my_appointments_without_patient_record(self, client, staff_headers):
        """Test a user with no linked patient gets an empty history."""
        response = client.get("/api/v1/appointments/my-appointments", headers=staff_headers)
        assert response.status_code == 200
        assert response.json() == []

    def test_staff_cannot_book_me(self, client, staff_headers, doctor):
        """Test staff cannot self-book."""
        response = client.post(
            "/api/v1/appointments/book-me",
            json={"doctor_id": doctor.id, "date_time": tomorrow_at(11).isoformat()},
            headers=staff_headers,
        )
        assert response.status_code == 403

class TestManageAppointments:

    @pytest.fixture
    def appointment_id(self, client, staff_headers, doctor):
        response = client.post(
            "/api/v1/appointments", json=booking(doctor.id, tomorrow_at(10)), headers=staff_headers
        )
        return response.json()["id"]

    def test_list_all(self, client, staff_headers, appointment_id):
        """Test listing appointments."""
        response = client.get("/api/v1/appointments", headers=staff_headers)
        assert response.status_code == 200
        assert [a["id"] for a in response.json()] == [appointment_id]

    def test_list_filtered_by_status(self, client, staff_headers, appointment_id):
        """Test listing with a status filter."""
        response = client.get("/api/v1/appointments", params={"status": "pending"}, headers=staff_headers)
        assert response.json() == []

    def test_update_status(self, client, staff_headers, appointment_id):
        """Test status update."""
        response = client.patch(
            f"/api/v1/appointments/{appointment_id}/status",
            params={"status": "completed"},
            headers=staff_headers,
        )
        assert response.status_code == 200
        assert response.json()["status"] == "completed"

    def test_update_status_invalid_value(self, client, staff_headers, appointment_id):
        """Test status update with an unknown status."""
        response = client.patch(
            f"/api/v1/appointments/{appointment_id}/status",
            params={"status": "cancelled"},
            headers=staff_headers,
        )
        assert response.status_code == 422

    def test_update_status_not_found(self, client, staff_headers):
        """Test status update of a missing appointment."""
        response = client.patch(
            "/api/v1/appointments/999/status", params={"status": "completed"}, headers=staff_headers
        )
        assert response.status_code == 404
        assert "999" in response.json()["detail"]

    def test_update_diagnosis(self, client, staff_headers, appointment_id):
        """Test recording diagnosis and treatment."""
        response = client.patch(
            f"/api/v1/appointments/{appointment_id}/diagnosis",
            json={"diagnosis": "Common cold", "treatment": "Rest"},
            headers=staff_headers,
        )
        assert response.status_code == 200
        assert response.json()["diagnosis"] == "Common cold"
        assert response.json()["treatment"] == "Rest"

    def test_update_diagnosis_too_long(self, client, staff_headers, appointment_id):
        """Test diagnosis and treatment are capped at 1000 characters."""
        response = client.patch(
            f"/api/v1/appointments/{appointment_id}/diagnosis",
            json={"diagnosis": "x" * 1001, "treatment": "Rest"},
            headers=staff_headers,
        )
        assert response.status_code == 422

    def test_patient_history_sorted_newest_first(self, client, staff_headers, doctor, appointment_id):
        """Test patient history order."""
        client.post(
            "/api/v1/appointments", json=booking(doctor.id, tomorrow_at(15)), headers=staff_headers
        )
        client.post(
            "/api/v1/appointments",
            json=booking(doctor.id, tomorrow_at(9) + timedelta(days=1)),
            headers=staff_headers,
        )

        response = client.get("/api/v1/appointments/patient/jane@example.com", headers=staff_headers)
        assert response.status_code == 200
        times = [datetime.fromisoformat(a["date_time"]) for a in response.json()]
        assert times == sorted(times, reverse=True)
        assert len(times) == 3

    def test_taken_slots(self, client, staff_headers, doctor, appointment_id):
        """Test taken slots are public and sorted."""
        client.post(
            "/api/v1/appointments", json=booking(doctor.id, tomorrow_at(14, 30)), headers=staff_headers
        )

        response = client.get(
            "/api/v1/appointments/taken-slots",
            params={"doctor_id": doctor.id, "date": tomorrow_at(0).date().isoformat()},
        )
        assert response.status_code == 200
        assert response.json() == ["10:00:00", "14:30:00"]

class TestPrescriptionDownload:

    @pytest.fixture
    def appointment_id(self, client, staff_headers, doctor):
        response = client.post(
            "/api/v1/appointments", json=booking(doctor.id, tomorrow_at(10)), headers=staff_headers
        )
        return response.json()["id"]

    def test_pdf_requires_completed(self, client, staff_headers, appointment_id):
        """Test prescription download before completion."""
        response = client.get(f"/api/v1/appointments/{appointment_id}/pdf", headers=staff_headers)
        assert response.status_code == 400
        assert "completed" in response.json()["detail"]

    def test_pdf_for_completed_appointment(self, client, staff_headers, appointment_id):
        """Test prescription download for a completed visit."""
        client.patch(
            f"/api/v1/appointments/{appointment_id}/diagnosis",
            json={"diagnosis": "Flu", "treatment": "Paracetamol"},
            headers=staff_headers,
        )
        client.patch(
            f"/api/v1/appointments/{appointment_id}/status",
            params={"status": "completed"},
            headers=staff_headers,
        )

        response = client.get(f"/api/v1/appointments/{appointment_id}/pdf", headers=staff_headers)
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert f"prescription_{appointment_id}.pdf" in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    def test_pdf_unknown_appointment(self, client, staff_headers):
        """Test prescription download for a missing appointment."""
        response = client.get("/api/v1/appointments/999/pdf", headers=staff_headers)
        assert response.status_code == 404
