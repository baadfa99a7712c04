import pytest

from .conftest import APP_DATE, add_doctor, add_wards

@pytest.fixture
def ward_ids(db):
    ids = add_wards(db, 3)
    add_doctor(db, employee_id=1, name="Meredith Grey", specialization="Surgery")
    return ids

def book(client, headers, ward_id, slot=1, patient_id="p100"):
    return client.post("/api/v1/appointments", json={
        "doctorId": 1,
        "patientId": patient_id,
        "appDate": APP_DATE.isoformat(),
        "wardId": ward_id,
        "slot": slot,
        "reason": "Check-up"
    }, headers=headers)

class TestAppointmentsApi:

    def test_book(self, client, patient_headers, ward_ids):
        """Test booking through the versioned API."""
        response = book(client, patient_headers, ward_ids[0])
        assert response.status_code == 201

        data = response.json()["data"]
        assert data["id"] == 1
        assert data["doctorName"] == "Meredith Grey"
        assert data["doctorSpecialization"] == "Surgery"
        assert data["status"] == "SCHEDULED"
        assert data["reason"] == "Check-up"

        wards = client.get("/api/v1/wards", params={"occupied": "true"}, headers=patient_headers).json()["data"]
        assert wards == [{"id": ward_ids[0], "name": "Ward 1", "occupied": True, "appointmentId": 1}]

    def test_double_booking_is_conflict(self, client, patient_headers, ward_ids):
        """Test the same slot cannot be booked twice."""
        book(client, patient_headers, ward_ids[0])

        response = book(client, patient_headers, ward_ids[1], patient_id="p200")
        assert response.status_code == 409
        assert response.json()["success"] is False

    def test_unknown_ward(self, client, patient_headers, ward_ids):
        """Test booking into a ward that does not exist."""
        response = book(client, patient_headers, 999)
        assert response.status_code == 404

    def test_filters(self, client, patient_headers, ward_ids):
        """Test the list filters and the path-based lookups."""
        book(client, patient_headers, ward_ids[0], slot=1, patient_id="p100")
        book(client, patient_headers, ward_ids[1], slot=2, patient_id="p200")

        def ids(path, **params):
            response = client.get(f"/api/v1/appointments{path}", params=params, headers=patient_headers)
            assert response.status_code == 200
            return [row["id"] for row in response.json()["data"]]

        assert ids("") == [1, 2]
        assert ids("", patientId="p200") == [2]
        assert ids("", doctorId=1, date=APP_DATE.isoformat()) == [1, 2]
        assert ids("/patient/p100") == [1]
        assert ids("/doctor/1") == [1, 2]
        assert ids(f"/date/{APP_DATE.isoformat()}") == [1, 2]
        assert ids("/date/2031-01-01") == []
        assert ids("/status/SCHEDULED") == [1, 2]
        assert ids("/status/COMPLETED") == []

    def test_get_unknown(self, client, patient_headers, ward_ids):
        """Test a missing appointment is a 404."""
        response = client.get("/api/v1/appointments/5", headers=patient_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Appointment not found with id: 5"

    def test_update_status(self, client, patient_headers, ward_ids):
        """Test completing an appointment frees its ward."""
        book(client, patient_headers, ward_ids[0])

        response = client.patch(
            "/api/v1/appointments/1/status",
            params={"status": "COMPLETED"},
            headers=patient_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "COMPLETED"

        occupied = client.get("/api/v1/wards", params={"occupied": "true"}, headers=patient_headers).json()["data"]
        assert occupied == []

    def test_cancel_keeps_row(self, client, patient_headers, ward_ids):
        """Test cancelling marks the appointment and frees the slot."""
        book(client, patient_headers, ward_ids[0])

        response = client.patch("/api/v1/appointments/1/cancel", headers=patient_headers)
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "CANCELLED"

        rebooked = book(client, patient_headers, ward_ids[0], patient_id="p200")
        assert rebooked.status_code == 201

    def test_cancel_twice_is_conflict(self, client, patient_headers, ward_ids):
        """Test a cancelled appointment cannot be completed."""
        book(client, patient_headers, ward_ids[0])
        client.patch("/api/v1/appointments/1/cancel", headers=patient_headers)

        response = client.patch(
            "/api/v1/appointments/1/status",
            params={"status": "COMPLETED"},
            headers=patient_headers
        )
        assert response.status_code == 409

    def test_delete(self, client, patient_headers, ward_ids):
        """Test deleting removes the row and releases the ward."""
        book(client, patient_headers, ward_ids[0])

        response = client.delete("/api/v1/appointments/1", headers=patient_headers)
        assert response.status_code == 200

        assert client.get("/api/v1/appointments/1", headers=patient_headers).status_code == 404
        free = client.get("/api/v1/wards", params={"occupied": "false"}, headers=patient_headers).json()["data"]
        assert len(free) == 3

class TestOperationalEndpoints:

    def test_health(self, client):
        """Test the health check."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-Process-Time" in response.headers

    def test_root_and_info(self, client):
        """Test the informational endpoints."""
        assert client.get("/").json()["health"] == "/health"
        assert client.get("/api/v1/info").json()["endpoints"]["appointments"] == "/api/v1/appointments"

    def test_unknown_route(self, client):
        """Test unknown paths render the error envelope."""
        response = client.get("/does-not-exist")
        assert response.status_code == 404
        assert response.json()["success"] is False
