from hms.services.booking_service import BookingService
from .conftest import APP_DATE, add_doctor, add_wards

doctor_data = {
    "employeeId": 11,
    "name": "Addison Montgomery",
    "age": 45,
    "email": "addison@hospital.org",
    "salary": 8000,
    "specialization": "Obstetrics",
    "isAvailable": True
}

class TestDoctorsApi:

    def test_create_doctor(self, client, admin_headers):
        """Test an admin creates a doctor with its employee record."""
        response = client.post("/api/v1/doctors", json=doctor_data, headers=admin_headers)
        assert response.status_code == 201

        data = response.json()["data"]
        assert data == {
            "employeeId": 11,
            "name": "Addison Montgomery",
            "age": 45,
            "email": "addison@hospital.org",
            "salary": 8000.0,
            "specialization": "Obstetrics",
            "isAvailable": True
        }

        employees = client.get("/docDB").json()
        assert employees[0]["designation"] == "Doctor"

    def test_create_doctor_requires_admin(self, client, patient_headers):
        """Test non-admins cannot create doctors."""
        response = client.post("/api/v1/doctors", json=doctor_data, headers=patient_headers)
        assert response.status_code == 403

    def test_create_duplicate_doctor(self, client, admin_headers):
        """Test a taken employee id is a conflict."""
        client.post("/api/v1/doctors", json=doctor_data, headers=admin_headers)

        response = client.post("/api/v1/doctors", json=doctor_data, headers=admin_headers)
        assert response.status_code == 409

    def test_list_and_filter(self, client, db, patient_headers):
        """Test listing, availability and specialization filters."""
        add_doctor(db, employee_id=1, name="Meredith Grey", specialization="Surgery")
        add_doctor(db, employee_id=2, name="Cristina Yang", specialization="Cardiology", is_available=False)

        listing = client.get("/api/v1/doctors", headers=patient_headers).json()["data"]
        assert [row["employeeId"] for row in listing] == [1, 2]

        available = client.get("/api/v1/doctors/available", headers=patient_headers).json()["data"]
        assert [row["employeeId"] for row in available] == [1]

        cardiology = client.get("/api/v1/doctors/specialization/cardiology", headers=patient_headers).json()["data"]
        assert [row["name"] for row in cardiology] == ["Cristina Yang"]

    def test_search(self, client, db, patient_headers):
        """Test search by name or specialization."""
        add_doctor(db, employee_id=1, name="Meredith Grey", specialization="Surgery")
        add_doctor(db, employee_id=2, name="Cristina Yang", specialization="Cardiology")

        response = client.get("/api/v1/doctors/search", params={"query": "cardio"}, headers=patient_headers)
        assert [row["employeeId"] for row in response.json()["data"]] == [2]

        response = client.get("/api/v1/doctors/search", params={"query": "grey"}, headers=patient_headers)
        assert [row["employeeId"] for row in response.json()["data"]] == [1]

    def test_get_unknown_doctor(self, client, patient_headers):
        """Test a missing doctor is a 404."""
        response = client.get("/api/v1/doctors/77", headers=patient_headers)
        assert response.status_code == 404

    def test_update_keeps_employee_in_sync(self, client, admin_headers):
        """Test renaming a doctor renames the employee as well."""
        client.post("/api/v1/doctors", json=doctor_data, headers=admin_headers)

        update = dict(doctor_data, name="Addison Shepherd", salary=8500)
        del update["employeeId"]
        response = client.put("/api/v1/doctors/11", json=update, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Addison Shepherd"

        employee = client.get("/docDB").json()[0]
        assert employee["name"] == "Addison Shepherd"
        assert employee["salary"] == 8500.0

    def test_set_availability(self, client, db, admin_headers):
        """Test toggling availability."""
        add_doctor(db, employee_id=1)

        response = client.patch(
            "/api/v1/doctors/1/availability",
            params={"isAvailable": "false"},
            headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["isAvailable"] is False

    def test_delete_cascades(self, client, db, admin_headers):
        """Test deleting a doctor removes its appointments and frees its wards."""
        ward_ids = add_wards(db, 2)
        add_doctor(db, employee_id=1)
        BookingService(db).book_appointment(1, "p1", APP_DATE, ward_ids[0], 1)

        response = client.delete("/api/v1/doctors/1", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Doctor deleted successfully"

        assert client.get("/appointmentList").json() == []
        assert len(client.get("/ward").json()) == 2
        assert client.get("/docDB").json() == []
