import pytest

patient_data = {
    "firstName": "Jane",
    "lastName": "Doe",
    "email": "jane.doe@mail.com",
    "phone": "5551234567",
    "dateOfBirth": "1990-04-12",
    "gender": "FEMALE",
    "bloodGroup": "O+",
    "allergies": "Penicillin"
}

def create_patient(client, headers, **overrides):
    response = client.post("/api/v1/patients", json=dict(patient_data, **overrides), headers=headers)
    assert response.status_code == 201
    return response.json()["data"]

class TestPatients:

    def test_requires_authentication(self, client):
        """Test patient routes need a bearer token."""
        response = client.get("/api/v1/patients")
        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_create_patient(self, client, admin_headers):
        """Test patient creation returns the stored record."""
        data = create_patient(client, admin_headers)

        assert data["id"] == 1
        assert data["firstName"] == "Jane"
        assert data["bloodGroup"] == "O+"
        assert data["dateOfBirth"] == "1990-04-12"

    def test_duplicate_email(self, client, admin_headers):
        """Test a second patient with the same email is rejected."""
        create_patient(client, admin_headers)

        response = client.post(
            "/api/v1/patients",
            json=dict(patient_data, phone="5559999999"),
            headers=admin_headers
        )
        assert response.status_code == 409
        assert response.json()["message"] == "Patient already exists with email: jane.doe@mail.com"

    def test_duplicate_phone(self, client, admin_headers):
        """Test a second patient with the same phone is rejected."""
        create_patient(client, admin_headers)

        response = client.post(
            "/api/v1/patients",
            json=dict(patient_data, email="other@mail.com"),
            headers=admin_headers
        )
        assert response.status_code == 409

    def test_invalid_payload(self, client, admin_headers):
        """Test field validation."""
        response = client.post(
            "/api/v1/patients",
            json=dict(patient_data, phone="12ab", dateOfBirth="2999-01-01"),
            headers=admin_headers
        )
        assert response.status_code == 422
        fields = {error["field"] for error in response.json()["data"]}
        assert {"phone", "dateOfBirth"} <= fields

    def test_get_and_list(self, client, patient_headers):
        """Test reading patients."""
        created = create_patient(client, patient_headers)

        response = client.get(f"/api/v1/patients/{created['id']}", headers=patient_headers)
        assert response.json()["data"]["email"] == "jane.doe@mail.com"

        listing = client.get("/api/v1/patients", headers=patient_headers).json()["data"]
        assert [row["id"] for row in listing] == [created["id"]]

    def test_get_unknown_patient(self, client, admin_headers):
        """Test a missing patient is a 404."""
        response = client.get("/api/v1/patients/42", headers=admin_headers)
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": "Patient not found with id: 42",
            "data": None
        }

    def test_update_keeps_own_contact_details(self, client, admin_headers):
        """Test updating a patient does not collide with its own email and phone."""
        created = create_patient(client, admin_headers)

        response = client.put(
            f"/api/v1/patients/{created['id']}",
            json=dict(patient_data, address="12 Elm Street"),
            headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["address"] == "12 Elm Street"

    def test_update_to_other_patients_phone(self, client, admin_headers):
        """Test the duplicate check still applies against other patients."""
        create_patient(client, admin_headers)
        other = create_patient(client, admin_headers, email="john@mail.com", phone="5550000000", firstName="John")

        response = client.put(
            f"/api/v1/patients/{other['id']}",
            json=dict(patient_data, email="john@mail.com"),
            headers=admin_headers
        )
        assert response.status_code == 409

    def test_soft_delete(self, client, admin_headers):
        """Test a deleted patient disappears from reads."""
        created = create_patient(client, admin_headers)

        response = client.delete(f"/api/v1/patients/{created['id']}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Patient deleted successfully"

        assert client.get(f"/api/v1/patients/{created['id']}", headers=admin_headers).status_code == 404
        assert client.get("/api/v1/patients", headers=admin_headers).json()["data"] == []

    @pytest.mark.parametrize("query", ["jane", "DOE", "mail.com", "55512"])
    def test_search(self, client, admin_headers, query):
        """Test search by name, email and phone."""
        create_patient(client, admin_headers)
        create_patient(client, admin_headers, firstName="Mark", lastName="Sloan", email="mark@hospital.org", phone="4440001111")

        response = client.get("/api/v1/patients/search", params={"query": query}, headers=admin_headers)
        assert [row["firstName"] for row in response.json()["data"]] == ["Jane"]
