import pytest

class TestPortalSignup:

    def test_signup(self, client):
        """Test portal sign up."""
        response = client.post("/signup", json={"username": "p200", "password": "pw200"})
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "User registered successfully"}

    def test_signup_existing_user(self, client):
        """Test sign up with an id that is already taken."""
        client.post("/signup", json={"username": "p200", "password": "pw200"})

        response = client.post("/signup", json={"username": "p200", "password": "other"})
        assert response.json() == {"success": False, "message": "This user already exists"}

    def test_signup_unknown_prefix(self, client):
        """Test sign up with an id whose prefix maps to no role."""
        response = client.post("/signup", json={"username": "z1", "password": "pw"})
        body = response.json()
        assert body["success"] is False
        assert "must start with" in body["message"]

class TestPortalLogin:

    @pytest.mark.parametrize("user_id,role", [
        ("admin1", "admin"),
        ("p17", "patient"),
        ("d3", "doctor"),
        ("r9", "doctor"),
    ])
    def test_login_routes_by_prefix(self, client, user_id, role):
        """Test the returned role follows the user id prefix."""
        client.post("/signup", json={"username": user_id, "password": "pw"})

        response = client.post("/login", json={"username": user_id, "password": "pw"})
        assert response.status_code == 200
        assert response.json() == [{"userID": user_id, "role": role}]

    def test_login_invalid_credentials(self, client):
        """Test login with a wrong password."""
        client.post("/signup", json={"username": "p17", "password": "pw"})

        response = client.post("/login", json={"username": "p17", "password": "nope"})
        assert response.status_code == 200
        assert response.json() == {"success": False, "message": "Invalid credentials"}

    def test_login_unknown_user(self, client):
        """Test login with a user id that was never registered."""
        response = client.post("/login", json={"username": "p404", "password": "pw"})
        assert response.json() == {"success": False, "message": "Invalid credentials"}
