import pytest
from decimal import Decimal

from hms.core.exceptions import ConflictError
from hms.core.seed import DEFAULT_MEDICINES, DEFAULT_WARDS, seed_base
from hms.models.feedback import Feedback
from hms.models.pharmacy import Medicine
from hms.models.ward import Ward
from hms.services.pharmacy_service import PharmacyService

class TestMedicines:

    def test_list_medicines(self, client, db):
        """Test the catalogue is listed by name."""
        db.add_all([
            Medicine(name="Zinc 50mg", price=Decimal("12.00")),
            Medicine(name="Aspirin 75mg", price=Decimal("4.50")),
        ])
        db.commit()

        response = client.get("/pharmacy")
        assert response.status_code == 200
        assert [(row["name"], row["price"]) for row in response.json()] == [
            ("Aspirin 75mg", 4.5),
            ("Zinc 50mg", 12.0),
        ]

    def test_seed_is_idempotent(self, db):
        """Test seeding twice does not duplicate reference data."""
        seed_base(db)
        seed_base(db)

        assert db.query(Medicine).count() == len(DEFAULT_MEDICINES)
        assert db.query(Ward).count() == len(DEFAULT_WARDS)
        assert db.query(Ward).filter(Ward.occupied.is_(True)).count() == 0

class TestPaymentRecords:

    def test_latest_payment_id_empty(self, client):
        """Test the latest id is null before any payment."""
        assert client.get("/latestPaymentID").json() == {"paymentID": None}
        assert client.get("/nextPaymentID").json() == {"paymentID": 1}

    def test_record_payment_with_id(self, client):
        """Test a checkout with an explicit payment id."""
        response = client.post("/paymentrecord", json={"paymentID": 5, "amount": 120.5})
        assert response.json() == {
            "success": True,
            "message": "Payment submitted successfully",
            "paymentID": 5
        }

        assert client.get("/latestPaymentID").json() == {"paymentID": 5}
        assert client.get("/nextPaymentID").json() == {"paymentID": 6}
        assert client.get("/fetchrecord").json() == [{"paymentID": 5, "amount": 120.5}]

    def test_record_payment_generated_id(self, client):
        """Test the store assigns ids when none are sent."""
        first = client.post("/paymentrecord", json={"amount": 10}).json()
        second = client.post("/paymentrecord", json={"amount": 20}).json()

        assert first["paymentID"] == 1
        assert second["paymentID"] == 2

    def test_duplicate_payment_id(self, client):
        """Test payment records are append-only."""
        client.post("/paymentrecord", json={"paymentID": 5, "amount": 10})

        response = client.post("/paymentrecord", json={"paymentID": 5, "amount": 99})
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Payment 5 has already been recorded"

        assert client.get("/fetchrecord").json() == [{"paymentID": 5, "amount": 10.0}]

    def test_duplicate_payment_id_service(self, db):
        """Test the service reports a duplicate as a conflict."""
        service = PharmacyService(db)
        service.record_payment(Decimal("10.00"), 1)
        with pytest.raises(ConflictError):
            service.record_payment(Decimal("10.00"), 1)

    def test_non_positive_amount(self, client):
        """Test amounts must be positive."""
        response = client.post("/paymentrecord", json={"amount": 0})
        assert response.status_code == 422

class TestFeedback:

    def test_submit_feedback(self, client, db):
        """Test the portal feedback form posted to /doctors."""
        response = client.post("/doctors", json={
            "patientID": "p1",
            "employeeName": "Meredith Grey",
            "review": "Very attentive."
        })
        assert response.json() == {"success": True, "message": "Feedback submitted successfully"}

        feedback = db.query(Feedback).all()
        assert len(feedback) == 1
        assert feedback[0].employee_name == "Meredith Grey"

    def test_feedback_alias_route(self, client):
        """Test the /feedback route accepts the same form."""
        response = client.post("/feedback", json={
            "feedbackNo": 3,
            "patientID": "p2",
            "employeeName": "Cristina Yang",
            "review": "Sharp."
        })
        assert response.json()["success"] is True

    def test_duplicate_feedback_number(self, client):
        """Test a reused feedback number is reported as a failure."""
        payload = {"feedbackNo": 3, "patientID": "p2", "employeeName": "Cristina Yang", "review": "Sharp."}
        client.post("/feedback", json=payload)

        response = client.post("/feedback", json=payload)
        assert response.json() == {"success": False, "message": "Failed to Submit Feedback"}
