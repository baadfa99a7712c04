from decimal import Decimal
from sqlalchemy.orm import Session
import logging

from .config import settings
from ..models.pharmacy import Medicine
from ..models.ward import Ward
from ..services.auth_service import AuthService

logger = logging.getLogger(__name__)

DEFAULT_WARDS = ["General Ward A", "General Ward B", "ICU", "Maternity", "Pediatrics"]

DEFAULT_MEDICINES = [
    ("Paracetamol 500mg", Decimal("20.00")),
    ("Amoxicillin 250mg", Decimal("85.50")),
    ("Ibuprofen 400mg", Decimal("35.00")),
    ("Cetirizine 10mg", Decimal("15.75")),
    ("Omeprazole 20mg", Decimal("60.00")),
]

def seed_base(db: Session) -> None:
    """
    Load the minimum reference data (idempotent):
    - wards
    - pharmacy catalogue
    - bootstrap admin credential, when configured
    """
    for name in DEFAULT_WARDS:
        if db.query(Ward).filter(Ward.name == name).first() is None:
            db.add(Ward(name=name, occupied=False))

    for name, price in DEFAULT_MEDICINES:
        if db.query(Medicine).filter(Medicine.name == name).first() is None:
            db.add(Medicine(name=name, price=price))

    db.commit()

    if settings.ADMIN_USER_ID and settings.ADMIN_PASSWORD:
        AuthService(db).ensure_user(settings.ADMIN_USER_ID, settings.ADMIN_PASSWORD)

    logger.info("Reference data seeded")
