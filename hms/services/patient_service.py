from sqlalchemy import or_
from sqlalchemy.orm import Session
from datetime import datetime, timezone
from typing import List, Optional
import logging

from ..core.exceptions import ConflictError, NotFoundError
from ..models.patient import Patient
from ..schemas.patient import PatientRequest

logger = logging.getLogger(__name__)

class PatientService:
    def __init__(self, db: Session):
        self.db = db

    def _active(self):
        return self.db.query(Patient).filter(Patient.deleted_at.is_(None))

    def _check_unique(self, email: Optional[str], phone: str, exclude_id: Optional[int] = None) -> None:
        """Reject an email or phone already used by another patient."""
        if email:
            query = self.db.query(Patient).filter(Patient.email == email)
            if exclude_id is not None:
                query = query.filter(Patient.id != exclude_id)
            if query.first():
                raise ConflictError(f"Patient already exists with email: {email}")

        query = self.db.query(Patient).filter(Patient.phone == phone)
        if exclude_id is not None:
            query = query.filter(Patient.id != exclude_id)
        if query.first():
            raise ConflictError(f"Patient already exists with phone: {phone}")

    def create_patient(self, data: PatientRequest) -> Patient:
        self._check_unique(data.email, data.phone)

        patient = Patient(**data.model_dump())
        self.db.add(patient)
        self.db.commit()
        self.db.refresh(patient)

        logger.info(f"Patient {patient.id} registered")
        return patient

    def get_patient(self, patient_id: int) -> Patient:
        """Return an active patient; soft-deleted patients are not found."""
        patient = self._active().filter(Patient.id == patient_id).first()
        if not patient:
            raise NotFoundError("Patient", "id", patient_id)
        return patient

    def list_patients(self) -> List[Patient]:
        return self._active().order_by(Patient.id).all()

    def update_patient(self, patient_id: int, data: PatientRequest) -> Patient:
        patient = self.get_patient(patient_id)
        self._check_unique(data.email, data.phone, exclude_id=patient_id)

        for field, value in data.model_dump().items():
            setattr(patient, field, value)

        self.db.commit()
        self.db.refresh(patient)

        logger.info(f"Patient {patient_id} updated")
        return patient

    def delete_patient(self, patient_id: int) -> None:
        """Soft delete: the row stays for invoices and history."""
        patient = self.get_patient(patient_id)
        patient.deleted_at = datetime.now(timezone.utc)
        self.db.commit()

        logger.info(f"Patient {patient_id} deleted")

    def search_patients(self, query: str) -> List[Patient]:
        pattern = f"%{query}%"
        return self._active().filter(
            or_(
                Patient.first_name.ilike(pattern),
                Patient.last_name.ilike(pattern),
                Patient.email.ilike(pattern),
                Patient.phone.ilike(pattern),
            )
        ).order_by(Patient.id).all()
