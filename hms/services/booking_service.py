from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional
import logging

from ..core.exceptions import (
    ConflictError, NotFoundError, StoreError, ValidationFailedError, store_error_reason
)
from ..models.appointment import Appointment, AppointmentStatus, SLOT_COUNT
from ..models.doctor import Doctor
from ..models.ward import Ward

logger = logging.getLogger(__name__)

# Statuses that end an appointment and give its ward back
CLOSING_STATUSES = {
    AppointmentStatus.COMPLETED,
    AppointmentStatus.CANCELLED,
    AppointmentStatus.NO_SHOW,
}

class BookingService:
    """Appointment lifecycle and the ward occupancy that goes with it.

    A ward is occupied exactly while a scheduled appointment holds it. Booking
    and cancelling change the appointment row and the ward row in the same
    transaction, so a failure of either write leaves both untouched.
    """

    def __init__(self, db: Session):
        self.db = db

    # Appointments

    def list_appointments(
        self,
        app_date: Optional[date] = None,
        doctor_id: Optional[int] = None,
        patient_id: Optional[str] = None,
        status: Optional[AppointmentStatus] = None,
    ) -> List[Appointment]:
        """List appointments, optionally filtered; an empty list when nothing matches."""
        query = self.db.query(Appointment)
        if app_date is not None:
            query = query.filter(Appointment.app_date == app_date)
        if doctor_id is not None:
            query = query.filter(Appointment.doctor_id == doctor_id)
        if patient_id is not None:
            query = query.filter(Appointment.patient_id == patient_id)
        if status is not None:
            query = query.filter(Appointment.status == status)

        return query.order_by(Appointment.app_date, Appointment.slot, Appointment.id).all()

    def get_appointment(self, appointment_id: int) -> Appointment:
        appointment = self.db.query(Appointment).filter(
            Appointment.id == appointment_id
        ).first()

        if not appointment:
            raise NotFoundError("Appointment", "id", appointment_id)
        return appointment

    def next_appointment_id(self) -> int:
        """Preview of the id the store will assign next: max + 1, or 1 when empty."""
        current = self.db.query(func.max(Appointment.id)).scalar()
        return (current or 0) + 1

    def is_slot_taken(self, doctor_id: int, app_date: date, slot: int) -> bool:
        """Whether a live appointment already holds the doctor's slot on that date."""
        return self.db.query(Appointment.id).filter(
            Appointment.doctor_id == doctor_id,
            Appointment.app_date == app_date,
            Appointment.slot == slot,
            Appointment.status != AppointmentStatus.CANCELLED
        ).first() is not None

    def book_appointment(
        self,
        doctor_id: int,
        patient_id: str,
        app_date: date,
        ward_id: int,
        slot: int,
        reason: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Appointment:
        """Book a slot and occupy the ward in one transaction."""
        if not 1 <= slot <= SLOT_COUNT:
            raise ValidationFailedError(f"Slot must be between 1 and {SLOT_COUNT}")

        doctor = self.db.query(Doctor).filter(Doctor.employee_id == doctor_id).first()
        if not doctor:
            raise NotFoundError("Doctor", "id", doctor_id)
        if not doctor.is_available:
            raise ConflictError("Doctor is not available for appointments")

        ward = self.db.query(Ward).filter(Ward.id == ward_id).first()
        if not ward:
            raise NotFoundError("Ward", "id", ward_id)
        if ward.occupied:
            raise ConflictError(f"Ward {ward_id} is already occupied")

        if self.is_slot_taken(doctor_id, app_date, slot):
            logger.warning(
                f"Double booking rejected: doctor {doctor_id}, {app_date}, slot {slot}"
            )
            raise ConflictError(
                f"Doctor already has an appointment in slot {slot} on {app_date}"
            )

        appointment = Appointment(
            doctor_id=doctor_id,
            patient_id=patient_id,
            app_date=app_date,
            ward_id=ward_id,
            slot=slot,
            status=AppointmentStatus.SCHEDULED,
            reason=reason,
            notes=notes
        )

        try:
            self.db.add(appointment)
            self.db.flush()

            # Claim the ward only if it is still free
            claimed = self.db.query(Ward).filter(
                Ward.id == ward_id,
                Ward.occupied.is_(False)
            ).update(
                {"occupied": True, "appointment_id": appointment.id},
                synchronize_session=False
            )
            if not claimed:
                self.db.rollback()
                raise ConflictError(f"Ward {ward_id} is already occupied")

            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning(f"Booking rejected by the store: {store_error_reason(exc)}")
            raise ConflictError("Failed to book appointment: slot is no longer available") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Failed to book appointment: {store_error_reason(exc)}")
            raise StoreError(f"Failed to book appointment: {store_error_reason(exc)}") from exc

        self.db.refresh(appointment)
        logger.info(
            f"Appointment {appointment.id} booked: doctor {doctor_id}, patient {patient_id}, "
            f"{app_date} slot {slot}, ward {ward_id}"
        )
        return appointment

    def cancel_appointment(self, appointment_id: int, ward_id: Optional[int] = None) -> None:
        """Delete an appointment and release its ward in one transaction.

        Only a scheduled appointment still holds a ward. A ward named by the
        caller is released only while no other appointment holds it.
        """
        appointment = self.get_appointment(appointment_id)
        releases = appointment.status == AppointmentStatus.SCHEDULED

        try:
            if releases:
                held = Ward.appointment_id == appointment.id
                if ward_id is not None:
                    held = held | ((Ward.id == ward_id) & Ward.appointment_id.is_(None))
                self.db.query(Ward).filter(held).update(
                    {"occupied": False, "appointment_id": None},
                    synchronize_session=False
                )
            self.db.delete(appointment)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Failed to delete appointment {appointment_id}: {store_error_reason(exc)}")
            raise StoreError(f"Failed to delete appointment: {store_error_reason(exc)}") from exc

        if releases:
            logger.info(f"Appointment {appointment_id} deleted, its ward released")
        else:
            logger.info(f"Appointment {appointment_id} deleted, it held no ward")

    def update_status(self, appointment_id: int, status: AppointmentStatus) -> Appointment:
        """Move a scheduled appointment to another status, releasing its ward when it ends."""
        appointment = self.get_appointment(appointment_id)

        if appointment.status == status:
            return appointment
        if appointment.status != AppointmentStatus.SCHEDULED:
            raise ConflictError(
                f"Appointment is already {appointment.status.value} and cannot be changed"
            )

        try:
            appointment.status = status
            if status in CLOSING_STATUSES:
                self.db.query(Ward).filter(
                    Ward.appointment_id == appointment.id
                ).update(
                    {"occupied": False, "appointment_id": None},
                    synchronize_session=False
                )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Failed to update appointment {appointment_id}: {store_error_reason(exc)}")
            raise StoreError(f"Failed to update appointment: {store_error_reason(exc)}") from exc

        self.db.refresh(appointment)
        logger.info(f"Appointment {appointment_id} status updated to {status.value}")
        return appointment

    # Wards

    def list_wards(self, occupied: Optional[bool] = None) -> List[Ward]:
        query = self.db.query(Ward)
        if occupied is not None:
            query = query.filter(Ward.occupied.is_(occupied))
        return query.order_by(Ward.id).all()

    def list_free_wards(self) -> List[Ward]:
        return self.list_wards(occupied=False)

    def get_ward(self, ward_id: int) -> Ward:
        ward = self.db.query(Ward).filter(Ward.id == ward_id).first()
        if not ward:
            raise NotFoundError("Ward", "id", ward_id)
        return ward

    def wards_of_doctor(self, doctor_id: int) -> List[int]:
        """Wards held by the doctor's scheduled appointments."""
        rows = self.db.query(Appointment.ward_id).filter(
            Appointment.doctor_id == doctor_id,
            Appointment.status == AppointmentStatus.SCHEDULED
        ).all()
        return [row.ward_id for row in rows]

    def set_ward_occupied(self, ward_id: int, occupied: bool) -> None:
        """Unconditionally set a ward's occupancy; repeating the call changes nothing."""
        values = {"occupied": occupied}
        if not occupied:
            values["appointment_id"] = None

        try:
            updated = self.db.query(Ward).filter(Ward.id == ward_id).update(
                values, synchronize_session=False
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Failed to update ward {ward_id}: {store_error_reason(exc)}")
            raise StoreError(f"Failed to update ward: {store_error_reason(exc)}") from exc

        if not updated:
            raise NotFoundError("Ward", "id", ward_id)

        logger.info(f"Ward {ward_id} {'occupied' if occupied else 'released'}")
