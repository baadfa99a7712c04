from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional

from ...core.database import get_db
from ...api.deps import get_current_user
from ...models.appointment import AppointmentStatus
from ...services.booking_service import BookingService
from ...schemas.booking import AppointmentCreate, AppointmentResponse
from ...schemas.common import ApiResponse, envelope

router = APIRouter(prefix="/appointments", tags=["Appointments"], dependencies=[Depends(get_current_user)])

@router.post("", response_model=ApiResponse[AppointmentResponse], status_code=status.HTTP_201_CREATED)
async def book_appointment(booking: AppointmentCreate, db: Session = Depends(get_db)):
    """Book a slot with a doctor; the ward is occupied in the same transaction."""
    appointment = BookingService(db).book_appointment(
        doctor_id=booking.doctor_id,
        patient_id=booking.patient_id,
        app_date=booking.app_date,
        ward_id=booking.ward_id,
        slot=booking.slot,
        reason=booking.reason,
        notes=booking.notes
    )
    return envelope(appointment, "Appointment booked successfully")

@router.get("", response_model=ApiResponse[List[AppointmentResponse]])
async def list_appointments(
    app_date: Optional[date] = Query(None, alias="date"),
    doctor_id: Optional[int] = Query(None, alias="doctorId"),
    patient_id: Optional[str] = Query(None, alias="patientId"),
    appointment_status: Optional[AppointmentStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db)
):
    appointments = BookingService(db).list_appointments(
        app_date=app_date,
        doctor_id=doctor_id,
        patient_id=patient_id,
        status=appointment_status
    )
    return envelope(appointments)

@router.get("/patient/{patient_id}", response_model=ApiResponse[List[AppointmentResponse]])
async def appointments_for_patient(patient_id: str, db: Session = Depends(get_db)):
    return envelope(BookingService(db).list_appointments(patient_id=patient_id))

@router.get("/doctor/{doctor_id}", response_model=ApiResponse[List[AppointmentResponse]])
async def appointments_for_doctor(doctor_id: int, db: Session = Depends(get_db)):
    return envelope(BookingService(db).list_appointments(doctor_id=doctor_id))

@router.get("/date/{app_date}", response_model=ApiResponse[List[AppointmentResponse]])
async def appointments_on_date(app_date: date, db: Session = Depends(get_db)):
    return envelope(BookingService(db).list_appointments(app_date=app_date))

@router.get("/status/{appointment_status}", response_model=ApiResponse[List[AppointmentResponse]])
async def appointments_by_status(appointment_status: AppointmentStatus, db: Session = Depends(get_db)):
    return envelope(BookingService(db).list_appointments(status=appointment_status))

@router.get("/{appointment_id}", response_model=ApiResponse[AppointmentResponse])
async def get_appointment(appointment_id: int, db: Session = Depends(get_db)):
    return envelope(BookingService(db).get_appointment(appointment_id))

@router.patch("/{appointment_id}/status", response_model=ApiResponse[AppointmentResponse])
async def update_status(
    appointment_id: int,
    new_status: AppointmentStatus = Query(..., alias="status"),
    db: Session = Depends(get_db)
):
    appointment = BookingService(db).update_status(appointment_id, new_status)
    return envelope(appointment, "Appointment status updated successfully")

@router.patch("/{appointment_id}/cancel", response_model=ApiResponse[AppointmentResponse])
async def cancel_appointment(appointment_id: int, db: Session = Depends(get_db)):
    """Mark an appointment cancelled and release its ward; the row is kept."""
    appointment = BookingService(db).update_status(appointment_id, AppointmentStatus.CANCELLED)
    return envelope(appointment, "Appointment cancelled successfully")

@router.delete("/{appointment_id}", response_model=ApiResponse[None])
async def delete_appointment(appointment_id: int, db: Session = Depends(get_db)):
    """Delete an appointment and release its ward."""
    BookingService(db).cancel_appointment(appointment_id)
    return envelope(message="Appointment deleted successfully")
