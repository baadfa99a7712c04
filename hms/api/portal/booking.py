from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import Dict, List

from ...core.database import get_db
from ...services.booking_service import BookingService
from ...schemas.common import ActionResult
from ...schemas.booking import (
    BookAppointmentRequest, BookingResult, CancelAppointmentRequest,
    PortalAppointment, PortalWard, WardToggleRequest
)

router = APIRouter(tags=["Portal: Booking"])

@router.get("/ward", response_model=List[PortalWard])
async def list_free_wards(db: Session = Depends(get_db)):
    """Wards that are not occupied."""
    return BookingService(db).list_free_wards()

@router.get("/appointments", response_model=List[PortalAppointment])
async def appointments_on_date(
    app_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db)
):
    return BookingService(db).list_appointments(app_date=app_date)

@router.get("/appointmentList", response_model=List[PortalAppointment])
async def appointment_list(db: Session = Depends(get_db)):
    return BookingService(db).list_appointments()

@router.get("/appointmentListForDoctor", response_model=List[PortalAppointment])
async def appointments_for_doctor(
    doctor_id: int = Query(..., alias="docID"),
    db: Session = Depends(get_db)
):
    return BookingService(db).list_appointments(doctor_id=doctor_id)

@router.get("/fetchWardsOfDoctor")
async def wards_of_doctor(
    doctor_id: int = Query(..., alias="docID"),
    db: Session = Depends(get_db)
) -> List[Dict[str, int]]:
    return [{"wardID": ward_id} for ward_id in BookingService(db).wards_of_doctor(doctor_id)]

@router.get("/nextAppointmentID")
async def next_appointment_id(db: Session = Depends(get_db)) -> Dict[str, int]:
    return {"appointmentID": BookingService(db).next_appointment_id()}

@router.post("/bookAppointment", response_model=BookingResult)
async def book_appointment(
    booking: BookAppointmentRequest,
    db: Session = Depends(get_db)
):
    """Book a slot with a doctor and occupy the requested ward."""
    try:
        appointment = BookingService(db).book_appointment(
            doctor_id=booking.doctor_id,
            patient_id=booking.patient_id,
            app_date=booking.app_date,
            ward_id=booking.ward_id,
            slot=booking.slot
        )
    except HTTPException as exc:
        return BookingResult(success=False, message=exc.detail)

    return BookingResult(
        success=True,
        message="Appointment booked successfully",
        appointment_id=appointment.id
    )

@router.post("/deleteAppointment", response_model=ActionResult)
async def delete_appointment(
    cancel: CancelAppointmentRequest,
    db: Session = Depends(get_db)
):
    """Delete an appointment and release its ward."""
    try:
        BookingService(db).cancel_appointment(cancel.appointment_id, cancel.ward_id)
    except HTTPException as exc:
        return ActionResult(success=False, message=exc.detail)

    return ActionResult(success=True, message="Appointment and ward updated successfully")

@router.post("/bookWard", response_model=ActionResult)
async def book_ward(
    toggle: WardToggleRequest,
    db: Session = Depends(get_db)
):
    try:
        BookingService(db).set_ward_occupied(toggle.ward_id, True)
    except HTTPException:
        return ActionResult(success=False, message="Failed to occupy ward")

    return ActionResult(success=True, message="Ward occupied successfully")

@router.post("/unbookWard", response_model=ActionResult)
async def unbook_ward(
    toggle: WardToggleRequest,
    db: Session = Depends(get_db)
):
    try:
        BookingService(db).set_ward_occupied(toggle.ward_id, False)
    except HTTPException:
        return ActionResult(success=False, message="Failed to unoccupy ward")

    return ActionResult(success=True, message="Ward unoccupied successfully")
