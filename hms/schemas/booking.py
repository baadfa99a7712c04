from datetime import date, datetime
from typing import Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .common import ActionResult, CamelModel
from ..models.appointment import AppointmentStatus, SLOT_COUNT

# Portal (unversioned) payloads

class BookAppointmentRequest(BaseModel):
    doctor_id: int = Field(..., alias="doctorID")
    patient_id: str = Field(..., alias="patientID", min_length=1, max_length=50)
    app_date: date = Field(..., alias="appDate")
    ward_id: int = Field(..., alias="wardID")
    slot: int = Field(..., ge=1, le=SLOT_COUNT)

class CancelAppointmentRequest(BaseModel):
    appointment_id: int = Field(..., alias="appointmentID")
    ward_id: Optional[int] = Field(None, alias="wardID")

class WardToggleRequest(BaseModel):
    ward_id: int = Field(..., validation_alias=AliasChoices("wardID", "wardToBook", "wardToUnbook"))

class BookingResult(ActionResult):
    model_config = ConfigDict(populate_by_name=True)

    appointment_id: Optional[int] = Field(None, alias="appointmentID")

class PortalAppointment(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int = Field(..., alias="appID")
    doctor_id: int = Field(..., alias="doctorID")
    patient_id: str = Field(..., alias="patientID")
    app_date: date = Field(..., alias="appDate")
    ward_id: int = Field(..., alias="wardID")
    slot: int
    status: AppointmentStatus

class PortalWard(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int = Field(..., alias="wardID")
    name: str
    occupied: bool

# Versioned API

class AppointmentCreate(CamelModel):
    doctor_id: int
    patient_id: str = Field(..., min_length=1, max_length=50)
    app_date: date
    ward_id: int
    slot: int = Field(..., ge=1, le=SLOT_COUNT)
    reason: Optional[str] = None
    notes: Optional[str] = None

class AppointmentResponse(CamelModel):
    id: int
    doctor_id: int
    doctor_name: Optional[str] = None
    doctor_specialization: Optional[str] = None
    patient_id: str
    app_date: date
    ward_id: int
    slot: int
    status: AppointmentStatus
    reason: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class WardResponse(CamelModel):
    id: int
    name: str
    occupied: bool
    appointment_id: Optional[int] = None
