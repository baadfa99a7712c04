from datetime import date, datetime
from typing import Optional
from pydantic import EmailStr, Field, field_validator

from .common import CamelModel
from ..models.patient import Gender

PHONE_PATTERN = r"^[0-9]{10,15}$"

class PatientRequest(CamelModel):
    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    email: Optional[EmailStr] = None
    phone: str = Field(..., pattern=PHONE_PATTERN)
    date_of_birth: date
    gender: Gender
    address: Optional[str] = None
    blood_group: Optional[str] = Field(None, pattern=r"^(A|B|AB|O)[+-]$")
    emergency_contact: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    medical_history: Optional[str] = None
    allergies: Optional[str] = None

    @field_validator("date_of_birth")
    @classmethod
    def date_of_birth_in_past(cls, value: date) -> date:
        if value >= date.today():
            raise ValueError("Date of birth must be in the past")
        return value

class PatientResponse(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: str
    date_of_birth: date
    gender: Gender
    address: Optional[str] = None
    blood_group: Optional[str] = None
    emergency_contact: Optional[str] = None
    medical_history: Optional[str] = None
    allergies: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
