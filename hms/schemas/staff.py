from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .common import CamelModel, Money
from ..models.employee import EmployeeKind

# Portal (unversioned) payloads keep the original camelCase keys

class EmployeeCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    employee_id: Optional[int] = Field(None, alias="employeeID", gt=0)
    name: str = Field(..., min_length=1, max_length=100)
    age: Optional[int] = Field(None, ge=0, le=120)
    salary: Optional[Money] = Field(None, ge=0)
    email: Optional[str] = Field(None, max_length=255)
    designation: str = Field(..., min_length=1, max_length=100)
    specialization: Optional[str] = Field(None, alias="specialisation", max_length=100)
    kind: Optional[EmployeeKind] = None

class EmployeeDelete(BaseModel):
    employee_id: int = Field(..., alias="employeeID")

class PortalEmployee(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    employee_id: int = Field(..., alias="employeeID")
    name: str
    age: Optional[int] = None
    salary: Optional[Money] = None
    email: Optional[str] = None
    designation: str

class PortalDoctor(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    employee_id: int = Field(..., alias="employeeID")
    specialization: str = Field(..., alias="specialisation")
    display_name: str = Field(..., alias="docName")
    salary: Optional[Money] = None

# Versioned API

class DoctorBase(CamelModel):
    name: str = Field(..., min_length=2, max_length=100)
    age: Optional[int] = Field(None, ge=0, le=120)
    email: Optional[EmailStr] = None
    salary: Optional[Money] = Field(None, ge=0)
    specialization: str = Field(..., min_length=1, max_length=100)
    is_available: bool = True

class DoctorCreate(DoctorBase):
    employee_id: Optional[int] = Field(None, gt=0)

class DoctorUpdate(DoctorBase):
    pass

class DoctorResponse(CamelModel):
    employee_id: int
    name: str
    age: Optional[int] = None
    email: Optional[str] = None
    salary: Optional[Money] = None
    specialization: str
    is_available: bool
