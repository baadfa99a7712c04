from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List

from ...core.database import get_db
from ...api.deps import get_admin_user, get_current_user
from ...models.employee import EmployeeKind
from ...services.employee_service import EmployeeService
from ...schemas.common import ApiResponse, envelope
from ...schemas.staff import DoctorCreate, DoctorResponse, DoctorUpdate

router = APIRouter(prefix="/doctors", tags=["Doctors"], dependencies=[Depends(get_current_user)])

@router.post(
    "",
    response_model=ApiResponse[DoctorResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_admin_user)]
)
async def create_doctor(doctor_data: DoctorCreate, db: Session = Depends(get_db)):
    """Create a doctor together with its employee record (admin only)."""
    service = EmployeeService(db)
    employee = service.add_employee(
        name=doctor_data.name,
        designation="Doctor",
        employee_id=doctor_data.employee_id,
        age=doctor_data.age,
        salary=doctor_data.salary,
        email=doctor_data.email,
        specialization=doctor_data.specialization,
        kind=EmployeeKind.DOCTOR,
        is_available=doctor_data.is_available
    )
    return envelope(service.get_doctor(employee.employee_id), "Doctor created successfully")

@router.get("", response_model=ApiResponse[List[DoctorResponse]])
async def list_doctors(db: Session = Depends(get_db)):
    return envelope(EmployeeService(db).list_doctors())

@router.get("/available", response_model=ApiResponse[List[DoctorResponse]])
async def list_available_doctors(db: Session = Depends(get_db)):
    return envelope(EmployeeService(db).list_doctors(available=True))

@router.get("/specialization/{specialization}", response_model=ApiResponse[List[DoctorResponse]])
async def list_doctors_by_specialization(specialization: str, db: Session = Depends(get_db)):
    return envelope(EmployeeService(db).list_doctors(specialization=specialization))

@router.get("/search", response_model=ApiResponse[List[DoctorResponse]])
async def search_doctors(
    query: str = Query(..., min_length=1),
    db: Session = Depends(get_db)
):
    """Search doctors by name or specialization."""
    return envelope(EmployeeService(db).search_doctors(query))

@router.get("/{doctor_id}", response_model=ApiResponse[DoctorResponse])
async def get_doctor(doctor_id: int, db: Session = Depends(get_db)):
    return envelope(EmployeeService(db).get_doctor(doctor_id))

@router.put("/{doctor_id}", response_model=ApiResponse[DoctorResponse], dependencies=[Depends(get_admin_user)])
async def update_doctor(
    doctor_id: int,
    doctor_data: DoctorUpdate,
    db: Session = Depends(get_db)
):
    doctor = EmployeeService(db).update_doctor(
        doctor_id,
        name=doctor_data.name,
        specialization=doctor_data.specialization,
        age=doctor_data.age,
        salary=doctor_data.salary,
        email=doctor_data.email,
        is_available=doctor_data.is_available
    )
    return envelope(doctor, "Doctor updated successfully")

@router.patch(
    "/{doctor_id}/availability",
    response_model=ApiResponse[DoctorResponse],
    dependencies=[Depends(get_admin_user)]
)
async def set_availability(
    doctor_id: int,
    is_available: bool = Query(..., alias="isAvailable"),
    db: Session = Depends(get_db)
):
    doctor = EmployeeService(db).set_availability(doctor_id, is_available)
    return envelope(doctor, "Doctor availability updated successfully")

@router.delete("/{doctor_id}", response_model=ApiResponse[None], dependencies=[Depends(get_admin_user)])
async def delete_doctor(doctor_id: int, db: Session = Depends(get_db)):
    """Delete a doctor with its appointments, releasing their wards (admin only)."""
    service = EmployeeService(db)
    service.get_doctor(doctor_id)
    service.delete_employee(doctor_id)
    return envelope(message="Doctor deleted successfully")
