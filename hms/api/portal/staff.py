from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List
import logging

from ...core.database import get_db
from ...services.employee_service import EmployeeService
from ...schemas.staff import EmployeeCreate, EmployeeDelete, PortalDoctor, PortalEmployee

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Portal: Staff"])

@router.get("/doctors", response_model=List[PortalDoctor])
async def list_doctors(db: Session = Depends(get_db)):
    """All doctors with their specialisation and salary."""
    return EmployeeService(db).list_doctors()

@router.get("/docDB", response_model=List[PortalEmployee])
async def list_employees(db: Session = Depends(get_db)):
    """All employees."""
    return EmployeeService(db).list_employees()

@router.get("/doctorForDoctorPage", response_model=str)
async def doctor_name(
    doctor_id: int = Query(..., alias="doctorID"),
    db: Session = Depends(get_db)
):
    """Display name of a doctor."""
    try:
        return EmployeeService(db).doctor_name(doctor_id)
    except HTTPException as exc:
        logger.warning(f"Doctor lookup failed: {exc.detail}")
        return "Failed to Retrieve Doctor Name"

@router.post("/addEmployee", response_model=str)
async def add_employee(
    employee_data: EmployeeCreate,
    db: Session = Depends(get_db)
):
    """Add an employee; doctors also get a doctor record."""
    service = EmployeeService(db)
    try:
        employee = service.add_employee(
            name=employee_data.name,
            designation=employee_data.designation,
            employee_id=employee_data.employee_id,
            age=employee_data.age,
            salary=employee_data.salary,
            email=employee_data.email,
            specialization=employee_data.specialization,
            kind=employee_data.kind
        )
    except HTTPException as exc:
        return exc.detail

    if employee.doctor is not None:
        return "Employee and Doctor added successfully"
    return "Employee added successfully"

@router.post("/deleteEmployee", response_model=str)
async def delete_employee(
    delete_data: EmployeeDelete,
    db: Session = Depends(get_db)
):
    """Delete an employee together with its doctor record, appointments and ward holds."""
    try:
        EmployeeService(db).delete_employee(delete_data.employee_id)
    except HTTPException as exc:
        return exc.detail

    return "Employee, doctor, appointments, and wards updated successfully"
