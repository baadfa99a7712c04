from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from decimal import Decimal
from typing import List, Optional
import logging

from ..core.exceptions import (
    ConflictError, NotFoundError, StoreError, ValidationFailedError, store_error_reason
)
from ..models.appointment import Appointment, AppointmentStatus
from ..models.doctor import Doctor
from ..models.employee import Employee, EmployeeKind
from ..models.ward import Ward

logger = logging.getLogger(__name__)

class EmployeeService:
    def __init__(self, db: Session):
        self.db = db

    def add_employee(
        self,
        name: str,
        designation: str,
        employee_id: Optional[int] = None,
        age: Optional[int] = None,
        salary: Optional[Decimal] = None,
        email: Optional[str] = None,
        specialization: Optional[str] = None,
        kind: Optional[EmployeeKind] = None,
        is_available: bool = True,
    ) -> Employee:
        """Create an employee and, for doctors, the doctor record sharing its id.

        Both rows are written in one transaction. A failure of the doctor insert
        is reported separately from a failure of the employee insert.
        """
        kind = kind or EmployeeKind.from_designation(designation)
        if kind == EmployeeKind.DOCTOR and not (specialization and specialization.strip()):
            raise ValidationFailedError("Specialisation is required for doctors")

        if employee_id is not None and self.db.query(Employee).filter(
            Employee.employee_id == employee_id
        ).first():
            raise ConflictError(f"Employee with ID {employee_id} already exists")

        employee = Employee(
            employee_id=employee_id,
            name=name.strip(),
            age=age,
            salary=salary,
            email=email,
            designation=designation.strip(),
            kind=kind
        )

        try:
            self.db.add(employee)
            self.db.flush()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning(f"Employee insert rejected: {store_error_reason(exc)}")
            raise ConflictError(f"Failed to add employee: {store_error_reason(exc)}") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Employee insert failed: {store_error_reason(exc)}")
            raise StoreError(f"Failed to add employee: {store_error_reason(exc)}") from exc

        if kind == EmployeeKind.DOCTOR:
            doctor = Doctor(
                employee_id=employee.employee_id,
                specialization=specialization.strip(),
                display_name=employee.name,
                salary=employee.salary,
                is_available=is_available
            )
            try:
                self.db.add(doctor)
                self.db.flush()
            except SQLAlchemyError as exc:
                self.db.rollback()
                logger.error(f"Doctor insert failed for employee {employee.employee_id}: {store_error_reason(exc)}")
                raise StoreError(f"Failed to add doctor record: {store_error_reason(exc)}") from exc

        self.db.commit()
        self.db.refresh(employee)

        logger.info(f"Employee {employee.employee_id} added as {kind.value}")
        return employee

    def delete_employee(self, employee_id: int) -> None:
        """Remove an employee with its doctor record and appointments, releasing their wards.

        Either every change applies or none does.
        """
        employee = self.db.query(Employee).filter(
            Employee.employee_id == employee_id
        ).first()
        if not employee:
            raise NotFoundError("Employee", "id", employee_id)

        try:
            ward_ids = [
                row.ward_id for row in self.db.query(Appointment.ward_id).filter(
                    Appointment.doctor_id == employee_id,
                    Appointment.status == AppointmentStatus.SCHEDULED
                ).all()
            ]
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Failed to fetch wards of doctor {employee_id}: {store_error_reason(exc)}")
            raise StoreError(f"Failed to fetch wards of doctor: {store_error_reason(exc)}") from exc

        # Dependents go first so stores enforcing foreign keys accept each statement
        try:
            if ward_ids:
                self.db.query(Ward).filter(Ward.id.in_(ward_ids)).update(
                    {"occupied": False, "appointment_id": None},
                    synchronize_session=False
                )
            removed = self.db.query(Appointment).filter(
                Appointment.doctor_id == employee_id
            ).delete(synchronize_session=False)
            self.db.query(Doctor).filter(
                Doctor.employee_id == employee_id
            ).delete(synchronize_session=False)
            self.db.query(Employee).filter(
                Employee.employee_id == employee_id
            ).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Cascading delete of employee {employee_id} rolled back: {store_error_reason(exc)}")
            raise StoreError(f"Failed to delete employee: {store_error_reason(exc)}") from exc

        self.db.expunge_all()
        logger.info(
            f"Employee {employee_id} deleted with {removed} appointment(s); "
            f"wards released: {sorted(set(ward_ids))}"
        )

    def list_employees(self) -> List[Employee]:
        return self.db.query(Employee).order_by(Employee.employee_id).all()

    # Doctors

    def list_doctors(
        self,
        available: Optional[bool] = None,
        specialization: Optional[str] = None,
    ) -> List[Doctor]:
        query = self.db.query(Doctor)
        if available is not None:
            query = query.filter(Doctor.is_available.is_(available))
        if specialization:
            query = query.filter(Doctor.specialization.ilike(specialization))
        return query.order_by(Doctor.employee_id).all()

    def get_doctor(self, employee_id: int) -> Doctor:
        doctor = self.db.query(Doctor).filter(Doctor.employee_id == employee_id).first()
        if not doctor:
            raise NotFoundError("Doctor", "id", employee_id)
        return doctor

    def doctor_name(self, employee_id: int) -> str:
        return self.get_doctor(employee_id).display_name

    def search_doctors(self, search: str) -> List[Doctor]:
        pattern = f"%{search.strip()}%"
        return self.db.query(Doctor).filter(
            or_(
                Doctor.display_name.ilike(pattern),
                Doctor.specialization.ilike(pattern)
            )
        ).order_by(Doctor.employee_id).all()

    def update_doctor(
        self,
        employee_id: int,
        name: str,
        specialization: str,
        age: Optional[int] = None,
        salary: Optional[Decimal] = None,
        email: Optional[str] = None,
        is_available: bool = True,
    ) -> Doctor:
        """Update a doctor, keeping the employee row in step."""
        doctor = self.get_doctor(employee_id)
        employee = doctor.employee

        employee.name = name.strip()
        employee.age = age
        employee.salary = salary
        employee.email = email

        doctor.display_name = employee.name
        doctor.specialization = specialization.strip()
        doctor.salary = salary
        doctor.is_available = is_available

        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(f"Failed to update doctor: {store_error_reason(exc)}") from exc

        self.db.refresh(doctor)
        logger.info(f"Doctor {employee_id} updated")
        return doctor

    def set_availability(self, employee_id: int, is_available: bool) -> Doctor:
        doctor = self.get_doctor(employee_id)
        doctor.is_available = is_available
        self.db.commit()
        self.db.refresh(doctor)

        logger.info(f"Doctor {employee_id} availability set to {is_available}")
        return doctor
