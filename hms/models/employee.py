from sqlalchemy import Column, Integer, String, DateTime, Numeric, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum

from ..core.database import Base

class EmployeeKind(str, enum.Enum):
    DOCTOR = "DOCTOR"
    STAFF = "STAFF"

    @classmethod
    def from_designation(cls, designation: str) -> "EmployeeKind":
        """Infer the kind from a free-text job title."""
        if designation and designation.strip().lower() == "doctor":
            return cls.DOCTOR
        return cls.STAFF

class Employee(Base):
    __tablename__ = "employees"

    employee_id = Column(Integer, primary_key=True, index=True)

    # Personal information
    name = Column(String(100), nullable=False)
    age = Column(Integer, nullable=True)
    email = Column(String(255), nullable=True)

    # Job information
    salary = Column(Numeric(12, 2), nullable=True)
    designation = Column(String(100), nullable=False)
    kind = Column(SQLEnum(EmployeeKind), nullable=False, default=EmployeeKind.STAFF)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())

    # Relationships
    doctor = relationship("Doctor", back_populates="employee", uselist=False)

    def __repr__(self):
        return f"<Employee(id={self.employee_id}, name='{self.name}', designation='{self.designation}')>"
