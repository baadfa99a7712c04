from sqlalchemy import Column, Integer, String, ForeignKey, Boolean, Numeric
from sqlalchemy.orm import relationship

from ..core.database import Base

class Doctor(Base):
    __tablename__ = "doctors"

    # Same key as the owning employee row
    employee_id = Column(Integer, ForeignKey("employees.employee_id"), primary_key=True, index=True)

    # Professional information
    specialization = Column(String(100), nullable=False)
    display_name = Column(String(100), nullable=False)
    salary = Column(Numeric(12, 2), nullable=True)

    # Availability
    is_available = Column(Boolean, default=True, nullable=False)

    # Relationships
    employee = relationship("Employee", back_populates="doctor")
    appointments = relationship("Appointment", back_populates="doctor")

    @property
    def name(self) -> str:
        return self.display_name

    @property
    def email(self):
        return self.employee.email if self.employee else None

    @property
    def age(self):
        return self.employee.age if self.employee else None

    def __repr__(self):
        return f"<Doctor(id={self.employee_id}, name='{self.display_name}', specialization='{self.specialization}')>"
