from sqlalchemy import Column, Integer, String, ForeignKey, Date, DateTime, Text, Index, CheckConstraint, Enum as SQLEnum, text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum

from ..core.database import Base

SLOT_COUNT = 5

class AppointmentStatus(str, enum.Enum):
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"

class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        CheckConstraint(f"slot BETWEEN 1 AND {SLOT_COUNT}", name="ck_appointments_slot"),
        # One live booking per doctor, date and slot
        Index(
            "uq_appointments_doctor_date_slot",
            "doctor_id", "app_date", "slot",
            unique=True,
            sqlite_where=text("status != 'CANCELLED'"),
            postgresql_where=text("status != 'CANCELLED'"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)

    # Relationships
    doctor_id = Column(Integer, ForeignKey("doctors.employee_id"), nullable=False, index=True)
    patient_id = Column(String(50), nullable=False, index=True)
    ward_id = Column(Integer, ForeignKey("wards.id"), nullable=False)

    # Appointment details
    app_date = Column(Date, nullable=False, index=True)
    slot = Column(Integer, nullable=False)
    status = Column(SQLEnum(AppointmentStatus), default=AppointmentStatus.SCHEDULED, nullable=False)
    reason = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    # Tracking
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    doctor = relationship("Doctor", back_populates="appointments")

    @property
    def doctor_name(self):
        return self.doctor.display_name if self.doctor else None

    @property
    def doctor_specialization(self):
        return self.doctor.specialization if self.doctor else None

    def __repr__(self):
        return f"<Appointment(id={self.id}, doctor_id={self.doctor_id}, date='{self.app_date}', slot={self.slot})>"
