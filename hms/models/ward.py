from sqlalchemy import Column, Integer, String, ForeignKey, Boolean

from ..core.database import Base

class Ward(Base):
    __tablename__ = "wards"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    occupied = Column(Boolean, default=False, nullable=False)

    # Appointment currently holding the ward; cleared whenever it is released
    appointment_id = Column(
        Integer,
        ForeignKey("appointments.id", ondelete="SET NULL", use_alter=True, name="fk_wards_appointment_id"),
        nullable=True,
    )

    def __repr__(self):
        return f"<Ward(id={self.id}, name='{self.name}', occupied={self.occupied})>"
