from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.sql import func

from ..core.database import Base

class Feedback(Base):
    __tablename__ = "feedback"

    feedback_no = Column(Integer, primary_key=True, index=True)
    patient_id = Column(String(50), nullable=False)
    employee_name = Column(String(100), nullable=False)
    review = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
