from sqlalchemy import Column, Integer, String, DateTime, Numeric
from sqlalchemy.sql import func

from ..core.database import Base

class Medicine(Base):
    __tablename__ = "medicines"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False, unique=True)
    price = Column(Numeric(10, 2), nullable=False)

    def __repr__(self):
        return f"<Medicine(id={self.id}, name='{self.name}', price={self.price})>"

class PaymentRecord(Base):
    __tablename__ = "payment_records"

    # Append-only; never updated or deleted
    payment_id = Column(Integer, primary_key=True, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        return f"<PaymentRecord(id={self.payment_id}, amount={self.amount})>"
