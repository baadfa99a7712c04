from decimal import Decimal
from sqlalchemy import Column, Integer, String, ForeignKey, Date, DateTime, Text, Numeric, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum

from ..core.database import Base

ZERO = Decimal("0.00")

class InvoiceStatus(str, enum.Enum):
    PENDING = "PENDING"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    PAID = "PAID"
    CANCELLED = "CANCELLED"

class PaymentMethod(str, enum.Enum):
    CASH = "CASH"
    CARD = "CARD"
    INSURANCE = "INSURANCE"
    UPI = "UPI"
    OTHER = "OTHER"

class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    invoice_number = Column(String(40), unique=True, nullable=False)

    # Relationships
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    appointment_id = Column(Integer, ForeignKey("appointments.id", ondelete="SET NULL"), nullable=True, index=True)

    # Charges
    consultation_fee = Column(Numeric(10, 2), nullable=False)
    medication_charges = Column(Numeric(10, 2), nullable=False, default=ZERO)
    test_charges = Column(Numeric(10, 2), nullable=False, default=ZERO)
    other_charges = Column(Numeric(10, 2), nullable=False, default=ZERO)
    discount = Column(Numeric(10, 2), nullable=False, default=ZERO)
    tax = Column(Numeric(10, 2), nullable=False, default=ZERO)

    # Totals
    total_amount = Column(Numeric(10, 2), nullable=False)
    paid_amount = Column(Numeric(10, 2), nullable=False, default=ZERO)
    balance_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(SQLEnum(InvoiceStatus), nullable=False, default=InvoiceStatus.PENDING, index=True)
    payment_method = Column(SQLEnum(PaymentMethod), nullable=True)

    notes = Column(Text, nullable=True)
    invoice_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=True)
    paid_at = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    patient = relationship("Patient", back_populates="invoices")
    items = relationship("InvoiceItem", back_populates="invoice", cascade="all, delete-orphan")
    payments = relationship(
        "Payment", back_populates="invoice", cascade="all, delete-orphan", order_by="Payment.id"
    )

    @property
    def patient_name(self):
        return self.patient.full_name if self.patient else None

    def calculate_totals(self) -> None:
        """Recompute total, balance and status from the charges and the amount paid."""
        items_total = sum((item.total_price for item in self.items), ZERO)
        subtotal = (
            Decimal(self.consultation_fee)
            + Decimal(self.medication_charges or ZERO)
            + Decimal(self.test_charges or ZERO)
            + Decimal(self.other_charges or ZERO)
            + items_total
        )
        paid = Decimal(self.paid_amount or ZERO)
        self.paid_amount = paid
        self.total_amount = subtotal - Decimal(self.discount or ZERO) + Decimal(self.tax or ZERO)
        self.balance_amount = self.total_amount - paid

        if self.status == InvoiceStatus.CANCELLED:
            return
        if self.balance_amount == ZERO:
            self.status = InvoiceStatus.PAID
        elif paid > ZERO:
            self.status = InvoiceStatus.PARTIALLY_PAID
        else:
            self.status = InvoiceStatus.PENDING

    def __repr__(self):
        return f"<Invoice(id={self.id}, number='{self.invoice_number}', status='{self.status}')>"

class InvoiceItem(Base):
    __tablename__ = "invoice_items"

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)

    invoice = relationship("Invoice", back_populates="items")

class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(SQLEnum(PaymentMethod), nullable=False)
    transaction_id = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)
    payment_date = Column(DateTime, server_default=func.now())

    invoice = relationship("Invoice", back_populates="payments")
