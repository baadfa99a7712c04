from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import Field

from .common import CamelModel, Money
from ..models.billing import InvoiceStatus, PaymentMethod

class InvoiceItemRequest(CamelModel):
    description: str = Field(..., min_length=1, max_length=255)
    quantity: int = Field(1, ge=1)
    unit_price: Money = Field(..., ge=0)

class InvoiceCharges(CamelModel):
    consultation_fee: Money = Field(..., gt=0)
    medication_charges: Money = Field(Decimal("0"), ge=0)
    test_charges: Money = Field(Decimal("0"), ge=0)
    other_charges: Money = Field(Decimal("0"), ge=0)
    discount: Money = Field(Decimal("0"), ge=0)
    tax: Money = Field(Decimal("0"), ge=0)
    items: List[InvoiceItemRequest] = []
    notes: Optional[str] = None
    due_date: Optional[date] = None

class InvoiceCreate(InvoiceCharges):
    patient_id: int
    appointment_id: Optional[int] = None

class InvoiceUpdate(InvoiceCharges):
    pass

class InvoiceItemResponse(CamelModel):
    id: int
    description: str
    quantity: int
    unit_price: Money
    total_price: Money

class InvoiceResponse(CamelModel):
    id: int
    invoice_number: str
    patient_id: int
    patient_name: Optional[str] = None
    appointment_id: Optional[int] = None
    consultation_fee: Money
    medication_charges: Money
    test_charges: Money
    other_charges: Money
    discount: Money
    tax: Money
    total_amount: Money
    paid_amount: Money
    balance_amount: Money
    status: InvoiceStatus
    payment_method: Optional[PaymentMethod] = None
    notes: Optional[str] = None
    invoice_date: date
    due_date: Optional[date] = None
    paid_at: Optional[datetime] = None
    items: List[InvoiceItemResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class PaymentCreate(CamelModel):
    amount: Money = Field(..., gt=0)
    payment_method: PaymentMethod
    transaction_id: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None

class PaymentResponse(CamelModel):
    id: int
    invoice_id: int
    amount: Money
    payment_method: PaymentMethod
    transaction_id: Optional[str] = None
    notes: Optional[str] = None
    payment_date: Optional[datetime] = None
