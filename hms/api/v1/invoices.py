from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from ...core.database import get_db
from ...api.deps import get_admin_user, get_current_user
from ...models.billing import InvoiceStatus
from ...services.billing_service import BillingService
from ...schemas.billing import (
    InvoiceCreate, InvoiceResponse, InvoiceUpdate, PaymentCreate, PaymentResponse
)
from ...schemas.common import ApiResponse, envelope

router = APIRouter(prefix="/invoices", tags=["Invoices"], dependencies=[Depends(get_current_user)])

@router.post(
    "",
    response_model=ApiResponse[InvoiceResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_admin_user)]
)
async def create_invoice(invoice_data: InvoiceCreate, db: Session = Depends(get_db)):
    invoice = BillingService(db).create_invoice(invoice_data)
    return envelope(invoice, "Invoice created successfully")

@router.get("", response_model=ApiResponse[List[InvoiceResponse]])
async def list_invoices(db: Session = Depends(get_db)):
    return envelope(BillingService(db).list_invoices())

@router.get("/patient/{patient_id}", response_model=ApiResponse[List[InvoiceResponse]])
async def invoices_for_patient(patient_id: int, db: Session = Depends(get_db)):
    return envelope(BillingService(db).list_by_patient(patient_id))

@router.get("/status/{invoice_status}", response_model=ApiResponse[List[InvoiceResponse]])
async def invoices_by_status(invoice_status: InvoiceStatus, db: Session = Depends(get_db)):
    return envelope(BillingService(db).list_by_status(invoice_status))

@router.get("/{invoice_id}", response_model=ApiResponse[InvoiceResponse])
async def get_invoice(invoice_id: int, db: Session = Depends(get_db)):
    return envelope(BillingService(db).get_invoice(invoice_id))

@router.put("/{invoice_id}", response_model=ApiResponse[InvoiceResponse], dependencies=[Depends(get_admin_user)])
async def update_invoice(
    invoice_id: int,
    invoice_data: InvoiceUpdate,
    db: Session = Depends(get_db)
):
    """Replace the charges of an invoice that has no payments yet."""
    invoice = BillingService(db).update_invoice(invoice_id, invoice_data)
    return envelope(invoice, "Invoice updated successfully")

@router.delete("/{invoice_id}", response_model=ApiResponse[None], dependencies=[Depends(get_admin_user)])
async def delete_invoice(invoice_id: int, db: Session = Depends(get_db)):
    BillingService(db).delete_invoice(invoice_id)
    return envelope(message="Invoice deleted successfully")

@router.patch("/{invoice_id}/cancel", response_model=ApiResponse[InvoiceResponse], dependencies=[Depends(get_admin_user)])
async def cancel_invoice(invoice_id: int, db: Session = Depends(get_db)):
    invoice = BillingService(db).cancel_invoice(invoice_id)
    return envelope(invoice, "Invoice cancelled successfully")

@router.get("/{invoice_id}/payments", response_model=ApiResponse[List[PaymentResponse]])
async def list_payments(invoice_id: int, db: Session = Depends(get_db)):
    return envelope(BillingService(db).list_payments(invoice_id))

@router.post(
    "/{invoice_id}/payments",
    response_model=ApiResponse[PaymentResponse],
    status_code=status.HTTP_201_CREATED
)
async def record_payment(
    invoice_id: int,
    payment_data: PaymentCreate,
    db: Session = Depends(get_db)
):
    """Record a payment and update the invoice balance."""
    payment = BillingService(db).record_payment(invoice_id, payment_data)
    return envelope(payment, "Payment recorded successfully")
