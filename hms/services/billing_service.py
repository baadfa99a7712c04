from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List
import logging
import secrets

from ..core.exceptions import (
    ConflictError, NotFoundError, StoreError, ValidationFailedError, store_error_reason
)
from ..models.appointment import Appointment
from ..models.billing import ZERO, Invoice, InvoiceItem, InvoiceStatus, Payment
from ..models.patient import Patient
from ..schemas.billing import InvoiceCharges, InvoiceCreate, PaymentCreate

logger = logging.getLogger(__name__)

CHARGE_FIELDS = (
    "consultation_fee", "medication_charges", "test_charges",
    "other_charges", "discount", "tax",
)

def generate_invoice_number() -> str:
    return f"INV-{datetime.now(timezone.utc):%Y%m%d%H%M%S}-{secrets.token_hex(3).upper()}"

class BillingService:
    """Invoices for patients and the payments recorded against them."""

    def __init__(self, db: Session):
        self.db = db

    def _apply_charges(self, invoice: Invoice, data: InvoiceCharges) -> None:
        for field in CHARGE_FIELDS:
            setattr(invoice, field, getattr(data, field))
        invoice.notes = data.notes
        invoice.due_date = data.due_date
        invoice.items = [
            InvoiceItem(
                description=item.description,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total_price=item.unit_price * item.quantity
            )
            for item in data.items
        ]
        invoice.calculate_totals()

        if invoice.total_amount < ZERO:
            raise ValidationFailedError("Discount cannot exceed the invoice total")

    def create_invoice(self, data: InvoiceCreate) -> Invoice:
        patient = self.db.query(Patient).filter(
            Patient.id == data.patient_id,
            Patient.deleted_at.is_(None)
        ).first()
        if not patient:
            raise NotFoundError("Patient", "id", data.patient_id)

        if data.appointment_id is not None:
            appointment = self.db.query(Appointment).filter(
                Appointment.id == data.appointment_id
            ).first()
            if not appointment:
                raise NotFoundError("Appointment", "id", data.appointment_id)

            already_billed = self.db.query(Invoice.id).filter(
                Invoice.appointment_id == data.appointment_id
            ).first()
            if already_billed:
                raise ConflictError(f"Invoice already exists for appointment: {data.appointment_id}")

        invoice = Invoice(
            invoice_number=generate_invoice_number(),
            patient_id=patient.id,
            appointment_id=data.appointment_id,
            invoice_date=date.today(),
            paid_amount=ZERO,
            status=InvoiceStatus.PENDING
        )
        self._apply_charges(invoice, data)

        self.db.add(invoice)
        self.db.commit()
        self.db.refresh(invoice)

        logger.info(f"Invoice {invoice.invoice_number} created for patient {patient.id}: {invoice.total_amount}")
        return invoice

    def get_invoice(self, invoice_id: int) -> Invoice:
        invoice = self.db.query(Invoice).filter(Invoice.id == invoice_id).first()
        if not invoice:
            raise NotFoundError("Invoice", "id", invoice_id)
        return invoice

    def list_invoices(self) -> List[Invoice]:
        return self.db.query(Invoice).order_by(Invoice.id).all()

    def list_by_patient(self, patient_id: int) -> List[Invoice]:
        return self.db.query(Invoice).filter(
            Invoice.patient_id == patient_id
        ).order_by(Invoice.id).all()

    def list_by_status(self, status: InvoiceStatus) -> List[Invoice]:
        return self.db.query(Invoice).filter(
            Invoice.status == status
        ).order_by(Invoice.id).all()

    def update_invoice(self, invoice_id: int, data: InvoiceCharges) -> Invoice:
        invoice = self.get_invoice(invoice_id)

        if invoice.status == InvoiceStatus.CANCELLED:
            raise ConflictError("Cannot update a cancelled invoice")
        if invoice.payments:
            raise ConflictError("Cannot update an invoice with recorded payments")

        self._apply_charges(invoice, data)
        self.db.commit()
        self.db.refresh(invoice)

        logger.info(f"Invoice {invoice.invoice_number} updated: {invoice.total_amount}")
        return invoice

    def delete_invoice(self, invoice_id: int) -> None:
        invoice = self.get_invoice(invoice_id)
        if invoice.payments:
            raise ConflictError("Cannot delete an invoice with recorded payments")

        self.db.delete(invoice)
        self.db.commit()

        logger.info(f"Invoice {invoice_id} deleted")

    def cancel_invoice(self, invoice_id: int) -> Invoice:
        invoice = self.get_invoice(invoice_id)
        if invoice.status == InvoiceStatus.PAID:
            raise ConflictError("Cannot cancel a paid invoice")

        invoice.status = InvoiceStatus.CANCELLED
        self.db.commit()
        self.db.refresh(invoice)

        logger.info(f"Invoice {invoice.invoice_number} cancelled")
        return invoice

    def record_payment(self, invoice_id: int, data: PaymentCreate) -> Payment:
        """Record a payment and recompute the invoice balance in one transaction."""
        invoice = self.get_invoice(invoice_id)

        if invoice.status in (InvoiceStatus.PAID, InvoiceStatus.CANCELLED):
            raise ConflictError(f"Cannot record a payment on a {invoice.status.value.lower()} invoice")

        amount = Decimal(data.amount)
        if amount <= ZERO:
            raise ValidationFailedError("Payment amount must be positive")
        if amount > invoice.balance_amount:
            raise ValidationFailedError(
                f"Payment amount {amount} exceeds the outstanding balance {invoice.balance_amount}"
            )

        payment = Payment(
            amount=amount,
            payment_method=data.payment_method,
            transaction_id=data.transaction_id,
            notes=data.notes
        )

        try:
            invoice.payments.append(payment)
            invoice.paid_amount = Decimal(invoice.paid_amount) + amount
            invoice.payment_method = data.payment_method
            invoice.calculate_totals()
            if invoice.status == InvoiceStatus.PAID:
                invoice.paid_at = datetime.now(timezone.utc)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Payment on invoice {invoice_id} failed: {store_error_reason(exc)}")
            raise StoreError(f"Failed to record payment: {store_error_reason(exc)}") from exc

        self.db.refresh(payment)
        logger.info(f"Payment of {amount} recorded on invoice {invoice.invoice_number}, balance {invoice.balance_amount}")
        return payment

    def list_payments(self, invoice_id: int) -> List[Payment]:
        return self.get_invoice(invoice_id).payments
