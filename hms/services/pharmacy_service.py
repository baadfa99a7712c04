from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from decimal import Decimal
from typing import List, Optional
import logging

from ..core.exceptions import ConflictError, StoreError, store_error_reason
from ..models.pharmacy import Medicine, PaymentRecord

logger = logging.getLogger(__name__)

class PharmacyService:
    def __init__(self, db: Session):
        self.db = db

    def list_medicines(self) -> List[Medicine]:
        return self.db.query(Medicine).order_by(Medicine.name).all()

    def latest_payment_id(self) -> Optional[int]:
        return self.db.query(func.max(PaymentRecord.payment_id)).scalar()

    def next_payment_id(self) -> int:
        return (self.latest_payment_id() or 0) + 1

    def record_payment(self, amount: Decimal, payment_id: Optional[int] = None) -> PaymentRecord:
        """Append a payment record; the store assigns the id when none is given."""
        record = PaymentRecord(payment_id=payment_id, amount=amount)

        try:
            self.db.add(record)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning(f"Payment record {payment_id} rejected: {store_error_reason(exc)}")
            raise ConflictError(f"Payment {payment_id} has already been recorded") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(f"Failed to record payment: {store_error_reason(exc)}") from exc

        self.db.refresh(record)
        logger.info(f"Payment {record.payment_id} recorded for {record.amount}")
        return record

    def list_payment_records(self) -> List[PaymentRecord]:
        return self.db.query(PaymentRecord).order_by(PaymentRecord.payment_id).all()
