from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Dict, List, Optional

from ...core.database import get_db
from ...services.feedback_service import FeedbackService
from ...services.pharmacy_service import PharmacyService
from ...schemas.common import ActionResult
from ...schemas.pharmacy import (
    FeedbackRequest, MedicineResponse, PaymentRecordRequest, PaymentRecordResponse
)

router = APIRouter(tags=["Portal: Pharmacy"])

@router.get("/pharmacy", response_model=List[MedicineResponse])
async def list_medicines(db: Session = Depends(get_db)):
    """Medicine catalogue."""
    return PharmacyService(db).list_medicines()

@router.get("/fetchrecord", response_model=List[PaymentRecordResponse])
async def list_payment_records(db: Session = Depends(get_db)):
    return PharmacyService(db).list_payment_records()

@router.get("/latestPaymentID")
async def latest_payment_id(db: Session = Depends(get_db)) -> Dict[str, Optional[int]]:
    return {"paymentID": PharmacyService(db).latest_payment_id()}

@router.get("/nextPaymentID")
async def next_payment_id(db: Session = Depends(get_db)) -> Dict[str, int]:
    return {"paymentID": PharmacyService(db).next_payment_id()}

@router.post("/paymentrecord")
async def record_payment(
    payment: PaymentRecordRequest,
    db: Session = Depends(get_db)
):
    """Record a pharmacy checkout."""
    try:
        record = PharmacyService(db).record_payment(payment.amount, payment.payment_id)
    except HTTPException as exc:
        return {"success": False, "message": exc.detail, "paymentID": payment.payment_id}

    return {
        "success": True,
        "message": "Payment submitted successfully",
        "paymentID": record.payment_id
    }

# The patient portal posts reviews to /doctors
@router.post("/doctors", response_model=ActionResult)
@router.post("/feedback", response_model=ActionResult)
async def submit_feedback(
    feedback: FeedbackRequest,
    db: Session = Depends(get_db)
):
    """Submit a review of an employee."""
    try:
        FeedbackService(db).submit_feedback(
            patient_id=feedback.patient_id,
            employee_name=feedback.employee_name,
            review=feedback.review,
            feedback_no=feedback.feedback_no
        )
    except HTTPException:
        return ActionResult(success=False, message="Failed to Submit Feedback")

    return ActionResult(success=True, message="Feedback submitted successfully")
