from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from ..core.exceptions import ConflictError
from ..models.feedback import Feedback

logger = logging.getLogger(__name__)

class FeedbackService:
    def __init__(self, db: Session):
        self.db = db

    def submit_feedback(
        self,
        patient_id: str,
        employee_name: str,
        review: str,
        feedback_no: Optional[int] = None,
    ) -> Feedback:
        feedback = Feedback(
            feedback_no=feedback_no,
            patient_id=patient_id,
            employee_name=employee_name,
            review=review
        )
        try:
            self.db.add(feedback)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError(f"Feedback {feedback_no} already exists") from exc

        self.db.refresh(feedback)
        logger.info(f"Feedback {feedback.feedback_no} submitted by {patient_id}")
        return feedback

    def list_feedback(self) -> List[Feedback]:
        return self.db.query(Feedback).order_by(Feedback.feedback_no).all()
