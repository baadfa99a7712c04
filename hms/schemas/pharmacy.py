from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .common import Money

class MedicineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: Money

class PaymentRecordRequest(BaseModel):
    payment_id: Optional[int] = Field(None, alias="paymentID", gt=0)
    amount: Money = Field(..., gt=0)

class PaymentRecordResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    payment_id: int = Field(..., alias="paymentID")
    amount: Money

class FeedbackRequest(BaseModel):
    feedback_no: Optional[int] = Field(None, alias="feedbackNo", gt=0)
    patient_id: str = Field(..., alias="patientID", min_length=1, max_length=50)
    employee_name: str = Field(..., alias="employeeName", min_length=1, max_length=100)
    review: str = Field(..., min_length=1)
