from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List

from ...core.database import get_db
from ...api.deps import get_current_user
from ...services.patient_service import PatientService
from ...schemas.common import ApiResponse, envelope
from ...schemas.patient import PatientRequest, PatientResponse

router = APIRouter(prefix="/patients", tags=["Patients"], dependencies=[Depends(get_current_user)])

@router.post("", response_model=ApiResponse[PatientResponse], status_code=status.HTTP_201_CREATED)
async def create_patient(patient_data: PatientRequest, db: Session = Depends(get_db)):
    patient = PatientService(db).create_patient(patient_data)
    return envelope(patient, "Patient created successfully")

@router.get("", response_model=ApiResponse[List[PatientResponse]])
async def list_patients(db: Session = Depends(get_db)):
    return envelope(PatientService(db).list_patients())

@router.get("/search", response_model=ApiResponse[List[PatientResponse]])
async def search_patients(
    query: str = Query(..., min_length=1),
    db: Session = Depends(get_db)
):
    """Search active patients by name, email or phone."""
    return envelope(PatientService(db).search_patients(query))

@router.get("/{patient_id}", response_model=ApiResponse[PatientResponse])
async def get_patient(patient_id: int, db: Session = Depends(get_db)):
    return envelope(PatientService(db).get_patient(patient_id))

@router.put("/{patient_id}", response_model=ApiResponse[PatientResponse])
async def update_patient(
    patient_id: int,
    patient_data: PatientRequest,
    db: Session = Depends(get_db)
):
    patient = PatientService(db).update_patient(patient_id, patient_data)
    return envelope(patient, "Patient updated successfully")

@router.delete("/{patient_id}", response_model=ApiResponse[None])
async def delete_patient(patient_id: int, db: Session = Depends(get_db)):
    PatientService(db).delete_patient(patient_id)
    return envelope(message="Patient deleted successfully")
