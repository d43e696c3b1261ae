from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...api.deps import get_staff_user
from ...schemas.patient import PatientRequest, PatientResponse
from ...services.patient_service import PatientService

router = APIRouter(
    prefix="/patients",
    tags=["Patients"],
    dependencies=[Depends(get_staff_user)],
)

@router.get("", response_model=List[PatientResponse])
async def list_patients(db: Session = Depends(get_db)):
    return PatientService(db).get_all()

@router.get("/search", response_model=List[PatientResponse])
async def search_patients(
    query: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    """Search by first name, last name or dni."""
    return PatientService(db).search(query)

@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(patient_id: int, db: Session = Depends(get_db)):
    return PatientService(db).get_by_id(patient_id)

@router.post("", response_model=PatientResponse)
async def create_patient(patient_data: PatientRequest, db: Session = Depends(get_db)):
    return PatientService(db).create(patient_data)

@router.put("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: int,
    patient_data: PatientRequest,
    db: Session = Depends(get_db),
):
    return PatientService(db).update(patient_id, patient_data)
