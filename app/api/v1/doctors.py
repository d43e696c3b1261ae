from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...api.deps import get_admin_user
from ...models.user import User
from ...schemas.doctor import DoctorRequest, DoctorResponse
from ...services.doctor_service import DoctorService

router = APIRouter(prefix="/doctors", tags=["Doctors"])

@router.post("", response_model=DoctorResponse, status_code=status.HTTP_201_CREATED)
async def create_doctor(
    doctor_data: DoctorRequest,
    db: Session = Depends(get_db),
    _: User = Depends(get_admin_user),
):
    return DoctorService(db).create(doctor_data)

@router.get("", response_model=List[DoctorResponse])
async def list_doctors(db: Session = Depends(get_db)):
    return DoctorService(db).get_all()

@router.get("/{doctor_id}", response_model=DoctorResponse)
async def get_doctor(doctor_id: int, db: Session = Depends(get_db)):
    return DoctorService(db).get_by_id(doctor_id)

@router.put("/{doctor_id}", response_model=DoctorResponse)
async def update_doctor(
    doctor_id: int,
    doctor_data: DoctorRequest,
    db: Session = Depends(get_db),
    _: User = Depends(get_admin_user),
):
    return DoctorService(db).update(doctor_id, doctor_data)

@router.delete("/{doctor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_doctor(
    doctor_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_admin_user),
):
    DoctorService(db).delete(doctor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
