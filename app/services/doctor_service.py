from typing import List
import logging

from sqlalchemy.orm import Session

from ..core.exceptions import DuplicateError, NotFoundError
from ..models.doctor import Doctor
from ..repositories.doctor_repository import DoctorRepository
from ..schemas.doctor import DoctorRequest

logger = logging.getLogger(__name__)

class DoctorService:
    def __init__(self, db: Session):
        self.db = db
        self.doctors = DoctorRepository(db)

    def create(self, data: DoctorRequest) -> Doctor:
        if self.doctors.get_by_email(data.email):
            raise DuplicateError("A doctor with this email already exists")

        doctor = self.doctors.add(Doctor(**data.model_dump()))
        self.db.commit()
        self.db.refresh(doctor)
        logger.info(f"Doctor created: {doctor.full_name}")
        return doctor

    def get_by_id(self, doctor_id: int) -> Doctor:
        doctor = self.doctors.get(doctor_id)
        if not doctor:
            raise NotFoundError("Doctor not found")
        return doctor

    def get_all(self) -> List[Doctor]:
        return self.doctors.list_all()

    def update(self, doctor_id: int, data: DoctorRequest) -> Doctor:
        doctor = self.get_by_id(doctor_id)

        if data.email != doctor.email and self.doctors.get_by_email(data.email):
            raise DuplicateError("A doctor with this email already exists")

        for field, value in data.model_dump().items():
            setattr(doctor, field, value)

        self.db.commit()
        self.db.refresh(doctor)
        logger.info(f"Doctor {doctor_id} updated")
        return doctor

    def delete(self, doctor_id: int) -> None:
        """Delete a doctor together with their appointments."""
        doctor = self.get_by_id(doctor_id)
        self.doctors.delete(doctor)
        self.db.commit()
        logger.warning(f"Doctor {doctor_id} deleted")
