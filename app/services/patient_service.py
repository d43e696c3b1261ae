from typing import List
import logging

from sqlalchemy.orm import Session

from ..core.exceptions import DuplicateError, NotFoundError
from ..models.patient import Patient
from ..repositories.patient_repository import PatientRepository
from ..schemas.patient import PatientRequest

logger = logging.getLogger(__name__)

class PatientService:
    def __init__(self, db: Session):
        self.db = db
        self.patients = PatientRepository(db)

    def get_all(self) -> List[Patient]:
        return self.patients.list_all()

    def search(self, query: str) -> List[Patient]:
        return self.patients.search(query.strip())

    def get_by_id(self, patient_id: int) -> Patient:
        patient = self.patients.get(patient_id)
        if not patient:
            raise NotFoundError(f"Patient not found with ID: {patient_id}")
        return patient

    def create(self, data: PatientRequest) -> Patient:
        if self.patients.get_by_email(data.email):
            raise DuplicateError()

        patient = self.patients.add(Patient(**data.model_dump()))
        self.db.commit()
        self.db.refresh(patient)
        logger.info(f"Patient created: {patient.full_name} ({patient.email})")
        return patient

    def update(self, patient_id: int, data: PatientRequest) -> Patient:
        patient = self.get_by_id(patient_id)

        if data.email != patient.email and self.patients.get_by_email(data.email):
            raise DuplicateError()

        for field, value in data.model_dump().items():
            setattr(patient, field, value)

        self.db.commit()
        self.db.refresh(patient)
        logger.info(f"Patient {patient_id} updated")
        return patient
