from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..models.patient import Patient

class PatientRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, patient_id: int) -> Optional[Patient]:
        return self.db.get(Patient, patient_id)

    def get_by_email(self, email: str) -> Optional[Patient]:
        return self.db.query(Patient).filter(Patient.email == email).first()

    def get_by_dni(self, dni: str) -> Optional[Patient]:
        return self.db.query(Patient).filter(Patient.dni == dni).first()

    def list_all(self) -> List[Patient]:
        return self.db.query(Patient).order_by(Patient.last_name.asc(), Patient.first_name.asc()).all()

    def search(self, query: str) -> List[Patient]:
        """Case-insensitive substring match on first name, last name or dni."""
        pattern = f"%{query}%"
        return (
            self.db.query(Patient)
            .filter(
                or_(
                    Patient.first_name.ilike(pattern),
                    Patient.last_name.ilike(pattern),
                    Patient.dni.ilike(pattern),
                )
            )
            .order_by(Patient.last_name.asc())
            .all()
        )

    def add(self, patient: Patient) -> Patient:
        self.db.add(patient)
        return patient
