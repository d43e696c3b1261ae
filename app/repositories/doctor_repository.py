from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.doctor import Doctor

class DoctorRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, doctor_id: int) -> Optional[Doctor]:
        return self.db.get(Doctor, doctor_id)

    def get_by_email(self, email: str) -> Optional[Doctor]:
        return self.db.query(Doctor).filter(Doctor.email == email).first()

    def list_all(self) -> List[Doctor]:
        return self.db.query(Doctor).order_by(Doctor.last_name.asc(), Doctor.first_name.asc()).all()

    def add(self, doctor: Doctor) -> Doctor:
        self.db.add(doctor)
        return doctor

    def delete(self, doctor: Doctor) -> None:
        self.db.delete(doctor)
