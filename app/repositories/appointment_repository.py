from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.appointment import Appointment, AppointmentStatus
from ..models.patient import Patient

class AppointmentRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, appointment_id: int) -> Optional[Appointment]:
        return self.db.get(Appointment, appointment_id)

    def list_all(self) -> List[Appointment]:
        return self.db.query(Appointment).order_by(Appointment.date_time.asc()).all()

    def exists_for_doctor_at(self, doctor_id: int, date_time: datetime) -> bool:
        return self.db.query(
            self.db.query(Appointment).filter(
                Appointment.doctor_id == doctor_id,
                Appointment.date_time == date_time,
            ).exists()
        ).scalar()

    def list_for_doctor_between(
        self, doctor_id: int, start: datetime, end: datetime
    ) -> List[Appointment]:
        """Appointments of a doctor with ``start <= date_time <= end``."""
        return (
            self.db.query(Appointment)
            .filter(
                Appointment.doctor_id == doctor_id,
                Appointment.date_time.between(start, end),
            )
            .order_by(Appointment.date_time.asc())
            .all()
        )

    def list_for_patient_email(self, email: str) -> List[Appointment]:
        return (
            self.db.query(Appointment)
            .join(Patient, Appointment.patient_id == Patient.id)
            .filter(Patient.email == email)
            .order_by(Appointment.date_time.desc())
            .all()
        )

    def list_by_status(self, status: AppointmentStatus) -> List[Appointment]:
        return (
            self.db.query(Appointment)
            .filter(Appointment.status == status)
            .order_by(Appointment.date_time.asc())
            .all()
        )

    def add(self, appointment: Appointment) -> Appointment:
        self.db.add(appointment)
        return appointment
