from datetime import datetime
from typing import Annotated, Optional
from pydantic import AfterValidator, BaseModel, EmailStr, Field

from ..models.appointment import Appointment, AppointmentStatus

def _to_local_naive(value: datetime) -> datetime:
    """Appointments are stored as naive local wall-clock times."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value

LocalDateTime = Annotated[datetime, AfterValidator(_to_local_naive)]

class AppointmentRequest(BaseModel):
    doctor_id: int
    date_time: LocalDateTime
    patient_name: str = Field(..., min_length=1, max_length=200)
    patient_email: EmailStr

class SelfBookingRequest(BaseModel):
    doctor_id: int
    date_time: LocalDateTime

class DiagnosisRequest(BaseModel):
    diagnosis: Optional[str] = Field(None, max_length=1000)
    treatment: Optional[str] = Field(None, max_length=1000)

class AppointmentResponse(BaseModel):
    id: int
    date_time: datetime
    status: AppointmentStatus
    diagnosis: Optional[str] = None
    treatment: Optional[str] = None
    doctor_id: int
    doctor_name: str
    doctor_specialty: str
    patient_id: int
    patient_name: str
    patient_email: str

    @classmethod
    def from_appointment(cls, appointment: Appointment) -> "AppointmentResponse":
        return cls(
            id=appointment.id,
            date_time=appointment.date_time,
            status=appointment.status,
            diagnosis=appointment.diagnosis,
            treatment=appointment.treatment,
            doctor_id=appointment.doctor.id,
            doctor_name=appointment.doctor.full_name,
            doctor_specialty=appointment.doctor.specialty,
            patient_id=appointment.patient.id,
            patient_name=appointment.patient.full_name,
            patient_email=appointment.patient.email,
        )
