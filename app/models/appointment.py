from sqlalchemy import Column, Integer, ForeignKey, DateTime, String, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship
import enum

from ..core.database import Base

class AppointmentStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"

class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        # Backstop for the check-then-insert in the booking path
        UniqueConstraint("doctor_id", "date_time", name="uq_appointment_doctor_slot"),
    )

    id = Column(Integer, primary_key=True, index=True)

    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False)

    date_time = Column(DateTime, nullable=False, index=True)
    status = Column(SQLEnum(AppointmentStatus), nullable=False, default=AppointmentStatus.CONFIRMED)
    diagnosis = Column(String(1000), nullable=True)
    treatment = Column(String(1000), nullable=True)

    patient = relationship("Patient", back_populates="appointments")
    doctor = relationship("Doctor", back_populates="appointments")

    def __repr__(self):
        return f"<Appointment(id={self.id}, patient_id={self.patient_id}, doctor_id={self.doctor_id}, date='{self.date_time}')>"
