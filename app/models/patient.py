from sqlalchemy import Column, Integer, String, Date, Text
from sqlalchemy.orm import relationship

from ..core.database import Base

class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)

    # Personal information
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(30), nullable=True)
    dni = Column(String(30), nullable=True, index=True)
    birth_date = Column(Date, nullable=True)

    # Medical information
    allergies = Column(Text, nullable=True)
    blood_type = Column(String(10), nullable=True)

    # Relationships
    user = relationship("User", back_populates="patient", uselist=False)
    appointments = relationship("Appointment", back_populates="patient")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<Patient(id={self.id}, name='{self.full_name}')>"
