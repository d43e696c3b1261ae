from datetime import time

from sqlalchemy import Column, Integer, String, Float, Text, Time
from sqlalchemy.orm import relationship

from ..core.database import Base

DEFAULT_WORK_START = time(9, 0)
DEFAULT_WORK_END = time(17, 0)

class Doctor(Base):
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    specialty = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    bio = Column(Text, nullable=True)
    consultation_price = Column(Float, nullable=False, default=0.0)

    # Daily bookable window, both ends inclusive
    work_start = Column(Time, nullable=False, default=DEFAULT_WORK_START)
    work_end = Column(Time, nullable=False, default=DEFAULT_WORK_END)

    appointments = relationship(
        "Appointment", back_populates="doctor", cascade="all, delete-orphan"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<Doctor(id={self.id}, name='{self.full_name}', specialty='{self.specialty}')>"
