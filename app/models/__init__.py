from .user import User
from .doctor import Doctor
from .patient import Patient
from .appointment import Appointment, AppointmentStatus

__all__ = ["User", "Doctor", "Patient", "Appointment", "AppointmentStatus"]
