from datetime import datetime
from typing import Callable

from ..core.exceptions import ConflictError, NotFoundError, OutOfHoursError, PastDateError
from ..repositories.appointment_repository import AppointmentRepository
from ..repositories.doctor_repository import DoctorRepository

class BookingValidator:
    """Admissibility checks for a candidate (doctor, date_time) slot.

    Checks run in a fixed order and the first failure wins: past date,
    unknown doctor, slot already taken, outside working hours. Working
    hours are inclusive at both ends. Nothing is written.
    """

    def __init__(
        self,
        doctors: DoctorRepository,
        appointments: AppointmentRepository,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.doctors = doctors
        self.appointments = appointments
        self.clock = clock

    def validate(self, doctor_id: int, date_time: datetime) -> None:
        if date_time < self.clock():
            raise PastDateError()

        doctor = self.doctors.get(doctor_id)
        if not doctor:
            raise NotFoundError(f"Doctor not found with ID: {doctor_id}")

        if self.appointments.exists_for_doctor_at(doctor_id, date_time):
            raise ConflictError()

        requested = date_time.time()
        if requested < doctor.work_start or requested > doctor.work_end:
            raise OutOfHoursError(
                f"The doctor only sees patients from "
                f"{doctor.work_start.strftime('%H:%M')} to {doctor.work_end.strftime('%H:%M')}"
            )
