from datetime import date, datetime, time
from typing import Callable, List, Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import ConflictError, InvalidStateError, NotFoundError
from ..models.appointment import Appointment, AppointmentStatus
from ..models.patient import Patient
from ..models.user import User
from ..repositories.appointment_repository import AppointmentRepository
from ..repositories.doctor_repository import DoctorRepository
from ..repositories.patient_repository import PatientRepository
from ..schemas.appointment import AppointmentResponse
from .booking_validator import BookingValidator
from .notification_service import NotificationSender

logger = logging.getLogger(__name__)

# Last name given to patients auto-created from a single-word name
PLACEHOLDER_LAST_NAME = "-"

class AppointmentService:
    def __init__(
        self,
        db: Session,
        notifier: NotificationSender,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.db = db
        self.notifier = notifier
        self.appointments = AppointmentRepository(db)
        self.doctors = DoctorRepository(db)
        self.patients = PatientRepository(db)
        self.validator = BookingValidator(self.doctors, self.appointments, clock=clock)

    def create_appointment(
        self,
        doctor_id: int,
        date_time: datetime,
        patient_name: str,
        patient_email: str,
    ) -> AppointmentResponse:
        """Validate and book a slot, creating the patient if the email is new."""
        self.validator.validate(doctor_id, date_time)

        patient = self._resolve_patient(patient_name, patient_email)
        appointment = self.appointments.add(
            Appointment(
                doctor_id=doctor_id,
                patient=patient,
                date_time=date_time,
                status=AppointmentStatus.CONFIRMED,
            )
        )

        try:
            self.db.commit()
        except IntegrityError:
            # Lost the race for this slot to a concurrent booking
            self.db.rollback()
            logger.warning(f"Concurrent booking rejected for doctor {doctor_id} at {date_time}")
            raise ConflictError()

        self.db.refresh(appointment)
        logger.info(
            f"Appointment {appointment.id} created for patient {patient.email} "
            f"with doctor {doctor_id}"
        )

        doctor = appointment.doctor
        self.notifier.send(
            patient.email,
            f"Appointment Confirmation - {settings.CLINIC_NAME}",
            f"Hello {patient.first_name}, your appointment with Dr. {doctor.full_name} "
            f"is confirmed for {appointment.date_time.strftime('%d/%m/%Y %H:%M')}.",
        )

        return AppointmentResponse.from_appointment(appointment)

    def book_for_user(self, user: User, doctor_id: int, date_time: datetime) -> AppointmentResponse:
        """Book on behalf of the authenticated user's own patient record."""
        patient = user.patient
        if patient is None:
            raise InvalidStateError("User not linked to a patient")

        response = self.create_appointment(
            doctor_id, date_time, patient.full_name, patient.email
        )
        logger.info(f"Patient {patient.email} booked doctor {doctor_id}")
        return response

    def get_appointment(self, appointment_id: int) -> Appointment:
        appointment = self.appointments.get(appointment_id)
        if not appointment:
            raise NotFoundError(f"Appointment not found with ID: {appointment_id}")
        return appointment

    def get_all(self, status: Optional[AppointmentStatus] = None) -> List[AppointmentResponse]:
        if status is not None:
            rows = self.appointments.list_by_status(status)
        else:
            rows = self.appointments.list_all()
        return [AppointmentResponse.from_appointment(a) for a in rows]

    def update_status(self, appointment_id: int, status: AppointmentStatus) -> AppointmentResponse:
        """Overwrite the status. Every transition is allowed."""
        appointment = self.get_appointment(appointment_id)
        appointment.status = status
        self.db.commit()
        self.db.refresh(appointment)
        logger.info(f"Appointment {appointment_id} status set to {status.value}")
        return AppointmentResponse.from_appointment(appointment)

    def update_diagnosis(
        self,
        appointment_id: int,
        diagnosis: Optional[str],
        treatment: Optional[str],
    ) -> AppointmentResponse:
        appointment = self.get_appointment(appointment_id)
        appointment.diagnosis = diagnosis
        appointment.treatment = treatment
        self.db.commit()
        self.db.refresh(appointment)
        logger.info(f"Diagnosis recorded for appointment {appointment_id}")
        return AppointmentResponse.from_appointment(appointment)

    def get_patient_history(self, email: str) -> List[AppointmentResponse]:
        """Appointments of a patient, newest first."""
        return [
            AppointmentResponse.from_appointment(a)
            for a in self.appointments.list_for_patient_email(email)
        ]

    def list_by_doctor_and_range(
        self, doctor_id: int, start: datetime, end: datetime
    ) -> List[Appointment]:
        return self.appointments.list_for_doctor_between(doctor_id, start, end)

    def get_taken_slots(self, doctor_id: int, day: date) -> List[time]:
        """Times of day already booked for a doctor on ``day``."""
        start = datetime.combine(day, time.min)
        end = datetime.combine(day, time.max)
        return [a.date_time.time() for a in self.list_by_doctor_and_range(doctor_id, start, end)]

    def _resolve_patient(self, patient_name: str, patient_email: str) -> Patient:
        patient = self.patients.get_by_email(patient_email)
        if patient:
            return patient

        parts = patient_name.strip().split(" ", 1)
        first_name = parts[0]
        last_name = parts[1].strip() if len(parts) > 1 and parts[1].strip() else PLACEHOLDER_LAST_NAME

        patient = self.patients.add(
            Patient(first_name=first_name, last_name=last_name, email=patient_email)
        )
        # Part of the booking transaction; rolled back with it on conflict
        self.db.flush()
        logger.info(f"Patient record created for {patient_email}")
        return patient
