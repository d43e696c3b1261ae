from datetime import date, time
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...api.deps import (
    get_appointment_service, get_current_user, get_patient_user, get_staff_user
)
from ...models.appointment import AppointmentStatus
from ...models.user import User
from ...schemas.appointment import (
    AppointmentRequest, AppointmentResponse, DiagnosisRequest, SelfBookingRequest
)
from ...services.appointment_service import AppointmentService
from ...services.prescription_service import PrescriptionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])

@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    request: AppointmentRequest,
    service: AppointmentService = Depends(get_appointment_service),
    _: User = Depends(get_staff_user),
):
    """Book an appointment for any patient."""
    response = service.create_appointment(
        request.doctor_id, request.date_time, request.patient_name, request.patient_email
    )
    logger.info(f"Appointment booked for patient {request.patient_email}")
    return response

@router.post("/book-me", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def book_me(
    request: SelfBookingRequest,
    service: AppointmentService = Depends(get_appointment_service),
    current_user: User = Depends(get_patient_user),
):
    """Book an appointment as the authenticated patient."""
    return service.book_for_user(current_user, request.doctor_id, request.date_time)

@router.get("/my-appointments", response_model=List[AppointmentResponse])
async def my_appointments(
    service: AppointmentService = Depends(get_appointment_service),
    current_user: User = Depends(get_current_user),
):
    """Appointment history of the authenticated user's patient record."""
    if current_user.patient is None:
        return []
    return service.get_patient_history(current_user.patient.email)

@router.get("", response_model=List[AppointmentResponse])
async def list_appointments(
    status: Optional[AppointmentStatus] = None,
    service: AppointmentService = Depends(get_appointment_service),
    _: User = Depends(get_staff_user),
):
    """List every appointment, optionally filtered by status."""
    return service.get_all(status)

@router.get("/taken-slots", response_model=List[time])
async def taken_slots(
    doctor_id: int = Query(...),
    day: date = Query(..., alias="date"),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Times of day already booked for a doctor on a date."""
    return service.get_taken_slots(doctor_id, day)

@router.get("/patient/{email}", response_model=List[AppointmentResponse])
async def patient_history(
    email: str,
    service: AppointmentService = Depends(get_appointment_service),
    _: User = Depends(get_staff_user),
):
    """Appointment history for a patient email, newest first."""
    return service.get_patient_history(email)

@router.patch("/{appointment_id}/status", response_model=AppointmentResponse)
async def update_status(
    appointment_id: int,
    status: AppointmentStatus,
    service: AppointmentService = Depends(get_appointment_service),
    _: User = Depends(get_staff_user),
):
    return service.update_status(appointment_id, status)

@router.patch("/{appointment_id}/diagnosis", response_model=AppointmentResponse)
async def update_diagnosis(
    appointment_id: int,
    request: DiagnosisRequest,
    service: AppointmentService = Depends(get_appointment_service),
    _: User = Depends(get_staff_user),
):
    return service.update_diagnosis(appointment_id, request.diagnosis, request.treatment)

@router.get("/{appointment_id}/pdf")
async def prescription_pdf(
    appointment_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_staff_user),
):
    """Download the prescription of a completed appointment."""
    content = PrescriptionService(db).generate(appointment_id)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="prescription_{appointment_id}.pdf"'
        },
    )
