from dataclasses import dataclass
from io import BytesIO
from typing import List
import logging

from PIL import Image, ImageDraw, ImageFont
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import InvalidStateError, NotFoundError
from ..models.appointment import Appointment, AppointmentStatus
from ..repositories.appointment_repository import AppointmentRepository

logger = logging.getLogger(__name__)

# -----------------------------
# Page geometry (A4 at 150 dpi)
# -----------------------------
PAGE_SIZE = (1240, 1754)
RESOLUTION = 150.0
MARGIN_X = 120
MARGIN_TOP = 140
MARGIN_BOTTOM = 140
LINE_SPACING = 8
TEXT_WIDTH = PAGE_SIZE[0] - 2 * MARGIN_X

PLACEHOLDER = "N/A"
SEPARATOR = "_" * 60
SIGNATURE_LINE = "_" * 26

# style -> (font size, colour, centred, space after)
STYLES = {
    "header": (44, (0, 0, 0), True, 50),
    "subheader": (30, (64, 64, 64), False, 14),
    "body": (28, (0, 0, 0), False, 10),
    "small": (22, (128, 128, 128), True, 10),
    "blank": (28, (0, 0, 0), False, 28),
}

@dataclass
class PrescriptionLine:
    text: str
    style: str = "body"

def font(size: int):
    try:
        return ImageFont.truetype("DejaVuSans.ttf", size)
    except OSError:
        return ImageFont.load_default(size=size)

def _split_word(word: str, face, width: float) -> List[str]:
    """Hard-break a word that is wider than the text column."""
    pieces = []
    while face.getlength(word) > width:
        cut = 1
        while cut < len(word) - 1 and face.getlength(word[:cut + 1]) <= width:
            cut += 1
        pieces.append(word[:cut])
        word = word[cut:]
    pieces.append(word)
    return pieces

def _wrap(text: str, face, width: float = TEXT_WIDTH) -> List[str]:
    lines = []
    for paragraph in text.splitlines() or [""]:
        current = ""
        for word in paragraph.split(" "):
            candidate = f"{current} {word}" if current else word
            if face.getlength(candidate) <= width:
                current = candidate
                continue
            if current:
                lines.append(current)
            *full, current = _split_word(word, face, width)
            lines.extend(full)
        lines.append(current)
    return lines

def build_prescription_lines(appointment: Appointment, clinic_name: str) -> List[PrescriptionLine]:
    """Fixed prescription layout, top to bottom."""
    doctor = appointment.doctor
    patient = appointment.patient

    lines = [
        PrescriptionLine(clinic_name, "header"),
        PrescriptionLine(f"Dr. {doctor.full_name}", "subheader"),
        PrescriptionLine(f"Specialty: {doctor.specialty}"),
        PrescriptionLine("", "blank"),
        PrescriptionLine(SEPARATOR),
        PrescriptionLine("", "blank"),
        PrescriptionLine(f"Patient: {patient.full_name}"),
        PrescriptionLine(f"Email: {patient.email}"),
        PrescriptionLine(f"Date: {appointment.date_time.strftime('%d/%m/%Y %H:%M')}"),
        PrescriptionLine("", "blank"),
        PrescriptionLine("Diagnosis", "subheader"),
        PrescriptionLine(appointment.diagnosis if appointment.diagnosis is not None else PLACEHOLDER),
        PrescriptionLine("", "blank"),
        PrescriptionLine("Treatment / Rx", "subheader"),
        PrescriptionLine(appointment.treatment if appointment.treatment is not None else PLACEHOLDER),
        PrescriptionLine("", "blank"),
        PrescriptionLine("", "blank"),
        PrescriptionLine("", "blank"),
        PrescriptionLine(SIGNATURE_LINE, "small"),
        PrescriptionLine("Signature and Stamp", "small"),
    ]
    return lines

def _new_page():
    page = Image.new("RGB", PAGE_SIZE, "white")
    return page, ImageDraw.Draw(page)

def render_prescription(appointment: Appointment, clinic_name: str) -> bytes:
    """Render the prescription as PDF bytes, adding pages as the text grows.

    Does not check status.
    """
    page, draw = _new_page()
    pages = [page]
    bottom = PAGE_SIZE[1] - MARGIN_BOTTOM

    y = MARGIN_TOP
    for line in build_prescription_lines(appointment, clinic_name):
        size, colour, centred, space_after = STYLES[line.style]
        face = font(size)
        for chunk in _wrap(line.text, face):
            if y + size > bottom:
                page, draw = _new_page()
                pages.append(page)
                y = MARGIN_TOP
            if centred:
                x = (PAGE_SIZE[0] - draw.textlength(chunk, font=face)) / 2
            else:
                x = MARGIN_X
            draw.text((x, y), chunk, fill=colour, font=face)
            y += size + LINE_SPACING
        y += space_after

    buf = BytesIO()
    pages[0].save(
        buf,
        format="PDF",
        resolution=RESOLUTION,
        save_all=True,
        append_images=pages[1:],
        title=f"Prescription #{appointment.id}",
        author=clinic_name,
    )
    if len(pages) > 1:
        logger.debug(f"Prescription for appointment {appointment.id} spans {len(pages)} pages")
    return buf.getvalue()

class PrescriptionService:
    def __init__(self, db: Session):
        self.db = db
        self.appointments = AppointmentRepository(db)

    def generate(self, appointment_id: int) -> bytes:
        """PDF prescription for a completed appointment, rendered on every call."""
        appointment = self.appointments.get(appointment_id)
        if not appointment:
            raise NotFoundError(f"Appointment not found with ID: {appointment_id}")

        if appointment.status != AppointmentStatus.COMPLETED:
            raise InvalidStateError("The prescription is only available for completed appointments")

        content = render_prescription(appointment, settings.CLINIC_NAME)
        logger.info(f"Prescription generated for appointment {appointment_id} ({len(content)} bytes)")
        return content
