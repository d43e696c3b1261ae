"""Load demo doctors, an admin and a doctor account into the configured database.

Safe to run repeatedly: every record is looked up by email first.

    python -m scripts.seed_demo
"""
from datetime import time
import logging

from sqlalchemy.orm import Session

from app.core.database import SessionLocal, init_db
from app.core.security import UserRole, get_password_hash
from app.models.doctor import Doctor
from app.models.user import User
from app.repositories.doctor_repository import DoctorRepository
from app.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

DEMO_DOCTORS = [
    dict(first_name="Gregory", last_name="House", specialty="Diagnostic Medicine",
         email="house@medibook.local", consultation_price=150.0,
         work_start=time(9, 0), work_end=time(17, 0),
         bio="Head of diagnostic medicine."),
    dict(first_name="Meredith", last_name="Grey", specialty="General Surgery",
         email="grey@medibook.local", consultation_price=120.0,
         work_start=time(8, 0), work_end=time(14, 0),
         bio="General surgeon."),
    dict(first_name="John", last_name="Watson", specialty="General Practice",
         email="watson@medibook.local", consultation_price=80.0,
         work_start=time(10, 0), work_end=time(18, 0),
         bio="Family doctor."),
]

DEMO_USERS = [
    ("admin@medibook.local", "admin12345", UserRole.ADMIN),
    ("doctor@medibook.local", "doctor12345", UserRole.DOCTOR),
]

def seed(db: Session) -> dict:
    """Insert whatever demo records are missing; returns counts of new rows."""
    doctors = DoctorRepository(db)
    users = UserRepository(db)
    created = {"doctors": 0, "users": 0}

    for data in DEMO_DOCTORS:
        if not doctors.get_by_email(data["email"]):
            doctors.add(Doctor(**data))
            created["doctors"] += 1

    for username, password, role in DEMO_USERS:
        if not users.get_by_username(username):
            users.add(User(username=username, password_hash=get_password_hash(password), role=role))
            created["users"] += 1

    db.commit()
    return created

def main():
    logging.basicConfig(level=logging.INFO)
    init_db()
    db = SessionLocal()
    try:
        created = seed(db)
    finally:
        db.close()
    logger.info(f"Seed complete: {created['doctors']} doctors, {created['users']} users added")

if __name__ == "__main__":
    main()
