from datetime import date, datetime, time, timedelta

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core.database import Base, SessionLocal, engine
from app.core.security import UserRole, create_access_token, get_password_hash
from app.models.doctor import Doctor
from app.models.user import User
from app.services.notification_service import NotificationSender, get_notification_sender


class RecordingSender(NotificationSender):
    """Keeps sent messages in memory."""

    def __init__(self):
        self.sent = []

    def send(self, to, subject, body):
        self.sent.append({"to": to, "subject": subject, "body": body})


def tomorrow_at(hour: int, minute: int = 0) -> datetime:
    return datetime.combine(date.today() + timedelta(days=1), time(hour, minute))


@pytest.fixture(scope="function")
def test_db():
    # Create tables
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(test_db):
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def notifier():
    sender = RecordingSender()
    app.dependency_overrides[get_notification_sender] = lambda: sender
    yield sender
    app.dependency_overrides.pop(get_notification_sender, None)


@pytest.fixture
def client(test_db, notifier):
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client


@pytest.fixture
def doctor(db_session):
    doc = Doctor(
        first_name="Gregory",
        last_name="House",
        specialty="Diagnostic Medicine",
        email="house@example.com",
        consultation_price=150.0,
        work_start=time(9, 0),
        work_end=time(17, 0),
    )
    db_session.add(doc)
    db_session.commit()
    db_session.refresh(doc)
    return doc


def auth_headers_for(db_session, username: str, role: UserRole) -> dict:
    db_session.add(User(username=username, password_hash=get_password_hash("Secret12345"), role=role))
    db_session.commit()
    token = create_access_token(username, role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(db_session):
    return auth_headers_for(db_session, "admin@example.com", UserRole.ADMIN)


@pytest.fixture
def staff_headers(db_session):
    return auth_headers_for(db_session, "staff@example.com", UserRole.DOCTOR)
