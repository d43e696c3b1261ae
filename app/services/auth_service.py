from sqlalchemy.orm import Session
import logging

from ..core.exceptions import AuthError, DuplicateError
from ..core.security import (
    verify_password, get_password_hash, create_access_token, UserRole
)
from ..models.patient import Patient
from ..models.user import User
from ..repositories.patient_repository import PatientRepository
from ..repositories.user_repository import UserRepository
from ..schemas.auth import UserLogin, UserRegister, TokenResponse

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.patients = PatientRepository(db)

    def register_user(self, user_data: UserRegister) -> User:
        """Register a patient account, linking an existing patient record if any."""
        if self.users.get_by_username(user_data.email):
            logger.warning(f"Registration attempt with existing email: {user_data.email}")
            raise DuplicateError()

        # Staff may already have booked this person by email or dni
        patient = self.patients.get_by_email(user_data.email)
        if not patient and user_data.dni:
            patient = self.patients.get_by_dni(user_data.dni)

        if not patient:
            patient = self.patients.add(Patient(
                first_name=user_data.first_name,
                last_name=user_data.last_name,
                email=user_data.email,
                dni=user_data.dni,
            ))

        new_user = self.users.add(User(
            username=user_data.email,
            password_hash=get_password_hash(user_data.password),
            role=UserRole.PATIENT,
            patient=patient,
        ))

        self.db.commit()
        self.db.refresh(new_user)
        logger.info(f"Patient account registered: {new_user.username}")

        return new_user

    def authenticate_user(self, login_data: UserLogin) -> TokenResponse:
        """Authenticate user and return an access token."""
        user = self.users.get_by_username(login_data.username)

        if not user or not verify_password(login_data.password, user.password_hash):
            logger.warning(f"Failed login for {login_data.username}")
            raise AuthError("Invalid username or password")

        token = create_access_token(user.username, user.role)
        logger.info(f"User authenticated: {user.username}")

        return TokenResponse(
            access_token=token,
            role=user.role,
            patient_id=user.patient_id,
        )
