"""Error taxonomy surfaced to API callers.

Every error is an ``HTTPException`` so services can raise it directly and
FastAPI renders it with its own status code. None of them are retried.
"""
from fastapi import HTTPException, status


class PastDateError(HTTPException):
    def __init__(self, detail: str = "Appointments cannot be booked in the past"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class OutOfHoursError(HTTPException):
    def __init__(self, detail: str = "Requested time is outside the doctor's working hours"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: str = "The doctor already has an appointment at that time"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    def __init__(self, detail: str = "Email already registered"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidStateError(HTTPException):
    def __init__(self, detail: str = "Operation not allowed in the current state"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


# Bad credentials on login
AuthError = AuthenticationError


class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Not enough permissions"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
