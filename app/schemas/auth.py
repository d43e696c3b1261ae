from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from ..core.security import UserRole

class UserRegister(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    dni: Optional[str] = Field(None, max_length=30)
    password: str = Field(..., min_length=8)

class UserLogin(BaseModel):
    username: str
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: UserRole
    patient_id: Optional[int] = None

class UserResponse(BaseModel):
    id: int
    username: str
    role: UserRole
    patient_id: Optional[int] = None

    class Config:
        from_attributes = True
