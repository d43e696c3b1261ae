from datetime import date
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

class PatientRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = None
    dni: Optional[str] = None
    birth_date: Optional[date] = None
    allergies: Optional[str] = None
    blood_type: Optional[str] = None

class PatientResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    dni: Optional[str] = None
    birth_date: Optional[date] = None
    allergies: Optional[str] = None
    blood_type: Optional[str] = None

    class Config:
        from_attributes = True
