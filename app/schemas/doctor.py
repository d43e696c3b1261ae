from datetime import time
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, model_validator

class DoctorRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    specialty: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    bio: Optional[str] = None
    consultation_price: float = Field(0.0, ge=0)
    work_start: time = time(9, 0)
    work_end: time = time(17, 0)

    @model_validator(mode="after")
    def check_working_hours(self):
        if self.work_start >= self.work_end:
            raise ValueError("work_start must be before work_end")
        return self

class DoctorResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    specialty: str
    email: str
    bio: Optional[str] = None
    consultation_price: float
    work_start: time
    work_end: time

    class Config:
        from_attributes = True
