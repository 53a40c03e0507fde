"""
Account and athlete profile schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class AthleteProfile(BaseModel):
    """Physiology used by the HR-based load estimates."""
    resting_hr: Optional[int] = Field(None, ge=25, le=120)
    max_hr: Optional[int] = Field(None, ge=120, le=230)
    lthr: Optional[int] = Field(None, ge=80, le=220, description="Lactate threshold heart rate")
    ftp: Optional[int] = Field(None, ge=50, le=600, description="Functional threshold power (W)")


class UserCreate(AthleteProfile):
    """Registration payload."""
    email: EmailStr
    password: str = Field(..., min_length=8)
    full_name: Optional[str] = Field(None, max_length=255)


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserUpdate(AthleteProfile):
    """Profile fields an athlete may change; omitted fields are left alone."""
    full_name: Optional[str] = Field(None, max_length=255)


class UserResponse(AthleteProfile):
    id: int
    email: EmailStr
    full_name: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class Token(BaseModel):
    """Bearer token issued on login."""
    access_token: str
    token_type: str = "bearer"
