"""
Account schemas
"""
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from assetverse.core.schemas import CamelModel


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    date_of_birth: date
    role: str
    profile_image: Optional[str] = None
    # HR only
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    package_limit: Optional[int] = Field(None, ge=0)
    subscription: Optional[str] = None


class LoginRequest(CamelModel):
    """email is a plain str so .local and similar domains are accepted."""

    email: str
    password: str


class ProfileUpdate(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    photo: Optional[str] = None


class UserOut(CamelModel):
    id: UUID
    name: str
    email: str
    role: str
    date_of_birth: Optional[date] = None
    profile_image: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    package_limit: Optional[int] = None
    current_employees: Optional[int] = None
    subscription: Optional[str] = None
    created_at: datetime


class AuthResponse(CamelModel):
    message: str
    user: UserOut
    token: str


class MeResponse(CamelModel):
    message: str = "Authenticated"
    user: UserOut
