"""Authentication schemas."""

from datetime import date, datetime

from pydantic import EmailStr, Field

from school_fees.models.user import UserRole
from school_fees.schemas.common import BaseSchema


class LoginRequest(BaseSchema):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseSchema):
    """Teacher self-registration schema."""

    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1, max_length=255)
    employee_id: str = Field(..., min_length=1, max_length=50)
    phone_number: str = Field(..., min_length=1, max_length=50)
    address: str | None = None
    qualification: str | None = None


class PasswordChange(BaseSchema):
    """Password change schema."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


class TeacherProfile(BaseSchema):
    """Teacher profile attached to a user."""

    id: int
    employee_id: str
    phone_number: str
    address: str | None
    qualification: str | None
    joining_date: date


class UserResponse(BaseSchema):
    """User response schema."""

    id: int
    email: str
    name: str
    role: UserRole
    is_active: bool
    teacher: TeacherProfile | None = None
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseSchema):
    """Token plus the authenticated user."""

    token: str
    user: UserResponse
