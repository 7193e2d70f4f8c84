"""User domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from ...models import Role
from ...shared.schemas import CamelInput, CamelModel
from ...shared.validators import validate_phone_e164


class SignupRequest(CamelInput):
    """Schema for public self-registration"""

    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=8)
    phone_e164: Optional[str] = None

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower()

    @field_validator("phone_e164")
    @classmethod
    def validate_phone(cls, v):
        return validate_phone_e164(v)


class LoginRequest(CamelInput):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower()


class ForgotPasswordRequest(CamelInput):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower()


class ResetPasswordRequest(CamelInput):
    token: str = Field(min_length=1)
    password: str = Field(min_length=8)


class UserCreate(SignupRequest):
    """Schema for admin-created users"""

    roles: list[Role] = [Role.musician]


class UserUpdate(CamelInput):
    """Schema for updating an existing user"""

    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    phone_e164: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=8)
    roles: Optional[list[Role]] = None
    is_active: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower() if v else v

    @field_validator("phone_e164")
    @classmethod
    def validate_phone(cls, v):
        return validate_phone_e164(v)


class SignupResponse(CamelModel):
    id: str
    email: str
    name: str


class MeResponse(CamelModel):
    id: str
    name: str
    email: str
    phone_e164: Optional[str] = None
    roles: list[str]


class UserResponse(MeResponse):
    is_active: bool
    created_at: datetime
    updated_at: datetime


class LoginUser(CamelModel):
    id: str
    email: str
    roles: list[str]
    name: str
