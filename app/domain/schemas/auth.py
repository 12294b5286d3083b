"""Pydantic schemas for User and Auth."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from app.config import get_settings
from app.core.security import BCRYPT_MAX_PASSWORD_BYTES
from app.domain.models.user import UserRole

settings = get_settings()

_camel = ConfigDict(populate_by_name=True, extra="ignore")


class _PasswordPair(BaseModel):
    model_config = _camel

    password: str = Field(min_length=settings.PASSWORD_MIN_LENGTH, max_length=BCRYPT_MAX_PASSWORD_BYTES)
    password_confirm: str = Field(alias="passwordConfirm")

    @field_validator("password")
    @classmethod
    def fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes long")
        return value

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.password_confirm:
            raise ValueError("Passwords are not the same!")
        return self


class SignupRequest(_PasswordPair):
    name: Optional[str] = Field(default=None, max_length=200)
    email: EmailStr
    photo: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(_PasswordPair):
    pass


class UpdatePasswordRequest(_PasswordPair):
    password_current: str = Field(alias="passwordCurrent")


class UpdateMeRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(default=None, max_length=200)
    email: Optional[EmailStr] = None
    photo: Optional[str] = None


class UserRead(BaseModel):
    id: int
    name: Optional[str] = None
    email: str
    photo: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserAdminRead(UserRead):
    is_active: bool


class AuthResponse(BaseModel):
    status: str = "success"
    token: str
    data: Dict[str, Any]


class MessageResponse(BaseModel):
    status: str = "success"
    message: str
