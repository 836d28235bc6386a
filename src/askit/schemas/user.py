# src/askit/schemas/user.py
"""User, login, course and user-control Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from askit.core.security import MAX_PASSWORD_BYTES
from askit.core.settings import settings
from askit.models.user import Role


def _check_password_length(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


def _check_email_domain(value: str) -> str:
    domains = settings.allowed_email_domains
    if domains and not any(value.lower().endswith(f"@{d.lower()}") for d in domains):
        raise ValueError("email domain is not allowed")
    return value


class LoginRequest(BaseModel):
    """Credentials submitted to obtain an access token."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=255)


class LoginResponse(BaseModel):
    """Access token returned after a successful login."""

    access_token: str
    token_type: str = "bearer"


class UserCreate(BaseModel):
    """Public registration payload; new accounts always start as USER."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=1000)
    password: str = Field(..., min_length=8, max_length=255)
    course_id: int | None = None

    @field_validator("password")
    @classmethod
    def _password_fits(cls, value: str) -> str:
        return _check_password_length(value)

    @field_validator("email")
    @classmethod
    def _email_domain_allowed(cls, value: str) -> str:
        return _check_email_domain(value)


class UserUpdate(BaseModel):
    """Self-service profile changes.

    Changing the email requires the current email; changing the password
    requires the current password.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    new_email: EmailStr | None = Field(None, max_length=1000)
    course_id: int | None = None
    password: str | None = Field(None, min_length=8, max_length=255)
    new_password: str | None = Field(None, min_length=8, max_length=255)

    @field_validator("new_email")
    @classmethod
    def _new_email_domain_allowed(cls, value: str | None) -> str | None:
        return value if value is None else _check_email_domain(value)

    @field_validator("new_password")
    @classmethod
    def _new_password_fits(cls, value: str | None) -> str | None:
        return value if value is None else _check_password_length(value)

    @model_validator(mode="after")
    def _require_current_credentials(self) -> "UserUpdate":
        if self.new_email is not None and self.email is None:
            raise ValueError("email is required to change the email")
        if self.new_password is not None and self.password is None:
            raise ValueError("password is required to change the password")
        return self


class RoleUpdate(BaseModel):
    """Role assignment made by an administrator."""

    role: Role


class StatusUpdate(BaseModel):
    """Enable or disable an account."""

    status: bool


class UserRead(BaseModel):
    """Public view of a user; the password hash is never included."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role
    status: bool
    course_id: int | None
    created_at: datetime
    updated_at: datetime


class AuthorRead(BaseModel):
    """Compact author reference embedded in content responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class CourseCreate(BaseModel):
    """Schema for creating a course."""

    title: str = Field(..., min_length=1, max_length=255)


class CourseRead(BaseModel):
    """Course returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str


class UserControlCreate(BaseModel):
    """Moderation note to attach to a user."""

    reason: str = Field(..., min_length=1, max_length=255)
    user_id: int


class UserControlUpdate(BaseModel):
    reason: str | None = Field(None, min_length=1, max_length=255)
    user_id: int | None = None


class UserControlRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    reason: str
    user_id: int
    created_at: datetime
    updated_at: datetime
