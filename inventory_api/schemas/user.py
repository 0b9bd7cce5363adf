import re
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from inventory_api.core.constants import USER_ROLES
from inventory_api.schemas.common import CamelModel

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _normalize_email(value: str) -> str:
    value = value.strip().lower()
    if not _EMAIL_RE.match(value):
        raise ValueError("Please provide a valid email")
    return value


def _normalize_name(value: str) -> str:
    value = value.strip()
    if not 3 <= len(value) <= 50:
        raise ValueError("Name must be between 3-50 characters")
    return value


class UserSummary(CamelModel):
    id: int
    name: str
    email: str


class UserDetail(UserSummary):
    role: str


class UserRead(UserDetail):
    is_active: bool
    created_at: datetime
    last_login_at: Optional[datetime] = None


class RegisterRequest(CamelModel):
    name: str
    email: str
    password: str = Field(min_length=6)
    role: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return _normalize_name(value)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator("role")
    @classmethod
    def _check_role(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in USER_ROLES:
            raise ValueError("Invalid role")
        return value


class LoginRequest(CamelModel):
    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _strip_email(cls, value: str) -> str:
        return value.strip().lower()


class ProfileUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _normalize_name(value)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _normalize_email(value)


class PasswordChange(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6)


class UserResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    data: UserRead


class TokenResponse(UserResponse):
    token: str
